"""Pytest configuration and fixtures."""

import pytest
import densetensor as dt


@pytest.fixture(autouse=True)
def default_config():
    """Restore the process-wide configuration after every test."""
    previous = dt.set_config(dt.TensorConfig())
    yield dt.get_config()
    dt.set_config(previous)


@pytest.fixture
def counting_2x3():
    """Shape (2, 3) tensor whose linear position i holds i."""
    t = dt.Tensor((2, 3), dtype="int64")
    for i in range(t.num_elements):
        t.value_at(i, i)
    return t


@pytest.fixture
def matrix_2x2():
    """[[1, 2], [3, 4]] as int64."""
    m = dt.Matrix(2, 2, dtype="int64")
    m[0, 0], m[0, 1] = 1, 2
    m[1, 0], m[1, 1] = 3, 4
    return m


@pytest.fixture(params=[(), (0,), (4,), (2, 3), (2, 0, 3), (1, 1, 1, 1), (3, 2, 2)])
def shape(request):
    """Shapes covering rank 0, zero-length axes and higher ranks."""
    return request.param
