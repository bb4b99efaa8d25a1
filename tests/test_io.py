"""Tests for the plain-text tensor file format."""

import logging

import numpy as np
import pytest

import densetensor as dt


def _filled(shape, dtype="float64"):
    t = dt.Tensor(shape, dtype=dtype)
    for i in range(t.num_elements):
        t.value_at(i, (i * 7) % 11)
    return t


class TestFormat:
    """Tests for the writer's layout."""

    def test_layout(self, counting_2x3):
        assert dt.format_tensor(counting_2x3) == "2\n2\n3\n0\n1\n2\n3\n4\n5\n"

    def test_scalar_layout(self):
        assert dt.format_tensor(dt.Tensor(fill_value=1.5)) == "0\n1.5\n"

    def test_empty_axis_layout(self):
        assert dt.format_tensor(dt.Tensor((2, 0))) == "2\n2\n0\n"

    def test_bool_written_as_integers(self):
        t = dt.Tensor((2,), dtype="bool")
        t.value_at(1, True)
        assert dt.format_tensor(t) == "1\n2\n0\n1\n"

    def test_float_written_exactly(self):
        t = dt.Tensor((1,), fill_value=0.1)
        assert dt.format_tensor(t) == "1\n1\n0.1\n"


class TestParse:
    """Tests for the reader's validation."""

    def test_parse(self):
        t = dt.parse_tensor("2 2 2\n1 2 3 4", dtype="int64")
        assert t.shape == (2, 2)
        assert t.at((1, 0)) == 3

    def test_parse_scalar(self):
        t = dt.parse_tensor("0\n-2.5\n")
        assert t == dt.Tensor(fill_value=-2.5)

    def test_special_floats(self):
        t = dt.parse_tensor("1 3 inf -inf nan")
        assert t.value_at(0) == float("inf")
        assert t.value_at(1) == float("-inf")
        assert np.isnan(t.value_at(2))

    @pytest.mark.parametrize("text", ["", "2\n3\n", "1\n3\n1\n2\n", "2 2 2 1 2 3"])
    def test_truncated(self, text):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor(text)

    @pytest.mark.parametrize("text", ["x", "1.5 2 1 1", "-1", "1 -2", "1 2 1 abc"])
    def test_malformed(self, text):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor(text)

    def test_integer_dtype_rejects_fraction(self):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor("1 1 1.5", dtype="int32")

    def test_value_out_of_dtype_range(self):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor("1 2 1 300", dtype="uint8")
        with pytest.raises(dt.ParseError):
            dt.parse_tensor("1 1 -1", dtype="uint16")

    def test_trailing_tokens(self):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor("1 1 5 6")

    @pytest.mark.parametrize("text", [
        "1 99999999999999999999 1",
        "3 4294967296 4294967296 4294967296 1",
        "2 100000 100000 1 2 3",
    ])
    def test_header_larger_than_body(self, text):
        """Element count is checked against the tokens before allocating."""
        with pytest.raises(dt.ParseError, match="Unexpected end of input"):
            dt.parse_tensor(text)

    @pytest.mark.parametrize("token", ["1_000", "+5", "\u0663", "0x10", "5.0"])
    def test_integer_elements_must_be_ascii_decimal(self, token):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor(f"1 1 {token}", dtype="int64")

    def test_negative_integer_element(self):
        t = dt.parse_tensor("1 2 -7 12", dtype="int64")
        assert t.value_at(0) == -7
        assert t.value_at(1) == 12

    @pytest.mark.parametrize("text", ["1_0 1", "+1 1", "\u0661 1", "1 \u0662 1 2"])
    def test_counts_must_be_ascii_decimal(self, text):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor(text)

    @pytest.mark.parametrize("token", ["1_000.5", "+1.5", "\u0661.5", "infinity", "1e"])
    def test_float_elements_must_be_ascii_decimal(self, token):
        with pytest.raises(dt.ParseError):
            dt.parse_tensor(f"0 {token}")

    @pytest.mark.parametrize("token", ["-0.5", ".5", "5.", "1e-3", "2.5E+10", "-inf", "NaN"])
    def test_float_literals_accepted(self, token):
        assert dt.parse_tensor(f"0 {token}").rank == 0

    def test_trailing_tokens_allowed(self):
        t = dt.parse_tensor("1 1 5 6", strict_trailing=False)
        assert t == dt.Tensor((1,), fill_value=5)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            dt.parse_tensor("oops")


class TestFiles:
    """Tests for read_tensor / write_tensor."""

    @pytest.mark.parametrize("dtype", ["float64", "float32", "int8", "int64", "uint32", "bool"])
    def test_round_trip(self, tmp_path, shape, dtype):
        t = _filled(shape, dtype)
        path = tmp_path / "t.txt"
        dt.write_tensor(t, path)
        assert dt.read_tensor(path, dtype=dtype) == t

    def test_round_trip_non_terminating_floats(self, tmp_path):
        t = dt.Tensor.from_numpy(np.array([1 / 3, np.pi, 1e-300, -2.5e200]))
        path = tmp_path / "floats.txt"
        dt.write_tensor(t, path)
        assert dt.read_tensor(path) == t

    def test_large_int64_needs_writer_dtype(self, tmp_path):
        t = dt.Tensor((1,), fill_value=2**53 + 1, dtype="int64")
        path = tmp_path / "big.txt"
        dt.write_tensor(t, path)
        assert dt.read_tensor(path, dtype="int64") == t
        assert dt.read_tensor(path) != t
        assert dt.Vector.from_file(path, dtype="int64")[0] == 2**53 + 1

    def test_round_trip_float32(self, tmp_path):
        t = dt.Tensor.from_numpy(np.array([0.1, 1 / 3], dtype=np.float32))
        path = tmp_path / "f32.txt"
        dt.write_tensor(t, str(path))
        assert dt.read_tensor(str(path), dtype="float32") == t

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(dt.FileOpenError):
            dt.read_tensor(tmp_path / "missing.txt")

    def test_file_open_error_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            dt.read_tensor(tmp_path / "missing.txt")

    def test_write_unopenable(self, tmp_path):
        with pytest.raises(dt.FileOpenError):
            dt.write_tensor(dt.Tensor(), tmp_path / "no-such-dir" / "t.txt")

    def test_write_to_directory(self, tmp_path):
        with pytest.raises(dt.FileOpenError):
            dt.write_tensor(dt.Tensor(), tmp_path)

    def test_read_truncated_file(self, tmp_path):
        path = tmp_path / "short.txt"
        path.write_text("2\n2\n2\n1\n2\n")
        with pytest.raises(dt.ParseError):
            dt.read_tensor(path)

    def test_read_undecodable(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(dt.ParseError):
            dt.read_tensor(path)

    def test_overwrites_existing(self, tmp_path):
        path = tmp_path / "t.txt"
        dt.write_tensor(dt.Tensor((5,), fill_value=1), path)
        dt.write_tensor(dt.Tensor(fill_value=2), path)
        assert dt.read_tensor(path) == dt.Tensor(fill_value=2)

    def test_configured_trailing_policy(self, tmp_path, default_config):
        path = tmp_path / "extra.txt"
        path.write_text("0\n1\n2\n")
        with pytest.raises(dt.ParseError):
            dt.read_tensor(path)
        default_config.strict_trailing = False
        assert dt.read_tensor(path) == dt.Tensor(fill_value=1)

    def test_debug_logging(self, tmp_path, caplog):
        path = tmp_path / "logged.txt"
        with caplog.at_level(logging.DEBUG, logger="densetensor.io"):
            dt.write_tensor(dt.Tensor((2,)), path)
            dt.read_tensor(path)
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("Wrote float64 tensor of shape (2,)") for m in messages)
        assert any(m.startswith("Read float64 tensor of shape (2,)") for m in messages)
