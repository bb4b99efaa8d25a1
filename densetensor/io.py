"""
Plain-text tensor files.

Format, one whitespace-separated token per line when written::

    <rank>
    <extent_0>
    ...
    <extent_{rank-1}>
    <element_0>
    ...
    <element_{num_elements-1}>

A rank-0 file has no extent lines and exactly one element line. Elements
appear in row-major order.
"""

import logging
import os
import re
from typing import Any, Callable, List, Optional, Union

from .config import get_config
from .core.storage import DType, num_elements
from .errors import FileOpenError, ParseError
from .tensor import Tensor

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


_COUNT = re.compile(r"[0-9]+")
_INTEGER = re.compile(r"-?[0-9]+")
_FLOAT = re.compile(
    r"-?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|-?(?:inf|nan)",
    re.IGNORECASE,
)


def _element_formatter(dtype: DType) -> Callable[[Any], str]:
    if dtype.is_bool:
        return lambda value: str(int(value))
    if dtype.is_floating:
        # repr is the shortest text that reads back to the same float
        return repr
    return str


def _element_parser(dtype: DType) -> Callable[[str], Any]:
    """Return a parser accepting only plain ASCII decimal tokens for `dtype`."""
    if dtype.is_floating:
        pattern, convert = _FLOAT, float
    elif dtype.is_bool:
        pattern, convert = _INTEGER, lambda token: int(token) != 0
    else:
        pattern, convert = _INTEGER, int

    def parse(token: str) -> Any:
        if not pattern.fullmatch(token):
            raise ValueError(f"not a decimal {dtype} literal: {token!r}")
        return convert(token)

    return parse


def format_tensor(tensor: Tensor) -> str:
    """Render `tensor` in the text file format."""
    fmt = _element_formatter(tensor.dtype)
    lines = [str(tensor.rank)]
    lines.extend(str(extent) for extent in tensor.shape)
    lines.extend(fmt(tensor.value_at(i)) for i in range(tensor.num_elements))
    return "\n".join(lines) + "\n"


def _parse_count(tokens: List[str], pos: int, what: str) -> int:
    if pos >= len(tokens):
        raise ParseError(f"Unexpected end of input while reading {what}")
    token = tokens[pos]
    if not _COUNT.fullmatch(token):
        raise ParseError(f"Expected a non-negative integer for {what}, got {token!r}")
    return int(token)


def parse_tensor(
    text: str,
    dtype: Optional[Union[DType, str, Any]] = None,
    strict_trailing: Optional[bool] = None,
) -> Tensor:
    """
    Build a tensor from text in the file format.

    Counts must be unsigned ASCII decimal integers; elements are ASCII
    decimal literals (an optional leading minus, no digit separators).

    Args:
        text: File contents
        dtype: Component type of the result (default: configured default_dtype)
        strict_trailing: Reject tokens after the last element
            (default: configured strict_trailing)

    Raises:
        ParseError: If the text is truncated, malformed, or an element does
            not fit `dtype`
    """
    if strict_trailing is None:
        strict_trailing = get_config().strict_trailing

    tokens = text.split()
    rank = _parse_count(tokens, 0, "rank")
    shape = tuple(_parse_count(tokens, 1 + axis, f"extent {axis}") for axis in range(rank))

    # The header must be backed by enough tokens before any buffer is allocated.
    first = 1 + rank
    expected = num_elements(shape)
    available = len(tokens) - first
    if available < expected:
        raise ParseError(
            f"Unexpected end of input: shape {shape} needs {expected} elements, "
            f"found {available}"
        )
    if strict_trailing and available > expected:
        raise ParseError(
            f"Unexpected token {tokens[first + expected]!r} after {expected} elements"
        )

    tensor = Tensor(shape, dtype=dtype)
    parse = _element_parser(tensor.dtype)
    for i in range(expected):
        token = tokens[first + i]
        try:
            tensor.value_at(i, parse(token))
        except (ValueError, OverflowError):
            raise ParseError(
                f"Element {i} ({token!r}) is not a valid {tensor.dtype} value"
            ) from None
    return tensor


def read_tensor(path: PathLike, dtype: Optional[Union[DType, str, Any]] = None) -> Tensor:
    """
    Read a tensor from a text file.

    The file does not record its component type. Without `dtype` the
    configured default_dtype (float64) is used, which rounds integers above
    2**53; pass the writer's dtype for an exact round trip.

    Raises:
        FileOpenError: If `path` cannot be opened
        ParseError: If the contents are not a valid tensor file
    """
    config = get_config()
    try:
        with open(path, "r", encoding=config.encoding) as f:
            text = f.read()
    except OSError as exc:
        raise FileOpenError(f"Could not open file: {path}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"File {path} is not valid {config.encoding} text") from exc

    tensor = parse_tensor(text, dtype=dtype, strict_trailing=config.strict_trailing)
    logger.debug("Read %s tensor of shape %s from %s", tensor.dtype, tensor.shape, path)
    return tensor


def write_tensor(tensor: Tensor, path: PathLike):
    """
    Write a tensor to a text file, replacing any existing file.

    The write is not atomic: write to a temporary path and rename if a
    partially written file must never be observed.

    Raises:
        FileOpenError: If `path` cannot be opened for writing
    """
    text = format_tensor(tensor)
    try:
        f = open(path, "w", encoding=get_config().encoding)
    except OSError as exc:
        raise FileOpenError(f"Could not open file for writing: {path}") from exc
    with f:
        f.write(text)
    logger.debug("Wrote %s tensor of shape %s to %s", tensor.dtype, tensor.shape, path)
