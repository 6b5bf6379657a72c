"""
Tests for chunkstore.errors and the batch helper.
"""

import pytest

from chunkstore import ChunkNotFoundError, ErrorList, InvalidRangeError
from chunkstore.batch import run_batch


def test_error_list_check_is_silent_when_empty():
    ErrorList.check([])


def test_error_list_keeps_order():
    errors = [("b", ChunkNotFoundError("b")), ("a", OSError("disk"))]
    with pytest.raises(ErrorList) as exc_info:
        ErrorList.check(errors, ["x", None, None])
    err = exc_info.value
    assert err.paths == ["b", "a"]
    assert err.results == ["x", None, None]
    assert "2 operation(s) failed" in str(err)
    assert "#1 b: file not exist: b" in str(err)


def test_invalid_range_is_value_and_eof_error():
    err = InvalidRangeError(-1, 5)
    assert isinstance(err, ValueError)
    assert isinstance(err, EOFError)


def test_run_batch_collects_failures():
    def op(path):
        if path.startswith("bad"):
            raise ChunkNotFoundError(path)
        return path.upper()

    with pytest.raises(ErrorList) as exc_info:
        run_batch(["a", "bad1", "c", "bad2"], op, "test")
    assert exc_info.value.paths == ["bad1", "bad2"]
    assert exc_info.value.results == ["A", None, "C", None]
    assert exc_info.value.file_paths == ["a", "bad1", "c", "bad2"]


def test_run_batch_propagates_unexpected_errors():
    def op(path):
        raise TypeError("bug")

    with pytest.raises(TypeError):
        run_batch(["a"], op, "test")


def test_run_batch_without_failures():
    assert run_batch(["a", "b"], str.upper, "test") == ["A", "B"]
