# chunkstore/errors.py
from typing import List, Optional, Tuple


class ChunkStoreError(Exception):
    """Base class for chunk storage failures."""


class ChunkNotFoundError(ChunkStoreError, FileNotFoundError):
    def __init__(self, file_path: str):
        super().__init__(f"file not exist: {file_path}")
        self.file_path = file_path


class InvalidRangeError(ChunkStoreError, ValueError, EOFError):
    def __init__(self, off: int, length: int):
        super().__init__(f"invalid range: offset={off}, length={length}")
        self.off = off
        self.length = length


class ShortReadError(ChunkStoreError, EOFError):
    def __init__(self, file_path: str, expected: int, actual: int):
        super().__init__(f"short read on {file_path}: wanted {expected} bytes, got {actual}")
        self.file_path = file_path
        self.expected = expected
        self.actual = actual


class ListingError(ChunkStoreError):
    """Stat of a listed entry failed; `partial_paths` holds what was listed."""

    def __init__(self, file_path: str, partial_paths: List[str]):
        super().__init__(f"stat fileinfo error: {file_path}")
        self.file_path = file_path
        self.partial_paths = partial_paths


class ErrorList(ChunkStoreError):
    """
    Aggregate failure of a batch operation.

    Holds the per-item failures as ordered (path, exception) pairs. A batch
    raises it only when at least one item failed; the items that are not
    listed here completed. For batch reads, `results` is the full result
    list with None in the failed slots, and `file_paths` the batch input
    in the same order, so each slot can be matched to its path.
    """

    def __init__(
        self,
        errors: List[Tuple[str, Exception]],
        results: Optional[list] = None,
        file_paths: Optional[List[str]] = None,
    ):
        self.errors = list(errors)
        self.results = results
        self.file_paths = file_paths
        super().__init__(self._format())

    @classmethod
    def check(
        cls,
        errors: List[Tuple[str, Exception]],
        results: Optional[list] = None,
        file_paths: Optional[List[str]] = None,
    ):
        if errors:
            raise cls(errors, results, file_paths)

    @property
    def paths(self) -> List[str]:
        return [path for path, _ in self.errors]

    def __len__(self):
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def _format(self) -> str:
        lines = [f"{len(self.errors)} operation(s) failed:"]
        for i, (path, err) in enumerate(self.errors, start=1):
            lines.append(f"  #{i} {path}: {err}")
        return "\n".join(lines)
