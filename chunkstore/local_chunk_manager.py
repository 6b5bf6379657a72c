# chunkstore/local_chunk_manager.py
import glob
import logging
import mmap
import os
import shutil
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List, Optional, Tuple

from .base import ChunkManager
from .batch import run_batch
from .errors import ChunkNotFoundError, InvalidRangeError, ListingError, ShortReadError

logger = logging.getLogger(__name__)


class EmptyMapping(bytes):
    """Stand-in for the map of an empty chunk, which the OS cannot mmap."""

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class LocalChunkManager(ChunkManager):
    """
    Chunk manager backed by a directory on the local filesystem.

    Virtual paths map one to one onto paths under `root_path`. Paths are
    joined as given; `..` segments are not rejected, so callers that accept
    untrusted keys must validate them first.
    """

    def __init__(self, root_path: str):
        self._root_path = root_path
        self.base_path = os.path.abspath(root_path)

    def _full_path(self, file_path: str) -> str:
        # keys are always relative to the root, even with a leading slash
        return os.path.normpath(os.path.join(self.base_path, file_path.lstrip("/")))

    def _rel_path(self, full_path: str) -> str:
        if full_path.startswith(self.base_path):
            return full_path[len(self.base_path):].lstrip(os.sep)
        return full_path

    def root_path(self) -> str:
        return self._root_path

    def path(self, file_path: str) -> str:
        if not self.exist(file_path):
            raise ChunkNotFoundError(file_path)
        return self._full_path(file_path)

    def reader(self, file_path: str) -> BinaryIO:
        if not self.exist(file_path):
            raise ChunkNotFoundError(file_path)
        return open(self._full_path(file_path), "rb")

    def exist(self, file_path: str) -> bool:
        try:
            os.stat(self._full_path(file_path))
        except FileNotFoundError:
            return False
        return True

    def size(self, file_path: str) -> int:
        return os.stat(self._full_path(file_path)).st_size

    def write(self, file_path: str, content: bytes) -> None:
        full_path = self._full_path(file_path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "wb") as f:
            f.write(content)
        logger.debug(f"Wrote {len(content)} bytes to {full_path}")

    def multi_write(self, contents: Dict[str, bytes]) -> None:
        run_batch(contents, lambda p: self.write(p, contents[p]), "multi_write")

    def read(self, file_path: str) -> bytes:
        if not self.exist(file_path):
            raise ChunkNotFoundError(file_path)
        with open(self._full_path(file_path), "rb") as f:
            return f.read()

    def multi_read(self, file_paths: List[str]) -> List[Optional[bytes]]:
        return run_batch(file_paths, self.read, "multi_read")

    def list_with_prefix(self, prefix: str, recursive: bool) -> Tuple[List[str], List[datetime]]:
        if recursive:
            file_paths = self._walk_prefix(prefix)
        else:
            # the root is literal, the prefix stays a pattern
            pattern = os.path.normpath(os.path.join(glob.escape(self.base_path), prefix.lstrip("/") + "*"))
            file_paths = [self._rel_path(p) for p in sorted(glob.glob(pattern, include_hidden=True))]

        mod_times = []
        for file_path in file_paths:
            try:
                mod_times.append(self._mod_time(file_path))
            except OSError as e:
                raise ListingError(file_path, file_paths) from e
        return file_paths, mod_times

    def _walk_prefix(self, prefix: str) -> List[str]:
        """
        Collect every file under the prefix's parent directory whose absolute
        path starts with the absolute prefix.

        The test is a plain string prefix, not a path-segment match: prefix
        "a/b" also picks up "a/bc/z.txt".
        """
        abs_prefix = self._full_path(prefix)
        file_paths = []
        for dir_path, dir_names, file_names in os.walk(os.path.dirname(abs_prefix)):
            # a directory that doesn't match can't hold anything that does
            dir_names[:] = [d for d in dir_names if os.path.join(dir_path, d).startswith(abs_prefix)]
            for name in file_names:
                full_path = os.path.join(dir_path, name)
                if full_path.startswith(abs_prefix):
                    file_paths.append(self._rel_path(full_path))
        file_paths.sort()
        return file_paths

    def _mod_time(self, file_path: str) -> datetime:
        try:
            st = os.stat(self._full_path(file_path))
        except OSError as e:
            logger.error(f"stat fileinfo error for {file_path}: {e}")
            raise
        return datetime.fromtimestamp(st.st_mtime, tz=timezone.utc)

    def read_with_prefix(self, prefix: str) -> Tuple[List[str], List[Optional[bytes]]]:
        file_paths, _ = self.list_with_prefix(prefix, True)
        return file_paths, self.multi_read(file_paths)

    def read_at(self, file_path: str, off: int, length: int) -> bytes:
        if off < 0 or length < 0:
            raise InvalidRangeError(off, length)
        with open(self._full_path(file_path), "rb") as f:
            data = os.pread(f.fileno(), length, off)
        if len(data) < length:
            raise ShortReadError(file_path, length, len(data))
        return data

    def mmap(self, file_path: str):
        with open(self._full_path(file_path), "rb") as f:
            if os.fstat(f.fileno()).st_size == 0:
                return EmptyMapping()
            # the mapping stays valid after the descriptor is closed
            return mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)

    def remove(self, file_path: str) -> None:
        if not self.exist(file_path):
            return
        full_path = self._full_path(file_path)
        if os.path.isdir(full_path) and not os.path.islink(full_path):
            shutil.rmtree(full_path)
        else:
            os.remove(full_path)
        logger.debug(f"Removed {full_path}")

    def multi_remove(self, file_paths: List[str]) -> None:
        run_batch(file_paths, self.remove, "multi_remove")

    def remove_with_prefix(self, prefix: str) -> None:
        file_paths, _ = self.list_with_prefix(prefix, True)
        self.multi_remove(file_paths)
