# chunkstore/base.py
from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, Dict, List, Optional, Tuple


class ChunkManager(ABC):
    """
    Storage contract shared by every chunk backend.

    Chunks are addressed by virtual paths relative to the backend's root.
    Batch operations are best-effort: every item is attempted and the
    failures are raised together as an ErrorList.
    """

    @abstractmethod
    def root_path(self) -> str:
        pass

    @abstractmethod
    def path(self, file_path: str) -> str:
        """Resolve a chunk that must already exist"""
        pass

    @abstractmethod
    def reader(self, file_path: str) -> BinaryIO:
        """Open a stream over the chunk. The caller closes it."""
        pass

    @abstractmethod
    def write(self, file_path: str, content: bytes) -> None:
        pass

    @abstractmethod
    def multi_write(self, contents: Dict[str, bytes]) -> None:
        pass

    @abstractmethod
    def exist(self, file_path: str) -> bool:
        pass

    @abstractmethod
    def read(self, file_path: str) -> bytes:
        pass

    @abstractmethod
    def multi_read(self, file_paths: List[str]) -> List[Optional[bytes]]:
        pass

    @abstractmethod
    def list_with_prefix(self, prefix: str, recursive: bool) -> Tuple[List[str], List[datetime]]:
        pass

    @abstractmethod
    def read_with_prefix(self, prefix: str) -> Tuple[List[str], List[Optional[bytes]]]:
        pass

    @abstractmethod
    def read_at(self, file_path: str, off: int, length: int) -> bytes:
        pass

    @abstractmethod
    def mmap(self, file_path: str):
        """
        Map the chunk read-only.

        Returns an `mmap.mmap` (or an empty bytes-like stand-in for an empty
        chunk) that supports len(), slicing and `with`. The caller closes it.
        """
        pass

    @abstractmethod
    def size(self, file_path: str) -> int:
        pass

    @abstractmethod
    def remove(self, file_path: str) -> None:
        pass

    @abstractmethod
    def multi_remove(self, file_paths: List[str]) -> None:
        pass

    @abstractmethod
    def remove_with_prefix(self, prefix: str) -> None:
        pass
