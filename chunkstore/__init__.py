from .base import ChunkManager
from .config import ChunkStoreConfig
from .errors import (
    ChunkNotFoundError,
    ChunkStoreError,
    ErrorList,
    InvalidRangeError,
    ListingError,
    ShortReadError,
)
from .factory import create_chunk_manager
from .local_chunk_manager import LocalChunkManager
from .s3_chunk_manager import S3ChunkManager

__all__ = [
    "ChunkManager",
    "ChunkStoreConfig",
    "ChunkNotFoundError",
    "ChunkStoreError",
    "ErrorList",
    "InvalidRangeError",
    "ListingError",
    "ShortReadError",
    "LocalChunkManager",
    "S3ChunkManager",
    "create_chunk_manager",
]
