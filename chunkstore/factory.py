from .base import ChunkManager
from .config import ChunkStoreConfig
from .local_chunk_manager import LocalChunkManager
from .s3_chunk_manager import S3ChunkManager


def create_chunk_manager(config: ChunkStoreConfig) -> ChunkManager:
    if config.storage_type == "local":
        return LocalChunkManager(config.root_path)
    if config.storage_type == "s3":
        if not config.bucket_name:
            raise ValueError("bucket_name is required for s3 storage")
        return S3ChunkManager(
            bucket_name=config.bucket_name,
            root_path=config.root_path,
            region_name=config.region_name,
            endpoint_url=config.endpoint_url,
        )
    raise ValueError(f"Unsupported storage type: {config.storage_type}")
