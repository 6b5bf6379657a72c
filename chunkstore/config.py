# chunkstore/config.py
import os
from typing import Literal, Optional

from pydantic import BaseModel


class ChunkStoreConfig(BaseModel):
    storage_type: Literal["local", "s3"] = "local"
    root_path: str = "files"
    bucket_name: Optional[str] = None
    region_name: str = "us-west-2"
    endpoint_url: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ChunkStoreConfig":
        """Build a config from CHUNKSTORE_* variables, falling back to the defaults."""
        values = {
            "storage_type": os.getenv("CHUNKSTORE_STORAGE_TYPE"),
            "root_path": os.getenv("CHUNKSTORE_ROOT_PATH"),
            "bucket_name": os.getenv("CHUNKSTORE_BUCKET_NAME"),
            "region_name": os.getenv("AWS_REGION"),
            "endpoint_url": os.getenv("CHUNKSTORE_ENDPOINT_URL"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})
