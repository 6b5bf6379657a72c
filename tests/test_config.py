"""
Tests for chunkstore.config and chunkstore.factory.
"""

import pytest
from pydantic import ValidationError

from chunkstore import ChunkStoreConfig, LocalChunkManager, S3ChunkManager, create_chunk_manager


class TestChunkStoreConfig:
    def test_defaults(self):
        config = ChunkStoreConfig()
        assert config.storage_type == "local"
        assert config.root_path == "files"
        assert config.bucket_name is None

    def test_rejects_unknown_storage_type(self):
        with pytest.raises(ValidationError):
            ChunkStoreConfig(storage_type="ftp")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CHUNKSTORE_STORAGE_TYPE", "s3")
        monkeypatch.setenv("CHUNKSTORE_ROOT_PATH", "segments")
        monkeypatch.setenv("CHUNKSTORE_BUCKET_NAME", "my-bucket")
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        monkeypatch.delenv("CHUNKSTORE_ENDPOINT_URL", raising=False)

        config = ChunkStoreConfig.from_env()
        assert config.storage_type == "s3"
        assert config.root_path == "segments"
        assert config.bucket_name == "my-bucket"
        assert config.region_name == "eu-west-1"
        assert config.endpoint_url is None

    def test_from_env_uses_defaults(self, monkeypatch):
        for name in (
            "CHUNKSTORE_STORAGE_TYPE",
            "CHUNKSTORE_ROOT_PATH",
            "CHUNKSTORE_BUCKET_NAME",
            "CHUNKSTORE_ENDPOINT_URL",
            "AWS_REGION",
        ):
            monkeypatch.delenv(name, raising=False)
        assert ChunkStoreConfig.from_env() == ChunkStoreConfig()


class TestCreateChunkManager:
    def test_local(self, tmp_path):
        manager = create_chunk_manager(ChunkStoreConfig(root_path=str(tmp_path)))
        assert isinstance(manager, LocalChunkManager)
        manager.write("a", b"1")
        assert manager.read("a") == b"1"

    def test_s3(self):
        manager = create_chunk_manager(ChunkStoreConfig(storage_type="s3", bucket_name="b", root_path="p"))
        assert isinstance(manager, S3ChunkManager)
        assert manager.root_path() == "p"

    def test_s3_requires_bucket(self):
        with pytest.raises(ValueError):
            create_chunk_manager(ChunkStoreConfig(storage_type="s3"))
