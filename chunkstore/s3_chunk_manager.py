# chunkstore/s3_chunk_manager.py
import logging
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import ChunkManager
from .batch import run_batch
from .errors import ChunkNotFoundError, ChunkStoreError, InvalidRangeError, ShortReadError

logger = logging.getLogger(__name__)

S3_ERRORS = (ChunkStoreError, ClientError, BotoCoreError)


def _is_not_found(e: ClientError) -> bool:
    return e.response["Error"]["Code"] in ("404", "NoSuchKey", "NotFound")


class S3ChunkManager(ChunkManager):
    def __init__(
        self,
        bucket_name: str,
        root_path: str = "",
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client=None,
    ):
        self.bucket = bucket_name
        self.prefix = root_path.strip("/")  # optional prefix within the bucket
        self.s3 = client or boto3.client("s3", region_name=region_name, endpoint_url=endpoint_url)

    def _full_key(self, key: str) -> str:
        key = key.lstrip("/")
        return f"{self.prefix}/{key}" if self.prefix else key

    def _rel_key(self, key: str) -> str:
        if self.prefix and key.startswith(self.prefix + "/"):
            return key[len(self.prefix) + 1:]
        return key

    def root_path(self) -> str:
        return self.prefix

    def path(self, file_path: str) -> str:
        if not self.exist(file_path):
            raise ChunkNotFoundError(file_path)
        return self._full_key(file_path)

    def _get_object(self, file_path: str, **kwargs):
        key = self._full_key(file_path)
        try:
            return self.s3.get_object(Bucket=self.bucket, Key=key, **kwargs)
        except ClientError as e:
            if _is_not_found(e):
                raise ChunkNotFoundError(file_path) from e
            if e.response["Error"]["Code"] == "InvalidRange":
                raise
            logger.error(f"Error reading file {key} from bucket {self.bucket}: {e}")
            raise

    def reader(self, file_path: str) -> BinaryIO:
        return self._get_object(file_path)["Body"]

    def write(self, file_path: str, content: bytes) -> None:
        # No directory creation needed for S3
        key = self._full_key(file_path)
        try:
            self.s3.put_object(Bucket=self.bucket, Key=key, Body=content)
        except ClientError as e:
            logger.error(f"Error writing file {key} to bucket {self.bucket}: {e}")
            raise

    def multi_write(self, contents: Dict[str, bytes]) -> None:
        run_batch(contents, lambda p: self.write(p, contents[p]), "multi_write", S3_ERRORS)

    def exist(self, file_path: str) -> bool:
        key = self._full_key(file_path)
        try:
            self.s3.head_object(Bucket=self.bucket, Key=key)
            return True
        except ClientError as e:
            if _is_not_found(e):
                return False
            raise

    def read(self, file_path: str) -> bytes:
        return self._get_object(file_path)["Body"].read()

    def multi_read(self, file_paths: List[str]) -> List[Optional[bytes]]:
        return run_batch(file_paths, self.read, "multi_read", S3_ERRORS)

    def list_with_prefix(self, prefix: str, recursive: bool) -> Tuple[List[str], List[datetime]]:
        params = {"Bucket": self.bucket, "Prefix": self._full_key(prefix)}
        if not recursive:
            params["Delimiter"] = "/"

        file_paths = []
        mod_times = []
        listed_at = datetime.now(timezone.utc)
        paginator = self.s3.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(**params):
                for obj in page.get("Contents", []):
                    file_paths.append(self._rel_key(obj["Key"]))
                    mod_times.append(obj["LastModified"])
                # "directories" have no timestamp of their own
                for common in page.get("CommonPrefixes", []):
                    file_paths.append(self._rel_key(common["Prefix"]))
                    mod_times.append(listed_at)
        except ClientError as e:
            logger.error(f"Error listing files in bucket {self.bucket}: {e}")
            raise
        return file_paths, mod_times

    def read_with_prefix(self, prefix: str) -> Tuple[List[str], List[Optional[bytes]]]:
        file_paths, _ = self.list_with_prefix(prefix, True)
        return file_paths, self.multi_read(file_paths)

    def read_at(self, file_path: str, off: int, length: int) -> bytes:
        if off < 0 or length < 0:
            raise InvalidRangeError(off, length)
        if length == 0:
            return b""
        try:
            resp = self._get_object(file_path, Range=f"bytes={off}-{off + length - 1}")
        except ClientError as e:
            # range starts past the end of the object
            if e.response["Error"]["Code"] == "InvalidRange":
                raise ShortReadError(file_path, length, 0) from e
            raise
        data = resp["Body"].read()
        if len(data) < length:
            raise ShortReadError(file_path, length, len(data))
        return data

    def mmap(self, file_path: str):
        raise NotImplementedError("mmap is not supported by the S3 chunk manager")

    def size(self, file_path: str) -> int:
        key = self._full_key(file_path)
        try:
            resp = self.s3.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_not_found(e):
                raise ChunkNotFoundError(file_path) from e
            raise
        return resp["ContentLength"]

    def remove(self, file_path: str) -> None:
        # S3 deletes are already idempotent
        key = self._full_key(file_path)
        self.s3.delete_object(Bucket=self.bucket, Key=key)
        logger.debug(f"Removed s3://{self.bucket}/{key}")

    def multi_remove(self, file_paths: List[str]) -> None:
        run_batch(file_paths, self.remove, "multi_remove", S3_ERRORS)

    def remove_with_prefix(self, prefix: str) -> None:
        file_paths, _ = self.list_with_prefix(prefix, True)
        self.multi_remove(file_paths)
