from __future__ import annotations

import shutil
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import BinaryIO

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from confmaster.core.config import settings
from confmaster.core.errors import NotFound
from confmaster.core.logging import get_logger

logger = get_logger(__name__)


class StorageError(Exception):
    """The blob store could not accept or hand out the file."""


@dataclass(frozen=True)
class BlobLink:
    """Where a stored file can be fetched from: a signed URL or a path on disk."""

    object_key: str
    url: str | None = None
    path: Path | None = None
    expires_in: int | None = None


def _get_s3_client():
    return boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint,
        aws_access_key_id=settings.s3_access_key,
        aws_secret_access_key=settings.s3_secret_key,
        region_name=settings.s3_region,
        config=Config(signature_version="s3v4"),
    )


def ensure_bucket_exists(bucket: str) -> None:
    s3 = _get_s3_client()
    try:
        s3.head_bucket(Bucket=bucket)
    except ClientError:
        s3.create_bucket(Bucket=bucket)


def _object_key(prefix: str, original_name: str) -> str:
    safe_name = original_name.replace("/", "_").replace("\\", "_")
    return f"{prefix.strip('/')}/{uuid.uuid4()}-{safe_name}"


def display_name(object_key: str) -> str:
    """Original file name, without the prefix and the uuid added by _object_key."""
    name = object_key.rsplit("/", 1)[-1]
    return name[37:] if len(name) > 37 and name[36] == "-" else name


class BlobStore:
    """Accepts uploaded bytes and hands back a stable reference."""

    backend_name = "base"

    def put(self, fileobj: BinaryIO, *, original_name: str, content_type: str, prefix: str) -> str:
        raise NotImplementedError

    def link(self, object_key: str) -> BlobLink:
        raise NotImplementedError


class S3BlobStore(BlobStore):
    backend_name = "s3"

    def __init__(self, bucket: str) -> None:
        self.bucket = bucket
        self._bucket_ready = False

    def put(self, fileobj: BinaryIO, *, original_name: str, content_type: str, prefix: str) -> str:
        """
        Uploads the file to S3/MinIO and returns the object_key.
        """
        object_key = _object_key(prefix, original_name)
        try:
            if not self._bucket_ready:
                ensure_bucket_exists(self.bucket)
                self._bucket_ready = True
            _get_s3_client().upload_fileobj(
                Fileobj=fileobj,
                Bucket=self.bucket,
                Key=object_key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("s3 upload failed", extra={"fields": {"bucket": self.bucket, "key": object_key}})
            raise StorageError("file upload failed") from exc
        return object_key

    def link(self, object_key: str) -> BlobLink:
        """
        Returns a presigned GET url for the object.
        """
        expires_in = settings.s3_presign_expires_seconds
        try:
            url = _get_s3_client().generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": object_key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("s3 presign failed", extra={"fields": {"bucket": self.bucket, "key": object_key}})
            raise StorageError("file link failed") from exc
        return BlobLink(object_key=object_key, url=url, expires_in=expires_in)


class LocalBlobStore(BlobStore):
    backend_name = "local"

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def put(self, fileobj: BinaryIO, *, original_name: str, content_type: str, prefix: str) -> str:
        object_key = _object_key(prefix, original_name)
        target = self.root / object_key
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as out:
                shutil.copyfileobj(fileobj, out)
        except OSError as exc:
            logger.error("local upload failed", extra={"fields": {"path": str(target)}})
            raise StorageError("file upload failed") from exc
        return object_key

    def link(self, object_key: str) -> BlobLink:
        root = self.root.resolve()
        target = (root / object_key).resolve()
        # keys come from the database, but never serve anything outside the root
        if root not in target.parents or not target.is_file():
            raise NotFound("file not found")
        return BlobLink(object_key=object_key, path=target)


@lru_cache
def get_blob_store() -> BlobStore:
    if settings.storage_backend == "s3":
        return S3BlobStore(settings.s3_bucket)
    return LocalBlobStore(settings.local_storage_dir)
