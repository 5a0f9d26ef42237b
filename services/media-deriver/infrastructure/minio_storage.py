"""MinIO implementation of the StorageClient interface."""

import gzip
import shutil
from pathlib import Path

from media_common import StorageDownloadError, StorageUploadError, setup_logging
from media_common.infrastructure import StorageClient, UploadMetadata
from minio import Minio

logger = setup_logging()

PUBLIC_READ_ACL = "public-read"


class MinioStorageClient(StorageClient):
    """Handles file storage operations using MinIO."""

    def __init__(self, client: Minio):
        self._client = client

    def download_file(self, bucket_name: str, object_name: str, file_path: Path) -> Path:
        try:
            self._client.fget_object(bucket_name, object_name, str(file_path))
            logger.info(
                "File downloaded from MinIO",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            return file_path
        except Exception as e:
            logger.exception(
                "MinIO download failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e

    def upload_file(
        self,
        bucket_name: str,
        file_path: Path,
        object_name: str,
        metadata: UploadMetadata,
    ) -> None:
        upload_path = file_path
        try:
            if metadata.gzip:
                upload_path = self._gzip(file_path)
            self._client.fput_object(
                bucket_name=bucket_name,
                object_name=object_name,
                file_path=str(upload_path),
                content_type=metadata.content_type or "application/octet-stream",
                metadata=self._object_headers(metadata),
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                    "public_read": metadata.public_read,
                },
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e
        finally:
            if upload_path != file_path:
                upload_path.unlink(missing_ok=True)

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        """Creates the media bucket on first start; derived objects land in it too."""
        created = not self._client.bucket_exists(bucket_name)
        if created:
            self._client.make_bucket(bucket_name)
        logger.info(
            "Media bucket ready", extra={"bucket_name": bucket_name, "created": created}
        )

    @staticmethod
    def _object_headers(metadata: UploadMetadata) -> dict[str, str]:
        headers = {"Cache-Control": metadata.cache_control}
        if metadata.public_read:
            headers["x-amz-acl"] = PUBLIC_READ_ACL
        if metadata.gzip:
            headers["Content-Encoding"] = "gzip"
        return headers

    @staticmethod
    def _gzip(file_path: Path) -> Path:
        """Writes a gzip-compressed sibling of ``file_path`` and returns its path."""
        gzip_path = file_path.with_name(file_path.name + ".gz")
        with open(file_path, "rb") as source, gzip.open(gzip_path, "wb") as target:
            shutil.copyfileobj(source, target)
        return gzip_path
