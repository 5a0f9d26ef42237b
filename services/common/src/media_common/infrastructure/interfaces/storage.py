"""Abstract interface for file storage operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel


class UploadMetadata(BaseModel, frozen=True):
    """Object metadata attached to an uploaded file."""

    content_type: str | None = None
    cache_control: str
    public_read: bool = False
    gzip: bool = False


class StorageClient(ABC):
    """Abstract base class for file storage backends."""

    @abstractmethod
    def download_file(self, bucket_name: str, object_name: str, file_path: Path) -> Path:
        """
        Downloads an object from storage into a local file.

        Args:
            bucket_name: The storage bucket name.
            object_name: The object path/name in storage.
            file_path: Local destination; parent directories must exist.

        Returns:
            The local path the object was written to.

        Raises:
            StorageDownloadError: If the download fails.
        """

    @abstractmethod
    def upload_file(
        self,
        bucket_name: str,
        file_path: Path,
        object_name: str,
        metadata: UploadMetadata,
    ) -> None:
        """
        Uploads a local file to storage.

        Args:
            bucket_name: The storage bucket name.
            file_path: Local file to upload.
            object_name: The destination path/name in storage.
            metadata: Content type, cache control, ACL and encoding of the object.

        Raises:
            StorageUploadError: If the upload fails.
        """

    @abstractmethod
    def ensure_bucket_exists(self, bucket_name: str) -> None:
        """
        Ensures a bucket exists, creating it if necessary.

        Args:
            bucket_name: The bucket name to ensure exists.
        """
