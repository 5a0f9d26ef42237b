from media_common.config import MinioConfig, QueueConfig, RabbitMQConfig
from media_common.exceptions import (
    EventPublishError,
    StorageDownloadError,
    StorageUploadError,
    StoreError,
)
from media_common.logging import setup_logging

__all__ = [
    "setup_logging",
    "StoreError",
    "StorageDownloadError",
    "StorageUploadError",
    "EventPublishError",
    "MinioConfig",
    "QueueConfig",
    "RabbitMQConfig",
]
