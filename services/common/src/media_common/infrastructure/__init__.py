from media_common.infrastructure.interfaces import (
    MessageBroker,
    MessagePublisher,
    StorageClient,
    UploadMetadata,
)

__all__ = [
    "StorageClient",
    "UploadMetadata",
    "MessagePublisher",
    "MessageBroker",
]
