from media_common.infrastructure.interfaces.message_broker import (
    MessageBroker,
    MessagePublisher,
)
from media_common.infrastructure.interfaces.storage import StorageClient, UploadMetadata

__all__ = [
    "StorageClient",
    "UploadMetadata",
    "MessagePublisher",
    "MessageBroker",
]
