"""Abstract interfaces for infrastructure dependencies."""

from media_common.infrastructure import MessageBroker, StorageClient

from .media_prober import MediaProber
from .media_transformer import MediaTransformer

__all__ = ["MessageBroker", "StorageClient", "MediaProber", "MediaTransformer"]
