"""Dependency injection configuration for the media-deriver service.

Process-wide collaborators are built once by ``init()`` at process start,
before the first message is consumed, and only read afterwards. None of them
hold per-object state, so concurrent invocations can share them; nothing
needs tearing down between invocations.
"""

from media_common import setup_logging
from media_common.infrastructure import MessageBroker, StorageClient
from media_common.minio import get_minio_client
from media_common.rabbitmq import get_rabbit_channel

from config import AppConfig, load_config
from domain import DerivationPlanner
from handlers import DerivationPipeline
from infrastructure import (
    FFmpegMediaTransformer,
    FFprobeMediaProber,
    MinioStorageClient,
    RabbitMQBroker,
)
from infrastructure.interfaces import MediaProber, MediaTransformer
from worker import Worker

logger = setup_logging()

_config: AppConfig | None = None
_connection = None
_storage: StorageClient | None = None
_broker: MessageBroker | None = None
_prober: MediaProber | None = None
_transformer: MediaTransformer | None = None


def init(config: AppConfig | None = None) -> None:
    """Creates the store, broker and media tool clients. Safe to call once per process."""
    global _config, _connection, _storage, _broker, _prober, _transformer

    if _config is not None:
        return

    config = config or load_config()

    storage = MinioStorageClient(get_minio_client(config.minio))
    storage.ensure_bucket_exists(config.minio.bucket_name)

    connection, channel = get_rabbit_channel(config.rabbitmq)
    broker = RabbitMQBroker(channel, config.rabbitmq)
    broker.setup()

    _prober = FFprobeMediaProber(
        ffprobe_path=config.tools.ffprobe_path,
        timeout=config.tools.probe_timeout_seconds,
    )
    _transformer = FFmpegMediaTransformer(
        ffmpeg_path=config.tools.ffmpeg_path,
        timeout=config.tools.transform_timeout_seconds,
    )
    _connection = connection
    _storage = storage
    _broker = broker
    _config = config
    logger.info("Dependencies initialized")


def _require(value, name: str):
    if value is None:
        raise RuntimeError(f"{name} requested before dependencies.init()")
    return value


def get_config() -> AppConfig:
    """Returns the loaded application configuration."""
    return _require(_config, "config")


def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    return _require(_storage, "storage")


def get_broker() -> MessageBroker:
    """Returns the configured message broker."""
    return _require(_broker, "broker")


def get_prober() -> MediaProber:
    """Returns the media prober."""
    return _require(_prober, "prober")


def get_transformer() -> MediaTransformer:
    """Returns the media transformer."""
    return _require(_transformer, "transformer")


def get_pipeline() -> DerivationPipeline:
    """Returns a derivation pipeline wired to the shared clients."""
    config = get_config()
    return DerivationPipeline(
        storage=get_storage(),
        prober=get_prober(),
        transformer=get_transformer(),
        planner=DerivationPlanner(config.derivation),
        scratch_root=config.derivation.scratch_root,
    )


def get_worker() -> Worker:
    """Returns the configured worker."""
    return Worker(get_broker(), get_pipeline(), get_config().rabbitmq)
