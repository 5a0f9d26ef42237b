"""Infrastructure implementations."""

from .ffmpeg_transformer import FFmpegMediaTransformer
from .ffprobe_prober import FFprobeMediaProber
from .minio_storage import MinioStorageClient
from .rabbitmq_broker import RabbitMQBroker
from .scratch import ScratchSpace

__all__ = [
    "FFmpegMediaTransformer",
    "FFprobeMediaProber",
    "MinioStorageClient",
    "RabbitMQBroker",
    "ScratchSpace",
]
