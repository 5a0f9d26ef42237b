"""Application configuration loaded from environment variables."""

import os
import tempfile

from media_common import MinioConfig, QueueConfig, RabbitMQConfig
from pydantic import BaseModel, Field


class DerivationConfig(BaseModel, frozen=True):
    """Decision constants of the derivation pipeline."""

    thumbnail_max_width: int = Field(default=200, ge=1)
    thumbnail_max_height: int = Field(default=200, ge=1)
    thumbnail_min_size_gate: bool = True
    thumbnail_cache_control: str = "public,max-age=3600"

    normalized_codec: str = "h264"
    video_encoder: str = "libx264"
    video_container: str = "mp4"
    video_cache_control: str = "public, max-age=31536000"

    preview_max_width: int = Field(default=425, ge=1)
    preview_max_height: int = Field(default=480, ge=1)

    poster_seek_seconds: float = Field(default=1, ge=0)
    poster_frame_count: int = Field(default=1, ge=1)
    poster_cache_control: str = "public, max-age=31536000"

    scratch_root: str = tempfile.gettempdir()


class ToolConfig(BaseModel, frozen=True):
    """Locations and time limits of the external media tools."""

    ffmpeg_path: str = "ffmpeg"
    ffprobe_path: str = "ffprobe"
    probe_timeout_seconds: float = Field(default=30, gt=0)
    transform_timeout_seconds: float = Field(default=540, gt=0)


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    rabbitmq: RabbitMQConfig
    derivation: DerivationConfig = DerivationConfig()
    tools: ToolConfig = ToolConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            secure=os.getenv("MINIO_SECURE", "false"),
            bucket_name=os.getenv("MINIO_BUCKET", "media"),
        ),
        rabbitmq=RabbitMQConfig(
            host=os.getenv("RABBITMQ_HOST", "rabbitmq"),
            user=os.getenv("RABBITMQ_USER", ""),
            password=os.getenv("RABBITMQ_PASSWORD", ""),
            queue_config=QueueConfig(
                name="media_derivation_queue",
                queue_type="quorum",
                max_delivery_count=3,
                expected_routing_key="object.finalized",
                success_routing_key="media.derivation.completed",
                dlq_name="dlq_media_derivation",
                dlq_exchange_name="dead_letter_exchange",
                dlq_routing_key="media.derivation.failed",
            ),
        ),
        derivation=DerivationConfig(
            thumbnail_max_width=os.getenv("THUMBNAIL_MAX_WIDTH", "200"),
            thumbnail_max_height=os.getenv("THUMBNAIL_MAX_HEIGHT", "200"),
            thumbnail_min_size_gate=os.getenv("THUMBNAIL_MIN_SIZE_GATE", "true"),
            preview_max_width=os.getenv("PREVIEW_MAX_WIDTH", "425"),
            preview_max_height=os.getenv("PREVIEW_MAX_HEIGHT", "480"),
            poster_seek_seconds=os.getenv("POSTER_SEEK_SECONDS", "1"),
            scratch_root=os.getenv("SCRATCH_ROOT", tempfile.gettempdir()),
        ),
        tools=ToolConfig(
            ffmpeg_path=os.getenv("FFMPEG_PATH", "ffmpeg"),
            ffprobe_path=os.getenv("FFPROBE_PATH", "ffprobe"),
            probe_timeout_seconds=os.getenv("PROBE_TIMEOUT_SECONDS", "30"),
            transform_timeout_seconds=os.getenv("TRANSFORM_TIMEOUT_SECONDS", "540"),
        ),
    )
