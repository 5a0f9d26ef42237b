"""Domain models for the media derivation service."""

from enum import Enum
from urllib.parse import unquote_plus

from media_common.infrastructure import UploadMetadata
from pydantic import AliasChoices, BaseModel, Field


class InboundObject(BaseModel, frozen=True):
    """Descriptor of the store object whose finalization triggered an invocation."""

    key: str = Field(min_length=1, validation_alias=AliasChoices("key", "name"))
    bucket_id: str = Field(
        min_length=1, validation_alias=AliasChoices("bucketId", "bucket", "bucket_id")
    )
    content_type: str = Field(
        default="", validation_alias=AliasChoices("contentType", "content_type")
    )

    @classmethod
    def from_event(cls, payload: dict) -> list["InboundObject"]:
        """
        Builds inbound objects from a trigger payload.

        Accepts either a flat ``{key, bucketId, contentType}`` document or an
        S3-style bucket notification (as emitted by MinIO) carrying one object
        per record. Notification keys are URL-encoded and get decoded here.

        Raises:
            ValidationError: If a descriptor lacks a key or bucket.
        """
        if "Records" not in payload:
            return [cls.model_validate(payload)]

        objects = []
        for record in payload["Records"]:
            s3_info = record.get("s3", {})
            s3_object = s3_info.get("object", {})
            objects.append(
                cls.model_validate(
                    {
                        "key": unquote_plus(s3_object.get("key", "")),
                        "bucketId": s3_info.get("bucket", {}).get("name", ""),
                        "contentType": s3_object.get("contentType", ""),
                    }
                )
            )
        return objects


class MediaProbeResult(BaseModel, frozen=True):
    """Stream-level facts read off a local media file."""

    video_codec: str | None = None
    width: int | None = Field(default=None, ge=1)
    height: int | None = Field(default=None, ge=1)

    @property
    def has_dimensions(self) -> bool:
        return self.width is not None and self.height is not None


class ArtifactKind(str, Enum):
    THUMBNAIL = "thumbnail"
    TRANSCODE = "transcode"
    PREVIEW = "preview"
    POSTER = "poster"


class ThumbnailParams(BaseModel, frozen=True):
    """Box a thumbnail must fit in; the source is only ever shrunk."""

    max_width: int = Field(ge=1)
    max_height: int = Field(ge=1)


class TranscodeParams(BaseModel, frozen=True):
    """Target encoding of a re-encoded video (also used for previews)."""

    codec: str
    container: str
    scale_percent: int = Field(default=100, gt=0, le=100)


class PosterParams(BaseModel, frozen=True):
    """Still frame(s) grabbed from a video."""

    seek_seconds: float = Field(default=1, ge=0)
    frame_count: int = Field(default=1, ge=1)


class DerivedArtifactSpec(BaseModel, frozen=True):
    """One artifact the pipeline must produce and upload."""

    kind: ArtifactKind
    target_key: str
    params: ThumbnailParams | TranscodeParams | PosterParams
    metadata: UploadMetadata


class DerivationPlan(BaseModel, frozen=True):
    """Ordered artifacts to derive from one inbound object."""

    artifacts: tuple[DerivedArtifactSpec, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.artifacts

    def kinds(self) -> list[ArtifactKind]:
        return [artifact.kind for artifact in self.artifacts]


class DerivationStatus(str, Enum):
    SKIPPED_INELIGIBLE = "skipped_ineligible"
    SKIPPED_DERIVED = "skipped_derived"
    COMPLETED = "completed"


class DerivationResult(BaseModel, frozen=True):
    """Outcome of handling one inbound object."""

    key: str
    bucket_name: str
    status: DerivationStatus
    derived_keys: tuple[str, ...] = ()
