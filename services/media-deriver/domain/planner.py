"""Core business logic deciding which artifacts to derive from an object."""

import math

from media_common import setup_logging
from media_common.infrastructure import UploadMetadata

from config import DerivationConfig

from .models import (
    ArtifactKind,
    DerivationPlan,
    DerivedArtifactSpec,
    InboundObject,
    MediaProbeResult,
    PosterParams,
    ThumbnailParams,
    TranscodeParams,
)
from .naming import derived_content_type, derived_key, is_image, is_video

logger = setup_logging()


def preview_scale_percent(
    width: int, height: int, max_width: int = 425, max_height: int = 480
) -> int:
    """
    Uniform scale percentage for a preview clip.

    Each axis contributes ``100 - ((dim - limit) / dim) * 100`` when it exceeds
    its limit and 0 otherwise. The smaller contribution, floored, scales both
    axes. A result of 0 means no preview should be made.
    """
    height_percent = _axis_percent(height, max_height)
    width_percent = _axis_percent(width, max_width)
    return math.floor(min(height_percent, width_percent))


def _axis_percent(dimension: int, limit: int) -> float:
    if dimension <= limit:
        return 0.0
    return 100 - ((dimension - limit) / dimension) * 100


class DerivationPlanner:
    """Turns an inbound object and its probe result into a derivation plan."""

    def __init__(self, config: DerivationConfig):
        self._config = config

    def plan(self, inbound: InboundObject, probe: MediaProbeResult) -> DerivationPlan:
        """
        Decides the artifacts to derive from ``inbound``.

        Args:
            inbound: The triggering object; must be an image or a video.
            probe: Stream facts of the downloaded object.

        Returns:
            The ordered plan; empty when nothing needs deriving.
        """
        if is_image(inbound.content_type):
            artifacts = self._plan_image(inbound, probe)
        elif is_video(inbound.content_type):
            artifacts = self._plan_video(inbound, probe)
        else:
            artifacts = []

        plan = DerivationPlan(artifacts=tuple(artifacts))
        logger.info(
            "Derivation planned",
            extra={
                "file_name": inbound.key,
                "artifacts": [kind.value for kind in plan.kinds()],
            },
        )
        return plan

    def _plan_image(
        self, inbound: InboundObject, probe: MediaProbeResult
    ) -> list[DerivedArtifactSpec]:
        box = ThumbnailParams(
            max_width=self._config.thumbnail_max_width,
            max_height=self._config.thumbnail_max_height,
        )
        if self._config.thumbnail_min_size_gate and self._fits_box(probe, box):
            logger.info(
                "Image already within thumbnail box",
                extra={
                    "file_name": inbound.key,
                    "width": probe.width,
                    "height": probe.height,
                },
            )
            return []

        return [
            self._artifact(
                inbound,
                ArtifactKind.THUMBNAIL,
                box,
                cache_control=self._config.thumbnail_cache_control,
                public_read=True,
            )
        ]

    def _plan_video(
        self, inbound: InboundObject, probe: MediaProbeResult
    ) -> list[DerivedArtifactSpec]:
        if probe.video_codec is None:
            logger.warning(
                "No video stream found, deriving anyway",
                extra={"file_name": inbound.key},
            )

        artifacts = []
        if probe.video_codec != self._config.normalized_codec:
            artifacts.append(
                self._video_artifact(inbound, ArtifactKind.TRANSCODE, scale_percent=100)
            )

        artifacts.append(
            self._artifact(
                inbound,
                ArtifactKind.POSTER,
                PosterParams(
                    seek_seconds=self._config.poster_seek_seconds,
                    frame_count=self._config.poster_frame_count,
                ),
                cache_control=self._config.poster_cache_control,
                public_read=False,
            )
        )

        scale = self._preview_scale(probe)
        if scale > 0:
            artifacts.append(
                self._video_artifact(inbound, ArtifactKind.PREVIEW, scale_percent=scale)
            )
        return artifacts

    def _preview_scale(self, probe: MediaProbeResult) -> int:
        if not probe.has_dimensions:
            return 0
        return preview_scale_percent(
            probe.width,
            probe.height,
            max_width=self._config.preview_max_width,
            max_height=self._config.preview_max_height,
        )

    def _video_artifact(
        self, inbound: InboundObject, kind: ArtifactKind, scale_percent: int
    ) -> DerivedArtifactSpec:
        return self._artifact(
            inbound,
            kind,
            TranscodeParams(
                codec=self._config.video_encoder,
                container=self._config.video_container,
                scale_percent=scale_percent,
            ),
            cache_control=self._config.video_cache_control,
            public_read=True,
            gzip=True,
        )

    def _artifact(
        self,
        inbound: InboundObject,
        kind: ArtifactKind,
        params: ThumbnailParams | TranscodeParams | PosterParams,
        cache_control: str,
        public_read: bool,
        gzip: bool = False,
    ) -> DerivedArtifactSpec:
        return DerivedArtifactSpec(
            kind=kind,
            target_key=derived_key(inbound.key, kind),
            params=params,
            metadata=UploadMetadata(
                content_type=derived_content_type(kind, inbound.content_type),
                cache_control=cache_control,
                public_read=public_read,
                gzip=gzip,
            ),
        )

    @staticmethod
    def _fits_box(probe: MediaProbeResult, box: ThumbnailParams) -> bool:
        return (
            probe.has_dimensions
            and probe.width < box.max_width
            and probe.height < box.max_height
        )
