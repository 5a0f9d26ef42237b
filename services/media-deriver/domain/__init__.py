"""Domain layer containing business logic and models."""

from .models import (
    ArtifactKind,
    DerivationPlan,
    DerivationResult,
    DerivationStatus,
    DerivedArtifactSpec,
    InboundObject,
    MediaProbeResult,
    PosterParams,
    ThumbnailParams,
    TranscodeParams,
)
from .naming import derived_key, is_already_derived, is_eligible
from .planner import DerivationPlanner, preview_scale_percent

__all__ = [
    "ArtifactKind",
    "DerivationPlan",
    "DerivationPlanner",
    "DerivationResult",
    "DerivationStatus",
    "DerivedArtifactSpec",
    "InboundObject",
    "MediaProbeResult",
    "PosterParams",
    "ThumbnailParams",
    "TranscodeParams",
    "derived_key",
    "is_already_derived",
    "is_eligible",
    "preview_scale_percent",
]
