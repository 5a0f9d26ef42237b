"""Message handlers."""

from .derivation_pipeline import DerivationPipeline

__all__ = ["DerivationPipeline"]
