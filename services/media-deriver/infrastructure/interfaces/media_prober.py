"""Abstract interface for media inspection."""

from abc import ABC, abstractmethod
from pathlib import Path

from domain.models import MediaProbeResult


class MediaProber(ABC):
    """Abstract base class for media inspection backends."""

    @abstractmethod
    def probe(self, file_path: Path) -> MediaProbeResult:
        """
        Reads stream-level facts off a local media file.

        The codec is the one of the first video stream (None without any);
        dimensions are read off the first stream.

        Args:
            file_path: Local file to inspect.

        Returns:
            The probe result.

        Raises:
            ProbeError: If the file cannot be parsed or has no streams.
        """
        pass
