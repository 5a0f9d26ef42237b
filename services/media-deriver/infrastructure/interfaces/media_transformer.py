"""Abstract interface for media transform operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from domain.models import ThumbnailParams, TranscodeParams


class MediaTransformer(ABC):
    """Abstract base class for media transform backends.

    Every operation returns only once the output is complete; on failure it
    raises and the output file must not be used.
    """

    @abstractmethod
    def transcode(
        self, input_path: Path, output_path: Path, params: TranscodeParams
    ) -> None:
        """
        Re-encodes a video to the given codec and container, scaled uniformly.

        Raises:
            TransformError: If the tool fails or times out.
        """

    @abstractmethod
    def extract_poster(
        self,
        input_path: Path,
        output_path: Path,
        seek_seconds: float = 1,
        frame_count: int = 1,
    ) -> None:
        """
        Writes still frame(s) taken ``seek_seconds`` into a video.

        Raises:
            TransformError: If the tool fails or times out.
        """

    @abstractmethod
    def thumbnail(
        self, input_path: Path, output_path: Path, params: ThumbnailParams
    ) -> None:
        """
        Shrinks an image to fit the box, keeping its aspect ratio and format.

        Raises:
            TransformError: If the image cannot be read or written.
        """
