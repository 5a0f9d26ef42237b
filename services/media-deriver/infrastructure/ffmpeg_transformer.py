"""ffmpeg / Pillow implementation of the MediaTransformer interface."""

import subprocess
from pathlib import Path

from media_common import setup_logging
from PIL import Image, ImageOps

from domain.models import ThumbnailParams, TranscodeParams
from exceptions import TransformError

from .interfaces import MediaTransformer

logger = setup_logging()


class FFmpegMediaTransformer(MediaTransformer):
    """Derives videos and stills with ffmpeg and image thumbnails with Pillow."""

    def __init__(self, ffmpeg_path: str = "ffmpeg", timeout: float = 540):
        self._ffmpeg_path = ffmpeg_path
        self._timeout = timeout

    def transcode(
        self, input_path: Path, output_path: Path, params: TranscodeParams
    ) -> None:
        cmd = [
            self._ffmpeg_path,
            "-y",
            "-v", "error",
            "-i", str(input_path),
            "-c:v", params.codec,
        ]
        if params.scale_percent != 100:
            # libx264 needs even dimensions
            cmd += [
                "-vf",
                f"scale=trunc(iw*{params.scale_percent}/200)*2"
                f":trunc(ih*{params.scale_percent}/200)*2",
            ]
        if params.container == "mp4":
            cmd += ["-movflags", "+faststart"]
        cmd += ["-f", params.container, str(output_path)]

        self._run(cmd, input_path, output_path)
        logger.info(
            "Video transcoded",
            extra={
                "file_name": input_path.name,
                "output": output_path.name,
                "codec": params.codec,
                "scale_percent": params.scale_percent,
            },
        )

    def extract_poster(
        self,
        input_path: Path,
        output_path: Path,
        seek_seconds: float = 1,
        frame_count: int = 1,
    ) -> None:
        cmd = [
            self._ffmpeg_path,
            "-y",
            "-v", "error",
            "-ss", str(seek_seconds),
            "-i", str(input_path),
            "-frames:v", str(frame_count),
            "-f", "image2",
            "-update", "1",
            str(output_path),
        ]

        self._run(cmd, input_path, output_path)
        logger.info(
            "Poster extracted",
            extra={
                "file_name": input_path.name,
                "output": output_path.name,
                "seek_seconds": seek_seconds,
            },
        )

    def thumbnail(
        self, input_path: Path, output_path: Path, params: ThumbnailParams
    ) -> None:
        image_format = None
        try:
            with Image.open(input_path) as source:
                image_format = source.format
                image = ImageOps.exif_transpose(source)
                # Image.thumbnail never enlarges and keeps the aspect ratio
                image.thumbnail((params.max_width, params.max_height), Image.LANCZOS)
                if image_format == "JPEG" and image.mode not in ("RGB", "L"):
                    image = image.convert("RGB")
                image.save(output_path, format=image_format)
        except KeyError as e:
            # Pillow reads this format but has no writer for it
            logger.exception(
                "Thumbnail format not writable",
                extra={"file_name": input_path.name, "format": image_format},
            )
            raise TransformError(
                input_path.name, f"cannot write {image_format} thumbnails", e
            ) from e
        except (OSError, ValueError) as e:
            logger.exception(
                "Thumbnail generation failed", extra={"file_name": input_path.name}
            )
            raise TransformError(input_path.name, "thumbnail generation failed", e) from e

        logger.info(
            "Thumbnail created",
            extra={
                "file_name": input_path.name,
                "output": output_path.name,
                "width": image.width,
                "height": image.height,
            },
        )

    def _run(self, cmd: list[str], input_path: Path, output_path: Path) -> None:
        """Runs ffmpeg to completion; raises TransformError unless it produced output."""
        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.exception("ffmpeg timed out", extra={"file_name": input_path.name})
            raise TransformError(input_path.name, "ffmpeg timed out", e) from e
        except OSError as e:
            logger.exception("ffmpeg could not run", extra={"file_name": input_path.name})
            raise TransformError(input_path.name, "ffmpeg could not run", e) from e

        if completed.returncode != 0:
            logger.error(
                "ffmpeg failed",
                extra={
                    "file_name": input_path.name,
                    "returncode": completed.returncode,
                    "stderr": completed.stderr[-500:],
                },
            )
            raise TransformError(
                input_path.name, f"ffmpeg exited with {completed.returncode}"
            )

        if not output_path.exists() or output_path.stat().st_size == 0:
            raise TransformError(input_path.name, "ffmpeg produced no output")
