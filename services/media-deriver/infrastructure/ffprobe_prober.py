"""ffprobe implementation of the MediaProber interface."""

import json
import subprocess
from pathlib import Path

from media_common import setup_logging

from domain.models import MediaProbeResult
from exceptions import ProbeError

from .interfaces import MediaProber

logger = setup_logging()


class FFprobeMediaProber(MediaProber):
    """Inspects media files by running ffprobe."""

    def __init__(self, ffprobe_path: str = "ffprobe", timeout: float = 30):
        self._ffprobe_path = ffprobe_path
        self._timeout = timeout

    def probe(self, file_path: Path) -> MediaProbeResult:
        streams = self._read_streams(file_path)
        if not streams:
            raise ProbeError(file_path.name, "no streams found")

        video_codec = next(
            (
                stream.get("codec_name")
                for stream in streams
                if stream.get("codec_type") == "video"
            ),
            None,
        )
        first = streams[0]
        result = MediaProbeResult(
            video_codec=video_codec,
            width=first.get("width") or None,
            height=first.get("height") or None,
        )

        logger.info(
            "Media probed",
            extra={
                "file_name": file_path.name,
                "video_codec": result.video_codec,
                "width": result.width,
                "height": result.height,
            },
        )
        return result

    def _read_streams(self, file_path: Path) -> list[dict]:
        cmd = [
            self._ffprobe_path,
            "-v", "error",
            "-print_format", "json",
            "-show_streams",
            str(file_path),
        ]
        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.exception("ffprobe timed out", extra={"file_name": file_path.name})
            raise ProbeError(file_path.name, "ffprobe timed out", e) from e
        except OSError as e:
            logger.exception("ffprobe could not run", extra={"file_name": file_path.name})
            raise ProbeError(file_path.name, "ffprobe could not run", e) from e

        if completed.returncode != 0:
            logger.error(
                "ffprobe failed",
                extra={
                    "file_name": file_path.name,
                    "returncode": completed.returncode,
                    "stderr": completed.stderr[-500:],
                },
            )
            raise ProbeError(file_path.name, f"ffprobe exited with {completed.returncode}")

        try:
            return json.loads(completed.stdout or "{}").get("streams") or []
        except json.JSONDecodeError as e:
            raise ProbeError(file_path.name, "unparseable ffprobe output", e) from e
