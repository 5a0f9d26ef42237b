"""Invocation-local scratch files for downloaded and derived media."""

import shutil
import tempfile
from pathlib import Path

from media_common import setup_logging

logger = setup_logging()


class ScratchSpace:
    """
    Private scratch directory of one invocation.

    Store keys map to paths below the directory with their own directory
    structure preserved. On exit every file that was actually created is
    removed, each independently; removal failures are logged and never raised
    so they cannot mask an error already propagating.

    Example:
        with ScratchSpace(root) as scratch:
            local_path = scratch.path_for("uploads/clip.mov")
    """

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._directory: Path | None = None
        self._paths: list[Path] = []

    @property
    def directory(self) -> Path:
        if self._directory is None:
            raise RuntimeError("Scratch space is not open")
        return self._directory

    def __enter__(self) -> "ScratchSpace":
        self._root.mkdir(parents=True, exist_ok=True)
        self._directory = Path(tempfile.mkdtemp(prefix="derive-", dir=self._root))
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def path_for(self, key: str) -> Path:
        """
        Reserves the local path of a store key and creates its parent directories.

        Raises:
            ValueError: If the key would resolve outside the scratch directory.
        """
        base = self.directory.resolve()
        path = (base / key.lstrip("/")).resolve()
        if base not in path.parents:
            raise ValueError(f"Key '{key}' escapes the scratch directory")

        path.parent.mkdir(parents=True, exist_ok=True)
        self._paths.append(path)
        return path

    def cleanup(self) -> None:
        """Removes every created scratch file, then the scratch directory."""
        if self._directory is None:
            return

        for path in self._paths:
            if not path.exists():
                continue
            try:
                path.unlink()
            except OSError:
                logger.exception(
                    "Failed to remove scratch file", extra={"path": str(path)}
                )

        try:
            shutil.rmtree(self._directory)
        except OSError:
            logger.exception(
                "Failed to remove scratch directory",
                extra={"path": str(self._directory)},
            )
        self._paths = []
        self._directory = None
