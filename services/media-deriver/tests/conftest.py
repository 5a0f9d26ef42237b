from pathlib import Path

import pytest
from media_common import StorageDownloadError, StorageUploadError
from media_common.infrastructure import StorageClient, UploadMetadata

from config import DerivationConfig
from domain import DerivationPlanner, MediaProbeResult, ThumbnailParams, TranscodeParams
from exceptions import ProbeError, TransformError
from handlers import DerivationPipeline
from infrastructure.interfaces import MediaProber, MediaTransformer


class StubStorage(StorageClient):
    def __init__(self, *, fail_download: bool = False, fail_upload_key: str | None = None):
        self._fail_download = fail_download
        self._fail_upload_key = fail_upload_key
        self.downloads: list[tuple[str, str, Path]] = []
        self.uploads: list[dict] = []

    def download_file(self, bucket_name: str, object_name: str, file_path: Path) -> Path:
        self.downloads.append((bucket_name, object_name, file_path))
        if self._fail_download:
            raise StorageDownloadError(object_name, ConnectionError("unreachable"))
        file_path.write_bytes(b"source-media")
        return file_path

    def upload_file(
        self,
        bucket_name: str,
        file_path: Path,
        object_name: str,
        metadata: UploadMetadata,
    ) -> None:
        if object_name == self._fail_upload_key:
            raise StorageUploadError(object_name, PermissionError("denied"))
        self.uploads.append(
            {
                "bucket_name": bucket_name,
                "object_name": object_name,
                "metadata": metadata,
                "file_path": file_path,
                "content": file_path.read_bytes(),
            }
        )

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        pass

    @property
    def uploaded_keys(self) -> list[str]:
        return [upload["object_name"] for upload in self.uploads]

    def metadata_for(self, object_name: str) -> UploadMetadata:
        return next(u["metadata"] for u in self.uploads if u["object_name"] == object_name)


class StubProber(MediaProber):
    def __init__(self, result: MediaProbeResult | None = None, error: Exception | None = None):
        self._result = result or MediaProbeResult()
        self._error = error
        self.calls: list[Path] = []

    def probe(self, file_path: Path) -> MediaProbeResult:
        self.calls.append(file_path)
        if self._error:
            raise self._error
        return self._result


class StubTransformer(MediaTransformer):
    def __init__(self, fail_on: str | None = None):
        self._fail_on = fail_on
        self.calls: list[tuple[str, Path, Path, object]] = []

    def transcode(self, input_path: Path, output_path: Path, params: TranscodeParams) -> None:
        self._record("transcode", input_path, output_path, params)

    def extract_poster(
        self,
        input_path: Path,
        output_path: Path,
        seek_seconds: float = 1,
        frame_count: int = 1,
    ) -> None:
        self._record("poster", input_path, output_path, (seek_seconds, frame_count))

    def thumbnail(self, input_path: Path, output_path: Path, params: ThumbnailParams) -> None:
        self._record("thumbnail", input_path, output_path, params)

    def _record(self, operation: str, input_path: Path, output_path: Path, params) -> None:
        self.calls.append((operation, input_path, output_path, params))
        if operation == self._fail_on:
            output_path.write_bytes(b"partial")
            raise TransformError(input_path.name, f"{operation} failed")
        output_path.write_bytes(f"{operation}-output".encode())

    @property
    def operations(self) -> list[str]:
        return [call[0] for call in self.calls]


def scratch_files(root: Path) -> list[Path]:
    if not root.exists():
        return []
    return [path for path in root.rglob("*") if path.is_file()]


@pytest.fixture
def scratch_root(tmp_path) -> Path:
    return tmp_path / "scratch"


@pytest.fixture
def derivation_config(scratch_root) -> DerivationConfig:
    return DerivationConfig(scratch_root=str(scratch_root))


@pytest.fixture
def make_pipeline(derivation_config, scratch_root):
    def _make(storage=None, prober=None, transformer=None, config=None):
        return DerivationPipeline(
            storage=storage or StubStorage(),
            prober=prober or StubProber(),
            transformer=transformer or StubTransformer(),
            planner=DerivationPlanner(config or derivation_config),
            scratch_root=scratch_root,
        )

    return _make
