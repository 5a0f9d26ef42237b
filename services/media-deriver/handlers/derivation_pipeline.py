"""Pipeline deriving thumbnails, transcodes, previews and posters from stored media."""

from pathlib import Path

from media_common import setup_logging

from domain import (
    ArtifactKind,
    DerivationPlanner,
    DerivationResult,
    DerivationStatus,
    DerivedArtifactSpec,
    InboundObject,
    is_already_derived,
    is_eligible,
)
from infrastructure import ScratchSpace
from infrastructure.interfaces import MediaProber, MediaTransformer, StorageClient

logger = setup_logging()


class DerivationPipeline:
    """Handles one finalized store object end-to-end."""

    def __init__(
        self,
        storage: StorageClient,
        prober: MediaProber,
        transformer: MediaTransformer,
        planner: DerivationPlanner,
        scratch_root: str | Path,
    ):
        self._storage = storage
        self._prober = prober
        self._transformer = transformer
        self._planner = planner
        self._scratch_root = scratch_root

    def handle(self, inbound: InboundObject) -> DerivationResult:
        """
        Derives and uploads every artifact planned for ``inbound``.

        Ineligible content types are ignored without touching the store.
        Objects this pipeline produced itself are downloaded, recognized and
        skipped. Local scratch files are removed before returning, whether or
        not derivation succeeded.

        Args:
            inbound: The finalized object.

        Returns:
            DerivationResult listing the uploaded derived keys.

        Raises:
            StoreError: If the download or an upload fails.
            ProbeError: If the downloaded file cannot be inspected.
            TransformError: If producing an artifact fails.
        """
        if not is_eligible(inbound.content_type):
            logger.info(
                "Skipping object that is neither image nor video",
                extra={"file_name": inbound.key, "content_type": inbound.content_type},
            )
            return self._result(inbound, DerivationStatus.SKIPPED_INELIGIBLE)

        logger.info(
            "Processing object",
            extra={
                "file_name": inbound.key,
                "bucket_name": inbound.bucket_id,
                "content_type": inbound.content_type,
            },
        )

        with ScratchSpace(self._scratch_root) as scratch:
            local_input = scratch.path_for(inbound.key)
            self._storage.download_file(inbound.bucket_id, inbound.key, local_input)

            if is_already_derived(inbound.key, inbound.content_type):
                logger.info(
                    "Skipping already derived object", extra={"file_name": inbound.key}
                )
                return self._result(inbound, DerivationStatus.SKIPPED_DERIVED)

            probe = self._prober.probe(local_input)
            plan = self._planner.plan(inbound, probe)

            derived_keys = []
            for artifact in plan.artifacts:
                local_output = scratch.path_for(artifact.target_key)
                self._derive(artifact, local_input, local_output)
                self._storage.upload_file(
                    inbound.bucket_id, local_output, artifact.target_key, artifact.metadata
                )
                derived_keys.append(artifact.target_key)

        logger.info(
            "Object processed",
            extra={"file_name": inbound.key, "derived_keys": derived_keys},
        )
        return self._result(inbound, DerivationStatus.COMPLETED, derived_keys)

    def _derive(
        self, artifact: DerivedArtifactSpec, local_input: Path, local_output: Path
    ) -> None:
        if artifact.kind is ArtifactKind.THUMBNAIL:
            self._transformer.thumbnail(local_input, local_output, artifact.params)
        elif artifact.kind is ArtifactKind.POSTER:
            self._transformer.extract_poster(
                local_input,
                local_output,
                seek_seconds=artifact.params.seek_seconds,
                frame_count=artifact.params.frame_count,
            )
        else:
            self._transformer.transcode(local_input, local_output, artifact.params)

    @staticmethod
    def _result(
        inbound: InboundObject,
        status: DerivationStatus,
        derived_keys: list[str] | None = None,
    ) -> DerivationResult:
        return DerivationResult(
            key=inbound.key,
            bucket_name=inbound.bucket_id,
            status=status,
            derived_keys=tuple(derived_keys or ()),
        )
