"""Worker that handles queue message consumption and orchestration."""

import json
from typing import Any

from media_common import RabbitMQConfig, setup_logging
from pydantic import ValidationError

from domain import DerivationResult, InboundObject
from handlers import DerivationPipeline
from infrastructure.interfaces import MessageBroker

logger = setup_logging()


class Worker:
    """Consumes object notifications from the queue and runs the pipeline on each."""

    def __init__(
        self,
        broker: MessageBroker,
        pipeline: DerivationPipeline,
        config: RabbitMQConfig,
    ):
        self._broker = broker
        self._pipeline = pipeline
        self._config = config

    def start(self) -> None:
        """Starts consuming messages from the queue."""
        logger.info("Worker initialized, starting message consumption")
        self._broker.consume(self._on_message)

    def _on_message(
        self, body: bytes, delivery_tag: int, headers: dict[str, Any] | None
    ) -> None:
        """Callback for each received message."""
        delivery_count = headers.get("x-delivery-count", 1) if headers else 1

        logger.info(
            "Message received",
            extra={
                "attempt": delivery_count,
                "max_attempts": self._config.queue_config.max_delivery_count,
            },
        )

        try:
            objects = InboundObject.from_event(json.loads(body))
        except (ValidationError, ValueError, TypeError, AttributeError) as e:
            logger.exception("Invalid message format", extra={"error": str(e)})
            self._broker.reject(delivery_tag, requeue=False)
            return

        current = None
        try:
            for current in objects:
                result = self._pipeline.handle(current)
                if result.derived_keys:
                    self._publish_completed(result)

            self._broker.acknowledge(delivery_tag)

        except Exception:
            logger.exception(
                "Message processing failed",
                extra={"file_name": current.key if current else None},
            )
            self._broker.reject(delivery_tag)

    def _publish_completed(self, result: DerivationResult) -> None:
        self._broker.publish(
            routing_key=self._config.queue_config.success_routing_key,
            payload={
                "file_name": result.key,
                "bucket_name": result.bucket_name,
                "derived_keys": list(result.derived_keys),
            },
        )
        logger.info(
            "Message processed successfully",
            extra={"file_name": result.key, "derived_keys": list(result.derived_keys)},
        )
