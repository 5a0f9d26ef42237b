"""RabbitMQ implementation of the MessageBroker interface."""

import json

from media_common import EventPublishError, QueueConfig, RabbitMQConfig, setup_logging
from media_common.infrastructure import MessageBroker
from media_common.infrastructure.interfaces.message_broker import MessageCallback
from pika.adapters.blocking_connection import BlockingChannel

logger = setup_logging()


class RabbitMQBroker(MessageBroker):
    """Consumes object notifications and publishes derivation events over RabbitMQ."""

    def __init__(self, channel: BlockingChannel, config: RabbitMQConfig):
        self._channel = channel
        self._config = config

    @property
    def _queue_config(self) -> QueueConfig:
        if self._config.queue_config is None:
            raise ValueError("RabbitMQ queue configuration is missing")
        return self._config.queue_config

    def publish(self, routing_key: str, payload: dict) -> None:
        try:
            self._channel.basic_publish(
                exchange=self._config.exchange_name,
                routing_key=routing_key,
                body=json.dumps(payload),
            )
            logger.info(
                "Event published",
                extra={
                    "exchange": self._config.exchange_name,
                    "routing_key": routing_key,
                },
            )
        except Exception as e:
            logger.exception(
                "Failed to publish event", extra={"routing_key": routing_key}
            )
            raise EventPublishError(routing_key, cause=e) from e

    def acknowledge(self, delivery_tag: int) -> None:
        self._channel.basic_ack(delivery_tag=delivery_tag)

    def reject(self, delivery_tag: int, requeue: bool = True) -> None:
        self._channel.basic_nack(delivery_tag=delivery_tag, requeue=requeue)

    def consume(self, callback: MessageCallback) -> None:
        def on_message(ch, method, properties, body):
            headers = properties.headers if properties else None
            callback(body, method.delivery_tag, headers)

        self._channel.basic_consume(
            queue=self._queue_config.name,
            on_message_callback=on_message,
        )
        logger.info("Started consuming", extra={"queue": self._queue_config.name})
        self._channel.start_consuming()

    def setup(self) -> None:
        """
        Declares the derivation queue and its dead-letter route.

        The queue is bound to the events topic exchange that bucket
        notifications are published to. Messages rejected past the delivery
        limit go to the dead-letter queue.
        """
        queue_config = self._queue_config
        self._declare_dead_letter_route(queue_config)
        self._declare_derivation_queue(queue_config)
        logger.info(
            "Queue infrastructure ready",
            extra={"queue": queue_config.name, "exchange": self._config.exchange_name},
        )

    def _declare_dead_letter_route(self, queue_config: QueueConfig) -> None:
        self._channel.exchange_declare(
            exchange=queue_config.dlq_exchange_name, exchange_type="direct", durable=True
        )
        self._channel.queue_declare(queue=queue_config.dlq_name, durable=True)
        self._channel.queue_bind(
            queue=queue_config.dlq_name,
            exchange=queue_config.dlq_exchange_name,
            routing_key=queue_config.dlq_routing_key,
        )

    def _declare_derivation_queue(self, queue_config: QueueConfig) -> None:
        self._channel.exchange_declare(
            exchange=self._config.exchange_name, exchange_type="topic", durable=True
        )
        self._channel.queue_declare(
            queue=queue_config.name,
            durable=True,
            arguments={
                "x-queue-type": queue_config.queue_type,
                "x-delivery-limit": queue_config.max_delivery_count,
                "x-dead-letter-exchange": queue_config.dlq_exchange_name,
                "x-dead-letter-routing-key": queue_config.dlq_routing_key,
            },
        )
        self._channel.queue_bind(
            queue=queue_config.name,
            exchange=self._config.exchange_name,
            routing_key=queue_config.expected_routing_key,
        )
