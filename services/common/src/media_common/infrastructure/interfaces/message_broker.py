"""Abstract interfaces for message broker operations."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

MessageCallback = Callable[[bytes, int, dict[str, Any] | None], None]


class MessagePublisher(ABC):
    """Abstract base class for publishing events to a broker."""

    @abstractmethod
    def publish(self, routing_key: str, payload: dict) -> None:
        """
        Publishes an event to the broker.

        Args:
            routing_key: The routing key for message routing.
            payload: The event data as a dictionary.

        Raises:
            EventPublishError: If publishing fails.
        """


class MessageBroker(MessagePublisher, ABC):
    """Abstract base class for full message broker operations (publish + consume)."""

    @abstractmethod
    def acknowledge(self, delivery_tag: int) -> None:
        """
        Acknowledges successful processing of a message.

        Args:
            delivery_tag: The message delivery tag.
        """

    @abstractmethod
    def reject(self, delivery_tag: int, requeue: bool = True) -> None:
        """
        Rejects a message.

        With ``requeue`` the broker redelivers it until the queue's delivery
        limit is reached and the message is dead-lettered; without it the
        message is dead-lettered immediately.

        Args:
            delivery_tag: The message delivery tag.
            requeue: Whether the broker should redeliver the message.
        """

    @abstractmethod
    def consume(self, callback: MessageCallback) -> None:
        """
        Starts consuming messages from the configured queue. Blocks.

        Args:
            callback: Function called for each message with (body, delivery_tag, headers).
        """

    @abstractmethod
    def setup(self) -> None:
        """Sets up the required infrastructure (exchanges, queues, bindings)."""
