import json
from types import SimpleNamespace

import pytest
from media_common import EventPublishError, QueueConfig, RabbitMQConfig

from infrastructure import RabbitMQBroker


class FakeChannel:
    def __init__(self, *, fail_publish: bool = False):
        self._fail_publish = fail_publish
        self.calls: list[tuple[str, dict]] = []
        self.consumer = None

    def _record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))

    def exchange_declare(self, **kwargs):
        self._record("exchange_declare", **kwargs)

    def queue_declare(self, **kwargs):
        self._record("queue_declare", **kwargs)

    def queue_bind(self, **kwargs):
        self._record("queue_bind", **kwargs)

    def basic_publish(self, **kwargs):
        if self._fail_publish:
            raise ConnectionError("channel closed")
        self._record("basic_publish", **kwargs)

    def basic_ack(self, **kwargs):
        self._record("basic_ack", **kwargs)

    def basic_nack(self, **kwargs):
        self._record("basic_nack", **kwargs)

    def basic_consume(self, **kwargs):
        self.consumer = kwargs["on_message_callback"]
        self._record("basic_consume", queue=kwargs["queue"])

    def start_consuming(self):
        self._record("start_consuming")

    def named(self, name: str) -> list[dict]:
        return [kwargs for call, kwargs in self.calls if call == name]


RABBITMQ_CONFIG = RabbitMQConfig(
    host="localhost",
    user="guest",
    password="guest",
    queue_config=QueueConfig(
        name="media_derivation_queue",
        max_delivery_count=3,
        expected_routing_key="object.finalized",
        success_routing_key="media.derivation.completed",
        dlq_name="dlq_media_derivation",
        dlq_routing_key="media.derivation.failed",
    ),
)


def test_setup_binds_derivation_queue_with_dead_letter_route() -> None:
    channel = FakeChannel()

    RabbitMQBroker(channel, RABBITMQ_CONFIG).setup()

    assert channel.named("exchange_declare") == [
        {"exchange": "dead_letter_exchange", "exchange_type": "direct", "durable": True},
        {"exchange": "events", "exchange_type": "topic", "durable": True},
    ]
    dlq, main = channel.named("queue_declare")
    assert dlq == {"queue": "dlq_media_derivation", "durable": True}
    assert main["queue"] == "media_derivation_queue"
    assert main["arguments"] == {
        "x-queue-type": "quorum",
        "x-delivery-limit": 3,
        "x-dead-letter-exchange": "dead_letter_exchange",
        "x-dead-letter-routing-key": "media.derivation.failed",
    }
    assert channel.named("queue_bind")[-1] == {
        "queue": "media_derivation_queue",
        "exchange": "events",
        "routing_key": "object.finalized",
    }


def test_setup_without_queue_config_fails() -> None:
    config = RabbitMQConfig(host="localhost", user="guest", password="guest")

    with pytest.raises(ValueError):
        RabbitMQBroker(FakeChannel(), config).setup()


def test_publish_sends_json_to_events_exchange() -> None:
    channel = FakeChannel()

    RabbitMQBroker(channel, RABBITMQ_CONFIG).publish(
        "media.derivation.completed", {"file_name": "clip.mov"}
    )

    [published] = channel.named("basic_publish")
    assert published["exchange"] == "events"
    assert published["routing_key"] == "media.derivation.completed"
    assert json.loads(published["body"]) == {"file_name": "clip.mov"}


def test_publish_failure_raises_event_publish_error() -> None:
    with pytest.raises(EventPublishError) as exc_info:
        RabbitMQBroker(FakeChannel(fail_publish=True), RABBITMQ_CONFIG).publish(
            "media.derivation.completed", {}
        )

    assert exc_info.value.routing_key == "media.derivation.completed"
    assert isinstance(exc_info.value.cause, ConnectionError)


def test_reject_controls_requeue() -> None:
    channel = FakeChannel()
    broker = RabbitMQBroker(channel, RABBITMQ_CONFIG)

    broker.reject(4)
    broker.reject(5, requeue=False)
    broker.acknowledge(6)

    assert channel.named("basic_nack") == [
        {"delivery_tag": 4, "requeue": True},
        {"delivery_tag": 5, "requeue": False},
    ]
    assert channel.named("basic_ack") == [{"delivery_tag": 6}]


def test_consume_passes_body_tag_and_headers() -> None:
    channel = FakeChannel()
    received = []

    RabbitMQBroker(channel, RABBITMQ_CONFIG).consume(
        lambda body, tag, headers: received.append((body, tag, headers))
    )
    channel.consumer(
        channel,
        SimpleNamespace(delivery_tag=11),
        SimpleNamespace(headers={"x-delivery-count": 2}),
        b"{}",
    )

    assert channel.named("basic_consume") == [{"queue": "media_derivation_queue"}]
    assert received == [(b"{}", 11, {"x-delivery-count": 2})]
