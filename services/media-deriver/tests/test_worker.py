import json

from conftest import StubProber, StubStorage, StubTransformer
from media_common import QueueConfig, RabbitMQConfig
from media_common.infrastructure import MessageBroker

from domain import MediaProbeResult
from worker import Worker


class StubBroker(MessageBroker):
    def __init__(self):
        self.published: list[tuple[str, dict]] = []
        self.acked: list[int] = []
        self.rejected: list[tuple[int, bool]] = []

    def publish(self, routing_key: str, payload: dict) -> None:
        self.published.append((routing_key, payload))

    def acknowledge(self, delivery_tag: int) -> None:
        self.acked.append(delivery_tag)

    def reject(self, delivery_tag: int, requeue: bool = True) -> None:
        self.rejected.append((delivery_tag, requeue))

    def consume(self, callback) -> None:
        pass

    def setup(self) -> None:
        pass


RABBITMQ_CONFIG = RabbitMQConfig(
    host="localhost",
    user="guest",
    password="guest",
    queue_config=QueueConfig(
        name="media_derivation_queue",
        expected_routing_key="object.finalized",
        success_routing_key="media.derivation.completed",
        dlq_name="dlq_media_derivation",
        dlq_routing_key="media.derivation.failed",
    ),
)


def _worker(make_pipeline, broker, **pipeline_parts) -> Worker:
    return Worker(broker, make_pipeline(**pipeline_parts), RABBITMQ_CONFIG)


def _body(payload) -> bytes:
    return json.dumps(payload).encode()


def test_flat_message_publishes_derived_keys_and_acks(make_pipeline) -> None:
    broker = StubBroker()
    worker = _worker(
        make_pipeline,
        broker,
        prober=StubProber(MediaProbeResult(video_codec="png", width=800, height=600)),
    )

    worker._on_message(
        _body({"key": "photos/cat.png", "bucketId": "media", "contentType": "image/png"}),
        7,
        None,
    )

    assert broker.acked == [7]
    assert broker.rejected == []
    assert broker.published == [
        (
            "media.derivation.completed",
            {
                "file_name": "photos/cat.png",
                "bucket_name": "media",
                "derived_keys": ["photos/thumb_cat.png"],
            },
        )
    ]


def test_bucket_notification_records_are_each_handled(make_pipeline) -> None:
    broker = StubBroker()
    storage = StubStorage()
    worker = _worker(
        make_pipeline,
        broker,
        storage=storage,
        prober=StubProber(MediaProbeResult(video_codec="h264", width=320, height=240)),
    )
    notification = {
        "Records": [
            {
                "s3": {
                    "bucket": {"name": "media"},
                    "object": {"key": "videos/my+clip%281%29.mp4", "contentType": "video/mp4"},
                }
            },
            {
                "s3": {
                    "bucket": {"name": "media"},
                    "object": {"key": "docs/readme.txt", "contentType": "text/plain"},
                }
            },
        ]
    }

    worker._on_message(_body(notification), 3, {"x-delivery-count": 1})

    assert storage.downloads[0][1] == "videos/my clip(1).mp4"
    assert storage.uploaded_keys == ["videos/my clip(1)_poster.jpg"]
    assert len(broker.published) == 1
    assert broker.acked == [3]


def test_message_without_derived_keys_is_acked_silently(make_pipeline) -> None:
    broker = StubBroker()
    worker = _worker(make_pipeline, broker)

    worker._on_message(
        _body({"name": "report.pdf", "bucket": "media", "content_type": "application/pdf"}),
        1,
        None,
    )

    assert broker.published == []
    assert broker.acked == [1]


def test_invalid_message_is_dead_lettered(make_pipeline) -> None:
    broker = StubBroker()
    worker = _worker(make_pipeline, broker)

    worker._on_message(b"not json", 1, None)
    worker._on_message(_body({"contentType": "image/png"}), 2, None)
    worker._on_message(_body(5), 3, None)

    assert broker.rejected == [(1, False), (2, False), (3, False)]
    assert broker.acked == []


def test_pipeline_failure_is_requeued(make_pipeline) -> None:
    broker = StubBroker()
    worker = _worker(
        make_pipeline,
        broker,
        prober=StubProber(MediaProbeResult(video_codec="hevc", width=1920, height=1080)),
        transformer=StubTransformer(fail_on="transcode"),
    )

    worker._on_message(
        _body({"key": "clip.mov", "bucketId": "media", "contentType": "video/quicktime"}),
        9,
        {"x-delivery-count": 2},
    )

    assert broker.rejected == [(9, True)]
    assert broker.acked == []
    assert broker.published == []


def test_start_consumes_with_message_callback(make_pipeline) -> None:
    consumed = []

    class RecordingBroker(StubBroker):
        def consume(self, callback) -> None:
            consumed.append(callback)

    worker = _worker(make_pipeline, RecordingBroker())

    worker.start()

    assert consumed == [worker._on_message]
