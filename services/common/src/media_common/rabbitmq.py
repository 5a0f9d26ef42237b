import logging

import pika

from media_common.config import RabbitMQConfig

logger = logging.getLogger(__name__)


def get_rabbit_channel(config: RabbitMQConfig):
    """
    Establishes a new blocking connection to RabbitMQ and returns a channel.

    Heartbeats are disabled because a single message may keep the consumer
    busy for the whole length of a video transcode.

    Args:
        config: Host and credentials of the RabbitMQ server.

    Returns:
        tuple: (connection, channel)
    """
    credentials = pika.PlainCredentials(config.user, config.password)
    parameters = pika.ConnectionParameters(
        host=config.host,
        credentials=credentials,
        heartbeat=0,
    )

    try:
        connection = pika.BlockingConnection(parameters)
        channel = connection.channel()
        channel.basic_qos(prefetch_count=1)

        return connection, channel
    except Exception:
        logger.exception(
            "Failed to connect to RabbitMQ",
            extra={"host": config.host, "username": config.user},
        )
        raise
