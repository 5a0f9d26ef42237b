"""
Media Deriver Service.

Consumes "object finalized" notifications and publishes derived artifacts
back into the same bucket:
- Thumbnails for images.
- Normalized H.264/MP4 transcodes, downscaled previews and poster frames for videos.
- Distributed tracing with Datadog.
- Structured JSON logging.
"""

import ddtrace.auto  # noqa: F401

import dependencies


def main():
    """Initializes the process-wide clients and starts the worker."""
    dependencies.init()
    worker = dependencies.get_worker()
    worker.start()


if __name__ == "__main__":
    main()
