"""Exceptions shared by services talking to storage and the message broker."""


class StoreError(Exception):
    """Base class for object store failures."""

    def __init__(self, object_name: str, message: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(message)


class StorageDownloadError(StoreError):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        super().__init__(
            object_name, f"Failed to download '{object_name}' from storage", cause
        )


class StorageUploadError(StoreError):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        super().__init__(
            object_name, f"Failed to upload '{object_name}' to storage", cause
        )


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")
