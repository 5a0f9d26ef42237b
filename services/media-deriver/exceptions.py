"""Custom exceptions for the media-deriver service."""


class ProbeError(Exception):
    """Raised when a local media file cannot be inspected."""

    def __init__(self, file_name: str, reason: str, cause: Exception | None = None):
        self.file_name = file_name
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to probe '{file_name}': {reason}")


class TransformError(Exception):
    """Raised when producing a derived artifact from a local file fails."""

    def __init__(self, file_name: str, reason: str, cause: Exception | None = None):
        self.file_name = file_name
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to transform '{file_name}': {reason}")
