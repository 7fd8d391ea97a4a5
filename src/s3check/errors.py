from __future__ import annotations


class S3CheckError(Exception):
    """Base class for errors raised by s3check."""


class ConfigurationError(S3CheckError):
    """A mandatory setting is missing; no client may be built."""

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"{key} not set in .env file or environment")


class ServiceError(S3CheckError):
    """The storage service rejected a call with an error code."""

    def __init__(self, code: str, message: str, operation: str | None = None) -> None:
        self.code = code
        self.message = message
        self.operation = operation
        super().__init__(f"{operation or 'S3'} failed ({code}): {message}")


class RegionParseWarning(UserWarning):
    """AWS_REGION could not be parsed; the default region is used instead."""
