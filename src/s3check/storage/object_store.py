from __future__ import annotations
from typing import Callable

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from s3check.config.credentials_config import StorageCredentials
from s3check.errors import ServiceError
from s3check.logging_config import get_logger
from s3check.storage.models import BucketSummary, UploadResult

logger = get_logger(__name__)


def _service_error(exc: ClientError, operation: str) -> ServiceError:
    error = (exc.response or {}).get("Error", {})
    return ServiceError(
        code=error.get("Code") or "Unknown",
        message=error.get("Message") or str(exc),
        operation=operation,
    )


class ObjectStore:
    """S3 client scoped to one run; use as a context manager so it is always closed."""

    def __init__(self, credentials: StorageCredentials, client_factory: Callable[..., object] | None = None):
        self.region = credentials.region
        self.endpoint = credentials.endpoint
        client_kwargs = {
            "config": Config(signature_version="s3v4"),
            "region_name": credentials.region,
            "aws_access_key_id": credentials.access_key_id,
            "aws_secret_access_key": credentials.secret_key,
        }
        if credentials.endpoint:
            client_kwargs["endpoint_url"] = credentials.endpoint
        factory = client_factory or boto3.client
        self.client = factory("s3", **client_kwargs)
        self._closed = False

    def __enter__(self) -> ObjectStore:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self.client, "close", None)
        if close is not None:
            close()
        logger.debug("Closed S3 client: region=%s", self.region)

    @property
    def closed(self) -> bool:
        return self._closed

    def list_buckets(self) -> list[BucketSummary]:
        try:
            response = self.client.list_buckets()
        except ClientError as e:
            raise _service_error(e, "ListBuckets") from e
        return [BucketSummary.model_validate(bucket) for bucket in response.get("Buckets", [])]

    def put_object(self, bucket_name: str, key: str, body: str, content_type: str = "text/plain") -> UploadResult:
        try:
            response = self.client.put_object(
                Bucket=bucket_name,
                Key=key,
                Body=body.encode("utf-8"),
                ContentType=content_type,
            )
        except ClientError as e:
            raise _service_error(e, "PutObject") from e
        return UploadResult(bucket=bucket_name, key=key, etag=response.get("ETag"))
