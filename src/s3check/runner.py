from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from s3check.config.credentials_config import StorageCredentials
from s3check.diagnostics import Step, report_service_error
from s3check.errors import ServiceError
from s3check.logging_config import get_logger
from s3check.storage.models import BucketSummary, UploadResult
from s3check.storage.object_store import ObjectStore

OBJECT_KEY_PREFIX = "demo/dummy-object-"
OBJECT_KEY_SUFFIX = ".txt"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

logger = get_logger(__name__)


@dataclass
class RunOutcome:
    buckets: list[BucketSummary]
    upload: UploadResult | None = None
    upload_error: ServiceError | None = None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_object_key(now: datetime) -> str:
    millis = (now.astimezone(timezone.utc) - _EPOCH) // timedelta(milliseconds=1)
    return f"{OBJECT_KEY_PREFIX}{millis}{OBJECT_KEY_SUFFIX}"


def build_object_body(now: datetime) -> str:
    return f"This is a dummy object created at {now.isoformat()}"


def list_buckets(store: ObjectStore) -> list[BucketSummary]:
    logger.info("Attempting to list buckets...")
    try:
        buckets = store.list_buckets()
    except ServiceError as e:
        logger.error("Error listing buckets: %s", e.message)
        report_service_error(logger, e, Step.LIST)
        raise

    logger.info("Your S3 Buckets:")
    if not buckets:
        logger.info("   (No buckets found in this account)")
        return buckets
    for bucket in buckets:
        logger.info("   - %s", bucket.name)
    logger.info("SUCCESS! Found %s bucket(s)", len(buckets))
    return buckets


def upload_dummy_object(store: ObjectStore, bucket_name: str, now: datetime) -> UploadResult:
    object_key = build_object_key(now)
    logger.info("Attempting to upload dummy object to bucket: %s", bucket_name)
    result = store.put_object(bucket_name, object_key, build_object_body(now))
    logger.info("Object uploaded successfully!")
    logger.info("   Bucket: %s", result.bucket)
    logger.info("   Key: %s", result.key)
    logger.info("   ETag: %s", result.etag)
    return result


def run(
    store: ObjectStore,
    credentials: StorageCredentials,
    clock: Callable[[], datetime] | None = None,
) -> RunOutcome:
    """List buckets, then upload one placeholder object when a bucket is configured.

    A ServiceError from the list step is reported and re-raised, so the upload
    step never runs. Upload failures are reported and kept on the outcome.
    """
    clock = clock or _utc_now
    logger.info("Successfully created S3 client.")
    logger.info("AWS Region: %s", credentials.region)
    if credentials.endpoint:
        logger.info("S3 Endpoint: %s", credentials.endpoint)

    outcome = RunOutcome(buckets=list_buckets(store))

    if not credentials.upload_enabled:
        logger.warning("S3_BUCKET_NAME not set in .env file. Skipping upload.")
        return outcome

    try:
        outcome.upload = upload_dummy_object(store, credentials.bucket_name, clock())
    except ServiceError as e:
        report_service_error(logger, e, Step.UPLOAD, bucket=credentials.bucket_name)
        outcome.upload_error = e
    except Exception:
        logger.exception("An unexpected error occurred during upload: bucket=%s", credentials.bucket_name)
    return outcome
