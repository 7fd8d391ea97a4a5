import logging
from datetime import datetime, timezone

import pytest

from conftest import FakeS3Client, RecordingFactory, client_error
from s3check.config.credentials_config import StorageCredentials
from s3check.errors import ServiceError
from s3check.runner import build_object_body, build_object_key, run
from s3check.storage.object_store import ObjectStore

FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0, 123000, tzinfo=timezone.utc)


def make_store(credentials, client):
    return ObjectStore(credentials, client_factory=RecordingFactory(client))


def test_build_object_key_uses_epoch_millis():
    assert build_object_key(FIXED_NOW) == "demo/dummy-object-1714566600123.txt"


def test_build_object_body_contains_timestamp():
    assert build_object_body(FIXED_NOW) == "This is a dummy object created at 2024-05-01T12:30:00.123000+00:00"


def test_empty_listing_logs_no_buckets_notice(credentials, info_logs):
    credentials = StorageCredentials(credentials.access_key_id, credentials.secret_key)
    outcome = run(make_store(credentials, FakeS3Client([])), credentials)

    assert outcome.buckets == []
    assert "No buckets found in this account" in info_logs.text
    assert "Found" not in info_logs.text


def test_listing_enumerates_each_bucket_and_count(credentials, info_logs):
    client = FakeS3Client(["alpha", "beta", "gamma"])

    run(make_store(credentials, client), credentials, clock=lambda: FIXED_NOW)

    bucket_lines = [r.getMessage() for r in info_logs.records if r.getMessage().startswith("   - ")]
    assert bucket_lines == ["   - alpha", "   - beta", "   - gamma"]
    assert "SUCCESS! Found 3 bucket(s)" in info_logs.text


def test_upload_skipped_without_bucket_name(info_logs):
    credentials = StorageCredentials("AKIA", "secret")
    client = FakeS3Client(["alpha"])

    outcome = run(make_store(credentials, client), credentials)

    assert client.put_calls == []
    assert outcome.upload is None
    assert any(
        r.levelno == logging.WARNING and "Skipping upload" in r.getMessage() for r in info_logs.records
    )


def test_successful_upload_logs_bucket_key_and_etag(credentials, info_logs):
    client = FakeS3Client(["my-bucket"], etag='"etag-1"')

    outcome = run(make_store(credentials, client), credentials, clock=lambda: FIXED_NOW)

    assert outcome.upload.key == "demo/dummy-object-1714566600123.txt"
    assert outcome.upload.etag == "etag-1"
    assert client.put_calls[0]["Body"] == build_object_body(FIXED_NOW).encode("utf-8")
    assert "Bucket: my-bucket" in info_logs.text
    assert "ETag: etag-1" in info_logs.text


def test_upload_no_such_bucket_is_reported_after_listing(credentials, info_logs):
    client = FakeS3Client(
        ["alpha"],
        put_error=client_error("NoSuchBucket", "The specified bucket does not exist", "PutObject"),
    )

    outcome = run(make_store(credentials, client), credentials, clock=lambda: FIXED_NOW)

    assert [b.name for b in outcome.buckets] == ["alpha"]
    assert outcome.upload is None
    assert outcome.upload_error.code == "NoSuchBucket"
    messages = [r.getMessage() for r in info_logs.records]
    found_at = messages.index("SUCCESS! Found 1 bucket(s)")
    remediation_at = messages.index("   The bucket 'my-bucket' does not exist.")
    assert found_at < remediation_at


def test_list_access_denied_stops_before_upload(credentials, info_logs):
    client = FakeS3Client(list_error=client_error("AccessDenied", "Access Denied"))

    with pytest.raises(ServiceError) as excinfo:
        run(make_store(credentials, client), credentials)

    assert excinfo.value.code == "AccessDenied"
    assert client.put_calls == []
    assert "s3:ListAllMyBuckets" in info_logs.text


def test_unexpected_upload_error_is_logged_not_raised(credentials, info_logs):
    client = FakeS3Client(["alpha"], put_error=ConnectionResetError("reset"))

    outcome = run(make_store(credentials, client), credentials)

    assert outcome.upload is None
    assert outcome.upload_error is None
    [record] = [r for r in info_logs.records if r.exc_info]
    assert "unexpected error occurred during upload" in record.getMessage()
