from __future__ import annotations
import logging

import pytest
from botocore.exceptions import ClientError

from s3check.config.credentials_config import StorageCredentials


def client_error(code: str, message: str = "boom", operation: str = "ListBuckets") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeS3Client:
    def __init__(self, buckets=(), list_error=None, put_error=None, etag='"abc123"'):
        self.buckets = list(buckets)
        self.list_error = list_error
        self.put_error = put_error
        self.etag = etag
        self.list_calls = 0
        self.put_calls = []
        self.close_calls = 0

    def list_buckets(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return {"Buckets": [{"Name": name} for name in self.buckets], "Owner": {"ID": "owner"}}

    def put_object(self, **kwargs):
        self.put_calls.append(kwargs)
        if self.put_error is not None:
            raise self.put_error
        return {"ETag": self.etag}

    def close(self):
        self.close_calls += 1


class RecordingFactory:
    def __init__(self, client: FakeS3Client):
        self.client = client
        self.calls = []

    def __call__(self, service_name, **kwargs):
        self.calls.append((service_name, kwargs))
        return self.client


@pytest.fixture
def credentials() -> StorageCredentials:
    return StorageCredentials(
        access_key_id="AKIAEXAMPLE1234",
        secret_key="secret-value",
        region="eu-west-1",
        bucket_name="my-bucket",
    )


@pytest.fixture
def info_logs(caplog):
    caplog.set_level(logging.INFO)
    return caplog
