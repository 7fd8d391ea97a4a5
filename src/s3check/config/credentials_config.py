from __future__ import annotations
from dataclasses import dataclass

from s3check.errors import ConfigurationError

DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True)
class StorageCredentials:
    access_key_id: str
    secret_key: str
    region: str = DEFAULT_REGION
    bucket_name: str | None = None
    endpoint: str | None = None

    def __post_init__(self):
        if not self.access_key_id or not self.access_key_id.strip():
            raise ConfigurationError("AWS_ACCESS_KEY_ID")
        if not self.secret_key or not self.secret_key.strip():
            raise ConfigurationError("AWS_SECRET_ACCESS_KEY")
        if not self.region or not self.region.strip():
            raise ValueError("StorageCredentials.region must be a non-empty string.")

    @property
    def upload_enabled(self) -> bool:
        return bool(self.bucket_name)

    @property
    def masked_access_key(self) -> str:
        return f"****{self.access_key_id[-4:]}"

    def __repr__(self) -> str:
        return (
            f"StorageCredentials(access_key_id={self.masked_access_key!r}, secret_key='****', "
            f"region={self.region!r}, bucket_name={self.bucket_name!r}, endpoint={self.endpoint!r})"
        )
