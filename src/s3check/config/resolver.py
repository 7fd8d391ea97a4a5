from __future__ import annotations
import re
import warnings
from functools import lru_cache

import boto3

from s3check.config.credentials_config import DEFAULT_REGION, StorageCredentials
from s3check.config.env_sources import LayeredEnv
from s3check.errors import ConfigurationError, RegionParseWarning
from s3check.logging_config import get_logger

ACCESS_KEY_VAR = "AWS_ACCESS_KEY_ID"
SECRET_KEY_VAR = "AWS_SECRET_ACCESS_KEY"
REGION_VAR = "AWS_REGION"
BUCKET_VAR = "S3_BUCKET_NAME"
ENDPOINT_VAR = "AWS_S3_ENDPOINT"

_REGION_SHAPE = re.compile(r"^[a-z]{2}(-[a-z]+)+-\d+$")

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def known_regions() -> frozenset[str]:
    session = boto3.session.Session()
    regions: set[str] = set()
    for partition in session.get_available_partitions():
        regions.update(session.get_available_regions("s3", partition_name=partition))
    return frozenset(regions)


def parse_region(raw: str | None) -> str | None:
    """Return the normalised region name, or None when ``raw`` is not a region."""
    if raw is None:
        return None
    candidate = raw.strip().lower().replace("_", "-")
    if not candidate:
        return None
    if candidate in known_regions() or _REGION_SHAPE.match(candidate):
        return candidate
    return None


def _resolve_region(raw: str | None) -> str:
    if raw is None:
        return DEFAULT_REGION
    region = parse_region(raw)
    if region is None:
        warnings.warn(
            f"Invalid {REGION_VAR}: {raw!r}. Using {DEFAULT_REGION}",
            RegionParseWarning,
            stacklevel=3,
        )
        return DEFAULT_REGION
    return region


def resolve_credentials(env: LayeredEnv) -> StorageCredentials:
    access_key = env.get(ACCESS_KEY_VAR)
    if not access_key:
        raise ConfigurationError(ACCESS_KEY_VAR)
    secret_key = env.get(SECRET_KEY_VAR)
    if not secret_key:
        raise ConfigurationError(SECRET_KEY_VAR)

    credentials = StorageCredentials(
        access_key_id=access_key,
        secret_key=secret_key,
        region=_resolve_region(env.get(REGION_VAR)),
        bucket_name=env.get(BUCKET_VAR),
        endpoint=env.get(ENDPOINT_VAR),
    )
    logger.debug("Resolved credentials: %r", credentials)
    return credentials
