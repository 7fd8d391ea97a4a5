from __future__ import annotations
import argparse
import dataclasses
from pathlib import Path
from typing import Callable, Sequence

from s3check.config.env_sources import DEFAULT_ENV_FILE, LayeredEnv, default_sources
from s3check.config.resolver import resolve_credentials
from s3check.errors import ConfigurationError, ServiceError
from s3check.logging_config import LEVEL_NAMES, configure_logging, get_logger
from s3check.runner import run
from s3check.storage.object_store import ObjectStore

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2

logger = get_logger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check S3 credentials by listing buckets and uploading one placeholder object."
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=Path(DEFAULT_ENV_FILE),
        help=f"Env file read before the process environment (default: {DEFAULT_ENV_FILE})",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=list(LEVEL_NAMES),
        help="Logging verbosity (default: $LOG_LEVEL or INFO).",
    )
    parser.add_argument(
        "--skip-upload",
        action="store_true",
        help="Only list buckets, even when S3_BUCKET_NAME is set.",
    )
    return parser.parse_args(argv)


def main(
    argv: Sequence[str] | None = None,
    env: LayeredEnv | None = None,
    client_factory: Callable[..., object] | None = None,
) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, service="s3check.cli")
    env = env or default_sources(args.env_file)

    try:
        credentials = resolve_credentials(env)
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIG
    if args.skip_upload and credentials.bucket_name:
        logger.info("Upload disabled by --skip-upload: bucket=%s", credentials.bucket_name)
        credentials = dataclasses.replace(credentials, bucket_name=None)

    try:
        with ObjectStore(credentials, client_factory=client_factory) as store:
            run(store, credentials)
    except ServiceError:
        # already reported with remediation by the runner
        return EXIT_FAILURE
    except Exception:
        logger.exception("An unexpected error occurred")
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
