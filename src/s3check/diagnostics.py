"""Maps S3 error codes to remediation text for the list and upload steps."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum

from s3check.errors import ServiceError


class Step(str, Enum):
    LIST = "list"
    UPLOAD = "upload"


@dataclass(frozen=True)
class Remediation:
    headline: str
    details: tuple[str, ...] = ()


_ACCESS_KEY = Remediation(
    "CREDENTIAL ISSUE - Invalid Access Key ID",
    (
        "The AWS access key is incorrect: the key ID does not exist.",
        "Check that AWS_ACCESS_KEY_ID is correct in .env file or environment.",
    ),
)
_SECRET_KEY = Remediation(
    "CREDENTIAL ISSUE - Signature Does Not Match",
    (
        "The AWS secret key is incorrect.",
        "Check that AWS_SECRET_ACCESS_KEY is correct in .env file or environment.",
    ),
)
_LIST_BUCKET = Remediation(
    "BUCKET ISSUE - Invalid Bucket Name",
    ("The bucket name is invalid or doesn't exist.",),
)

LIST_REMEDIATIONS: dict[str, Remediation] = {
    "AccessDenied": Remediation(
        "PERMISSION ISSUE DETECTED",
        (
            "Your IAM identity does not have the required S3 permissions.",
            "Missing Permission: s3:ListAllMyBuckets",
            "Attach a policy granting s3:ListAllMyBuckets to the user, then run again.",
        ),
    ),
    "InvalidAccessKeyId": _ACCESS_KEY,
    "SignatureDoesNotMatch": _SECRET_KEY,
    "InvalidBucketName": _LIST_BUCKET,
    "NoSuchBucket": _LIST_BUCKET,
}

UPLOAD_REMEDIATIONS: dict[str, Remediation] = {
    "AccessDenied": Remediation(
        "PERMISSION ISSUE",
        (
            "Your IAM identity does not have permission to upload to this bucket.",
            "Required Permission: s3:PutObject",
        ),
    ),
    "InvalidAccessKeyId": _ACCESS_KEY,
    "SignatureDoesNotMatch": _SECRET_KEY,
    "InvalidBucketName": Remediation(
        "BUCKET ISSUE - Invalid Bucket Name",
        ("The bucket '{bucket}' is not a valid bucket name.", "Check S3_BUCKET_NAME in .env file."),
    ),
    "NoSuchBucket": Remediation(
        "BUCKET NOT FOUND",
        ("The bucket '{bucket}' does not exist.", "Check S3_BUCKET_NAME in .env file."),
    ),
}

DEFAULT_REMEDIATION = Remediation("Check your credentials, region, and permissions.")

_TABLES = {Step.LIST: LIST_REMEDIATIONS, Step.UPLOAD: UPLOAD_REMEDIATIONS}
_HEADERS = {Step.LIST: "Error communicating with S3:", Step.UPLOAD: "Error uploading object to S3:"}


def classify(code: str | None, step: Step) -> Remediation:
    return _TABLES[step].get(code or "", DEFAULT_REMEDIATION)


def remediation_lines(code: str | None, step: Step, bucket: str | None = None) -> list[str]:
    remediation = classify(code, step)
    bucket_label = bucket or "<unset>"
    return [remediation.headline] + [line.format(bucket=bucket_label) for line in remediation.details]


def report_service_error(
    logger: logging.Logger,
    error: ServiceError,
    step: Step,
    bucket: str | None = None,
) -> list[str]:
    """Log the error code, message and remediation; return the remediation lines."""
    lines = remediation_lines(error.code, step, bucket)
    logger.error(_HEADERS[step])
    logger.error("   Error Code:    %s", error.code)
    logger.error("   Error Message: %s", error.message)
    for line in lines:
        logger.error("   %s", line)
    return lines
