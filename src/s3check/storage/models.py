from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BucketSummary(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True, frozen=True)
    name: str = Field(..., alias="Name", description="Bucket name as reported by ListBuckets.")
    creation_date: Optional[datetime] = Field(None, alias="CreationDate", description="When the bucket was created.")


class UploadResult(BaseModel):
    model_config = ConfigDict(frozen=True)
    bucket: str = Field(..., description="Bucket the object was written to.")
    key: str = Field(..., description="Object key.")
    etag: str = Field("", description="Checksum/version token returned by PutObject.")

    @field_validator("etag", mode="before")
    @classmethod
    def _strip_quotes(cls, value):
        if value is None:
            return ""
        return str(value).strip('"')
