"""Data models and constants for the bucket search API."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, model_validator

API_BASE = "https://buckets.grayhatwarfare.com/api/v2"
DEFAULT_TIMEOUT = 15.0  # seconds per request
MAX_PAGE_SIZE = 1000  # API hard limit per request

CLOUD_TYPES = ("aws", "azure", "dos", "gcp", "ali")

# Ids come back as numbers or strings depending on the record
OpaqueId = int | float | str | None


class _ApiModel(BaseModel):
    """Loosely decoded API object: unknown keys ignored, nulls fall back to defaults."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def to_json(self) -> dict:
        """Plain dict using the API's field names."""
        return self.model_dump(mode="json", by_alias=True)


class FileRecord(_ApiModel):
    """A single file hit from /files."""

    id: OpaqueId = None
    bucket: str = ""
    bucket_id: OpaqueId = Field(default=None, alias="bucketId")
    name: str = ""
    url: str = ""
    size: int = 0
    type: str = ""
    last_modified: int = Field(default=0, alias="lastModified")


class BucketRecord(_ApiModel):
    """A single bucket hit from /buckets."""

    id: OpaqueId = None
    bucket: str = ""
    file_count: int = Field(default=0, alias="fileCount")
    type: str = ""


class Meta(_ApiModel):
    results: int = 0


class FilesEnvelope(_ApiModel):
    files: list[FileRecord] = []
    meta: Meta = Meta()


class BucketsEnvelope(_ApiModel):
    buckets: list[BucketRecord] = []
    meta: Meta = Meta()


@dataclass
class Page:
    """One decoded page: its records and the total the API reported, if any."""

    records: list = field(default_factory=list)
    total: int | None = None
