import time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileStatus(str, Enum):
    PENDING = "Pending"
    ALREADY_COPY = "AlreadyCopy"
    FAILED = "Failed"


class FileRecord(BaseModel):
    """A file record as served by the files API. Only the status changes, upstream."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    original_filename: str = Field(alias="originalFilename")
    secure_url: str = Field(alias="secureUrl")
    status: str = FileStatus.PENDING.value

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        return str(value)


class StatusUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: FileStatus = FileStatus.ALREADY_COPY
    completed_timestamp: int = Field(
        default_factory=lambda: int(time.time() * 1000),
        alias="completedTimestamp",
    )


class Outcome(BaseModel):
    item_id: str
    name: str
    success: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls, item: FileRecord, name: str) -> "Outcome":
        return cls(item_id=item.id, name=name, success=True)

    @classmethod
    def failed(cls, item: FileRecord, error: Exception) -> "Outcome":
        return cls(item_id=item.id, name=item.original_filename, success=False, error=str(error))


class FolderStats(BaseModel):
    file_count: int
    total_bytes: int


class BatchSummary(BaseModel):
    """Read-only aggregate built once the queue has drained."""
    model_config = ConfigDict(frozen=True)

    total: int
    succeeded: List[str] = []
    failed: List[Outcome] = []
    folder_stats: Optional[FolderStats] = None
