from typing import Optional, List, Dict
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =========================
# Enums
# =========================
class QueryState(str, Enum):
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class EncryptionMode(str, Enum):
    SSE_S3 = "SSE_S3"
    SSE_KMS = "SSE_KMS"
    CSE_KMS = "CSE_KMS"


# A single result row keyed by column name
ResultRecord = Dict[str, str]


# =========================
# ENGINE PROTOCOL
# =========================
class QueryRequest(BaseModel):
    query_text: str
    database: str
    catalog: str
    workgroup: str
    output_location: str
    encryption_mode: Optional[EncryptionMode] = None

    model_config = ConfigDict(frozen=True)


class QueryExecutionHandle(BaseModel):
    id: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class ExecutionStatus(BaseModel):
    state: QueryState
    reason: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in (
            QueryState.SUCCEEDED,
            QueryState.FAILED,
            QueryState.CANCELLED,
        )

    @property
    def is_error(self) -> bool:
        return self.state in (QueryState.FAILED, QueryState.CANCELLED)


class ResultGrid(BaseModel):
    """Raw engine output. rows[0] repeats the column names."""

    column_names: List[str]
    rows: List[List[Optional[str]]]


class PageResult(BaseModel):
    records: List[ResultRecord]
    offset: int
    has_more: bool


# =========================
# HTTP
# =========================
class Pagination(BaseModel):
    offset: int
    has_more: bool = Field(alias="hasMore")

    model_config = ConfigDict(populate_by_name=True)


class QueryResponse(BaseModel):
    data: List[ResultRecord]
    pagination: Pagination

    @classmethod
    def from_page(cls, page: PageResult) -> "QueryResponse":
        return cls(
            data=page.records,
            pagination=Pagination(offset=page.offset, has_more=page.has_more),
        )


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
