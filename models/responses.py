"""
Pydantic response envelopes shared by the gateway and the backend
"""
from pydantic import BaseModel, Field, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel
from typing import Generic, List, Optional, Sequence, TypeVar
from datetime import datetime, UTC

from shared.utils import format_date, total_pages
from .requests import PaginationParams

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard envelope wrapping every API payload"""
    success: bool = Field(..., description="Whether the request succeeded")
    data: Optional[T] = Field(None, description="Response payload")
    error: Optional[str] = Field(None, description="Error code when the request failed")
    message: Optional[str] = Field(None, description="Human-readable message")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def ok(cls, data: Optional[T] = None, message: Optional[str] = None):
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: str, message: Optional[str] = None):
        return cls(success=False, error=error, message=message)


class PaginationMeta(BaseModel):
    """Paging information attached to list responses"""
    page: int = Field(..., ge=1, description="Current page number")
    limit: int = Field(..., ge=1, description="Items per page")
    total: int = Field(..., ge=0, description="Total number of items")
    total_pages: int = Field(..., ge=0, description="Total number of pages")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginatedResponse(ApiResponse[List[T]], Generic[T]):
    """Envelope for one page of a list"""
    pagination: PaginationMeta = Field(..., description="Paging information")

    @classmethod
    def from_items(
        cls,
        items: Sequence[T],
        params: PaginationParams,
        total: int,
        message: Optional[str] = None,
    ):
        """Wrap one page of ``items`` out of ``total`` available"""
        return cls(
            success=True,
            data=list(items),
            message=message,
            pagination=PaginationMeta(
                page=params.page,
                limit=params.limit,
                total=total,
                total_pages=total_pages(total, params.limit),
            ),
        )


class ErrorResponse(BaseModel):
    """Failure envelope returned by every exception handler"""
    success: bool = Field(default=False, description="Always false for errors")
    error: str = Field(..., description="Error code identifier")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Error timestamp")

    @field_serializer('timestamp')
    def serialize_timestamp(self, value: datetime) -> str:
        return format_date(value)

    model_config = ConfigDict()


class HealthResponse(BaseModel):
    """Gateway health payload"""
    status: str = Field(..., description="Overall gateway status")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    upstream: str = Field(..., description="Backend origin behind the API proxy")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Check timestamp")

    @field_serializer('timestamp')
    def serialize_timestamp(self, value: datetime) -> str:
        return format_date(value)


class RouteInfo(BaseModel):
    """One backend route template from the shared route table"""
    group: str = Field(..., description="Route group, e.g. AUTH")
    name: str = Field(..., description="Route name within the group, e.g. LOGIN")
    path: str = Field(..., description="Route template, e.g. /posts/:id/like")
