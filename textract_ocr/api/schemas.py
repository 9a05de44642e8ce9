"""Pydantic request/response schemas for the FastAPI endpoints."""

from pathlib import PurePath

from pydantic import BaseModel, Field, field_validator


class ExtractRequest(BaseModel):
    """Request schema for a text detection call.

    ``output_path`` is relative to the configured output directory.
    """

    bucket: str = Field(min_length=1)
    key: str = Field(min_length=1)
    version: str | None = None
    region: str | None = Field(default=None, min_length=1)
    output_path: str | None = Field(default=None, min_length=1)

    @field_validator("output_path")
    @classmethod
    def _relative_output_path(cls, value: str | None) -> str | None:
        if value is None:
            return value
        path = PurePath(value)
        if path.is_absolute() or path.anchor:
            raise ValueError("output_path must be relative to the output directory")
        if ".." in path.parts:
            raise ValueError("output_path must not contain '..'")
        return value


class ExtractResponse(BaseModel):
    """Response schema for a text detection call."""

    success: bool
    request_id: str | None
    document: str
    lines: list[str]
    block_count: int
    blocks_by_type: dict[str, int]
    page_count: int | None = None
    output_path: str | None = None
    processing_time_ms: float


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    region: str
