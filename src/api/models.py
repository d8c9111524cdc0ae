"""Request/Response models for API endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from src.services.viz.models import StyleOptions


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")


class OptionsRequest(BaseModel):
    """Request model for building chart options from a dataset."""

    chart_type: str = Field(..., description="Chart type tag, e.g. bar, donut, stackedBar")
    data: Any = Field(None, description="Points for single-series types, series for multi-series types")
    style: Optional[StyleOptions] = Field(None, description="Optional styling")


class OptionsResponse(BaseModel):
    """Response model for a built chart configuration."""

    chart_type: str
    options: dict[str, Any]


class ParseRequest(BaseModel):
    """Raw SSE-style stream text."""

    text: str = Field(..., description="Stream body with event:/data: lines")


class ChartEventResponse(BaseModel):
    """One chart (or failure) found in a stream."""

    step: str
    chart_type: str
    source_type: str = ""
    title: Optional[str] = None
    options: Optional[dict[str, Any]] = None
    errors: list[str] = []


class SamplesResponse(BaseModel):
    """Replayable sample streams."""

    samples: dict[str, str]
