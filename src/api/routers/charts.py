"""Chart options, stream parsing and sample replay endpoints."""

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from src.api.dependencies import get_options_factory, get_settings_dependency
from src.api.models import (
    ChartEventResponse,
    OptionsRequest,
    OptionsResponse,
    ParseRequest,
    SamplesResponse,
)
from src.config.settings import Settings
from src.orchestrator.pipeline import ChartStreamPipeline
from src.services.replay import list_samples, replay_lines, resolve_sample_dir
from src.services.viz.factory import OptionsFactory, config_to_jsonable

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/options", response_model=OptionsResponse)
async def build_options(
    request: OptionsRequest,
    factory: OptionsFactory = Depends(get_options_factory),  # noqa: B008
) -> dict[str, Any]:
    """Validate a dataset and build its chart configuration."""
    result = factory.build(request.chart_type, request.data, request.style)
    if not result.ok:
        raise HTTPException(status_code=422, detail={"errors": list(result.errors)})
    return {"chart_type": request.chart_type, "options": config_to_jsonable(result.config)}


@router.post("/parse", response_model=list[ChartEventResponse])
async def parse_stream(
    request: ParseRequest,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
    factory: OptionsFactory = Depends(get_options_factory),  # noqa: B008
) -> list[dict[str, Any]]:
    """Reconstruct every chart payload in a stream body and build its options."""
    pipeline = ChartStreamPipeline(settings, factory)
    try:
        return [event.to_dict() for event in pipeline.process_text(request.text)]
    except Exception as e:
        logger.error("Error parsing stream: %s", e, exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to parse stream") from e


@router.get("/samples", response_model=SamplesResponse)
async def get_samples(
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
) -> SamplesResponse:
    """List the sample streams available for replay."""
    return SamplesResponse(samples=list_samples(settings.sample_data_dir))


@router.get("/replay/{sample}", response_class=StreamingResponse)
async def replay_sample(
    sample: str,
    settings: Settings = Depends(get_settings_dependency),  # noqa: B008
    factory: OptionsFactory = Depends(get_options_factory),  # noqa: B008
) -> StreamingResponse:
    """
    Replay a sample file line by line and stream the charts it contains as SSE.

    Emits one ``chart`` event per built chart and one ``error`` event per
    payload that decoded but could not be charted.
    """
    samples = list_samples(settings.sample_data_dir)
    filename = samples.get(sample)
    if filename is None:
        raise HTTPException(status_code=404, detail=f"Unknown sample: {sample}")
    path = resolve_sample_dir(settings.sample_data_dir) / filename
    pipeline = ChartStreamPipeline(settings, factory)

    async def generate() -> AsyncIterator[str]:
        try:
            lines = replay_lines(path, settings.replay_delay_ms)
            async for event in pipeline.process_stream(lines):
                yield f"event: {event.step}\ndata: {json.dumps(event.to_dict(), ensure_ascii=False)}\n\n"
            logger.info("Replay of %s completed", sample)
        except Exception as e:
            logger.error("Error in replay stream: %s", e, exc_info=True)
            yield f"event: error\ndata: {json.dumps({'step': 'error', 'error': 'An error occurred'})}\n\n"

    return StreamingResponse(
        generate(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
