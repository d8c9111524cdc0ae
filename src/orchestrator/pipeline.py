"""Chart stream pipeline: line stream -> chart configurations."""

import logging
from collections.abc import AsyncIterable, AsyncGenerator, Iterable

from src.config.constants import SOURCE_TYPE_MAP, PipelineStep
from src.config.settings import Settings
from src.infrastructure.logging.logger import StructuredLogger
from src.orchestrator.state import ChartEvent
from src.orchestrator.step_timer import timed_step
from src.services.stream.decoder import decode_payload, descriptor_title
from src.services.stream.reconstructor import reconstruct, reconstruct_async, split_lines
from src.services.viz.factory import OptionsFactory, default_factory
from src.services.viz.models import ChartDescriptor, GridConfig, StyleOptions

logger = logging.getLogger(__name__)


class ChartStreamPipeline:
    """Turns an SSE-style line stream into renderer configurations.

    Payloads that fail to decode are dropped (and logged). Payloads that
    decode but cannot be charted produce an ``error`` event.
    """

    def __init__(self, settings: Settings, factory: OptionsFactory | None = None):
        """Initialize the pipeline."""
        self.settings = settings
        self.factory = factory if factory is not None else default_factory
        self.structured_logger = StructuredLogger(__name__)

    def resolve_chart_type(self, source_type: str) -> str:
        """Map a source chart name to a chart type tag."""
        mapped = SOURCE_TYPE_MAP.get(source_type)
        if mapped is not None:
            return mapped.value
        logger.info(
            "No chart type mapping for source type %r, using %s",
            source_type,
            self.settings.fallback_chart_type,
        )
        return self.settings.fallback_chart_type

    def default_style(self, descriptor: ChartDescriptor) -> StyleOptions:
        """Style applied to every streamed chart."""
        title = descriptor_title(descriptor.options) if self.settings.chart_title_from_source else None
        return StyleOptions(
            colors=list(self.settings.default_colors),
            show_legend=True,
            title=title,
            grid=GridConfig(bottom=80, contain_label=True),
        )

    def process_payload(self, payload: str) -> ChartEvent | None:
        """Decode and build one completed payload. None if it was dropped."""
        with timed_step(PipelineStep.DECODE, self.structured_logger) as step:
            descriptor = decode_payload(payload)
            step.set_state(payload_chars=len(payload), decoded=descriptor is not None)
        if descriptor is None:
            return None

        chart_type = self.resolve_chart_type(descriptor.type)
        style = self.default_style(descriptor)

        with timed_step(PipelineStep.BUILD, self.structured_logger) as step:
            result = self.factory.build(chart_type, descriptor.data, style)
            step.set_state(chart_type=chart_type, points=len(descriptor.data), ok=result.ok)

        if not result.ok:
            self.structured_logger.log_error(
                PipelineStep.BUILD.value,
                "; ".join(result.errors),
                context={"chart_type": chart_type, "source_type": descriptor.type},
            )
            return ChartEvent(
                step=PipelineStep.ERROR.value,
                chart_type=chart_type,
                source_type=descriptor.type,
                title=style.title,
                errors=list(result.errors),
            )

        return ChartEvent(
            step=PipelineStep.CHART.value,
            chart_type=chart_type,
            source_type=descriptor.type,
            title=style.title,
            options=result.config,
        )

    def process_lines(self, lines: Iterable[str]) -> list[ChartEvent]:
        """Run a complete, already available line sequence."""
        events = []
        for payload in reconstruct(lines, self.settings.stream_event_name):
            event = self.process_payload(payload)
            if event is not None:
                events.append(event)
        return events

    def process_text(self, text: str) -> list[ChartEvent]:
        return self.process_lines(split_lines(text))

    async def process_stream(self, lines: AsyncIterable[str]) -> AsyncGenerator[ChartEvent, None]:
        """
        Process a live line stream, yielding events as payloads complete.

        Args:
            lines: Async line source; lines may arrive with arbitrary delay.

        Yields:
            ChartEvent per decoded payload
        """
        async for payload in reconstruct_async(lines, self.settings.stream_event_name):
            event = self.process_payload(payload)
            if event is not None:
                yield event
