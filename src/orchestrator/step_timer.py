"""Context manager for timing and logging pipeline steps."""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from src.config.constants import PipelineStep
from src.infrastructure.logging.logger import StructuredLogger


class StepContext:
    """Mutable context for a timed pipeline step."""

    def __init__(self) -> None:
        self.state: dict[str, Any] = {}

    def set_state(self, **state: Any) -> None:
        self.state.update(state)


@contextmanager
def timed_step(step: PipelineStep, logger: StructuredLogger) -> Iterator[StepContext]:
    """Time a pipeline step and log what it recorded."""
    ctx = StepContext()
    start = time.perf_counter()
    yield ctx
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.log_step(step.value, ctx.state, duration_ms=round(elapsed_ms, 3))
