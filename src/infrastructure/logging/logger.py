"""Structured logging."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "asyncio")


class JSONFormatter(logging.Formatter):
    """Render each record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(
    level: str = "INFO",
    json_output: bool = True,
    silence_noisy_loggers: bool = False,
) -> None:
    """Configure the root logger once for the whole process."""
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    if silence_noisy_loggers:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


class StructuredLogger:
    """
    One JSON record per pipeline stage.

    Records carry ``kind`` (``step`` or ``error``) and the emitting
    component so stage timings can be filtered out of the general log.
    """

    def __init__(self, name: str = __name__):
        self.logger = logging.getLogger(name)
        self.component = name.rsplit(".", 1)[-1]

    def _record(self, kind: str, step: str, **fields: Any) -> str:
        record: dict[str, Any] = {
            "kind": kind,
            "component": self.component,
            "step": step,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        record.update({k: v for k, v in fields.items() if v is not None})
        return json.dumps(record, default=str)

    def log_step(
        self,
        step: str,
        state: dict[str, Any],
        duration_ms: float | None = None,
    ) -> None:
        """Log a completed pipeline step with its resulting state."""
        self.logger.info(self._record("step", step, state=state, duration_ms=duration_ms))

    def log_error(
        self,
        step: str,
        error: Exception | str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Log a failed step.

        Exceptions are logged with their traceback; plain strings are
        reported failures (validation errors, unknown chart types).
        """
        is_exception = isinstance(error, Exception)
        self.logger.error(
            self._record(
                "error",
                step,
                error=str(error),
                error_type=type(error).__name__ if is_exception else "ReportedFailure",
                context=context or None,
            ),
            exc_info=is_exception,
        )
