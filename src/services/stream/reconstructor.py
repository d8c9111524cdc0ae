"""
Reassembles chart payloads from an SSE-style line stream.

Lines are folded one at a time into a ``StreamState``. A payload opens with
``event: chartjs`` followed by a ``data:`` line, and may continue over any
number of following lines. Completion is detected by counting ``{`` and
``}`` characters, not by parsing JSON: a brace inside a string literal
shifts the count and the payload will not complete where a parser would.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator
from dataclasses import replace

from src.config.constants import DATA_PREFIX, DEFAULT_EVENT_NAME, EVENT_PREFIX
from src.services.stream.state import IDLE, StreamState

logger = logging.getLogger(__name__)


def _brace_balance(text: str) -> tuple[int, int]:
    """Return (opening, net) brace counts for a fragment."""
    opening = text.count("{")
    return opening, opening - text.count("}")


def advance(state: StreamState, line: str, event_name: str = DEFAULT_EVENT_NAME) -> StreamState:
    """Fold one line into the stream state and return the next state."""
    trimmed = line.strip()
    marker = f"{EVENT_PREFIX} {event_name}"

    # Any other event aborts the capture in progress
    if trimmed.startswith(EVENT_PREFIX) and trimmed != marker:
        if state.accumulating:
            logger.debug("Discarding partial payload (%d chars) on %r", len(state.payload), trimmed)
        return IDLE

    if trimmed == marker:
        return StreamState(context_active=True)

    if not state.context_active and not state.accumulating:
        return IDLE if state.ready else state

    if state.context_active and trimmed.startswith(DATA_PREFIX):
        fragment = trimmed[len(DATA_PREFIX):].strip()
        if fragment:
            opening, depth = _brace_balance(fragment)
            if depth == 0 and opening > 0:
                return StreamState(payload=fragment, ready=True)
            return StreamState(payload=fragment, accumulating=True, brace_depth=depth)

    if state.accumulating and trimmed:
        _, delta = _brace_balance(trimmed)
        depth = state.brace_depth + delta
        payload = state.payload + trimmed
        if depth == 0:
            return StreamState(payload=payload, ready=True)
        return replace(state, payload=payload, brace_depth=depth, ready=False)

    return replace(state, ready=False) if state.ready else state


def reconstruct(lines: Iterable[str], event_name: str = DEFAULT_EVENT_NAME) -> Iterator[str]:
    """Yield each complete payload as soon as its closing line arrives."""
    state = IDLE
    for line in lines:
        state = advance(state, line, event_name)
        if state.ready:
            yield state.payload


async def reconstruct_async(
    lines: AsyncIterable[str], event_name: str = DEFAULT_EVENT_NAME
) -> AsyncIterator[str]:
    """Async variant of :func:`reconstruct` for delayed line delivery."""
    state = IDLE
    async for line in lines:
        state = advance(state, line, event_name)
        if state.ready:
            yield state.payload


def split_lines(text: str) -> list[str]:
    """Split a raw stream body into lines, tolerating CRLF endings."""
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


class ChartStreamParser:
    """Push-style wrapper holding the state of a single subscription."""

    def __init__(self, event_name: str = DEFAULT_EVENT_NAME) -> None:
        self.event_name = event_name
        self.state = IDLE

    def feed(self, line: str) -> str | None:
        """Feed one line; return the completed payload, if this line closed one."""
        self.state = advance(self.state, line, self.event_name)
        return self.state.payload if self.state.ready else None

    def feed_many(self, lines: Iterable[str]) -> list[str]:
        payloads = []
        for line in lines:
            payload = self.feed(line)
            if payload is not None:
                payloads.append(payload)
        return payloads

    def reset(self) -> None:
        self.state = IDLE
