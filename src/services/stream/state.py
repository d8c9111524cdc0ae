"""Stream reconstruction state."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StreamState:
    """Accumulator for one line-stream subscription.

    A new instance is produced for every line; ``ready`` is true only on the
    state right after a payload was completed.
    """

    context_active: bool = False
    payload: str = ""
    ready: bool = False
    accumulating: bool = False
    brace_depth: int = 0


IDLE = StreamState()
