"""Line-stream reconstruction and payload decoding."""

from src.services.stream.decoder import decode_payload, descriptor_title
from src.services.stream.reconstructor import (
    ChartStreamParser,
    advance,
    reconstruct,
    reconstruct_async,
    split_lines,
)
from src.services.stream.state import IDLE, StreamState

__all__ = [
    "ChartStreamParser",
    "IDLE",
    "StreamState",
    "advance",
    "decode_payload",
    "descriptor_title",
    "reconstruct",
    "reconstruct_async",
    "split_lines",
]
