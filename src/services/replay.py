"""Replays sample stream files line by line, simulating a live SSE source."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

logger = logging.getLogger(__name__)

SAMPLE_SUFFIX = "_chart_with_response.txt"


def resolve_sample_dir(directory: str | Path) -> Path:
    """Relative paths are taken from the project root."""
    path = Path(directory)
    if path.is_absolute():
        return path
    return Path(__file__).parent.parent.parent / path


def list_samples(directory: str | Path) -> dict[str, str]:
    """
    Available samples in a directory.

    Returns:
        Mapping of sample name (``bar``, ``pie``...) to file name.
    """
    root = resolve_sample_dir(directory)
    if not root.is_dir():
        logger.warning("Sample directory not found: %s", root)
        return {}
    samples = {}
    for path in sorted(root.glob("*.txt")):
        name = path.name[: -len(SAMPLE_SUFFIX)] if path.name.endswith(SAMPLE_SUFFIX) else path.stem
        samples[name] = path.name
    return samples


async def replay_lines(path: str | Path, delay_ms: int = 50) -> AsyncGenerator[str, None]:
    """Yield each line of ``path`` after waiting ``delay_ms``."""
    content = Path(path).read_text(encoding="utf-8")
    lines = content.split("\n")
    logger.info("Replaying %s (%d lines, %d ms/line)", Path(path).name, len(lines), delay_ms)
    for line in lines:
        await asyncio.sleep(delay_ms / 1000)
        yield line
