"""Timing normalizer: clamp chunk durations into the mode's display window.

WHY: Builder output can contain chunks that flash by (a single short word)
or linger (a long pause-free run under a slow speaker). Whatever the
builder decided, the renderer must get durations a viewer can read and
that do not overstay. This pass enforces that independently of the
builder's own logic.

HOW: For each chunk, extend end to start + min_duration if shorter, then
shrink end to start + max_duration if longer. max_duration comes from the
mode's preset (4.0s talking-head, 5.0s cinematic).

RULES:
- start_sec is never changed; only end_sec moves.
- Input chunks are not modified; new SubtitleChunk objects are returned.
- Order, count and text are preserved.
"""

import dataclasses
import logging
from typing import List, Optional, Union

from .config import MIN_DISPLAY_DURATION
from .models import ModePreset, SubtitleChunk, SubtitleMode
from .presets import resolve_preset

logger = logging.getLogger(__name__)


def normalize_chunk_timings(
    chunks: List[SubtitleChunk],
    mode: Union[SubtitleMode, str, ModePreset],
    min_duration: float = MIN_DISPLAY_DURATION,
    max_duration: Optional[float] = None,
) -> List[SubtitleChunk]:
    """Clamp each chunk's duration into [min_duration, max_duration].

    Args:
        chunks: Raw chunks from core.build_chunks().
        mode: Caption mode (enum, name) or an already resolved ModePreset.
        min_duration: Shortest allowed display time in seconds.
        max_duration: Longest allowed display time; defaults to the
            preset's max_duration.

    Returns:
        New list of chunks with adjusted end times.

    Raises:
        ValueError: If the mode is unknown or min_duration > max_duration.
    """
    preset = mode if isinstance(mode, ModePreset) else resolve_preset(mode)
    if max_duration is None:
        max_duration = preset.max_duration
    if min_duration > max_duration:
        raise ValueError(
            "min_duration ({}) exceeds max_duration ({})".format(min_duration, max_duration)
        )

    normalized = []  # type: List[SubtitleChunk]
    adjusted = 0
    for chunk in chunks:
        start = chunk.start_sec
        end = chunk.end_sec
        if end - start < min_duration:
            end = start + min_duration
        if end - start > max_duration:
            end = start + max_duration
        if end != chunk.end_sec:
            adjusted += 1
        normalized.append(dataclasses.replace(chunk, text_lines=list(chunk.text_lines), end_sec=end))

    logger.debug(
        "Normalized %d chunks for %s (%d adjusted, window %.2f-%.2fs)",
        len(normalized), preset.mode.value, adjusted, min_duration, max_duration,
    )
    return normalized
