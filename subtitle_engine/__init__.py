"""Subtitle timing and chunking engine for burned-in video captions.

WHY: The video job pipeline receives a word-level transcript from speech to
text and must hand the renderer a list of timed caption chunks: one or two
short lines, readable at a comfortable pace, never flashing or lingering.
This package is that step, with no I/O of its own so the job runner can
call it from any worker.

HOW: build_captions(transcript, mode) runs the whole pipeline:
  resolve_preset() -> build_chunks() -> normalize_chunk_timings()
  -> build_decorations()
and returns a CaptionResult. Each stage is also importable on its own.

RULES:
- build_captions() is the entry point the job pipeline calls.
- Modes: "TALKING_HEAD", "CINEMATIC_CLIP" (or SubtitleMode members).
- Unknown modes raise ValueError; an empty transcript yields no chunks.
- Thread-safe: presets are frozen and every call works on its own data.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .core import build_chunks, split_lines, validate_transcript
from .decorate import (
    DECORATORS,
    BaseDecorator,
    KeywordEmojiDecorator,
    NullDecorator,
    build_decorations,
)
from .models import (
    CpsRange,
    DecorationToken,
    Decorations,
    FeatureFlags,
    ModePreset,
    SubtitleChunk,
    SubtitleMode,
    Transcript,
    WordToken,
)
from .presets import MODE_PRESETS, resolve_preset
from .timing import normalize_chunk_timings

__version__ = "0.1.0"

__all__ = [
    "build_captions",
    "CaptionResult",
    "build_chunks",
    "split_lines",
    "validate_transcript",
    "normalize_chunk_timings",
    "build_decorations",
    "resolve_preset",
    "MODE_PRESETS",
    "DECORATORS",
    "BaseDecorator",
    "NullDecorator",
    "KeywordEmojiDecorator",
    "CpsRange",
    "DecorationToken",
    "Decorations",
    "FeatureFlags",
    "ModePreset",
    "SubtitleChunk",
    "SubtitleMode",
    "Transcript",
    "WordToken",
]

logger = logging.getLogger(__name__)


@dataclass
class CaptionResult:
    """Output of the full pipeline, ready for the renderer."""

    preset: ModePreset
    chunks: List[SubtitleChunk] = field(default_factory=list)
    decorations: Decorations = field(default_factory=Decorations)


def build_captions(
    transcript: Transcript,
    mode: Union[SubtitleMode, str],
    flags: Optional[FeatureFlags] = None,
    decorator: Optional[BaseDecorator] = None,
    validate: bool = True,
) -> CaptionResult:
    """Turn a transcript into normalized, decorated caption chunks.

    Args:
        transcript: Word-level transcript from speech to text.
        mode: Caption mode name or SubtitleMode member.
        flags: Presentation features for the decorator (all off by default).
        decorator: Decoration strategy; NullDecorator by default.
        validate: Reject malformed transcripts before segmenting.

    Returns:
        CaptionResult with the resolved preset, chunks and decorations.

    Raises:
        ValueError: If the mode is unknown, or validate is True and the
            transcript is malformed.
    """
    preset = resolve_preset(mode)
    raw_chunks = build_chunks(transcript, preset, validate=validate)
    chunks = normalize_chunk_timings(raw_chunks, preset)
    decorations = build_decorations(chunks, preset, flags, decorator)

    logger.info(
        "Captioned %d words into %d chunks (%s, %d decoration tokens)",
        len(transcript.words), len(chunks), preset.mode.value, len(decorations.tokens),
    )
    return CaptionResult(preset=preset, chunks=chunks, decorations=decorations)
