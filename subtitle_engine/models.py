"""Data models for the subtitle chunking engine.

WHY: Every stage of the pipeline (builder, normalizer, decorator, renderer
hand-off) exchanges the same handful of shapes: timed words in, timed
caption chunks out. Keeping them as plain dataclasses in one module makes
the contract between stages explicit and easy to test.

HOW: Input types (WordToken, Transcript) and configuration types
(SubtitleMode, CpsRange, ModePreset) are frozen dataclasses. Output types
(SubtitleChunk, Decorations) are regular dataclasses; stages that adjust
them return new instances instead of mutating their input.

RULES:
- Timestamps are in seconds (float), never milliseconds.
- Transcript words are assumed ordered by start time; see
  core.validate_transcript() for the optional check.
- ModePreset validates its own invariants on construction.
- Decorations live beside the chunk list, never inside SubtitleChunk.
"""

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class SubtitleMode(str, enum.Enum):
    """Caption style family that selects a ModePreset.

    Inherits from str so members compare equal to their names and
    serialize cleanly to JSON.
    """

    TALKING_HEAD = "TALKING_HEAD"
    CINEMATIC_CLIP = "CINEMATIC_CLIP"


@dataclass(frozen=True)
class WordToken:
    """A single timestamped word from the upstream speech-to-text step.

    Attributes:
        text: The word text, possibly with attached punctuation ("Done.").
        start: Start time in seconds.
        end: End time in seconds (end >= start).
        confidence: Optional recognizer confidence in [0, 1].
    """

    text: str
    start: float
    end: float
    confidence: Optional[float] = None


@dataclass(frozen=True)
class Transcript:
    """An ordered word sequence for one video job.

    Constructed once per job and passed read-only through the pipeline.
    """

    words: List[WordToken] = field(default_factory=list)
    language: str = ""
    confidence: Optional[float] = None


@dataclass(frozen=True)
class CpsRange:
    """Target reading-speed window in characters per second."""

    min: float
    max: float


@dataclass(frozen=True)
class ModePreset:
    """Numeric layout and pacing parameters for one caption mode.

    WHY: The builder and normalizer only need a few numbers from the
    user-facing style selection. Bundling them per mode keeps the algorithm
    free of mode-specific branches.

    RULES:
    - max_chars_per_line > 0
    - max_lines is 1 or 2
    - target_cps.max > target_cps.min > 0
    - max_duration > 0 (upper bound used by the timing normalizer)
    """

    mode: SubtitleMode
    max_chars_per_line: int
    max_lines: int
    target_cps: CpsRange
    max_duration: float

    def __post_init__(self) -> None:
        # Accept the plain mode name; frozen, so bypass __setattr__
        object.__setattr__(self, "mode", SubtitleMode(self.mode))
        if self.max_chars_per_line <= 0:
            raise ValueError(
                "max_chars_per_line must be positive, got {}".format(self.max_chars_per_line)
            )
        if self.max_lines not in (1, 2):
            raise ValueError("max_lines must be 1 or 2, got {}".format(self.max_lines))
        if not self.target_cps.max > self.target_cps.min > 0:
            raise ValueError(
                "target_cps must satisfy max > min > 0, got min={} max={}".format(
                    self.target_cps.min, self.target_cps.max
                )
            )
        if self.max_duration <= 0:
            raise ValueError("max_duration must be positive, got {}".format(self.max_duration))

    @property
    def overflow_chars(self) -> int:
        """Maximum joined text length a single chunk may accumulate."""
        return self.max_chars_per_line * (2 if self.max_lines == 2 else 1)


@dataclass
class SubtitleChunk:
    """One on-screen caption: one or two text lines shown for a time window.

    Attributes:
        text_lines: 1 or 2 lines, bounded by the preset's max_lines.
        start_sec: Display start in seconds.
        end_sec: Display end in seconds. Raw builder output may equal
            start_sec for zero-duration words; the timing normalizer
            guarantees end_sec > start_sec.
    """

    text_lines: List[str]
    start_sec: float
    end_sec: float

    @property
    def duration(self) -> float:
        return self.end_sec - self.start_sec

    @property
    def text(self) -> str:
        """The chunk's lines rejoined with single spaces."""
        return " ".join(self.text_lines)


@dataclass(frozen=True)
class DecorationToken:
    """A presentation cue drawn on top of a chunk line.

    Attributes:
        kind: "WORD" (a highlighted word of the line) or "EMOJI".
        line_index: Which line of the chunk the token belongs to (0 or 1).
        text: The original word text or the emoji character.
        start_sec / end_sec: The owning chunk's display window.
        highlight: True for keyword highlights.
        emoji: True for emoji tokens.
    """

    kind: str
    line_index: int
    text: str
    start_sec: float
    end_sec: float
    highlight: bool = False
    emoji: bool = False


@dataclass
class Decorations:
    """Annotation tokens for a chunk list, in drawing order."""

    tokens: List[DecorationToken] = field(default_factory=list)


@dataclass(frozen=True)
class FeatureFlags:
    """User-selectable presentation features passed to decorators."""

    highlight_keywords: bool = False
    emoji_augment: bool = False
    micro_animations: bool = False
