"""Core chunking logic: transcript validation, segmentation and line splitting.

WHY: Burned-in captions need short, readable on-screen units. A word-level
transcript has no such structure, so this module groups words into chunks
using pauses, sentence ends, a character budget and a reading-speed cap,
then lays each chunk out on one or two lines.

HOW: build_chunks() makes a single greedy pass over the words while holding
one open buffer (_ChunkBuffer). Before a word is appended the buffer may be
flushed because of a pause, a sentence end on the previous word, or
character overflow. After the word is appended the buffer's characters per
second are checked and the buffer is flushed early if it reads too fast.
Every flush goes through _emit(), which builds the SubtitleChunk and splits
its text with split_lines().

RULES:
- Pure functions: no I/O, no shared mutable state, inputs never modified.
- Pause and sentence checks run before appending; the CPS check runs after.
- Emission never drops words. The minimum chunk duration is advisory and
  only logged.
- Chunk times are raw (end may equal start). The timing normalizer clamps
  them afterwards.
- Word text is never modified beyond whitespace collapsing.
"""

import logging
import re
from typing import List, Optional

from .config import MIN_CHUNK_DURATION, MIN_CPS_WINDOW, PAUSE_GAP_SEC
from .models import ModePreset, SubtitleChunk, Transcript, WordToken

logger = logging.getLogger(__name__)

# =============================================================================
# Text Utilities
# =============================================================================

SENT_END_RE = re.compile(r"[.!?]$")


def collapse_whitespace(s: str) -> str:
    """Trim and collapse runs of whitespace to single spaces."""
    return " ".join(s.split())


def ends_sentence(token: str) -> bool:
    """True if a token ends with sentence punctuation (. ! ?)."""
    return bool(SENT_END_RE.search(token.strip()))


def _join(words: List[WordToken]) -> str:
    return collapse_whitespace(" ".join(w.text for w in words))


# =============================================================================
# Validation
# =============================================================================

def validate_transcript(transcript: Transcript) -> None:
    """Fail fast on transcripts the builder cannot segment sensibly.

    Checks every word for negative timestamps, end before start, and a
    start time earlier than the previous word's start. Overlapping words
    (a start before the previous end) are allowed; recognizers produce
    them routinely.

    Raises:
        ValueError: Naming the first offending word and its index.
    """
    prev_start = None  # type: Optional[float]
    for i, word in enumerate(transcript.words):
        if word.start < 0 or word.end < 0:
            raise ValueError(
                "Word {} ({!r}) has a negative timestamp: start={} end={}".format(
                    i, word.text, word.start, word.end
                )
            )
        if word.end < word.start:
            raise ValueError(
                "Word {} ({!r}) ends before it starts: start={} end={}".format(
                    i, word.text, word.start, word.end
                )
            )
        if prev_start is not None and word.start < prev_start:
            raise ValueError(
                "Word {} ({!r}) is out of order: starts at {} after a word starting at {}".format(
                    i, word.text, word.start, prev_start
                )
            )
        prev_start = word.start


# =============================================================================
# Line Splitting
# =============================================================================

def _closest_space(text: str, target: int) -> int:
    """Index of the space nearest to target, earlier one on ties; -1 if none."""
    best = -1
    for i, ch in enumerate(text):
        if ch != " ":
            continue
        if best == -1 or abs(i - target) < abs(best - target):
            best = i
    return best


def split_lines(text: str, preset: ModePreset) -> List[str]:
    """Lay out chunk text on one or two lines.

    WHY: Two balanced lines read better than one long line and a short
    orphan, but a very short first line looks broken, so balance yields to
    a fuller first line in that case.

    HOW:
      1. Fits on one line (or the preset allows only one): single line.
      2. Otherwise split at the space closest to the midpoint.
      3. If that split would leave a first line shorter than half of
         max_chars_per_line, use the last space at or before
         max_chars_per_line instead.
      4. No usable space at all: hard cut at max_chars_per_line.

    RULES:
    - Never returns more than two lines or an empty second line.
    - A continuous run with no spaces may exceed max_chars_per_line.

    Args:
        text: Chunk text (whitespace is collapsed first).
        preset: Supplies max_chars_per_line and max_lines.

    Returns:
        List of one or two lines.
    """
    text = collapse_whitespace(text)
    limit = preset.max_chars_per_line

    if len(text) <= limit or preset.max_lines == 1:
        return [text]

    split_at = _closest_space(text, len(text) // 2)
    if split_at < limit / 2:
        # Prefer a fuller first line over an awkwardly short one
        split_at = text.rfind(" ", 0, limit + 1)
    if split_at == -1:
        split_at = min(limit, len(text) - 1)

    first = text[:split_at].strip()
    second = text[split_at:].strip()
    if not second:
        return [first]
    return [first, second]


# =============================================================================
# Segmentation
# =============================================================================

class _ChunkBuffer:
    """The words accumulated for the chunk currently being built."""

    def __init__(self) -> None:
        self.words = []  # type: List[WordToken]

    def __bool__(self) -> bool:
        return bool(self.words)

    def __len__(self) -> int:
        return len(self.words)

    @property
    def start(self) -> float:
        return self.words[0].start

    @property
    def last_end(self) -> float:
        return self.words[-1].end

    def text(self) -> str:
        return _join(self.words)

    def tentative_text(self, word: WordToken) -> str:
        """Joined text if word were appended."""
        return _join(self.words + [word])

    def cps(self, min_window: float) -> float:
        duration = max(min_window, self.last_end - self.start)
        return len(self.text()) / duration

    def take(self, count: Optional[int] = None) -> List[WordToken]:
        """Remove and return the first count words (all when None)."""
        if count is None:
            count = len(self.words)
        taken = self.words[:count]
        self.words = self.words[count:]
        return taken


def _emit(
    words: List[WordToken],
    preset: ModePreset,
    min_chunk_duration: float,
) -> Optional[SubtitleChunk]:
    """Turn buffered words into a chunk. Returns None if they hold no text."""
    text = _join(words)
    if not text:
        return None

    start = words[0].start
    end = words[-1].end
    if end - start < min_chunk_duration:
        logger.debug(
            "Short chunk %.3f-%.3f (%.3fs < %.3fs): %r",
            start, end, end - start, min_chunk_duration, text,
        )

    return SubtitleChunk(
        text_lines=split_lines(text, preset),
        start_sec=start,
        end_sec=end,
    )


def build_chunks(
    transcript: Transcript,
    preset: ModePreset,
    pause_gap: float = PAUSE_GAP_SEC,
    min_chunk_duration: float = MIN_CHUNK_DURATION,
    min_cps_window: float = MIN_CPS_WINDOW,
    validate: bool = True,
) -> List[SubtitleChunk]:
    """Segment a word-level transcript into timed caption chunks.

    WHY: This is the segmentation engine. It decides where one caption
    ends and the next begins, trading off natural breaks (pauses, sentence
    ends) against hard limits (characters on screen, reading speed).

    HOW: Greedy single pass with one open buffer. For each word:
      1. Flush first if the buffer is non-empty and the silence since the
         last word exceeds pause_gap, or the last buffered word ends a
         sentence; or if appending would exceed preset.overflow_chars.
      2. Append the word.
      3. If the buffer now reads faster than preset.target_cps.max, emit
         the words before the newest one and keep the newest as the start
         of the next chunk. A lone word that is still too fast is emitted
         on its own.
    Whatever is left in the buffer is emitted at the end.

    RULES:
    - Empty transcript returns [].
    - Chunks come out in input order with non-decreasing start times.
    - A single word longer than the overflow budget becomes its own chunk.
    - Durations are raw; run timing.normalize_chunk_timings() afterwards.

    Args:
        transcript: Input words (read-only).
        preset: Resolved mode preset.
        pause_gap: Silence in seconds that forces a break.
        min_chunk_duration: Advisory minimum chunk length (logged only).
        min_cps_window: Duration floor for the reading-speed calculation.
        validate: Run validate_transcript() before segmenting.

    Returns:
        Ordered list of SubtitleChunk objects.

    Raises:
        ValueError: If validate is True and the transcript is malformed.
    """
    words = transcript.words
    if not words:
        return []
    if validate:
        validate_transcript(transcript)

    chunks = []  # type: List[SubtitleChunk]
    buffer = _ChunkBuffer()

    def flush(count: Optional[int] = None) -> None:
        chunk = _emit(buffer.take(count), preset, min_chunk_duration)
        if chunk is not None:
            chunks.append(chunk)

    for word in words:
        if buffer:
            gap = word.start - buffer.last_end
            by_pause = gap > pause_gap
            by_sentence = ends_sentence(buffer.words[-1].text)
            by_overflow = len(buffer.tentative_text(word)) > preset.overflow_chars
            if by_pause or by_sentence or by_overflow:
                logger.debug(
                    "Flush before %r (pause=%s sentence=%s overflow=%s)",
                    word.text, by_pause, by_sentence, by_overflow,
                )
                flush()

        buffer.words.append(word)

        if buffer.cps(min_cps_window) > preset.target_cps.max:
            logger.debug("Reading speed above %.1f cps at %r", preset.target_cps.max, word.text)
            if len(buffer) > 1:
                flush(len(buffer) - 1)
            if buffer.cps(min_cps_window) > preset.target_cps.max:
                flush()

    if buffer:
        flush()

    logger.debug(
        "Built %d chunks from %d words (%s)", len(chunks), len(words), preset.mode.value
    )
    return chunks
