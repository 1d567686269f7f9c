"""Shared test fixtures for the subtitle_engine test suite.

WHY: Most tests need small transcripts with controlled timing. Building
them through one helper keeps gaps and durations explicit and consistent.

HOW: make_words() lays words out back to back with a fixed duration and
gap; make_transcript() wraps explicit (text, start, end) triples. Fixtures
provide the two built-in presets and a realistic two-sentence transcript.

RULES:
- Times are float seconds.
- Timings in individual tests are chosen so that reading-speed checks do
  not sit on an exact float boundary unless the test says so.
"""

from typing import List, Sequence, Tuple

import pytest

from subtitle_engine.models import Transcript, WordToken
from subtitle_engine.presets import PRESET_CINEMATIC_CLIP, PRESET_TALKING_HEAD


def make_words(texts, start=0.0, duration=0.3, gap=0.05):
    """Helper to create WordTokens with sequential timing."""
    words = []  # type: List[WordToken]
    t = start
    for text in texts:
        words.append(WordToken(text=text, start=t, end=t + duration))
        t += duration + gap
    return words


def make_transcript(triples: Sequence[Tuple[str, float, float]], language="en") -> Transcript:
    """Build a Transcript from explicit (text, start, end) triples."""
    return Transcript(
        words=[WordToken(text=text, start=start, end=end) for text, start, end in triples],
        language=language,
    )


@pytest.fixture
def talking_head():
    return PRESET_TALKING_HEAD


@pytest.fixture
def cinematic():
    return PRESET_CINEMATIC_CLIP


@pytest.fixture
def two_sentence_transcript():
    """Two sentences separated by a one second pause, steady speaking rate."""
    first = make_words(
        ["Welcome", "back", "to", "the", "channel."],
        start=0.0, duration=0.5, gap=0.05,
    )
    second = make_words(
        ["Today", "we", "are", "talking", "about", "growth", "hacks", "for", "creators."],
        start=first[-1].end + 1.0, duration=0.5, gap=0.05,
    )
    return Transcript(words=first + second, language="en", confidence=0.93)
