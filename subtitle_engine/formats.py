"""Transcript input parsing and chunk output serialization.

WHY: The engine itself works on in-memory dataclasses, but the job pipeline
and the CLI exchange transcripts and chunk lists as JSON, and editors want
an SRT file to check timing by eye. This module is the boundary between
those formats and the models.

HOW: parse_transcript() validates a decoded JSON document against the
bundled JSON schema (jsonschema) and builds a Transcript. chunks_to_dict()
produces the renderer's JSON shape. generate_srt() writes SRT text.

RULES:
- Schema validation is mandatory on input; raises on invalid documents.
- A bare list of word objects is accepted as {"words": [...]}.
- JSON output keeps the renderer's camelCase keys (textLines, startSec).
- SRT output does not adjust timings; run the normalizer first.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from .models import (
    Decorations,
    ModePreset,
    SubtitleChunk,
    Transcript,
    WordToken,
)

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "transcript.schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    """Load the transcript schema, cached after the first call."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


# =============================================================================
# Input
# =============================================================================

def load_transcript_json(raw: str) -> Transcript:
    """Parse JSON text into a Transcript.

    Raises:
        ValueError: If the text is not valid JSON.
        jsonschema.ValidationError: If the document is not a transcript.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError("Could not parse transcript JSON: {}".format(e)) from e
    return parse_transcript(data)


def parse_transcript(data: Any) -> Transcript:
    """Build a Transcript from a decoded JSON document.

    WHY: Transcripts arrive from the speech-to-text step as JSON. Checking
    the shape up front gives a precise error path ("words/3/start") instead
    of a KeyError deep inside the builder.

    HOW: Wraps a bare list into {"words": list}, validates against
    schemas/transcript.schema.json, then converts each word object.

    Args:
        data: Decoded JSON (dict with "words", or a list of word objects).

    Returns:
        Transcript with words in document order.

    Raises:
        jsonschema.ValidationError: If the document does not match the schema.
    """
    if isinstance(data, list):
        data = {"words": data}

    jsonschema.validate(instance=data, schema=_get_schema())

    words = [
        WordToken(
            text=w["text"],
            start=float(w["start"]),
            end=float(w["end"]),
            confidence=w.get("confidence"),
        )
        for w in data["words"]
    ]
    return Transcript(
        words=words,
        language=data.get("language", ""),
        confidence=data.get("confidence"),
    )


# =============================================================================
# Output
# =============================================================================

def chunk_to_dict(chunk: SubtitleChunk) -> Dict[str, Any]:
    return {
        "textLines": list(chunk.text_lines),
        "startSec": chunk.start_sec,
        "endSec": chunk.end_sec,
    }


def chunks_to_dict(
    chunks: List[SubtitleChunk],
    decorations: Optional[Decorations] = None,
    preset: Optional[ModePreset] = None,
) -> Dict[str, Any]:
    """Serialize chunks (and optional decorations) for the renderer.

    Returns:
        Dict with "mode" (None without a preset), "chunks" and
        "decorations" (an empty token list without decorations).
    """
    tokens = decorations.tokens if decorations is not None else []
    return {
        "mode": preset.mode.value if preset is not None else None,
        "chunks": [chunk_to_dict(c) for c in chunks],
        "decorations": {
            "tokens": [
                {
                    "kind": t.kind,
                    "lineIndex": t.line_index,
                    "text": t.text,
                    "startSec": t.start_sec,
                    "endSec": t.end_sec,
                    "highlight": t.highlight,
                    "emoji": t.emoji,
                }
                for t in tokens
            ]
        },
    }


def seconds_to_srt_time(seconds: float) -> str:
    """Convert seconds to SRT timestamp format: HH:MM:SS,mmm"""
    total_ms = int(round(max(0.0, seconds) * 1000))
    hours, rest = divmod(total_ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    secs, millis = divmod(rest, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def generate_srt(chunks: List[SubtitleChunk]) -> str:
    """Generate SRT content from chunks.

    Each block is the 1-based index, the timestamp line, the chunk's lines
    and a blank separator line.
    """
    lines = []  # type: List[str]
    for i, chunk in enumerate(chunks, 1):
        lines.append(str(i))
        lines.append("{} --> {}".format(
            seconds_to_srt_time(chunk.start_sec), seconds_to_srt_time(chunk.end_sec)
        ))
        lines.extend(chunk.text_lines)
        lines.append("")
    return "\n".join(lines)
