"""Configuration constants with .env and environment overrides.

WHY: The segmentation thresholds (pause gap, advisory minimum chunk length,
display-duration floor) are policy numbers that operators occasionally need
to tune without a code change. Centralizing them here keeps them out of the
algorithm bodies.

HOW: python-dotenv loads a .env file on import, then each constant is read
from the environment with a hard-coded default.

RULES:
- MIN_CHUNK_DURATION (builder, advisory) and MIN_DISPLAY_DURATION
  (normalizer floor) are separate knobs; do not merge them.
- Numeric variables that fail to parse raise ValueError naming the variable.
- Library functions take these as keyword defaults; callers can still pass
  explicit values per call.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory (where the process is started)
load_dotenv()


def _env_float(name: str, default: float) -> float:
    """Read a float from the environment, falling back to default."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(
            "Environment variable {} must be a number, got {!r}".format(name, raw)
        ) from None


# ---------------------------------------------------------------------------
# Chunk builder thresholds
# ---------------------------------------------------------------------------

PAUSE_GAP_SEC = _env_float("SUBTITLE_PAUSE_GAP_SEC", 0.25)
"""Silence between words (seconds) that closes the current chunk."""

MIN_CHUNK_DURATION = _env_float("SUBTITLE_MIN_CHUNK_DURATION", 1.0)
"""Advisory minimum raw chunk length. Shorter chunks are still emitted."""

MIN_CPS_WINDOW = _env_float("SUBTITLE_MIN_CPS_WINDOW", 0.1)
"""Floor for the duration used in reading-speed (CPS) calculations."""

# ---------------------------------------------------------------------------
# Timing normalizer
# ---------------------------------------------------------------------------

MIN_DISPLAY_DURATION = _env_float("SUBTITLE_MIN_DISPLAY_DURATION", 0.8)
"""Shortest on-screen time for any chunk after normalization."""

# ---------------------------------------------------------------------------
# Defaults for the CLI
# ---------------------------------------------------------------------------

DEFAULT_MODE = os.getenv("SUBTITLE_DEFAULT_MODE", "TALKING_HEAD")
LOG_LEVEL = os.getenv("SUBTITLE_LOG_LEVEL", "WARNING").upper()
