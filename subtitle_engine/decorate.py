"""Decoration hook: presentation tokens drawn alongside caption chunks.

WHY: Highlights, emoji and animation cues are presentation features that
change often. Keeping them out of SubtitleChunk and behind a small
strategy interface means new decoration logic never touches the builder
or the normalizer, and the timing/text contract stays stable.

HOW: BaseDecorator is an ABC with a ``name`` property and a ``decorate()``
method. NullDecorator (the default) returns no tokens. KeywordEmojiDecorator
adds keyword highlight and emoji tokens when the matching feature flags are
on. DECORATORS maps registry keys to decorator classes.

RULES:
- Decorators are pure and additive: they return a new Decorations value and
  never modify chunk text or timing.
- Tokens carry the time window of the chunk they belong to.
- micro_animations produces no tokens; animation is applied by the renderer.

To add a new decorator:
1. Subclass BaseDecorator in this module or a new one.
2. Implement ``name`` and ``decorate()``.
3. Register it in DECORATORS.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from .keywords import pick_emoji, pick_keywords
from .models import (
    DecorationToken,
    Decorations,
    FeatureFlags,
    ModePreset,
    SubtitleChunk,
)

logger = logging.getLogger(__name__)


class BaseDecorator(ABC):
    """Abstract base for chunk decorators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable decorator name."""

    @abstractmethod
    def decorate(
        self,
        chunks: List[SubtitleChunk],
        preset: ModePreset,
        flags: FeatureFlags,
    ) -> Decorations:
        """Produce decoration tokens for a chunk list.

        Args:
            chunks: Normalized chunks (read-only).
            preset: The resolved mode preset.
            flags: Feature toggles selected by the user.

        Returns:
            A Decorations value; tokens are in drawing order.
        """


class NullDecorator(BaseDecorator):
    """Default decorator: no tokens."""

    @property
    def name(self) -> str:
        return "None"

    def decorate(self, chunks, preset, flags):
        return Decorations(tokens=[])


class KeywordEmojiDecorator(BaseDecorator):
    """Keyword highlights and per-line emoji.

    WHY: Creator-style captions emphasize one or two words per line and
    often end a line with an emoji that matches its content.

    HOW: For each line of each chunk, emits a highlighted WORD token per
    picked keyword (flags.highlight_keywords), then an EMOJI token if a
    rule matches (flags.emoji_augment).

    RULES:
    - Both flags off: no tokens.
    - At most max_keywords WORD tokens and one EMOJI token per line.
    """

    def __init__(self, max_keywords: int = 2) -> None:
        self.max_keywords = max_keywords

    @property
    def name(self) -> str:
        return "Keywords and Emoji"

    def decorate(self, chunks, preset, flags):
        tokens: List[DecorationToken] = []
        if not (flags.highlight_keywords or flags.emoji_augment):
            return Decorations(tokens=tokens)

        for chunk in chunks:
            for line_index, line in enumerate(chunk.text_lines[:preset.max_lines]):
                if flags.highlight_keywords:
                    for keyword in pick_keywords(line, max_count=self.max_keywords):
                        tokens.append(DecorationToken(
                            kind="WORD",
                            line_index=line_index,
                            text=keyword,
                            start_sec=chunk.start_sec,
                            end_sec=chunk.end_sec,
                            highlight=True,
                        ))
                if flags.emoji_augment:
                    emoji = pick_emoji(line)
                    if emoji is not None:
                        tokens.append(DecorationToken(
                            kind="EMOJI",
                            line_index=line_index,
                            text=emoji,
                            start_sec=chunk.start_sec,
                            end_sec=chunk.end_sec,
                            emoji=True,
                        ))

        logger.debug("%s produced %d tokens for %d chunks", self.name, len(tokens), len(chunks))
        return Decorations(tokens=tokens)


DECORATORS: Dict[str, Type[BaseDecorator]] = {
    "none": NullDecorator,
    "keywords": KeywordEmojiDecorator,
}


def build_decorations(
    chunks: List[SubtitleChunk],
    preset: ModePreset,
    flags: Optional[FeatureFlags] = None,
    decorator: Optional[BaseDecorator] = None,
) -> Decorations:
    """Run a decorator over the chunk list.

    Defaults to NullDecorator and all-off FeatureFlags, which yields an
    empty token list.
    """
    if flags is None:
        flags = FeatureFlags()
    if decorator is None:
        decorator = NullDecorator()
    return decorator.decorate(chunks, preset, flags)
