"""Keyword and emoji selection for caption decorations.

WHY: Short-form video captions often highlight one or two key words per
line and append a matching emoji. The decorator needs a deterministic way
to pick those from plain caption text.

HOW: pick_keywords() normalizes the line (lowercase, diacritics stripped,
punctuation removed), drops stop words and short words, scores the rest by
length, position and a creator-domain bonus, then maps the winners back to
their original spelling in the line. pick_emoji() returns the emoji of the
first matching rule in EMOJI_RULES.

RULES:
- Only English stop words are implemented.
- Results keep the capitalization they have in the caption line.
- Deterministic: the same line always yields the same picks.
"""

import re
import unicodedata
from typing import FrozenSet, List, Optional, Pattern, Tuple

MAX_KEYWORDS_PER_LINE = 2
MIN_KEYWORD_LENGTH = 4
DOMAIN_BONUS = 5.0
POSITION_WEIGHT = 2.0

STOP_WORDS_EN: FrozenSet[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "so", "to", "of", "in", "on", "for",
    "with", "at", "by", "from", "is", "am", "are", "was", "were", "be", "been",
    "being", "it", "this", "that", "these", "those", "as", "if", "then", "than",
    "too", "very", "just", "not", "no", "yes", "you", "we", "they", "i", "me",
    "my", "your", "our", "their", "he", "she", "him", "her", "his", "hers",
    "its", "them", "us", "do", "does", "did", "done", "can", "could", "should",
    "would", "will", "shall", "may", "might", "up", "down", "out", "over",
    "under", "again", "once", "here", "there", "when", "where", "why", "how",
    "all", "any", "both", "each", "few", "more", "most", "other", "some",
    "such", "only", "own", "same", "s", "t", "ll", "re", "d", "m", "ve",
})

# Words that get a scoring bonus in creator-focused captions
DOMAIN_KEYWORDS: FrozenSet[str] = frozenset({
    "creator", "creators", "content", "engagement", "views", "reach", "viral",
    "trend", "trending", "growth", "grow", "hook", "caption", "captions",
    "hashtag", "hashtags", "tiktok", "instagram", "reels", "shorts",
    "monetize", "sales", "dm", "inbox", "fans", "brand", "sponsor", "aesthetic",
    "style",
})

EMOJI_RULES: List[Tuple[Pattern, str]] = [
    (re.compile(r"\b(love|heart)\b"), "❤️"),
    (re.compile(r"\b(fire|lit|hot)\b"), "🔥"),
    (re.compile(r"\b(money|sales?|cash)\b"), "💸"),
    (re.compile(r"\b(fast|quick|speed)\b"), "⚡"),
    (re.compile(r"\b(new|wow|amazing|magic)\b"), "✨"),
    (re.compile(r"\b(question|how|why|what)\b"), "❓"),
]

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")


def normalize_line(line: str) -> str:
    """Lowercase, strip diacritics and punctuation, collapse whitespace."""
    decomposed = unicodedata.normalize("NFD", line.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(_NON_WORD_RE.sub(" ", stripped).split())


def _score(word: str, index: int, total: int) -> float:
    """Longer words, later words and domain words score higher."""
    score = float(len(word))
    score += POSITION_WEIGHT * (index + 1) / max(1, total)
    if word in DOMAIN_KEYWORDS:
        score += DOMAIN_BONUS
    return score


def pick_keywords(
    line: str,
    max_count: int = MAX_KEYWORDS_PER_LINE,
    min_length: int = MIN_KEYWORD_LENGTH,
) -> List[str]:
    """Pick the most salient words of a caption line.

    Args:
        line: One caption line as displayed.
        max_count: Maximum number of keywords to return.
        min_length: Words shorter than this are never picked.

    Returns:
        Up to max_count words, best first, spelled as they appear in line.
        Words whose normalized form no longer matches the line (accented
        words, for instance) are skipped.
    """
    normalized = normalize_line(line)
    if not normalized:
        return []

    tokens = normalized.split(" ")
    candidates = [
        (word, i) for i, word in enumerate(tokens)
        if len(word) >= min_length and word not in STOP_WORDS_EN
    ]
    ranked = sorted(
        candidates,
        key=lambda c: _score(c[0], c[1], len(tokens)),
        reverse=True,
    )

    selected = []  # type: List[str]
    for word, _ in ranked:
        if len(selected) >= max_count:
            break
        if word not in selected:
            selected.append(word)

    originals = []  # type: List[str]
    for word in selected:
        match = re.search(r"\b{}\b".format(re.escape(word)), line, re.IGNORECASE)
        if match:
            originals.append(match.group(0))
    return originals


def pick_emoji(line: str) -> Optional[str]:
    """Return the emoji of the first rule matching the line, or None."""
    lowered = line.lower()
    for pattern, emoji in EMOJI_RULES:
        if pattern.search(lowered):
            return emoji
    return None
