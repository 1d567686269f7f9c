"""Unit tests for the decoration hook and keyword/emoji selection.

WHY: Decorations are drawn on top of captions, so they must never change
chunk text or timing, and the default path must stay a no-op.
"""

import copy

import pytest

from subtitle_engine.decorate import (
    DECORATORS,
    BaseDecorator,
    KeywordEmojiDecorator,
    NullDecorator,
    build_decorations,
)
from subtitle_engine.keywords import normalize_line, pick_emoji, pick_keywords
from subtitle_engine.models import Decorations, FeatureFlags, SubtitleChunk

ALL_ON = FeatureFlags(highlight_keywords=True, emoji_augment=True, micro_animations=True)


@pytest.fixture
def chunks():
    return [
        SubtitleChunk(text_lines=["Grow your content fast"], start_sec=0.0, end_sec=1.5),
        SubtitleChunk(text_lines=["the quick brown fox", "jumps over the lazy dog"],
                      start_sec=2.0, end_sec=4.0),
    ]


class TestDefaultHook:

    def test_default_is_empty(self, chunks, talking_head):
        result = build_decorations(chunks, talking_head)
        assert isinstance(result, Decorations)
        assert result.tokens == []

    def test_null_decorator_ignores_flags(self, chunks, talking_head):
        result = build_decorations(chunks, talking_head, ALL_ON, NullDecorator())
        assert result.tokens == []

    def test_registry(self):
        assert DECORATORS["none"] is NullDecorator
        assert DECORATORS["keywords"] is KeywordEmojiDecorator
        for cls in DECORATORS.values():
            assert issubclass(cls, BaseDecorator)
            assert cls().name

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            BaseDecorator()


class TestKeywordEmojiDecorator:

    def test_flags_off_produce_nothing(self, chunks, talking_head):
        result = KeywordEmojiDecorator().decorate(chunks, talking_head, FeatureFlags())
        assert result.tokens == []

    def test_micro_animations_alone_produce_nothing(self, chunks, talking_head):
        flags = FeatureFlags(micro_animations=True)
        assert KeywordEmojiDecorator().decorate(chunks, talking_head, flags).tokens == []

    def test_keyword_highlights(self, chunks, talking_head):
        flags = FeatureFlags(highlight_keywords=True)
        tokens = KeywordEmojiDecorator().decorate(chunks[:1], talking_head, flags).tokens
        assert [t.text for t in tokens] == ["content", "Grow"]
        assert all(t.kind == "WORD" and t.highlight and not t.emoji for t in tokens)
        assert all((t.start_sec, t.end_sec) == (0.0, 1.5) for t in tokens)

    def test_emoji(self, chunks, talking_head):
        flags = FeatureFlags(emoji_augment=True)
        tokens = KeywordEmojiDecorator().decorate(chunks[:1], talking_head, flags).tokens
        assert len(tokens) == 1
        assert tokens[0].kind == "EMOJI"
        assert tokens[0].emoji
        assert tokens[0].text == "⚡"

    def test_second_line_index(self, chunks, talking_head):
        flags = FeatureFlags(highlight_keywords=True)
        tokens = KeywordEmojiDecorator().decorate(chunks[1:], talking_head, flags).tokens
        assert {t.line_index for t in tokens} == {0, 1}
        assert all((t.start_sec, t.end_sec) == (2.0, 4.0) for t in tokens)

    def test_max_keywords(self, chunks, talking_head):
        flags = FeatureFlags(highlight_keywords=True)
        tokens = KeywordEmojiDecorator(max_keywords=1).decorate(chunks[:1], talking_head, flags).tokens
        assert [t.text for t in tokens] == ["content"]

    def test_chunks_are_not_modified(self, chunks, talking_head):
        before = copy.deepcopy(chunks)
        build_decorations(chunks, talking_head, ALL_ON, KeywordEmojiDecorator())
        assert chunks == before


class TestPickKeywords:

    def test_normalize_line(self):
        assert normalize_line("Café, au LAIT!") == "cafe au lait"

    def test_scores_length_position_and_domain(self):
        # content: 7 + 1.5 + 5, grow: 4 + 0.5 + 5, fast: 4 + 2
        assert pick_keywords("Grow your content fast") == ["content", "Grow"]

    def test_stop_words_and_short_words_skipped(self):
        assert pick_keywords("it is a big day") == []

    def test_empty_line(self):
        assert pick_keywords("  ...  ") == []

    def test_duplicates_collapse(self):
        assert pick_keywords("viral viral viral") == ["viral"]

    def test_accented_words_are_dropped(self):
        assert pick_keywords("Résumé tips") == ["tips"]

    def test_keeps_original_case(self):
        assert pick_keywords("TIKTOK rules") == ["TIKTOK", "rules"]


class TestPickEmoji:

    @pytest.mark.parametrize("line,emoji", [
        ("I love this", "❤️"),
        ("This track is fire", "🔥"),
        ("Money, money!", "💸"),
        ("Quick tip", "⚡"),
        ("Wow look at that", "✨"),
        ("Why does it work", "❓"),
    ])
    def test_rules(self, line, emoji):
        assert pick_emoji(line) == emoji

    def test_first_rule_wins(self):
        assert pick_emoji("new love") == "❤️"

    def test_no_match(self):
        assert pick_emoji("nothing here") is None
