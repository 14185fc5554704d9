"""
Unit tests for the daily quote: quote/author extraction and the built-in rotation.

These tests run WITHOUT network access: the selector is a MagicMock.

Usage:
    pytest tests/test_quotes.py -v
"""
import random
from unittest.mock import MagicMock

import pytest

from moodbuddy.data_models import Quote
from moodbuddy.quotes import (
    FALLBACK_QUOTES,
    QUOTE_PROMPT,
    UNKNOWN_AUTHOR,
    QuoteGenerator,
    extract_quote_and_author,
)


# ============================================================================
# Extraction Tests
# ============================================================================


class TestExtractQuoteAndAuthor:
    """Test splitting model text into quote and author."""

    def test_bold_author(self):
        quote = extract_quote_and_author(
            "Self-care is not self-indulgence, it is self-preservation. **Audre Lorde**"
        )

        assert quote == Quote("Self-care is not self-indulgence, it is self-preservation.", "Audre Lorde")

    def test_bold_author_after_dash(self):
        quote = extract_quote_and_author(
            "Self-care is not self-indulgence, it is self-preservation. - **Audre Lorde**"
        )

        assert quote == Quote("Self-care is not self-indulgence, it is self-preservation.", "Audre Lorde")

    def test_bold_wins_over_dash(self):
        quote = extract_quote_and_author("Stay strong - it gets better **Lady Gaga**")

        assert quote == Quote("Stay strong - it gets better", "Lady Gaga")

    def test_curly_quotes_then_dash(self):
        quote = extract_quote_and_author(
            "“There is hope, even when your brain tells you there isn't.” — John Green"
        )

        assert quote == Quote("There is hope, even when your brain tells you there isn't.", "John Green")

    def test_straight_quotes_then_dash(self):
        quote = extract_quote_and_author('"Small steps still move you forward." - Tiny Buddha')

        assert quote == Quote("Small steps still move you forward.", "Tiny Buddha")

    def test_spaced_dash_splits_at_last_dash(self):
        quote = extract_quote_and_author(
            "It's okay to not be okay – it means that your mind is trying to heal itself. "
            "– Jasmine Warga"
        )

        assert quote.author == "Jasmine Warga"
        assert quote.text == (
            "It's okay to not be okay – it means that your mind is trying to heal itself."
        )

    def test_by_author(self):
        quote = extract_quote_and_author("The best way out is always through by Robert Frost")

        assert quote == Quote("The best way out is always through", "Robert Frost")

    def test_from_author(self):
        quote = extract_quote_and_author("You are enough, just as you are from Meghan Markle")

        assert quote == Quote("You are enough, just as you are", "Meghan Markle")

    def test_from_inside_sentence_is_not_an_author(self):
        quote = extract_quote_and_author("Healing comes from within.")

        assert quote == Quote("Healing comes from within.", UNKNOWN_AUTHOR)

    def test_unspaced_dash(self):
        assert extract_quote_and_author("Stay strong—Demi Lovato") == Quote("Stay strong", "Demi Lovato")

    def test_hyphenated_words_are_not_split(self):
        assert extract_quote_and_author("Self-care is important") == Quote(
            "Self-care is important", UNKNOWN_AUTHOR
        )

    def test_short_trailing_sentence_is_author(self):
        quote = extract_quote_and_author("Progress is still progress, no matter how small. Rachel Hart")

        assert quote == Quote("Progress is still progress, no matter how small.", "Rachel Hart")

    def test_full_sentences_keep_unknown_author(self):
        quote = extract_quote_and_author("Breathe. You're going to be okay.")

        assert quote == Quote("Breathe. You're going to be okay.", UNKNOWN_AUTHOR)

    def test_surrounding_quotes_removed(self):
        assert extract_quote_and_author('"Every day is a fresh start."') == Quote(
            "Every day is a fresh start.", UNKNOWN_AUTHOR
        )

    def test_newlines_are_joined(self):
        quote = extract_quote_and_author("Your feelings are valid.\n\n**Brene Brown**\n")

        assert quote == Quote("Your feelings are valid.", "Brene Brown")

    @pytest.mark.parametrize("text", ["", "   ", "\n", None])
    def test_empty_text(self, text):
        assert extract_quote_and_author(text) == Quote("", UNKNOWN_AUTHOR)


# ============================================================================
# Quote Generator Tests
# ============================================================================


def _pool(size):
    return [Quote(f"Quote number {i}.") for i in range(size)]


class TestQuoteGenerator:
    """Test model quotes and the built-in fallback rotation."""

    def test_model_quote_is_parsed(self):
        selector = MagicMock()
        selector.complete.return_value = "Your feelings are valid. **Brene Brown**"

        quote = QuoteGenerator(selector=selector).generate()

        assert quote == Quote("Your feelings are valid.", "Brene Brown")
        assert selector.complete.call_args.args[0] == QUOTE_PROMPT

    def test_model_error_falls_back(self):
        selector = MagicMock()
        selector.complete.side_effect = RuntimeError("rate limited")

        quote = QuoteGenerator(selector=selector, rng=random.Random(0)).generate()

        assert quote in FALLBACK_QUOTES

    def test_empty_model_text_falls_back(self):
        selector = MagicMock()
        selector.complete.return_value = ""

        quote = QuoteGenerator(selector=selector, rng=random.Random(0)).generate()

        assert quote in FALLBACK_QUOTES

    def test_no_selector_uses_built_in_quotes(self):
        assert QuoteGenerator(rng=random.Random(0)).generate() in FALLBACK_QUOTES

    def test_pool_used_up_before_any_repeat(self):
        pool = _pool(6)
        generator = QuoteGenerator(rng=random.Random(1), fallback_quotes=pool, keep_recent=5)

        draws = [generator.next_fallback() for _ in range(7)]

        assert len(set(draws[:6])) == 6
        # 최근 5개를 제외하면 처음 고른 명언만 남음
        assert draws[6] == draws[0]

    def test_recent_quotes_never_repeat(self):
        generator = QuoteGenerator(rng=random.Random(7), fallback_quotes=_pool(8), keep_recent=5)

        draws = [generator.next_fallback() for _ in range(30)]

        for i, quote in enumerate(draws):
            assert quote not in draws[max(0, i - 5):i]

    @pytest.mark.parametrize("keep_recent", [0, 3, 10])
    def test_small_pool_keeps_drawing(self, keep_recent):
        pool = _pool(3)
        generator = QuoteGenerator(rng=random.Random(2), fallback_quotes=pool, keep_recent=keep_recent)

        draws = [generator.next_fallback() for _ in range(10)]

        assert all(quote in pool for quote in draws)
        assert set(draws[:3]) == set(pool)
