"""
Unit tests for the heuristic scorer.

These tests verify:
1. Mood target bonuses and low/neutral/high category weighting
2. Keyword, targeted and duration rules over free-text details
3. Jitter bounds and seeded determinism

Usage:
    pytest tests/test_scoring.py -v
"""
import random

import pytest

from moodbuddy.scoring import (
    EXACT_TARGET_BONUS,
    HIGH_BAND,
    LOW_BAND,
    MAX_JITTER,
    NEUTRAL_BAND,
    HeuristicScorer,
    contains_trigger,
    mood_band,
    normalize_details,
)


# ============================================================================
# Helper Function Tests
# ============================================================================


class TestMoodBand:
    """Test rating to band mapping."""

    @pytest.mark.parametrize("rating,band", [
        (1, LOW_BAND), (2, LOW_BAND), (3, NEUTRAL_BAND), (4, HIGH_BAND), (5, HIGH_BAND),
    ])
    def test_bands(self, rating, band):
        """Ratings 1-2 are low, 3 is neutral, 4-5 are high."""
        assert mood_band(rating) == band


class TestDetailsHelpers:
    """Test free-text normalization and trigger matching."""

    def test_normalize_lowercases_and_strips(self):
        assert normalize_details("  Feeling STRESSED ") == "feeling stressed"

    @pytest.mark.parametrize("text", [None, "", "   ", "I don't know", "not sure", "Whatever"])
    def test_empty_and_generic_details_normalize_to_empty(self, text):
        """Generic answers are treated like no details at all."""
        assert normalize_details(text) == ""

    def test_trigger_matches_at_word_start(self):
        assert contains_trigger("i want to eat something", "eat")
        assert contains_trigger("so hungry", "hungry")

    def test_trigger_does_not_match_inside_word(self):
        """'great' must not count as mentioning 'eat'."""
        assert not contains_trigger("feeling great today", "eat")

    def test_multi_word_trigger(self):
        assert contains_trigger("i have no time at all", "no time")


# ============================================================================
# Target and Category Tests
# ============================================================================


class TestTargetBonus:
    """Test the mood target step."""

    @pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
    def test_exact_target_beats_distance_two(self, exact_scorer, make_exercise, rating):
        """An exact target match always outscores a target two or more steps away."""
        far = rating + 2 if rating + 2 <= 5 else rating - 2
        exact = make_exercise(category="meditation", targets=(rating,))
        distant = make_exercise(category="meditation", targets=(far,))

        scored = exact_scorer.score(rating, "", [exact, distant])

        assert scored[0].reasoning_tokens["target"] == EXACT_TARGET_BONUS
        assert scored[0].reasoning_tokens["target"] > scored[1].reasoning_tokens["target"]
        assert scored[0].score > scored[1].score

    def test_distance_bonus_decreases(self, exact_scorer, make_exercise):
        near = make_exercise(targets=(2,))
        farther = make_exercise(targets=(3,))
        none = make_exercise(targets=(5,))

        tokens = [s.reasoning_tokens["target"] for s in exact_scorer.score(1, "", [near, farther, none])]

        assert tokens[0] > tokens[1] > tokens[2] == 0.0

    def test_activities_have_no_target_bonus(self, exact_scorer, make_activity):
        scored = exact_scorer.score(3, "", [make_activity()])
        assert scored[0].reasoning_tokens["target"] == 0.0


class TestCategoryWeighting:
    """Test band-based category weights."""

    def test_breathing_beats_physical_for_low_mood_without_details(self, rng, make_exercise):
        """Rating 1 with empty details favours breathing over physical."""
        scorer = HeuristicScorer(rng=rng)
        breathing = make_exercise(category="breathing", targets=(1,))
        physical = make_exercise(category="physical", targets=(1,))

        scored = scorer.score(1, "", [breathing, physical])

        assert scored[0].score > scored[1].score

    def test_physical_preferred_for_high_mood(self, exact_scorer, make_exercise):
        breathing = make_exercise(category="breathing", targets=(5,))
        physical = make_exercise(category="physical", targets=(5,))

        scored = exact_scorer.score(5, "", [breathing, physical])

        assert scored[1].score > scored[0].score

    def test_high_impact_activity_boosted_for_low_mood(self, exact_scorer, make_activity):
        high = make_activity(category="creative", impact="high", minutes=30)
        medium = make_activity(category="creative", impact="medium", minutes=30)

        scored = exact_scorer.score(1, "", [high, medium])

        assert scored[0].score > scored[1].score

    def test_short_activity_boosted_for_neutral_mood(self, exact_scorer, make_activity):
        short = make_activity(category="creative", minutes=10)
        long = make_activity(category="creative", minutes=45)

        scored = exact_scorer.score(3, "", [short, long])

        assert scored[0].score > scored[1].score


# ============================================================================
# Keyword Rule Tests
# ============================================================================


class TestKeywordRules:
    """Test free-text keyword scoring."""

    def test_empty_details_skip_keyword_steps(self, exact_scorer, make_exercise):
        scored = exact_scorer.score(2, "", [make_exercise()])
        tokens = scored[0].reasoning_tokens

        assert "keywords" not in tokens
        assert "targeted" not in tokens
        assert "duration" not in tokens

    def test_generic_details_behave_like_empty(self, exact_scorer, make_exercise):
        item = make_exercise(category="breathing", targets=(2,))

        empty = exact_scorer.score(2, "", [item])[0]
        generic = exact_scorer.score(2, "I don't know", [item])[0]

        assert empty.score == generic.score
        assert empty.reasoning_tokens == generic.reasoning_tokens

    def test_related_terms_add_bonus(self, exact_scorer, make_exercise):
        calm = make_exercise(category="meditation", title="Calm Breathing Meditation")
        plain = make_exercise(category="physical", title="Morning Routine")

        scored = exact_scorer.score(3, "I have so much anxiety", [calm, plain])

        assert scored[0].reasoning_tokens["keywords"] > 0
        assert scored[1].reasoning_tokens["keywords"] == 0
        assert scored[0].score > scored[1].score

    def test_hunger_dominates_other_signals(self, exact_scorer, catalog):
        """Mentioning hunger puts a food-related activity on top."""
        candidates = catalog.available_activities("free")

        scored = exact_scorer.score(2, "I'm so hungry", candidates)
        best = max(scored, key=lambda s: s.score)

        assert best.item.title == "Healthy Snack Break"

    def test_great_does_not_trigger_hunger(self, exact_scorer, catalog):
        candidates = catalog.available_activities("free")

        scored = exact_scorer.score(4, "Feeling great", candidates)
        snack = next(s for s in scored if s.item.title == "Healthy Snack Break")

        assert snack.reasoning_tokens["keywords"] == 0
        assert snack.reasoning_tokens["targeted"] == 0

    def test_targeted_title_rule(self, exact_scorer, catalog):
        candidates = catalog.available_activities("free")

        scored = exact_scorer.score(2, "So tired today", candidates)
        nap = next(s for s in scored if s.item.title == "Power Nap")

        assert nap.reasoning_tokens["targeted"] > 0

    def test_duration_rule_prefers_short_items_when_busy(self, exact_scorer, catalog):
        candidates = catalog.available_activities("free")

        scored = {s.item.title: s for s in exact_scorer.score(3, "so busy today", candidates)}

        assert scored["Deep Breathing"].reasoning_tokens["duration"] > 0
        assert scored["Nature Walk"].reasoning_tokens["duration"] == 0


# ============================================================================
# Jitter and Determinism Tests
# ============================================================================


class TestJitter:
    """Test the random tie-breaking step."""

    def test_jitter_is_bounded(self, rng, catalog):
        scorer = HeuristicScorer(rng=rng)

        for scored in scorer.score(3, "", catalog.exercises):
            assert 0.0 <= scored.reasoning_tokens["jitter"] <= MAX_JITTER

    def test_same_seed_same_scores(self, catalog):
        first = HeuristicScorer(rng=random.Random(7)).score(2, "stress", catalog.exercises)
        second = HeuristicScorer(rng=random.Random(7)).score(2, "stress", catalog.exercises)

        assert [s.score for s in first] == [s.score for s in second]

    def test_out_of_range_rating_is_clamped(self, exact_scorer, catalog):
        high = exact_scorer.score(9, "", catalog.exercises)
        five = exact_scorer.score(5, "", catalog.exercises)

        assert [s.score for s in high] == [s.score for s in five]

    def test_scores_keep_candidate_order(self, exact_scorer, catalog):
        candidates = catalog.exercises
        scored = exact_scorer.score(3, "", candidates)

        assert [s.item.item_id for s in scored] == [c.item_id for c in candidates]
