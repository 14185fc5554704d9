"""
Pytest fixtures for MoodBuddy tests.
"""
import random
from datetime import date

import pytest

from moodbuddy.catalog import Catalog
from moodbuddy.data_models import Activity, Exercise, MoodEntry
from moodbuddy.history import InMemoryMoodHistory
from moodbuddy.scoring import HeuristicScorer

# Monday
REFERENCE_DATE = date(2025, 9, 29)


# ============================================================================
# Catalog Fixtures
# ============================================================================

@pytest.fixture
def catalog():
    """Built-in exercise and activity catalog."""
    return Catalog.default()


@pytest.fixture
def make_exercise():
    """Factory for exercises with sensible defaults."""
    counter = {"n": 0}

    def _make(category="meditation", targets=(3,), title=None, premium=False, minutes=10,
              description="A short guided exercise."):
        counter["n"] += 1
        item_id = f"test-ex-{counter['n']}"
        return Exercise(
            item_id=item_id,
            title=title or f"Exercise {counter['n']}",
            description=description,
            category=category,
            duration_minutes=minutes,
            mood_target=frozenset(targets),
            is_premium=premium,
        )

    return _make


@pytest.fixture
def make_activity():
    """Factory for activities with sensible defaults."""
    counter = {"n": 0}

    def _make(category="mindfulness", title=None, minutes=10, impact="medium", tags=(),
              premium=False, description="A simple daily activity."):
        counter["n"] += 1
        return Activity(
            item_id=f"test-act-{counter['n']}",
            title=title or f"Activity {counter['n']}",
            description=description,
            category=category,
            duration_minutes=minutes,
            mood_impact=impact,
            tags=tuple(tags),
            is_premium=premium,
        )

    return _make


# ============================================================================
# Scoring Fixtures
# ============================================================================

@pytest.fixture
def rng():
    """Seeded random source so jitter and shuffles are reproducible."""
    return random.Random(42)


@pytest.fixture
def exact_scorer():
    """Scorer with jitter disabled."""
    return HeuristicScorer(max_jitter=0.0)


# ============================================================================
# History Fixtures
# ============================================================================

@pytest.fixture
def make_entries():
    """Build mood entries from (iso date, rating[, details]) tuples."""

    def _make(rows):
        entries = []
        for row in rows:
            day, rating = row[0], row[1]
            details = row[2] if len(row) > 2 else ""
            entries.append(MoodEntry(date=date.fromisoformat(day), rating=rating, details=details))
        return entries

    return _make


@pytest.fixture
def history(make_entries):
    """A week of free-tier history ending on the reference date."""
    return InMemoryMoodHistory(
        make_entries(
            [
                ("2025-09-23", 3, "Busy at work"),
                ("2025-09-24", 2, "Tired and stressed"),
                ("2025-09-25", 3),
                ("2025-09-26", 4, "Dinner with a friend"),
                ("2025-09-27", 5, "Hiked in nature"),
                ("2025-09-28", 4),
                ("2025-09-29", 1, "Feeling anxious about a deadline"),
            ]
        )
    )
