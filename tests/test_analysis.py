"""
Unit tests for mood pattern and trigger analysis.

Usage:
    pytest tests/test_analysis.py -v
"""
from datetime import date

from moodbuddy.analysis import (
    MoodPatternAnalyzer,
    compare_weekday_weekend,
    extract_triggers,
    find_peak_and_dip,
    weekday_averages,
    weekday_name,
)
from moodbuddy.history import InMemoryMoodHistory

MONDAYS = ["2025-09-01", "2025-09-08", "2025-09-15", "2025-09-22", "2025-09-29"]
THURSDAYS = ["2025-09-04", "2025-09-11", "2025-09-18", "2025-09-25", "2025-10-02"]


# ============================================================================
# Weekday Pattern Tests
# ============================================================================


class TestWeekdayPatterns:
    """Test weekday averages and peak/dip detection."""

    def test_weekday_name_starts_week_on_sunday(self):
        assert weekday_name(date(2025, 9, 28)) == "Sunday"
        assert weekday_name(date(2025, 9, 29)) == "Monday"

    def test_absent_weekdays_are_excluded(self, make_entries):
        averages = weekday_averages(make_entries([("2025-09-29", 4), ("2025-09-22", 2)]))

        assert averages == {"Monday": 3.0}

    def test_peak_and_dip(self, make_entries):
        """Weekday A averaging 5.0 is the peak and weekday B averaging 1.0 is the dip."""
        entries = make_entries([(d, 5) for d in MONDAYS] + [(d, 1) for d in THURSDAYS])

        peak, dip = find_peak_and_dip(entries)

        assert (peak.label, peak.day) == ("Peak Day", "Monday")
        assert (dip.label, dip.day) == ("Dip Day", "Thursday")
        assert "5.0" in peak.description
        assert "1.0" in dip.description

    def test_no_entries_no_patterns(self):
        assert find_peak_and_dip([]) == []


class TestWeekendComparison:
    """Test weekday versus weekend comparison."""

    def test_weekend_boost(self, make_entries):
        entries = make_entries([
            ("2025-09-01", 2), ("2025-09-02", 2), ("2025-09-03", 2),
            ("2025-09-06", 4), ("2025-09-07", 4),
        ])

        pattern = compare_weekday_weekend(entries)

        assert pattern.label == "Weekend Boost"
        assert "2.0" in pattern.description

    def test_weekday_preference(self, make_entries):
        entries = make_entries([("2025-09-01", 5), ("2025-09-06", 2), ("2025-09-07", 3)])

        pattern = compare_weekday_weekend(entries)

        assert pattern.label == "Weekday Preference"

    def test_small_gap_is_not_a_pattern(self, make_entries):
        entries = make_entries([("2025-09-01", 3), ("2025-09-06", 3)])

        assert compare_weekday_weekend(entries) is None

    def test_missing_weekend_entries(self, make_entries):
        assert compare_weekday_weekend(make_entries([("2025-09-01", 1)])) is None


# ============================================================================
# Trigger Extraction Tests
# ============================================================================


class TestTriggerExtraction:
    """Test keyword trigger extraction."""

    def test_frequency_threshold(self, make_entries):
        """Three mentions of 'tired' count; a single 'lonely' does not."""
        entries = make_entries([
            ("2025-09-01", 2, "So tired today"),
            ("2025-09-02", 3, "A bit TIRED"),
            ("2025-09-03", 4, "tired but happy"),
            ("2025-09-04", 2, "Feeling lonely"),
        ])

        triggers = extract_triggers(entries, negative_words=("tired", "lonely"))

        assert [t.keyword for t in triggers] == ["tired"]
        assert triggers[0].frequency == 3
        assert triggers[0].rating_sum == 9
        assert triggers[0].average_rating == 3.0

    def test_impact_comes_from_list_membership(self, make_entries):
        """A positive word stays positive even with low ratings."""
        entries = make_entries([
            ("2025-09-01", 1, "skipped exercise"),
            ("2025-09-02", 1, "no exercise again"),
        ])

        triggers = extract_triggers(entries)

        assert triggers[0].keyword == "exercise"
        assert triggers[0].impact == "positive"
        assert triggers[0].label == "Exercise"

    def test_sorted_by_frequency_and_capped(self, make_entries):
        words = ["work", "stress", "tired", "sick", "deadline", "worry"]
        rows = []
        for i, word in enumerate(words):
            for j in range(i + 2):
                rows.append((f"2025-08-{j + 1:02d}", 2, word))

        triggers = extract_triggers(make_entries(rows))

        assert len(triggers) == 5
        frequencies = [t.frequency for t in triggers]
        assert frequencies == sorted(frequencies, reverse=True)
        assert triggers[0].keyword == "worry"

    def test_substring_matching(self, make_entries):
        """'homework' contains 'work', matching is a plain substring check."""
        entries = make_entries([
            ("2025-09-01", 2, "homework"),
            ("2025-09-02", 2, "Work meeting"),
        ])

        triggers = extract_triggers(entries)

        assert triggers[0].keyword == "work"
        assert triggers[0].frequency == 2


# ============================================================================
# Analyzer Tests
# ============================================================================


class TestMoodPatternAnalyzer:
    """Test the combined analyzer."""

    def test_insufficient_data(self, make_entries):
        entries = make_entries([(d, 3, "tired") for d in MONDAYS + THURSDAYS[:4]])

        analysis = MoodPatternAnalyzer().analyze(entries, date(2025, 9, 29))

        assert not analysis.has_enough_data
        assert analysis.entries_needed == 1
        assert analysis.patterns == []
        assert analysis.triggers == []
        assert analysis.predicted_rating is None

    def test_full_analysis(self, make_entries):
        entries = make_entries(
            [(d, 5, "time with family") for d in MONDAYS]
            + [(d, 1, "deadline at work") for d in THURSDAYS]
        )

        analysis = MoodPatternAnalyzer().analyze(entries, date(2025, 10, 2))

        assert analysis.has_enough_data
        assert [p.label for p in analysis.patterns] == ["Peak Day", "Dip Day"]
        assert {t.keyword for t in analysis.triggers} == {"family", "deadline", "work"}
        # Tomorrow is a Friday with no history, so the overall mean is used
        assert analysis.predicted_rating == 3.0

    def test_analyze_recent_uses_window(self, make_entries):
        old = make_entries([("2025-06-02", 1)])
        recent = make_entries([(d, 4) for d in MONDAYS + THURSDAYS[:4]])
        history = InMemoryMoodHistory(old + recent)

        analysis = MoodPatternAnalyzer().analyze_recent(history, date(2025, 9, 29), days_back=30)

        assert analysis.entry_count == 9
        assert analysis.entries_needed == 1
        assert not analysis.has_enough_data
