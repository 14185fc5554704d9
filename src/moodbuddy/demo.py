from __future__ import annotations

import random

from .analysis import MoodPatternAnalyzer
from .catalog import Catalog
from .config import build_selector, configure_logging, load_settings
from .data_models import TIER_FREE
from .demo_data import BASE_DATE, create_sample_entries
from .history import InMemoryMoodHistory, StaticEntitlement
from .llm import ExplanationGenerator, JournalPromptGenerator
from .prediction import forecast_week
from .quotes import QuoteGenerator
from .recommendation import RecommendationEngine
from .streaks import summarize_streak


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    today = BASE_DATE
    history = InMemoryMoodHistory(create_sample_entries(end=today))
    entitlement = StaticEntitlement(TIER_FREE)
    selector = build_selector(settings)
    rng = random.Random(7)

    engine = RecommendationEngine(
        Catalog.default(), history, entitlement, selector=selector, rng=rng
    )
    generator = ExplanationGenerator()

    quote = QuoteGenerator(selector=selector, rng=rng).generate()
    print(f"\"{quote.text}\" - {quote.author}\n")

    print("--- Exercises for today ---")
    exercises = engine.recommend_exercises(today)
    print(f"(source={exercises.source})")
    for scored in exercises.scored or []:
        print(f"{scored.item.title}: score={scored.score:.2f}")
        tokens = {key: round(value, 2) for key, value in scored.reasoning_tokens.items()}
        print(f"  reasoning={tokens}")
        print(f"  message={generator.build_message(scored)}\n")
    if not exercises.scored:
        for item in exercises.items:
            print(f"{item.title} ({item.category})")

    print("--- Activities for 'I'm so hungry and tired' ---")
    activities = engine.recommend_activities(2, "I'm so hungry and tired", today)
    for item in activities.items:
        print(f"{item.title} ({item.category}, {item.duration_minutes} min)")

    print("\n--- Mood patterns ---")
    analysis = MoodPatternAnalyzer().analyze_recent(
        history, today, days_back=settings.analysis_window_days
    )
    if not analysis.has_enough_data:
        print(f"Log {analysis.entries_needed} more days to unlock pattern analysis.")
    for pattern in analysis.patterns:
        print(f"{pattern.label}: {pattern.description}")
    for trigger in analysis.triggers:
        print(f"Trigger {trigger.label} ({trigger.impact}): seen {trigger.frequency} times")
    if analysis.predicted_rating is not None:
        print(f"Tomorrow's predicted mood: {analysis.predicted_rating:.1f}")
        for day, value in forecast_week(analysis.predicted_rating, today, rng=rng):
            print(f"  {day.isoformat()}: {value:.2f}")

    print("\n--- Streak ---")
    streak = summarize_streak(history, entitlement.get_tier(), today)
    print(f"{streak.current_streak} days (longest {streak.longest_streak}): {streak.message}")
    print(f"Badges: {[badge.title for badge in streak.unlocked_badges]}")
    if streak.next_badge:
        print(f"Next badge: {streak.next_badge.title} at {streak.next_badge.required_streak} days")

    latest = history.get_most_recent_entry()
    if latest:
        prompt = JournalPromptGenerator(selector=selector, rng=rng).generate(latest.rating)
        print(f"\nJournal prompt: {prompt}")


if __name__ == "__main__":
    main()
