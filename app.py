import streamlit as st
from datetime import datetime

from moodbuddy.analysis import MoodPatternAnalyzer
from moodbuddy.catalog import Catalog
from moodbuddy.config import build_selector, configure_logging, load_settings
from moodbuddy.data_models import TIER_FREE, TIER_PREMIUM
from moodbuddy.demo_data import BASE_DATE, create_sample_entries
from moodbuddy.history import InMemoryMoodHistory, StaticEntitlement
from moodbuddy.llm import ExplanationGenerator, JournalPromptGenerator
from moodbuddy.prediction import forecast_week
from moodbuddy.quotes import QuoteGenerator
from moodbuddy.recommendation import RecommendationEngine
from moodbuddy.streaks import summarize_streak

st.set_page_config(page_title="MoodBuddy", page_icon="🌤️", layout="wide")

MOOD_LABELS = {1: "Terrible", 2: "Not Good", 3: "Okay", 4: "Good", 5: "Great"}

# Initialize session state
if 'history' not in st.session_state:
    settings = load_settings()
    configure_logging(settings.log_level)

    st.session_state.settings = settings
    st.session_state.history = InMemoryMoodHistory(create_sample_entries(end=BASE_DATE))
    st.session_state.catalog = Catalog.default()
    st.session_state.selector = build_selector(settings)
    st.session_state.explanation_gen = ExplanationGenerator()
    st.session_state.quote = QuoteGenerator(selector=st.session_state.selector).generate()

settings = st.session_state.settings
history = st.session_state.history

# Header
st.title("🌤️ MoodBuddy")
st.markdown("**Mood-based exercise and activity recommendations with pattern insights**")

quote = st.session_state.quote
st.markdown(f"> _{quote.text}_ **{quote.author}**")

if st.session_state.selector is not None:
    st.success(f"🤖 **Generative selection**: OpenAI `{settings.openai_model}` active")
else:
    st.info("⚠️ **Generative selection**: Disabled (Set OPENAI_API_KEY environment variable)")

# Sidebar - User Context Input
st.sidebar.header("🎯 Today")

today = st.sidebar.date_input("Date", BASE_DATE)
tier = st.sidebar.radio("Subscription", [TIER_FREE, TIER_PREMIUM], horizontal=True)
rating = st.sidebar.select_slider(
    "How are you feeling?",
    options=list(MOOD_LABELS),
    value=3,
    format_func=lambda value: f"{value} - {MOOD_LABELS[value]}",
)
details = st.sidebar.text_area("What's on your mind? (optional)")

if st.sidebar.button("Log mood"):
    at = datetime.combine(today, datetime.now().time())
    entry = history.log_mood(rating, details, tier=tier, at=at)
    st.sidebar.success(f"Saved: {MOOD_LABELS[entry.rating]} ({entry.rating}/5)")

entitlement = StaticEntitlement(tier)
engine = RecommendationEngine(
    st.session_state.catalog,
    history,
    entitlement,
    selector=st.session_state.selector,
)

col1, col2 = st.columns([1, 1])


def show_result(result):
    """추천 결과와 점수 내역 표시"""
    st.caption(f"Source: `{result.source}`")
    scored_by_id = {scored.item.item_id: scored for scored in result.scored}
    for i, item in enumerate(result.items, 1):
        with st.container():
            label = " ⭐ Premium" if item.is_premium else ""
            st.markdown(f"### {i}. {item.title}{label}")
            st.caption(f"Category: `{item.category}` · {item.duration_minutes} min")
            st.write(item.description)

            scored = scored_by_id.get(item.item_id)
            if scored is not None:
                st.info(f"💬 {st.session_state.explanation_gen.build_message(scored)}")
                with st.expander("📈 Score Breakdown"):
                    st.metric("Final Score", f"{scored.score:.2f}")
                    for signal, score in scored.reasoning_tokens.items():
                        st.write(f"**{signal.capitalize()}**: {score:.2f}")
            st.divider()


with col1:
    st.header("🧘 Guided Exercises")
    show_result(engine.recommend_exercises(today))

with col2:
    st.header("🎈 Activities")
    show_result(engine.recommend_activities(rating, details, today))

    st.header("📝 Journal Prompt")
    st.write(JournalPromptGenerator(selector=st.session_state.selector).generate(rating))

# Footer - Insights
st.header("📊 Mood Insights")

analysis = MoodPatternAnalyzer().analyze_recent(
    history, today, days_back=settings.analysis_window_days
)

col_stat1, col_stat2, col_stat3, col_stat4 = st.columns(4)
streak = summarize_streak(history, tier, today)

with col_stat1:
    st.metric("Entries (window)", analysis.entry_count)

with col_stat2:
    average = history.average_rating(settings.analysis_window_days, today=today)
    st.metric("Average Mood", f"{average:.1f}" if average is not None else "-")

with col_stat3:
    st.metric("Current Streak", f"{streak.current_streak} days")

with col_stat4:
    st.metric("Longest Streak", f"{streak.longest_streak} days")

st.caption(streak.message)

if not analysis.has_enough_data:
    st.info(f"Log {analysis.entries_needed} more days to unlock pattern analysis.")
else:
    for pattern in analysis.patterns:
        st.markdown(f"**{pattern.label}**: {pattern.description}")

    with st.expander("🔎 Mood Triggers", expanded=False):
        for trigger in analysis.triggers:
            icon = "🟢" if trigger.impact == "positive" else "🔴"
            st.write(
                f"{icon} **{trigger.label}**: seen {trigger.frequency} times, "
                f"average mood {trigger.average_rating:.1f}"
            )

    if analysis.predicted_rating is not None:
        st.subheader(f"🔮 Tomorrow: {analysis.predicted_rating:.1f}")
        forecast = forecast_week(analysis.predicted_rating, today)
        st.line_chart({"mood": {d.isoformat(): value for d, value in forecast}})

with st.expander("🏅 Badges", expanded=False):
    for badge in streak.unlocked_badges:
        st.write(f"✅ **{badge.title}**: {badge.description}")
    if streak.next_badge:
        remaining = streak.next_badge.required_streak - streak.current_streak
        st.write(f"🔒 **{streak.next_badge.title}** in {remaining} more days")
    if tier == TIER_PREMIUM:
        st.caption("Streak recovery available" if streak.recovery_available else "Streak recovery on cooldown")

# Recent entries
with st.expander("📅 Recent Mood Timeline", expanded=False):
    for entry in reversed(history.get_recent_entries(14, today=today)):
        st.write(f"{entry.date.isoformat()}: {entry.rating}/5 {entry.details}")
