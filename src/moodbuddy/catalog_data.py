from __future__ import annotations

from dataclasses import replace
from typing import List

from .data_models import Activity, Exercise


def _exercise(item_id, title, description, category, minutes, targets, premium=False) -> Exercise:
    return Exercise(
        item_id=item_id,
        title=title,
        description=description,
        category=category,
        duration_minutes=minutes,
        mood_target=frozenset(targets),
        is_premium=premium,
    )


def _activity(item_id, title, description, category, minutes, impact, tags, premium=False) -> Activity:
    return Activity(
        item_id=item_id,
        title=title,
        description=description,
        category=category,
        duration_minutes=minutes,
        mood_impact=impact,
        tags=tuple(tags),
        is_premium=premium,
    )


def create_exercise_catalog() -> List[Exercise]:
    return [
        # Meditation
        _exercise("ex-1", "Calm Mind Meditation",
                  "A gentle meditation to calm your mind and reduce anxiety.",
                  "meditation", 10, [1, 2]),
        _exercise("ex-4", "Joy Visualization",
                  "Guided visualization to connect with feelings of joy and happiness.",
                  "meditation", 15, [3, 4, 5], premium=True),
        _exercise("ex-8", "Morning Meditation",
                  "Start your day with clarity and intention.",
                  "meditation", 10, [2, 3, 4]),
        _exercise("ex-12", "Loving Kindness Meditation",
                  "Cultivate compassion for yourself and others.",
                  "meditation", 12, [2, 3, 4, 5], premium=True),
        _exercise("ex-13", "Body Scan Meditation",
                  "A progressive relaxation technique to release tension throughout your body.",
                  "meditation", 15, [1, 2, 3]),
        _exercise("ex-14", "Mindful Awareness Meditation",
                  "Develop present moment awareness and acceptance.",
                  "meditation", 10, [2, 3, 4]),

        # Breathing
        _exercise("ex-2", "Energizing Breath Work",
                  "Breathing exercises to boost your energy and mood.",
                  "breathing", 5, [2, 3]),
        _exercise("ex-7", "Deep Breathing Technique",
                  "Learn to breathe deeply to reduce stress and anxiety.",
                  "breathing", 6, [1, 2, 3]),
        _exercise("ex-11", "Box Breathing",
                  "A structured breathing technique to calm your nervous system.",
                  "breathing", 5, [1, 2, 3]),
        _exercise("ex-15", "4-7-8 Breathing",
                  "A breathing pattern that promotes relaxation and helps with sleep.",
                  "breathing", 8, [1, 2]),
        _exercise("ex-16", "Alternate Nostril Breathing",
                  "Balance your energy and calm your mind with this yogic breathing technique.",
                  "breathing", 7, [2, 3], premium=True),
        _exercise("ex-17", "Breath of Fire",
                  "An energizing breathing technique to increase alertness and energy.",
                  "breathing", 5, [2, 3, 4], premium=True),

        # Mindfulness
        _exercise("ex-3", "Gratitude Practice",
                  "Focus on the positive aspects of your life to improve your outlook.",
                  "mindfulness", 7, [2, 3, 4]),
        _exercise("ex-5", "Stress Release Body Scan",
                  "Progressive relaxation to release tension from your body.",
                  "mindfulness", 12, [1, 2, 3], premium=True),
        _exercise("ex-9", "Body Awareness Scan",
                  "Connect with your body and release tension.",
                  "mindfulness", 15, [1, 2, 3, 4], premium=True),
        _exercise("ex-18", "Mindful Eating Practice",
                  "Learn to eat with full awareness and appreciation of your food.",
                  "mindfulness", 10, [3, 4]),
        _exercise("ex-19", "Mindful Walking",
                  "Practice mindfulness while walking to reduce stress and increase awareness.",
                  "mindfulness", 15, [2, 3, 4]),
        _exercise("ex-20", "Thought Observation",
                  "Learn to observe your thoughts without judgment or attachment.",
                  "mindfulness", 8, [1, 2, 3], premium=True),

        # Physical
        _exercise("ex-6", "Gentle Movement Flow",
                  "Simple stretches and movements to release physical tension.",
                  "physical", 8, [1, 2, 3, 4, 5], premium=True),
        _exercise("ex-10", "Yoga Flow",
                  "A gentle yoga sequence to energize your body.",
                  "physical", 20, [2, 3, 4, 5], premium=True),
        _exercise("ex-21", "Desk Stretches",
                  "Quick stretches you can do at your desk to relieve tension.",
                  "physical", 5, [2, 3]),
        _exercise("ex-22", "Mood-Boosting Movement",
                  "Simple movements designed to boost your mood and energy.",
                  "physical", 10, [1, 2, 3]),
        _exercise("ex-23", "Tension Release Exercises",
                  "Physical exercises specifically designed to release body tension.",
                  "physical", 12, [1, 2, 3]),
        _exercise("ex-24", "Energy Flow Sequence",
                  "A sequence of movements to increase energy and improve mood.",
                  "physical", 15, [2, 3, 4], premium=True),
    ]


def create_activity_catalog() -> List[Activity]:
    free = [
        _activity("act-1", "5-Minute Meditation",
                  "Take a short break to clear your mind and focus on your breathing.",
                  "mindfulness", 5, "medium", ["stress", "anxiety", "calm", "focus", "beginner"]),
        _activity("act-2", "Quick Stretching",
                  "Loosen up with some simple stretches to release tension.",
                  "exercise", 10, "medium", ["energy", "tension", "physical", "morning", "beginner"]),
        _activity("act-3", "Gratitude Journaling",
                  "Write down three things you are grateful for today.",
                  "mindfulness", 15, "high", ["negative thoughts", "perspective", "reflection", "sadness"]),
        _activity("act-4", "Call a Friend",
                  "Reach out to someone you care about for a quick chat.",
                  "social", 20, "high", ["loneliness", "connection", "support", "isolation"]),
        _activity("act-5", "Nature Walk",
                  "Take a walk outside and notice the sights and sounds of nature.",
                  "exercise", 30, "high", ["stress", "fresh air", "perspective", "energy"]),
        _activity("act-6", "Deep Breathing",
                  "Slow, deep breaths to calm your nervous system.",
                  "mindfulness", 5, "medium", ["anxiety", "panic", "stress", "calm"]),
        _activity("act-7", "Progressive Muscle Relaxation",
                  "Tense and release each muscle group to let go of physical stress.",
                  "mindfulness", 15, "medium", ["tension", "stress", "physical", "sleep"]),
        _activity("act-8", "Listen to Uplifting Music",
                  "Put on a playlist of songs that lift your spirits.",
                  "relaxation", 15, "medium", ["sadness", "energy", "motivation", "joy"]),
        _activity("act-9", "Quick Workout",
                  "A short high-energy workout to get your blood pumping.",
                  "exercise", 20, "high", ["energy", "motivation", "strength", "focus"]),
        _activity("act-10", "Creative Drawing",
                  "Doodle or sketch whatever comes to mind without judgment.",
                  "creative", 25, "medium", ["expression", "focus", "creativity", "stress"]),
        _activity("act-11", "Mindful Tea Ritual",
                  "Prepare and sip a cup of tea slowly, savoring each moment.",
                  "mindfulness", 10, "medium", ["calm", "ritual", "focus", "present"]),
        _activity("act-12", "Write a Letter",
                  "Write a heartfelt letter to someone who matters to you.",
                  "creative", 20, "high", ["gratitude", "connection", "expression", "reflection"]),
        _activity("act-13", "Digital Detox",
                  "Put your devices away and reconnect with the present.",
                  "mindfulness", 60, "high", ["overwhelm", "focus", "present", "stress"]),
        _activity("act-14", "Declutter Space",
                  "Tidy up a small area to create a sense of order and control.",
                  "mindfulness", 20, "medium", ["control", "focus", "accomplishment", "overwhelm"]),
        _activity("act-15", "Positive Affirmations",
                  "Repeat kind, encouraging statements about yourself.",
                  "mindfulness", 5, "medium", ["confidence", "negative thoughts", "self-esteem", "anxiety"]),
        _activity("act-16", "Mindful Walking",
                  "Walk slowly and pay attention to each step and breath.",
                  "mindfulness", 15, "medium", ["stress", "present", "focus", "nature"]),
        _activity("act-17", "Healthy Snack Break",
                  "Enjoy a nourishing snack and give your body some fuel.",
                  "mindfulness", 10, "medium", ["energy", "nutrition", "self-care", "focus"]),
        _activity("act-18", "Power Nap",
                  "A short nap to recharge your energy.",
                  "relaxation", 20, "high", ["tired", "energy", "rest", "focus"]),
        _activity("act-19", "Random Act of Kindness",
                  "Do something nice for someone without expecting anything back.",
                  "social", 15, "high", ["connection", "purpose", "joy", "gratitude"]),
        _activity("act-20", "Dance Break",
                  "Put on your favorite song and dance like nobody is watching.",
                  "exercise", 5, "high", ["energy", "joy", "expression", "movement"]),
        _activity("act-21", "Mindful Breathing",
                  "Focus your attention on the natural rhythm of your breath.",
                  "mindfulness", 5, "medium", ["anxiety", "stress", "focus", "calm"]),
        _activity("act-22", "Stretch Break",
                  "Stand up and stretch your whole body for a few minutes.",
                  "exercise", 5, "medium", ["energy", "physical", "tension", "focus"]),
        _activity("act-23", "Laugh Therapy",
                  "Watch a funny video or recall a joke that makes you laugh.",
                  "relaxation", 10, "high", ["joy", "stress", "mood", "energy"]),
    ]
    premium = [
        _activity("act-24", "Body Scan Meditation",
                  "Move your attention slowly through your body and release tension.",
                  "mindfulness", 15, "high", ["anxiety", "stress", "body", "tension"]),
        _activity("act-25", "Guided Visualization",
                  "Imagine a peaceful place in vivid detail.",
                  "mindfulness", 10, "high", ["stress", "anxiety", "imagination", "calm"]),
        _activity("act-26", "Yoga Sun Salutation",
                  "Flow through a classic yoga sequence to wake up your body.",
                  "exercise", 15, "high", ["energy", "flow", "strength", "morning"]),
        _activity("act-27", "Mindful Eating",
                  "Eat a meal slowly, noticing every flavor and texture of your food.",
                  "mindfulness", 20, "medium", ["present", "nutrition", "awareness", "habits"]),
        _activity("act-28", "Loving-Kindness Meditation",
                  "Send warm wishes to yourself and the people around you.",
                  "mindfulness", 10, "high", ["compassion", "connection", "kindness", "anxiety"]),
        _activity("act-29", "Expressive Writing",
                  "Write freely about your thoughts and feelings for fifteen minutes.",
                  "creative", 15, "high", ["expression", "processing", "clarity", "stress"]),
        _activity("act-30", "Mindful Photography",
                  "Take photos of small details that catch your eye.",
                  "creative", 20, "medium", ["present", "creativity", "perspective", "focus"]),
        _activity("act-31", "Desk Yoga",
                  "Gentle yoga poses you can do without leaving your chair.",
                  "exercise", 5, "medium", ["work", "tension", "energy", "focus"]),
        _activity("act-32", "Guided Relaxation",
                  "Follow a calming script to relax body and mind.",
                  "relaxation", 15, "high", ["stress", "tension", "sleep", "anxiety"]),
        _activity("act-33", "Gratitude Visit",
                  "Visit someone in person to thank them for their impact on your life.",
                  "social", 30, "high", ["gratitude", "connection", "joy", "purpose"]),
        _activity("act-34", "Mindful Cooking",
                  "Cook a simple meal with full attention to each step.",
                  "creative", 30, "medium", ["present", "creativity", "nourishment", "focus"]),
        _activity("act-35", "Thought Defusion",
                  "Notice difficult thoughts and let them pass without holding on.",
                  "mindfulness", 10, "high", ["anxiety", "rumination", "perspective", "awareness"]),
        _activity("act-36", "Self-Compassion Break",
                  "Pause and treat yourself with the kindness you would offer a friend.",
                  "mindfulness", 5, "high", ["self-care", "kindness", "stress", "emotions"]),
        _activity("act-37", "Mindful Eating Challenge",
                  "Spend a whole meal eating without screens or distractions.",
                  "mindfulness", 20, "medium", ["habit", "awareness", "nutrition", "present"]),
        _activity("act-38", "Mindful Conversation",
                  "Have a conversation where you listen fully before responding.",
                  "social", 15, "high", ["connection", "present", "listening", "relationships"]),
        _activity("act-39", "Mindful Nature Connection",
                  "Spend time outdoors engaging all five senses.",
                  "mindfulness", 20, "high", ["nature", "sensory", "present", "calm"]),
    ]
    return free + [replace(activity, is_premium=True) for activity in premium]
