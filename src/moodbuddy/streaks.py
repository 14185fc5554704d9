"""연속 기록 모듈: 연속 기록 일수, 배지, 연속 기록 복구 가능 여부를 계산하는 모듈"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Iterable, List, Optional

from .data_models import TIER_PREMIUM, Badge

if TYPE_CHECKING:
    from .history import MoodHistory

# 연속 기록 계산 시 최대 조회 일수
MAX_STREAK_LOOKBACK_DAYS = 365

# 프리미엄 연속 기록 복구 쿨다운
RECOVERY_COOLDOWN = timedelta(days=30)

BADGES = (
    Badge("1", "First Check-in", "You logged your mood for the first time!", 1),
    Badge("2", "Consistency Starter", "You logged your mood for 3 days in a row!", 3),
    Badge("3", "Week Warrior", "You logged your mood for 7 days in a row!", 7),
    Badge("4", "Fortnight Focus", "You logged your mood for 14 days in a row!", 14),
    Badge("5", "Monthly Master", "You logged your mood for 30 days in a row!", 30),
    Badge("6", "Quarterly Champion", "You logged your mood for 90 days in a row!", 90, is_premium=True),
    Badge("7", "Half-Year Hero", "You logged your mood for 180 days in a row!", 180, is_premium=True),
    Badge("8", "Year-Long Legend", "You logged your mood for 365 days in a row!", 365, is_premium=True),
)

# (상한, 메시지): 연속 일수가 상한 미만이면 해당 메시지
STREAK_MESSAGES = (
    (1, "Start tracking your mood to build a streak!"),
    (3, "You're just getting started. Keep it up!"),
    (7, "You're building momentum!"),
    (14, "Great consistency! You're on a roll!"),
    (30, "Impressive dedication to your wellbeing!"),
    (90, "Amazing commitment! You're a mood tracking pro!"),
    (180, "Extraordinary discipline! You're an inspiration!"),
)
LEGENDARY_STREAK_MESSAGE = "Legendary consistency! You've achieved something remarkable!"


@dataclass
class StreakSummary:
    """연속 기록 화면에 필요한 정보 묶음"""
    current_streak: int
    longest_streak: int
    message: str
    unlocked_badges: List[Badge] = field(default_factory=list)
    next_badge: Optional[Badge] = None
    recovery_available: bool = False


def current_streak(dates: Iterable[date], lookback_days: int = MAX_STREAK_LOOKBACK_DAYS) -> int:
    """
    가장 최근 기록일부터 거꾸로 이어지는 연속 기록 일수를 계산하는 함수

    기준은 오늘이 아니라 가장 최근 기록일이며, 최대 lookback_days일 전까지만 확인합니다.

    Args:
        dates: 기록이 있는 날짜들 (순서/중복 무관)
        lookback_days: 최대 조회 일수

    Returns:
        연속 기록 일수 (기록이 없으면 0)
    """
    recorded = set(dates)
    if not recorded:
        return 0

    latest = max(recorded)
    streak = 1
    for offset in range(1, lookback_days + 1):
        if latest - timedelta(days=offset) not in recorded:
            break
        streak += 1
    return streak


def longest_streak(dates: Iterable[date]) -> int:
    ordered = sorted(set(dates))
    best = run = 0
    previous: Optional[date] = None
    for day in ordered:
        run = run + 1 if previous and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


def _badge_available(badge: Badge, tier: str) -> bool:
    return not badge.is_premium or tier == TIER_PREMIUM


def unlocked_badges(streak: int, tier: str) -> List[Badge]:
    # 프리미엄 배지는 일수를 채워도 프리미엄 사용자만 해금
    return [b for b in BADGES if streak >= b.required_streak and _badge_available(b, tier)]


def next_badge(streak: int, tier: str) -> Optional[Badge]:
    for badge in BADGES:
        if badge.required_streak > streak and _badge_available(badge, tier):
            return badge
    return None


def streak_message(streak: int) -> str:
    for upper, message in STREAK_MESSAGES:
        if streak < upper:
            return message
    return LEGENDARY_STREAK_MESSAGE


def recovery_available(
    tier: str,
    last_recovery: Optional[datetime],
    now: Optional[datetime] = None,
    cooldown: timedelta = RECOVERY_COOLDOWN,
) -> bool:
    """프리미엄 사용자는 마지막 복구 후 30일이 지나면 다시 복구 가능"""
    if tier != TIER_PREMIUM:
        return False
    if last_recovery is None:
        return True
    now = now or datetime.now()
    return now - last_recovery > cooldown


def summarize_streak(
    history: MoodHistory,
    tier: str,
    today: date,
    last_recovery: Optional[datetime] = None,
) -> StreakSummary:
    """
    이력 접근자로부터 연속 기록 요약을 만드는 함수

    Args:
        history: 기분 이력 접근자
        tier: 구독 등급
        today: 기준일
        last_recovery: 마지막 연속 기록 복구 시각 (없으면 None)
    """
    dates = [entry.date for entry in history.get_recent_entries(MAX_STREAK_LOOKBACK_DAYS, today=today)]
    streak = current_streak(dates)
    return StreakSummary(
        current_streak=streak,
        longest_streak=max(streak, longest_streak(dates)),
        message=streak_message(streak),
        unlocked_badges=unlocked_badges(streak, tier),
        next_badge=next_badge(streak, tier),
        recovery_available=recovery_available(
            tier, last_recovery, datetime.combine(today, datetime.min.time())
        ),
    )
