"""기분 이력 모듈: 기분 기록과 구독 등급을 제공하는 접근자 모듈

이 모듈은 엔진이 외부 저장소 대신 주입받아 사용하는 인터페이스와
메모리 기반 구현을 제공합니다:
- MoodHistory / EntitlementSource: 접근자 프로토콜
- InMemoryMoodHistory: 하루 한 건의 요약 기록 (upsert), 프리미엄은 세부 기록 평균
- StaticEntitlement: 고정된 구독 등급과 무료 기능 목록
- with_retry: 일시적인 읽기 실패에 대한 재시도 도우미
"""
from __future__ import annotations

import logging
import time as time_module
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple, Type, TypeVar

from .data_models import (
    TIER_FREE,
    TIER_PREMIUM,
    DetailedMoodEntry,
    MoodEntry,
    clamp_rating,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 무료 사용자에게 제공되는 기능 목록
FREE_FEATURES = (
    "daily_mood_tracking",
    "basic_mood_summary",
    "simple_mood_trends",
    "daily_quote",
    "basic_activities",
    "streak_tracking",
    "theme_toggle",
    "basic_notifications",
)


class MoodHistory(Protocol):
    """엔진이 사용하는 기분 이력 접근자"""

    def get_recent_entries(self, days_back: int, today: Optional[date] = None) -> List[MoodEntry]: ...

    def get_entry_for_date(self, day: date) -> Optional[MoodEntry]: ...


class EntitlementSource(Protocol):
    """구독 등급 접근자"""

    def get_tier(self) -> str: ...


class StaticEntitlement:
    """고정된 구독 등급을 반환하는 접근자"""

    def __init__(self, tier: str = TIER_FREE) -> None:
        if tier not in (TIER_FREE, TIER_PREMIUM):
            raise ValueError(f"Unknown subscription tier: {tier}")
        self.tier = tier

    def get_tier(self) -> str:
        return self.tier

    def is_feature_available(self, feature_name: str) -> bool:
        # 프리미엄은 모든 기능 사용 가능
        if self.tier == TIER_PREMIUM:
            return True
        return feature_name in FREE_FEATURES


class InMemoryMoodHistory:
    """
    메모리 기반 기분 이력 클래스: 날짜별 요약 기록과 세부 기록을 관리

    요약 기록은 사용자당 하루 하나이며, 같은 날 다시 기록하면 갱신됩니다.
    프리미엄 사용자는 같은 날 여러 세부 기록을 남길 수 있고,
    그 평균(반올림)이 요약 기록의 점수가 됩니다.
    """

    def __init__(self, entries: Iterable[MoodEntry] = ()) -> None:
        # 날짜 -> 요약 기록
        self._entries: Dict[date, MoodEntry] = {}

        # 날짜 -> 세부 기록 목록 (프리미엄)
        self._detailed: Dict[date, List[DetailedMoodEntry]] = defaultdict(list)

        self.ingest_entries(entries)

    def ingest_entries(self, entries: Iterable[MoodEntry]) -> None:
        """기존 요약 기록들을 일괄 적재 (같은 날짜는 나중 기록으로 덮어씀)"""
        for entry in entries:
            self._entries[entry.date] = entry

    def log_mood(
        self,
        rating: int,
        details: str = "",
        tier: str = TIER_FREE,
        at: Optional[datetime] = None,
    ) -> MoodEntry:
        """
        기분을 기록하는 함수

        무료 사용자는 그 날의 요약 기록을 새로 만들거나 덮어쓰고,
        프리미엄 사용자는 세부 기록을 추가한 뒤 그 날 평균으로 요약 기록을 갱신합니다.

        Args:
            rating: 기분 점수 (범위 밖이면 보정)
            details: 자유 텍스트
            tier: 구독 등급
            at: 기록 시각 (기본값: 현재 시각)

        Returns:
            갱신된 그 날의 요약 기록
        """
        at = at or datetime.now()
        day = at.date()
        rating = clamp_rating(rating)

        if tier != TIER_PREMIUM:
            entry = MoodEntry(date=day, rating=rating, details=details)
            self._entries[day] = entry
            logger.info(f"Saved mood entry for {day}: rating={rating}")
            return entry

        self._detailed[day].append(
            DetailedMoodEntry(date=day, time=at.time(), rating=rating, note=details)
        )
        ratings = [item.rating for item in self._detailed[day]]
        average = clamp_rating(sum(ratings) / len(ratings))

        # 새 텍스트가 비어 있으면 기존 텍스트 유지
        previous = self._entries.get(day)
        text = details or (previous.details if previous else "")
        entry = MoodEntry(date=day, rating=average, details=text)
        self._entries[day] = entry
        logger.info(
            f"Saved detailed mood entry for {day}: rating={rating}, "
            f"daily average={average} over {len(ratings)} entries"
        )
        return entry

    def get_entry_for_date(self, day: date) -> Optional[MoodEntry]:
        # 기록이 없는 날은 오류가 아닌 정상 결과
        return self._entries.get(day)

    def get_recent_entries(self, days_back: int, today: Optional[date] = None) -> List[MoodEntry]:
        """
        최근 days_back일 동안의 요약 기록을 날짜 오름차순으로 반환

        Args:
            days_back: 조회 기간 (오늘 - days_back 부터 오늘까지 포함)
            today: 기준일 (기본값: 오늘)
        """
        today = today or date.today()
        start = today - timedelta(days=days_back)
        return [
            self._entries[day]
            for day in sorted(self._entries)
            if start <= day <= today
        ]

    def get_detailed_entries(self, day: date) -> List[DetailedMoodEntry]:
        return sorted(self._detailed.get(day, []), key=lambda item: item.time)

    def get_most_recent_entry(self) -> Optional[MoodEntry]:
        if not self._entries:
            return None
        return self._entries[max(self._entries)]

    def entry_dates(self) -> List[date]:
        return sorted(self._entries)

    def average_rating(self, days_back: int = 30, today: Optional[date] = None) -> Optional[float]:
        """최근 기간의 평균 기분 점수 (기록이 없으면 None)"""
        entries = self.get_recent_entries(days_back, today=today)
        if not entries:
            return None
        return sum(entry.rating for entry in entries) / len(entries)


def with_retry(
    func: Callable[..., T],
    *args,
    max_retries: int = 3,
    backoff_base: float = 2.0,
    retry_on: Tuple[Type[BaseException], ...] = (ConnectionError, TimeoutError),
    sleep: Callable[[float], None] = time_module.sleep,
    **kwargs,
) -> T:
    """
    멱등한 읽기 호출을 일시적 실패 시 재시도하는 함수

    대기 시간은 backoff_base ** attempt 초 (1초, 2초, 4초...)로 늘어나며,
    마지막 시도까지 실패하면 마지막 예외를 그대로 다시 발생시킵니다.
    """
    for attempt in range(max_retries):
        try:
            return func(*args, **kwargs)
        except retry_on as exc:
            if attempt == max_retries - 1:
                raise
            name = getattr(func, "__name__", repr(func))
            logger.warning(f"[Retry {attempt + 1}/{max_retries}] {name} failed: {exc}")
            sleep(backoff_base ** attempt)
    raise ValueError("max_retries must be at least 1")
