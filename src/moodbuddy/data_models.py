"""
데이터 모델 정의 모듈: MoodBuddy 엔진에서 사용되는 핵심 데이터 구조들

이 모듈은 다음 데이터 클래스들을 정의합니다:
- MoodEntry / DetailedMoodEntry: 사용자가 기록한 기분 항목
- Exercise / Activity: 추천 가능한 카탈로그 항목 (공통 CatalogItem 인터페이스)
- ScoredItem: 점수가 매겨진 추천 후보
- MoodPattern / MoodTrigger / MoodAnalysis: 기분 이력 분석 결과
- Badge: 연속 기록(스트릭) 보상 배지
- Quote: 오늘의 명언
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Dict, FrozenSet, List, Optional, Protocol, Tuple

# 기분 점수의 범위 (1=최악, 5=최고)
MIN_RATING = 1
MAX_RATING = 5

# 구독 등급
TIER_FREE = "free"
TIER_PREMIUM = "premium"


def clamp_rating(rating: float) -> int:
    """
    기분 점수를 1-5 범위의 정수로 보정하는 함수

    반올림은 .5에서 올림 처리합니다 (예: 2.5 -> 3).
    """
    rounded = int(rating + 0.5) if rating >= 0 else int(rating - 0.5)
    return max(MIN_RATING, min(MAX_RATING, rounded))


@dataclass(frozen=True)
class MoodEntry:
    """
    하루 단위의 기분 요약 항목

    사용자당 하루에 하나만 존재합니다 (upsert 방식으로 갱신).
    frozen=True로 설정하여 불변 객체로 만들어 데이터 무결성을 보장합니다.
    """
    date: date         # 기록 날짜
    rating: int        # 기분 점수 (1-5)
    details: str = ""  # 자유 텍스트 (키워드 점수 계산에 사용)


@dataclass(frozen=True)
class DetailedMoodEntry:
    """프리미엄 사용자의 세부 기분 기록 (하루 여러 건, 평균이 요약 항목이 됨)"""
    date: date
    time: time
    rating: int
    note: str = ""


class CatalogItem(Protocol):
    """
    운동(Exercise)과 활동(Activity)이 공통으로 제공하는 기능 인터페이스

    스코어러와 셀렉터는 카탈로그 출처와 상관없이 이 인터페이스만 사용합니다.
    """
    item_id: str
    title: str
    description: str
    category: str
    duration_minutes: int
    is_premium: bool

    @property
    def kind(self) -> str: ...

    def matches_mood(self, rating: int) -> bool: ...

    def target_distance(self, rating: int) -> Optional[int]: ...

    def keyword_surface(self) -> str: ...


@dataclass(frozen=True)
class Exercise:
    """
    가이드 운동 카탈로그 항목

    mood_target에 이 운동이 가장 잘 맞는 기분 점수들을 담습니다.
    """
    item_id: str                 # 고유 식별자
    title: str                   # 표시 제목
    description: str             # 설명 (키워드 매칭 대상)
    category: str                # meditation, breathing, mindfulness, physical
    duration_minutes: int        # 소요 시간 (분)
    mood_target: FrozenSet[int]  # 적합한 기분 점수 집합
    is_premium: bool = False     # 프리미엄 전용 여부

    @property
    def kind(self) -> str:
        return "exercise"

    def matches_mood(self, rating: int) -> bool:
        return rating in self.mood_target

    def target_distance(self, rating: int) -> Optional[int]:
        """가장 가까운 목표 기분 점수까지의 거리 (목표가 없으면 None)"""
        if not self.mood_target:
            return None
        return min(abs(target - rating) for target in self.mood_target)

    def keyword_surface(self) -> str:
        return " ".join((self.title, self.description, self.category)).lower()


@dataclass(frozen=True)
class Activity:
    """
    일상 활동 카탈로그 항목

    운동과 달리 목표 기분 점수가 없고, 대신 자유 텍스트 태그를 가집니다.
    """
    item_id: str
    title: str
    description: str
    category: str                 # mindfulness, exercise, social, creative, relaxation
    duration_minutes: int
    mood_impact: str = "medium"   # low, medium, high
    tags: Tuple[str, ...] = ()
    is_premium: bool = False

    @property
    def kind(self) -> str:
        return "activity"

    def matches_mood(self, rating: int) -> bool:
        return False

    def target_distance(self, rating: int) -> Optional[int]:
        return None

    def keyword_surface(self) -> str:
        return " ".join((self.title, self.description, self.category, *self.tags)).lower()


@dataclass
class ScoredItem:
    """
    추천 후보와 그 점수 정보를 담는 데이터 클래스

    최종 점수와 함께 점수 계산에 사용된 각 규칙별 기여도를 저장합니다.
    """
    item: CatalogItem                  # 추천 대상 항목
    score: float                       # 최종 점수 (지터 포함)
    reasoning_tokens: Dict[str, float] = field(default_factory=dict)  # 규칙별 점수


@dataclass(frozen=True)
class MoodPattern:
    """요일별 기분 패턴 (예: Peak Day, Dip Day, Weekend Boost)"""
    day: str
    label: str
    description: str


@dataclass(frozen=True)
class MoodTrigger:
    """
    기분 기록의 자유 텍스트에서 반복적으로 등장한 키워드

    impact는 키워드가 속한 목록(긍정/부정)으로 결정되며 점수 합계와는 무관합니다.
    """
    keyword: str      # 소문자 키워드
    impact: str       # positive 또는 negative
    frequency: int    # 등장 횟수
    rating_sum: int   # 등장한 기록들의 기분 점수 합계

    @property
    def label(self) -> str:
        return self.keyword[:1].upper() + self.keyword[1:]

    @property
    def average_rating(self) -> float:
        return self.rating_sum / self.frequency if self.frequency else 0.0


@dataclass
class MoodAnalysis:
    """
    기분 이력 분석 결과

    데이터가 부족하면 has_enough_data=False이며 패턴/트리거/예측이 비어 있습니다.
    이는 오류가 아니라 "기준까지 남은 기록 수"를 보여주기 위한 상태입니다.
    """
    entry_count: int
    has_enough_data: bool
    min_entries: int
    patterns: List[MoodPattern] = field(default_factory=list)
    triggers: List[MoodTrigger] = field(default_factory=list)
    predicted_rating: Optional[float] = None

    @property
    def entries_needed(self) -> int:
        return max(0, self.min_entries - self.entry_count)


@dataclass(frozen=True)
class Badge:
    """연속 기록 일수에 따라 해금되는 배지"""
    badge_id: str
    title: str
    description: str
    required_streak: int
    is_premium: bool = False


@dataclass(frozen=True)
class Quote:
    """오늘의 명언 (출처를 알 수 없으면 Unknown)"""
    text: str
    author: str = "Unknown"
