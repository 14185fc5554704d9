"""
패턴 분석 모듈: 사용자의 기분 기록 이력에서 요일 패턴과 트리거 키워드를 추출하는 모듈

이 모듈은 기분 기록 목록을 분석하여 다음을 생성합니다:
1. 요일별 평균 기분과 최고/최저 요일 (Peak Day / Dip Day)
2. 평일 대비 주말 기분 차이 (Weekend Boost / Weekday Preference)
3. 자유 텍스트에 반복적으로 등장한 긍정/부정 트리거 키워드

모든 결과는 호출할 때마다 이력으로부터 새로 계산되며 저장되지 않습니다.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from .data_models import MoodAnalysis, MoodEntry, MoodPattern, MoodTrigger
from .prediction import predict_next_rating

if TYPE_CHECKING:
    from .history import MoodHistory

logger = logging.getLogger(__name__)

# 요일 이름 (일요일부터 시작, 동점 처리 순서 기준)
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

WEEKEND_DAYS = ("Saturday", "Sunday")

# 분석에 필요한 최소 기록 수 (미만이면 "데이터 부족" 상태)
MIN_ENTRIES_FOR_ANALYSIS = 10

# 기본 분석 기간 (일)
DEFAULT_ANALYSIS_WINDOW_DAYS = 30

# 평일/주말 평균 차이가 이 값을 넘어야 패턴으로 보고
WEEKEND_GAP_THRESHOLD = 0.5

# 트리거로 인정되는 최소 등장 횟수와 최대 보고 개수
MIN_TRIGGER_FREQUENCY = 2
MAX_TRIGGERS = 5

# 긍정/부정 트리거 키워드 목록 (영향 구분은 목록 소속으로 결정)
POSITIVE_TRIGGER_WORDS = (
    "exercise", "workout", "friend", "family", "nature",
    "outdoors", "sleep", "rest", "meditation", "hobby",
)
NEGATIVE_TRIGGER_WORDS = (
    "work", "stress", "tired", "sick", "argument",
    "conflict", "deadline", "anxiety", "worry",
)


def weekday_name(day: date) -> str:
    # date.weekday()는 월요일=0 이므로 일요일 기준 인덱스로 변환
    return WEEKDAY_NAMES[(day.weekday() + 1) % 7]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def weekday_averages(entries: Sequence[MoodEntry]) -> Dict[str, float]:
    """
    요일별 평균 기분 점수를 계산하는 함수

    기록이 없는 요일은 0으로 취급하지 않고 결과에서 제외합니다.

    Args:
        entries: 기분 기록 목록

    Returns:
        요일 이름 -> 평균 점수 (일요일부터 요일 순서)
    """
    ratings_by_day: Dict[str, List[int]] = defaultdict(list)
    for entry in entries:
        ratings_by_day[weekday_name(entry.date)].append(entry.rating)
    return {
        day: _mean(ratings_by_day[day])
        for day in WEEKDAY_NAMES
        if ratings_by_day.get(day)
    }


def find_peak_and_dip(entries: Sequence[MoodEntry]) -> List[MoodPattern]:
    """
    평균 기분이 가장 높은 요일과 가장 낮은 요일을 찾는 함수

    동점이면 요일 순서(일요일부터)에서 먼저 나온 요일이 선택됩니다.
    기록이 하나도 없으면 빈 목록을 반환합니다.
    """
    averages = weekday_averages(entries)
    if not averages:
        return []

    # sorted는 안정 정렬이므로 동점 시 요일 순서 유지
    peak_day, peak_avg = sorted(averages.items(), key=lambda pair: -pair[1])[0]
    dip_day, dip_avg = sorted(averages.items(), key=lambda pair: pair[1])[0]

    return [
        MoodPattern(
            day=peak_day,
            label="Peak Day",
            description=(
                f"You tend to feel your best on {peak_day}s "
                f"with an average mood of {peak_avg:.1f}."
            ),
        ),
        MoodPattern(
            day=dip_day,
            label="Dip Day",
            description=(
                f"You tend to experience lower moods on {dip_day}s "
                f"with an average mood of {dip_avg:.1f}."
            ),
        ),
    ]


def compare_weekday_weekend(
    entries: Sequence[MoodEntry],
    threshold: float = WEEKEND_GAP_THRESHOLD,
) -> Optional[MoodPattern]:
    """
    평일(월-금)과 주말(토-일)의 평균 기분을 비교하는 함수

    두 그룹 모두 기록이 있고 차이가 threshold를 넘을 때만 패턴을 반환합니다.

    Args:
        entries: 기분 기록 목록
        threshold: 패턴으로 인정할 최소 평균 차이

    Returns:
        Weekend Boost 또는 Weekday Preference 패턴 (해당 없으면 None)
    """
    weekday_ratings = [e.rating for e in entries if weekday_name(e.date) not in WEEKEND_DAYS]
    weekend_ratings = [e.rating for e in entries if weekday_name(e.date) in WEEKEND_DAYS]
    if not weekday_ratings or not weekend_ratings:
        return None

    weekday_avg = _mean(weekday_ratings)
    weekend_avg = _mean(weekend_ratings)
    gap = abs(weekend_avg - weekday_avg)
    if gap <= threshold:
        return None

    if weekend_avg > weekday_avg:
        return MoodPattern(
            day="Weekend",
            label="Weekend Boost",
            description=f"Your mood tends to improve on weekends by {gap:.1f} points on average.",
        )
    return MoodPattern(
        day="Weekday",
        label="Weekday Preference",
        description=(
            "You tend to have better moods during weekdays compared to weekends "
            f"by {gap:.1f} points."
        ),
    )


def extract_triggers(
    entries: Sequence[MoodEntry],
    positive_words: Sequence[str] = POSITIVE_TRIGGER_WORDS,
    negative_words: Sequence[str] = NEGATIVE_TRIGGER_WORDS,
    min_frequency: int = MIN_TRIGGER_FREQUENCY,
    limit: int = MAX_TRIGGERS,
) -> List[MoodTrigger]:
    """
    기분 기록의 자유 텍스트에서 트리거 키워드를 추출하는 함수

    각 기록의 텍스트를 대소문자 구분 없이 부분 문자열로 검사하여
    키워드별 등장 횟수와 기분 점수 합계를 누적합니다.

    Args:
        entries: 기분 기록 목록
        positive_words: 긍정 트리거 키워드
        negative_words: 부정 트리거 키워드
        min_frequency: 최소 등장 횟수
        limit: 최대 반환 개수

    Returns:
        등장 횟수 내림차순으로 정렬된 트리거 목록
    """
    impacts = [(word, "positive") for word in positive_words]
    impacts += [(word, "negative") for word in negative_words]

    # 키워드 -> [횟수, 점수 합계, 영향] (처음 발견된 순서 유지)
    counts: Dict[str, list] = {}
    for entry in entries:
        if not entry.details:
            continue
        text = entry.details.lower()
        for word, impact in impacts:
            if word not in text:
                continue
            stats = counts.setdefault(word, [0, 0, impact])
            stats[0] += 1
            stats[1] += entry.rating

    triggers = [
        MoodTrigger(keyword=word, impact=impact, frequency=count, rating_sum=total)
        for word, (count, total, impact) in counts.items()
        if count >= min_frequency
    ]
    triggers.sort(key=lambda trigger: trigger.frequency, reverse=True)
    return triggers[:limit]


class MoodPatternAnalyzer:
    """
    기분 패턴 분석기 클래스: 이력 전체를 분석하여 패턴/트리거/예측을 묶어서 반환

    기록 수가 기준 미만이면 오류 대신 "데이터 부족" 결과를 반환합니다.
    """

    def __init__(self, min_entries: int = MIN_ENTRIES_FOR_ANALYSIS) -> None:
        self.min_entries = min_entries

    def analyze(self, entries: Sequence[MoodEntry], reference_date: date) -> MoodAnalysis:
        """
        기분 이력을 분석하는 함수

        Args:
            entries: 날짜순으로 정렬된 기분 기록 목록
            reference_date: 예측 기준일 (다음 날을 예측)

        Returns:
            분석 결과 (데이터 부족 시 패턴/트리거/예측 없음)
        """
        if len(entries) < self.min_entries:
            logger.info(
                f"Only {len(entries)} entries, {self.min_entries} needed for pattern analysis"
            )
            return MoodAnalysis(
                entry_count=len(entries),
                has_enough_data=False,
                min_entries=self.min_entries,
            )

        patterns = find_peak_and_dip(entries)
        weekend_pattern = compare_weekday_weekend(entries)
        if weekend_pattern:
            patterns.append(weekend_pattern)

        return MoodAnalysis(
            entry_count=len(entries),
            has_enough_data=True,
            min_entries=self.min_entries,
            patterns=patterns,
            triggers=extract_triggers(entries),
            predicted_rating=predict_next_rating(entries, reference_date),
        )

    def analyze_recent(
        self,
        history: MoodHistory,
        reference_date: date,
        days_back: int = DEFAULT_ANALYSIS_WINDOW_DAYS,
    ) -> MoodAnalysis:
        """히스토리 접근자에서 최근 기록을 가져와 분석"""
        entries = history.get_recent_entries(days_back, today=reference_date)
        return self.analyze(entries, reference_date)
