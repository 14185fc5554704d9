"""예측 모듈: 기분 이력으로 다음 날의 기분 점수를 단순 추정하는 모듈"""
from __future__ import annotations

import random
from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from .data_models import MAX_RATING, MIN_RATING, MoodEntry

# 같은 요일 평균을 쓰기 위한 최소 기록 수
MIN_SAME_WEEKDAY_ENTRIES = 2

# 예보 차트용 변동 폭 (표시용, 예측 자체와는 무관)
FORECAST_VARIATION = 0.2
FORECAST_DAYS = 7


def predict_next_rating(entries: Sequence[MoodEntry], reference_date: date) -> Optional[float]:
    """
    다음 날의 기분 점수를 예측하는 함수

    내일과 같은 요일의 기록이 2개 이상이면 그 평균을,
    아니면 전체 평균을 반환합니다.

    Args:
        entries: 기분 기록 목록
        reference_date: 기준일 (오늘)

    Returns:
        예측 점수 (기록이 없으면 None)
    """
    if not entries:
        return None

    tomorrow = reference_date + timedelta(days=1)
    same_day = [e.rating for e in entries if e.date.weekday() == tomorrow.weekday()]
    if len(same_day) >= MIN_SAME_WEEKDAY_ENTRIES:
        return sum(same_day) / len(same_day)
    return sum(e.rating for e in entries) / len(entries)


def forecast_week(
    prediction: float,
    reference_date: date,
    rng: Optional[random.Random] = None,
    variation: float = FORECAST_VARIATION,
    days: int = FORECAST_DAYS,
) -> List[Tuple[date, float]]:
    """
    예보 차트용으로 다음 며칠의 값에 작은 변동을 더하는 함수

    값은 항상 [1, 5] 범위로 제한됩니다.
    """
    rng = rng or random.Random()
    series = []
    for offset in range(1, days + 1):
        value = prediction + rng.uniform(-variation, variation)
        series.append(
            (reference_date + timedelta(days=offset), max(MIN_RATING, min(MAX_RATING, value)))
        )
    return series
