from __future__ import annotations

from datetime import date, timedelta
from typing import List

from .data_models import MoodEntry

BASE_DATE = date(2025, 9, 29)

# 요일별 기본 기분 (월요일=0), 주말에 기분이 좋아지는 패턴
WEEKDAY_BASE_RATINGS = {0: 2, 1: 3, 2: 3, 3: 3, 4: 4, 5: 5, 6: 4}

WEEKDAY_NOTES = {
    0: "Long day at work, deadline stress and feeling tired",
    1: "Busy at work but managed okay",
    2: "Skipped lunch, really hungry all afternoon",
    3: "Tired after a late night",
    4: "Dinner with a friend after work",
    5: "Hiked in nature with family",
    6: "Slow morning, good sleep and some rest",
}


def create_sample_entries(end: date = BASE_DATE, days: int = 28) -> List[MoodEntry]:
    """end까지 days일 동안의 샘플 기분 기록 (사흘에 하루는 기록 없음)"""
    entries: List[MoodEntry] = []
    for offset in range(days - 1, -1, -1):
        day = end - timedelta(days=offset)

        # 최근 연속 기록이 유지되도록 끝에서 먼 날만 사흘에 하루씩 건너뜀
        if offset > 10 and offset % 3 == 0:
            continue

        rating = WEEKDAY_BASE_RATINGS[day.weekday()]
        # 둘째 주는 기분이 조금 더 낮음
        if 14 <= offset < 21 and rating > 1:
            rating -= 1

        entries.append(MoodEntry(date=day, rating=rating, details=WEEKDAY_NOTES[day.weekday()]))
    return entries
