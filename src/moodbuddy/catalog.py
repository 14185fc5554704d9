"""카탈로그 모듈: 추천 가능한 운동/활동 목록과 조회 기능을 제공하는 모듈

이 모듈은 다음 기능들을 제공합니다:
- 운동과 활동 두 카탈로그를 하나의 인터페이스로 관리
- 구독 등급에 따른 프리미엄 항목 필터링
- 카테고리, 기분 점수, ID 기반 조회
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from .catalog_data import create_activity_catalog, create_exercise_catalog
from .data_models import TIER_PREMIUM, Activity, CatalogItem, Exercise


class Catalog:
    """
    카탈로그 클래스: 정적 운동/활동 데이터를 보관하고 조회를 담당

    데이터는 한 번 로드된 뒤 실행 중에는 변경되지 않습니다.
    """

    def __init__(
        self,
        exercises: Iterable[Exercise],
        activities: Iterable[Activity],
    ) -> None:
        """
        운동/활동 목록으로 카탈로그를 초기화하는 함수

        Args:
            exercises: 가이드 운동 목록
            activities: 일상 활동 목록
        """
        self._exercises: List[Exercise] = list(exercises)
        self._activities: List[Activity] = list(activities)

    @classmethod
    def default(cls) -> "Catalog":
        """기본 제공 데이터로 카탈로그 생성"""
        return cls(create_exercise_catalog(), create_activity_catalog())

    @property
    def exercises(self) -> List[Exercise]:
        return list(self._exercises)

    @property
    def activities(self) -> List[Activity]:
        return list(self._activities)

    def available_exercises(self, tier: str) -> List[Exercise]:
        """구독 등급에서 사용 가능한 운동 목록 (무료 사용자에게는 프리미엄 항목 제외)"""
        return filter_by_tier(self._exercises, tier)

    def available_activities(self, tier: str) -> List[Activity]:
        """구독 등급에서 사용 가능한 활동 목록"""
        return filter_by_tier(self._activities, tier)

    def exercises_by_category(self, category: str, tier: str) -> List[Exercise]:
        return [item for item in self.available_exercises(tier) if item.category == category]

    def exercises_by_mood(self, rating: int, tier: str) -> List[Exercise]:
        return [item for item in self.available_exercises(tier) if item.matches_mood(rating)]

    def get(self, item_id: str) -> Optional[CatalogItem]:
        """
        ID로 운동 또는 활동을 조회하는 함수

        Args:
            item_id: 조회할 항목 ID

        Returns:
            일치하는 항목 (없으면 None)
        """
        for item in (*self._exercises, *self._activities):
            if item.item_id == item_id:
                return item
        return None


def filter_by_tier(items: Sequence[CatalogItem], tier: str) -> list:
    # 프리미엄 전용 항목은 무료 사용자 후보 목록에 절대 포함되지 않음
    if tier == TIER_PREMIUM:
        return list(items)
    return [item for item in items if not item.is_premium]
