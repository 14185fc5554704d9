"""추천 엔진 모듈: 기분 기록을 바탕으로 안내 운동과 활동 추천을 생성하는 모듈

추천 경로는 다음 순서로 결정됩니다:
- 구독 등급 필터: 무료 사용자는 프리미엄 항목을 후보로 받지 않음
- 기분 기록이 없으면: 점수 없는 균형 조합
- LLM 선택기가 있으면: 번호 목록 응답으로 선택 (실패 시 다음 단계)
- 휴리스틱 스코러 + 다양성 선택 (배고픔 언급 시 음식 관련 항목 우선)
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from .catalog import Catalog
from .data_models import CatalogItem, MoodEntry, ScoredItem, clamp_rating
from .history import EntitlementSource, MoodHistory, with_retry
from .scoring import HeuristicScorer, is_food_item, mentions_hunger, normalize_details
from .selection import (
    ACTIVITY_CATEGORIES,
    ACTIVITY_RECOMMENDATION_LIMIT,
    EXERCISE_CATEGORIES,
    EXERCISE_RECOMMENDATION_LIMIT,
    balanced_mix,
    select_diverse,
    select_with_priority,
)

if TYPE_CHECKING:
    from .llm import OpenAIRecommendationSelector

logger = logging.getLogger(__name__)

SOURCE_LLM = "llm"
SOURCE_HEURISTIC = "heuristic"
SOURCE_BALANCED_MIX = "balanced_mix"

# 활동 프롬프트에 넣는 최근 기분 흐름 기간 (일)
RECENT_CONTEXT_DAYS = 7


@dataclass
class RecommendationResult:
    """
    추천 결과를 담는 데이터 클래스

    scored는 휴리스틱 경로에서만 채워지며 설명 생성에 사용됩니다.
    """
    items: List[CatalogItem]                                   # 최종 추천 항목
    source: str                                                # llm / heuristic / balanced_mix
    scored: List[ScoredItem] = field(default_factory=list)    # 선택된 항목의 점수 정보


class RecommendationEngine:
    """
    추천 엔진 클래스: 카탈로그, 기분 이력, 구독 등급을 결합하여 추천 목록을 생성

    외부 의존성(이력, 구독 등급, LLM 선택기, 난수 생성기)은 모두 주입받습니다.
    """

    def __init__(
        self,
        catalog: Catalog,
        history: MoodHistory,
        entitlement: EntitlementSource,
        scorer: Optional[HeuristicScorer] = None,
        selector: OpenAIRecommendationSelector | None = None,
        rng: Optional[random.Random] = None,
        retry_sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        추천 엔진을 초기화하는 함수

        Args:
            catalog: 운동/활동 카탈로그
            history: 기분 이력 접근자
            entitlement: 구독 등급 접근자
            scorer: 휴리스틱 스코러 (None이면 rng를 공유하는 기본 스코러)
            selector: LLM 선택기 (선택사항)
            rng: 균형 조합과 지터에 사용할 난수 생성기
            retry_sleep: 이력 읽기 재시도 대기 함수
        """
        self.catalog = catalog
        self.history = history
        self.entitlement = entitlement
        self.rng = rng or random.Random()
        self.scorer = scorer or HeuristicScorer(rng=self.rng)
        self.selector = selector
        self.retry_sleep = retry_sleep

    def recommend_exercises(self, today: Optional[date] = None) -> RecommendationResult:
        """
        오늘의 기분 기록에 맞는 안내 운동을 추천하는 함수

        Args:
            today: 기준일 (기본값: 오늘)

        Returns:
            최대 6개의 운동 추천 결과
        """
        today = today or date.today()
        candidates = self.catalog.available_exercises(self.entitlement.get_tier())
        limit = EXERCISE_RECOMMENDATION_LIMIT

        entry = self._read_today(today)
        if entry is None:
            logger.info("No mood entry for today, returning balanced mix of exercises")
            return self._balanced(candidates, limit, EXERCISE_CATEGORIES)

        if self.selector is not None:
            prompt = self.selector.build_exercise_prompt(entry, candidates, limit)
            picked = self.selector.select(prompt, candidates, limit)
            if picked:
                return RecommendationResult(items=picked, source=SOURCE_LLM)
            logger.info("Falling back to heuristic exercise recommendations")

        return self._heuristic(entry.rating, entry.details, candidates, limit, EXERCISE_CATEGORIES)

    def recommend_activities(
        self,
        rating: Optional[int],
        details: Optional[str] = None,
        today: Optional[date] = None,
    ) -> RecommendationResult:
        """
        현재 기분 점수와 자유 텍스트에 맞는 활동을 추천하는 함수

        Args:
            rating: 현재 기분 점수 (None이면 균형 조합)
            details: 자유 텍스트 (비어 있으면 점수만 사용)
            today: 최근 기분 흐름 조회 기준일 (기본값: 오늘)

        Returns:
            최대 3개의 활동 추천 결과
        """
        today = today or date.today()
        candidates = self.catalog.available_activities(self.entitlement.get_tier())
        limit = ACTIVITY_RECOMMENDATION_LIMIT

        if rating is None:
            logger.info("No mood rating given, returning balanced mix of activities")
            return self._balanced(candidates, limit, ACTIVITY_CATEGORIES)

        rating = clamp_rating(rating)
        text = normalize_details(details)

        if self.selector is not None:
            # 의미 있는 텍스트가 없으면 ("모르겠다" 포함) 점수와 최근 기분 흐름을 대신 사용
            prompt_details = details.strip() if text else ""
            recent = [] if text else self._read_recent(RECENT_CONTEXT_DAYS, today)
            prompt = self.selector.build_activity_prompt(
                rating, prompt_details, candidates, limit, recent_entries=recent
            )
            picked = self.selector.select(prompt, candidates, limit)
            if picked:
                return RecommendationResult(items=picked, source=SOURCE_LLM)
            logger.info("Falling back to heuristic activity recommendations")

        return self._heuristic(rating, details, candidates, limit, ACTIVITY_CATEGORIES)

    def _heuristic(
        self,
        rating: int,
        details: Optional[str],
        candidates: Sequence[CatalogItem],
        limit: int,
        categories: Sequence[str],
    ) -> RecommendationResult:
        scored = self.scorer.score(rating, details, candidates)
        if mentions_hunger(normalize_details(details)):
            # 배고픔 언급은 다양성보다 우선: 음식 관련 항목을 먼저 채움
            logger.info("Hunger mentioned, placing food-related items first")
            items = select_with_priority(scored, limit, categories, is_food_item)
        else:
            items = select_diverse(scored, limit, categories)

        # 선택된 항목의 점수 정보만 선택 순서대로 보관
        by_id = {entry.item.item_id: entry for entry in scored}
        return RecommendationResult(
            items=items,
            source=SOURCE_HEURISTIC,
            scored=[by_id[item.item_id] for item in items],
        )

    def _balanced(
        self,
        candidates: Sequence[CatalogItem],
        limit: int,
        categories: Sequence[str],
    ) -> RecommendationResult:
        items = balanced_mix(candidates, limit, categories, rng=self.rng)
        return RecommendationResult(items=items, source=SOURCE_BALANCED_MIX)

    def _read_today(self, today: date) -> Optional[MoodEntry]:
        # 재시도 후에도 읽기에 실패하면 기록 없음으로 처리
        try:
            return with_retry(self.history.get_entry_for_date, today, sleep=self.retry_sleep)
        except (ConnectionError, TimeoutError) as exc:
            logger.warning(f"Could not read today's mood entry: {exc}")
            return None

    def _read_recent(self, days_back: int, today: date) -> List[MoodEntry]:
        try:
            return with_retry(
                self.history.get_recent_entries, days_back, today=today, sleep=self.retry_sleep
            )
        except (ConnectionError, TimeoutError) as exc:
            logger.warning(f"Could not read recent mood entries: {exc}")
            return []
