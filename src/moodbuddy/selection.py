"""선택 모듈: 점수가 매겨진 후보에서 카테고리가 다양한 최종 추천 목록을 고르는 모듈

이 모듈은 세 가지 선택 방식을 제공합니다:
1. 다양성 선택: 카테고리별 최고 점수 항목을 먼저 고르고, 나머지는 점수 순으로 채움
2. 우선 선택: 우선 항목(음식 관련 등)을 먼저 채운 뒤 다양성 선택
3. 균형 조합: 기분 기록이 없을 때 점수 없이 카테고리별로 무작위 추출
"""
from __future__ import annotations

import logging
import random
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Sequence, Set

from .data_models import CatalogItem, ScoredItem

logger = logging.getLogger(__name__)

# 카탈로그별로 알려진 카테고리
EXERCISE_CATEGORIES = ("meditation", "breathing", "mindfulness", "physical")
ACTIVITY_CATEGORIES = ("mindfulness", "exercise", "social", "creative", "relaxation")

# 관찰된 사용 방식의 추천 개수
EXERCISE_RECOMMENDATION_LIMIT = 6
ACTIVITY_RECOMMENDATION_LIMIT = 3

# 균형 조합에서 카테고리당 최대 항목 수
BALANCED_MIX_PER_CATEGORY = 2


def rank(scored: Sequence[ScoredItem]) -> List[ScoredItem]:
    """점수 내림차순 정렬 (동점은 입력 순서 유지)"""
    return sorted(scored, key=lambda entry: entry.score, reverse=True)


def select_diverse(
    scored: Sequence[ScoredItem],
    limit: int,
    categories: Sequence[str],
) -> List[CatalogItem]:
    """
    카테고리 다양성을 고려하여 상위 limit개 항목을 선택하는 함수

    첫 번째 단계에서는 알려진 카테고리마다 최고 점수 항목을 하나씩 고르고
    (카테고리는 그 최고 항목의 순위 순서로 방문),
    두 번째 단계에서는 남은 자리를 카테고리와 상관없이 점수 순으로 채웁니다.

    Args:
        scored: 스코어러가 반환한 점수 목록 (정렬 불필요)
        limit: 최대 추천 개수
        categories: 다양성을 보장할 카테고리 목록

    Returns:
        중복 없는 최대 min(limit, 후보 수)개의 항목
    """
    ranked = rank(scored)
    selected: List[CatalogItem] = []
    selected_ids: Set[str] = set()
    covered: Set[str] = set()
    known = set(categories)

    # 1단계: 카테고리별 최고 점수 항목
    for entry in ranked:
        if len(selected) >= limit:
            break
        item = entry.item
        if item.category not in known or item.category in covered:
            continue
        if item.item_id in selected_ids:
            continue
        covered.add(item.category)
        selected.append(item)
        selected_ids.add(item.item_id)

    # 2단계: 남은 자리는 점수 순으로 채움
    for entry in ranked:
        if len(selected) >= limit:
            break
        if entry.item.item_id in selected_ids:
            continue
        selected.append(entry.item)
        selected_ids.add(entry.item.item_id)

    logger.debug(f"Selected {[item.title for item in selected]} (categories covered: {sorted(covered)})")
    return selected


def select_with_priority(
    scored: Sequence[ScoredItem],
    limit: int,
    categories: Sequence[str],
    is_priority: Callable[[CatalogItem], bool],
) -> List[CatalogItem]:
    """
    우선 항목을 점수 순으로 먼저 채우고, 남은 자리만 다양성 선택으로 채우는 함수

    배고픔이 언급되었을 때 음식 관련 항목이 카테고리 다양성 규칙에 밀리지 않도록 사용합니다.

    Args:
        scored: 스코어러가 반환한 점수 목록
        limit: 최대 추천 개수
        categories: 남은 자리에서 다양성을 보장할 카테고리 목록
        is_priority: 우선 항목 여부 판단 함수

    Returns:
        우선 항목이 앞에 오는 중복 없는 최대 limit개의 항목
    """
    ranked = rank(scored)
    selected = [entry.item for entry in ranked if is_priority(entry.item)][:limit]
    selected_ids = {item.item_id for item in selected}

    rest = [entry for entry in ranked if entry.item.item_id not in selected_ids]
    selected.extend(select_diverse(rest, limit - len(selected), categories))
    return selected


def balanced_mix(
    items: Sequence[CatalogItem],
    limit: int,
    categories: Sequence[str],
    rng: Optional[random.Random] = None,
    per_category: int = BALANCED_MIX_PER_CATEGORY,
) -> List[CatalogItem]:
    """
    기분 기록이 없을 때 사용하는 점수 없는 균형 조합 선택 함수

    카테고리 방문 순서와 각 카테고리 내부를 섞은 뒤 최대 per_category개씩 가져오고,
    limit을 넘으면 자르고, 모자라면 나머지 전체를 섞어서 채웁니다.

    Args:
        items: 구독 등급으로 필터링된 후보 목록
        limit: 최대 추천 개수
        categories: 카테고리 목록 (방문 순서는 섞임)
        rng: 섞기에 사용할 난수 생성기
        per_category: 카테고리당 최대 항목 수

    Returns:
        중복 없는 최대 min(limit, 후보 수)개의 항목
    """
    rng = rng or random.Random()

    # 카테고리별로 그룹화
    by_category: Dict[str, List[CatalogItem]] = defaultdict(list)
    for item in items:
        by_category[item.category].append(item)

    selected: List[CatalogItem] = []
    # 카테고리 방문 순서도 섞어서 잘리는 카테고리가 매번 달라지게 함
    order = list(categories)
    rng.shuffle(order)
    for category in order:
        group = list(by_category.get(category, []))
        rng.shuffle(group)
        selected.extend(group[:per_category])

    if len(selected) >= limit:
        return selected[:limit]

    # 부족한 만큼 나머지 항목을 섞어서 채움
    chosen_ids = {item.item_id for item in selected}
    remaining = [item for item in items if item.item_id not in chosen_ids]
    rng.shuffle(remaining)
    selected.extend(remaining[: limit - len(selected)])
    return selected
