"""점수 계산 모듈: 기분 점수와 자유 텍스트로 카탈로그 항목의 관련도를 계산하는 모듈

이 모듈은 다음 규칙들을 합산하여 점수를 계산합니다:
- 목표 기분 일치 보너스: 운동의 목표 기분 점수와 현재 기분의 거리
- 기분 구간별 카테고리 가중치: 낮음(1-2) / 보통(3) /높음(4-5)
- 키워드 보너스: 자유 텍스트의 감정/필요 키워드와 항목 텍스트의 연관어 매칭
- 지터: 같은 입력에도 매번 동일한 목록이 나오지 않도록 하는 작은 난수
"""
from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .data_models import CatalogItem, ScoredItem, clamp_rating

logger = logging.getLogger(__name__)

# 목표 기분 점수와 정확히 일치할 때의 보너스
EXACT_TARGET_BONUS = 5.0

# 가장 가까운 목표 기분 점수까지의 거리별 부분 보너스 (3 이상은 0)
TARGET_DISTANCE_BONUS = {
    1: 2.0,  # 인접한 기분
    2: 1.0,  # 두 단계 차이
}

# 지터의 최대값 (0 ~ MAX_JITTER 사이 균등 분포)
MAX_JITTER = 0.5

# 배고픔 관련 규칙의 보너스: 다른 모든 규칙보다 커야 함
HUNGER_BONUS = 10.0

# 일반 키워드 규칙의 보너스
KEYWORD_BONUS = 3.0

# 기분 구간 정의
LOW_BAND = "low"
NEUTRAL_BAND = "neutral"
HIGH_BAND = "high"

# 카탈로그 종류 -> 기분 구간 -> 카테고리 -> 가중치
BAND_CATEGORY_WEIGHTS: Dict[str, Dict[str, Dict[str, float]]] = {
    "exercise": {
        LOW_BAND: {"meditation": 3.0, "breathing": 3.0, "mindfulness": 2.0, "physical": 1.0},
        NEUTRAL_BAND: {"meditation": 2.0, "breathing": 2.0, "mindfulness": 2.0, "physical": 2.0},
        HIGH_BAND: {"meditation": 2.0, "breathing": 1.0, "mindfulness": 2.0, "physical": 3.0},
    },
    "activity": {
        LOW_BAND: {"mindfulness": 3.0, "social": 2.0},
        NEUTRAL_BAND: {"exercise": 2.0, "creative": 2.0},
        HIGH_BAND: {"exercise": 3.0, "social": 3.0, "creative": 2.0},
    },
}

# "모르겠다" 류의 답변은 빈 텍스트와 동일하게 취급
GENERIC_DETAILS_PATTERN = re.compile(
    r"^(i don'?t know|not sure|unsure|no idea|whatever|anything|nothing specific|don'?t care)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class KeywordRule:
    """
    자유 텍스트 키워드 -> 연관어 규칙

    triggers 중 하나라도 텍스트에 있으면, 항목의 키워드 표면에서
    발견되는 연관어 하나당 bonus를 더합니다.
    """
    triggers: Tuple[str, ...]
    related_terms: Tuple[str, ...]
    bonus: float = KEYWORD_BONUS


@dataclass(frozen=True)
class TargetedRule:
    """자유 텍스트 키워드 -> 특정 카테고리 또는 특정 제목 항목에 보너스"""
    triggers: Tuple[str, ...]
    bonus: float
    categories: Tuple[str, ...] = ()
    titles: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DurationRule:
    """자유 텍스트 키워드 -> 소요 시간 조건을 만족하는 항목에 보너스"""
    triggers: Tuple[str, ...]
    bonus: float
    max_minutes: Optional[int] = None
    min_minutes: Optional[int] = None

    def accepts(self, minutes: int) -> bool:
        if self.max_minutes is not None and minutes > self.max_minutes:
            return False
        if self.min_minutes is not None and minutes < self.min_minutes:
            return False
        return True


HUNGER_TRIGGERS = ("hungry", "hunger", "food", "eat", "meal", "snack")

HUNGER_RULE = KeywordRule(
    HUNGER_TRIGGERS,
    ("food", "snack", "eating", "nutrition", "cook", "nourishment"),
    HUNGER_BONUS,
)

# 배고픔 언급 시 제목만으로 보너스를 받는 음식 관련 활동
HUNGER_TITLES = ("Healthy Snack Break", "Mindful Eating", "Mindful Cooking", "Mindful Eating Challenge")

EXERCISE_KEYWORD_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(("anxiety",), ("breathing", "meditation", "calm", "relax")),
    KeywordRule(("stress",), ("breathing", "meditation", "relax", "tension")),
    KeywordRule(("sad",), ("joy", "compassion", "kindness", "gratitude")),
    KeywordRule(("tired",), ("energy", "energizing", "morning", "boost")),
    KeywordRule(("angry",), ("calm", "breathing", "release", "tension")),
    KeywordRule(("happy",), ("joy", "gratitude", "loving", "kindness")),
    KeywordRule(("overwhelmed",), ("breathing", "calm", "release", "tension")),
    KeywordRule(("focus",), ("awareness", "mindful", "attention", "present")),
    KeywordRule(("sleep",), ("relaxation", "calm", "breathing", "body scan")),
    KeywordRule(("pain",), ("body", "scan", "release", "tension")),
    KeywordRule(("energy",), ("energizing", "boost", "fire", "movement")),
    HUNGER_RULE,
)

ACTIVITY_KEYWORD_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(("stress",), ("meditation", "breathing", "nature", "relaxation")),
    KeywordRule(("anxiety",), ("breathing", "meditation", "progressive")),
    KeywordRule(("sad",), ("friend", "music", "gratitude")),
    KeywordRule(("tired",), ("stretching", "workout", "walk", "nap")),
    KeywordRule(("lonely",), ("friend", "letter", "social")),
    KeywordRule(("bored",), ("creative", "workout", "declutter")),
    KeywordRule(("angry",), ("workout", "breathing", "nature")),
    KeywordRule(("happy",), ("friend", "creative", "music")),
    KeywordRule(("energetic",), ("workout", "walk", "creative")),
    KeywordRule(("overwhelmed",), ("meditation", "breathing", "detox")),
    KeywordRule(("motivated",), ("workout", "declutter", "creative")),
    KeywordRule(("worried",), ("meditation", "breathing", "friend")),
    KeywordRule(("excited",), ("creative", "social", "music")),
    KeywordRule(("frustrated",), ("workout", "breathing", "declutter")),
    KeywordRule(("calm",), ("meditation", "tea", "reading")),
    KeywordRule(("distracted",), ("meditation", "focus", "breathing")),
    HUNGER_RULE,
)

ACTIVITY_TARGETED_RULES: Tuple[TargetedRule, ...] = (
    TargetedRule(("work", "job", "busy", "deadline"), 2.0, categories=("mindfulness",)),
    TargetedRule(("sleep", "tired", "exhausted", "insomnia"), 3.0,
                 titles=("Progressive Muscle Relaxation", "Deep Breathing", "Power Nap")),
    TargetedRule(("friend", "social", "people", "family"), 3.0, categories=("social",)),
    TargetedRule(("creative", "express", "art"), 3.0, categories=("creative",)),
    TargetedRule(("exercise", "workout", "active"), 3.0, categories=("exercise",)),
    TargetedRule(("calm", "peace", "quiet"), 2.0, categories=("mindfulness", "relaxation")),
    TargetedRule(("focus", "concentrate", "distracted"), 2.0,
                 titles=("5-Minute Meditation", "Mindful Tea Ritual")),
    TargetedRule(("happy", "joy", "excited"), 3.0,
                 titles=("Dance Break", "Call a Friend", "Laugh Therapy")),
    TargetedRule(("anxious", "panic", "worry"), 3.0,
                 titles=("Deep Breathing", "Progressive Muscle Relaxation", "Mindful Walking")),
    TargetedRule(("sad", "down", "depressed"), 3.0,
                 titles=("Call a Friend", "Gratitude Journaling", "Listen to Uplifting Music")),
    TargetedRule(("angry", "frustrated", "irritated"), 3.0,
                 titles=("Quick Workout", "Deep Breathing", "Nature Walk")),
    TargetedRule(("bored", "restless", "uninterested"), 3.0,
                 titles=("Creative Drawing", "Dance Break", "Quick Workout")),
    TargetedRule(HUNGER_TRIGGERS, HUNGER_BONUS, titles=HUNGER_TITLES),
)

ACTIVITY_DURATION_RULES: Tuple[DurationRule, ...] = (
    DurationRule(("busy", "no time"), 2.0, max_minutes=10),
    DurationRule(("free time", "weekend"), 2.0, min_minutes=20),
)

# 카탈로그 종류별 규칙 테이블
KEYWORD_RULES: Dict[str, Tuple[KeywordRule, ...]] = {
    "exercise": EXERCISE_KEYWORD_RULES,
    "activity": ACTIVITY_KEYWORD_RULES,
}

TARGETED_RULES: Dict[str, Tuple[TargetedRule, ...]] = {
    "exercise": (),
    "activity": ACTIVITY_TARGETED_RULES,
}

DURATION_RULES: Dict[str, Tuple[DurationRule, ...]] = {
    "exercise": (),
    "activity": ACTIVITY_DURATION_RULES,
}


def mood_band(rating: int) -> str:
    """
    기분 점수를 세 구간 중 하나로 분류하는 함수

    Args:
        rating: 기분 점수 (1-5)

    Returns:
        low (1-2), neutral (3), high (4-5)
    """
    if rating <= 2:
        return LOW_BAND
    if rating == 3:
        return NEUTRAL_BAND
    return HIGH_BAND


def normalize_details(details: Optional[str]) -> str:
    """자유 텍스트를 소문자로 정리하고, 비어 있거나 일반적인 답변이면 빈 문자열 반환"""
    text = (details or "").strip()
    if not text or GENERIC_DETAILS_PATTERN.match(text):
        return ""
    return text.lower()


def contains_trigger(details: str, trigger: str) -> bool:
    # 단어 시작 위치에서만 매칭 ("great"가 "eat"로 인식되지 않도록)
    return re.search(r"\b" + re.escape(trigger), details) is not None


def _any_trigger(details: str, triggers: Sequence[str]) -> bool:
    return any(contains_trigger(details, trigger) for trigger in triggers)


def mentions_hunger(text: str) -> bool:
    """정리된 자유 텍스트(normalize_details 결과)에 배고픔 관련 단어가 있는지 확인"""
    return bool(text) and _any_trigger(text, HUNGER_TRIGGERS)


def is_food_item(item: CatalogItem) -> bool:
    """배고픔 규칙의 보너스를 받는 항목인지 확인 (음식 관련 제목 또는 연관어 포함)"""
    if item.title in HUNGER_TITLES:
        return True
    surface = item.keyword_surface()
    return any(term in surface for term in HUNGER_RULE.related_terms)


class HeuristicScorer:
    """
    휴리스틱 스코러 클래스: 규칙 기반으로 카탈로그 항목의 관련도 점수를 계산

    점수의 1-3단계(목표 일치, 카테고리, 키워드)는 결정적이며,
    4단계 지터만 주입된 난수 생성기를 사용합니다.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_jitter: float = MAX_JITTER,
        band_weights: Optional[Mapping[str, Mapping[str, Mapping[str, float]]]] = None,
        keyword_rules: Optional[Mapping[str, Sequence[KeywordRule]]] = None,
        targeted_rules: Optional[Mapping[str, Sequence[TargetedRule]]] = None,
        duration_rules: Optional[Mapping[str, Sequence[DurationRule]]] = None,
    ) -> None:
        """
        스코러를 초기화하는 함수

        Args:
            rng: 지터용 난수 생성기 (테스트에서는 시드 고정)
            max_jitter: 지터 최대값 (0이면 완전히 결정적)
            band_weights: 카탈로그 종류별 기분 구간 카테고리 가중치
            keyword_rules: 카탈로그 종류별 키워드 규칙
            targeted_rules: 카탈로그 종류별 카테고리/제목 규칙
            duration_rules: 카탈로그 종류별 소요 시간 규칙
        """
        self.rng = rng or random.Random()
        self.max_jitter = max_jitter
        self.band_weights = band_weights or BAND_CATEGORY_WEIGHTS
        self.keyword_rules = keyword_rules or KEYWORD_RULES
        self.targeted_rules = targeted_rules or TARGETED_RULES
        self.duration_rules = duration_rules or DURATION_RULES

    def score(
        self,
        rating: int,
        details: Optional[str],
        candidates: Sequence[CatalogItem],
    ) -> List[ScoredItem]:
        """
        후보 항목 각각에 관련도 점수를 매기는 함수

        정렬은 하지 않습니다 (셀렉터의 역할).

        Args:
            rating: 현재 기분 점수 (범위 밖이면 1-5로 보정)
            details: 자유 텍스트 (비어 있으면 키워드 단계 생략)
            candidates: 구독 등급으로 이미 필터링된 후보 목록

        Returns:
            후보와 같은 순서의 점수 목록
        """
        rating = clamp_rating(rating)
        text = normalize_details(details)
        logger.debug(f"Scoring {len(candidates)} candidates for rating={rating}, details={text!r}")
        return [self.score_item(rating, text, item) for item in candidates]

    def score_item(self, rating: int, text: str, item: CatalogItem) -> ScoredItem:
        """단일 항목의 점수 계산 (text는 normalize_details를 거친 값)"""
        tokens: Dict[str, float] = {
            "target": self._target_bonus(rating, item),
            "category": self._category_bonus(rating, item),
            "traits": self._trait_bonus(rating, item),
        }

        # 3단계: 빈 텍스트면 키워드 관련 규칙 전체를 건너뜀
        if text:
            tokens["keywords"] = self._keyword_bonus(text, item)
            tokens["targeted"] = self._targeted_bonus(text, item)
            tokens["duration"] = self._duration_bonus(text, item)

        # 4단계: 반복 호출 시 순서가 고정되지 않도록 작은 난수 추가
        tokens["jitter"] = self.rng.uniform(0.0, self.max_jitter) if self.max_jitter > 0 else 0.0

        return ScoredItem(item=item, score=sum(tokens.values()), reasoning_tokens=tokens)

    def _target_bonus(self, rating: int, item: CatalogItem) -> float:
        # 활동은 목표 기분이 없으므로 0
        if item.matches_mood(rating):
            return EXACT_TARGET_BONUS
        distance = item.target_distance(rating)
        if distance is None:
            return 0.0
        return TARGET_DISTANCE_BONUS.get(distance, 0.0)

    def _category_bonus(self, rating: int, item: CatalogItem) -> float:
        weights = self.band_weights.get(item.kind, {}).get(mood_band(rating), {})
        return weights.get(item.category, 0.0)

    def _trait_bonus(self, rating: int, item: CatalogItem) -> float:
        # 활동 고유 속성: 낮은 기분엔 효과가 큰 활동, 보통 기분엔 짧은 활동
        band = mood_band(rating)
        if band == LOW_BAND and getattr(item, "mood_impact", None) == "high":
            return 2.0
        if band == NEUTRAL_BAND and item.kind == "activity" and item.duration_minutes <= 15:
            return 1.0
        return 0.0

    def _keyword_bonus(self, text: str, item: CatalogItem) -> float:
        surface = item.keyword_surface()
        bonus = 0.0
        for rule in self.keyword_rules.get(item.kind, ()):
            if not _any_trigger(text, rule.triggers):
                continue
            # 항목 텍스트에서 발견되는 연관어마다 보너스
            bonus += rule.bonus * sum(1 for term in rule.related_terms if term in surface)
        return bonus

    def _targeted_bonus(self, text: str, item: CatalogItem) -> float:
        bonus = 0.0
        for rule in self.targeted_rules.get(item.kind, ()):
            if not _any_trigger(text, rule.triggers):
                continue
            if item.category in rule.categories:
                bonus += rule.bonus
            if item.title in rule.titles:
                bonus += rule.bonus
        return bonus

    def _duration_bonus(self, text: str, item: CatalogItem) -> float:
        bonus = 0.0
        for rule in self.duration_rules.get(item.kind, ()):
            if _any_trigger(text, rule.triggers) and rule.accepts(item.duration_minutes):
                bonus += rule.bonus
        return bonus
