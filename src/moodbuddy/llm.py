"""LLM 통합 모듈: OpenAI 기반 추천 선택, 저널 프롬프트 생성, 템플릿 기반 추천 설명"""
from __future__ import annotations

import json
import logging
import os
import random
import re
from typing import Any, List, Optional, Sequence

from .data_models import CatalogItem, MoodEntry, ScoredItem, clamp_rating

logger = logging.getLogger(__name__)

# 응답에서 찾는 숫자 목록 패턴 (예: [1, 5, 10])
INDEX_LIST_PATTERN = re.compile(r"\[[\d,\s]+\]")

MOOD_SCALE = "(1=Terrible, 2=Not Good, 3=Okay, 4=Good, 5=Great)"

EXERCISE_PROMPT = """Based on the following user's mood information, select the {limit} most appropriate guided exercises from the list below.

User's mood rating: {rating}/5 {scale}
{details_line}
Consider the following when making your recommendations:
- For low mood ratings (1-2), prioritize calming and soothing exercises
- For neutral mood (3), prioritize balancing and grounding exercises
- For high mood ratings (4-5), prioritize exercises that maintain or enhance the positive state
- Consider the user's specific emotions or needs mentioned in their mood details
- Include a diverse mix of exercise types (meditation, breathing, mindfulness, physical)
- Prioritize exercises that specifically target the user's current mood state

Available exercises:
{candidates}

Return only the numbers of the {limit} most appropriate exercises as a JSON array, like this: [1, 5, 10, 15, 20, 24]"""

ACTIVITY_PROMPT = """Based on the following user information, select the {limit} most appropriate activities from the list below.

{user_line}

IMPORTANT: If the user mentions hunger, food, eating, or being hungry, prioritize activities related to food, eating, or nutrition.

Available activities:
{candidates}

Return only the numbers of the {limit} most appropriate activities as a JSON array, like this: [1, 5, 10]"""

JOURNAL_PROMPT = """Generate a thoughtful journaling prompt for someone who is feeling the following mood:

Mood rating: {rating}/5 {scale}

The prompt should:
1. Be empathetic and appropriate for the mood level
2. Encourage self-reflection
3. Be 1-2 sentences long
4. Not be too generic
5. Not include "how are you feeling" since we already know their mood rating

Return only the prompt text with no additional commentary or quotation marks."""

# LLM을 사용할 수 없을 때의 기분 점수별 기본 저널 프롬프트
DEFAULT_JOURNAL_PROMPTS = {
    1: (
        "What small comfort could you give yourself today that might help you feel a little better?",
        "Reflect on a time when you overcame a difficult situation. What strengths did you use that you could apply now?",
        "What would you say to a friend who was feeling the way you are right now?",
        "Name one tiny thing that still brings you a moment of peace despite how you're feeling.",
        "What is one small step you could take today toward feeling better?",
    ),
    2: (
        "What's one thing that's weighing on your mind today, and what might help lighten that load?",
        "Think of something that made you smile recently, no matter how small. What was it about that moment?",
        "What's one area of your life where you could show yourself more compassion today?",
        "What activities usually help shift your mood, even slightly, when you're not feeling your best?",
        "If you could change one thing about today to make it better, what would it be?",
    ),
    3: (
        "What's one thing you could do today to move from 'okay' to 'good'?",
        "What are you looking forward to, even if it's something small?",
        "What's one thing you're grateful for in this neutral moment?",
        "What would make today more meaningful for you?",
        "What's something you've been putting off that might actually energize you if you tackled it today?",
    ),
    4: (
        "What contributed to your positive mood today, and how can you bring more of that into tomorrow?",
        "What's something you're excited about right now, and how can you build on that energy?",
        "How might you use this good energy to tackle something challenging you've been avoiding?",
        "What's one way you could spread some of your positive energy to someone else today?",
        "What are you most grateful for in this moment of feeling good?",
    ),
    5: (
        "What made today exceptional, and how can you create more moments like this?",
        "How might you channel this excellent mood into something creative or meaningful?",
        "What's something you've been wanting to try that you could use this positive energy for?",
        "Who in your life might benefit from connecting with you while you're feeling this positive energy?",
        "What does this great mood tell you about what truly matters to you?",
    ),
}

# 설명용 이유 라벨 매핑 (점수 토큰 -> 문구)
EN_REASON_LABELS = {
    "target": "it is designed for how you feel right now",
    "keywords": "it relates to what you described",
    "targeted": "it addresses what you mentioned",
    "category": "it suits your current mood level",
    "traits": "it fits your energy today",
    "duration": "it fits the time you have",
}

DEFAULT_EN_REASON = "it adds some variety to your day"

EN_EXPLANATION_TEMPLATE = "Try {title}. Reason: {reasons}."


def extract_indices(text: Optional[str]) -> Optional[List[int]]:
    """
    LLM 응답에서 첫 번째 숫자 목록을 찾아 파싱하는 함수

    Returns:
        정수 목록 (목록이 없거나 파싱 실패, 빈 목록이면 None)
    """
    if not text:
        return None

    match = INDEX_LIST_PATTERN.search(text)
    if not match:
        logger.warning(f"Could not find an index list in: {text}")
        return None

    try:
        indices = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.warning(f"Could not parse index list: {match.group(0)}")
        return None

    return [int(index) for index in indices] or None


def pick_by_indices(
    indices: Sequence[int],
    candidates: Sequence[CatalogItem],
    limit: int,
) -> List[CatalogItem]:
    """1부터 시작하는 번호로 후보를 고르는 함수 (범위 밖 번호와 중복은 제외)"""
    picked: List[CatalogItem] = []
    seen = set()
    for index in indices:
        if not 1 <= index <= len(candidates):
            continue
        item = candidates[index - 1]
        if item.item_id in seen:
            continue
        seen.add(item.item_id)
        picked.append(item)
    return picked[:limit]


def _format_duration(minutes: int) -> str:
    return f"{minutes} min"


class OpenAIRecommendationSelector:
    """
    OpenAI API를 사용한 추천 항목 선택기

    후보 목록에 번호를 매긴 프롬프트를 보내고, 응답의 번호 목록으로 항목을 고릅니다.
    API 호출이나 응답 해석에 실패하면 None을 반환하여 호출자가 휴리스틱 경로를 쓰게 합니다.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o-mini",
        temperature: float = 0.2,
        max_tokens: int = 200,
        client: Any = None,
    ) -> None:
        """
        OpenAI 선택기 초기화

        Args:
            api_key: OpenAI API 키 (None이면 환경변수 OPENAI_API_KEY 사용)
            model: 사용할 OpenAI 모델
            temperature: 생성 온도 (낮을수록 일관적)
            max_tokens: 최대 토큰 수
            client: 이미 생성된 클라이언트 (테스트용 주입)
        """
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

        if client is not None:
            self.client = client
            return

        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key:
            raise ValueError(
                "OpenAI API key is required. Set OPENAI_API_KEY environment variable or pass api_key parameter."
            )

        # OpenAI 클라이언트 초기화
        try:
            from openai import OpenAI
            self.client = OpenAI(api_key=self.api_key)
        except ImportError as exc:
            raise RuntimeError(
                "openai package is required. Install it with `pip install openai`."
            ) from exc

    def complete(self, prompt: str) -> str:
        """프롬프트 하나를 보내고 응답 텍스트를 반환 (실패 시 예외 전파)"""
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": "You are a supportive wellbeing assistant."},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        raw_text = (response.choices[0].message.content or "").strip()
        logger.info(f"OpenAI response: {raw_text}")
        return raw_text

    def select(
        self,
        prompt: str,
        candidates: Sequence[CatalogItem],
        limit: int,
    ) -> Optional[List[CatalogItem]]:
        """
        프롬프트를 보내고 응답의 번호 목록으로 후보를 선택

        Args:
            prompt: build_exercise_prompt / build_activity_prompt로 만든 프롬프트
            candidates: 프롬프트에 나열한 것과 같은 순서의 후보 목록
            limit: 최대 선택 개수

        Returns:
            선택된 항목 목록 (실패하거나 유효한 번호가 없으면 None)
        """
        if not candidates:
            return None

        try:
            raw_text = self.complete(prompt)
        except Exception as exc:
            logger.error(f"OpenAI API call failed: {exc}")
            return None

        indices = extract_indices(raw_text)
        if not indices:
            return None

        picked = pick_by_indices(indices, candidates, limit)
        if not picked:
            logger.warning(f"No valid indices in OpenAI response: {indices}")
            return None
        return picked

    def build_exercise_prompt(
        self,
        entry: MoodEntry,
        candidates: Sequence[CatalogItem],
        limit: int,
    ) -> str:
        candidate_lines = [
            f"{index}. {item.title} - {item.description} - Type: {item.category}"
            f" - Duration: {_format_duration(item.duration_minutes)}"
            f" - Target Moods: {', '.join(str(r) for r in sorted(getattr(item, 'mood_target', ())))}"
            f" - {'Premium' if item.is_premium else 'Free'}"
            for index, item in enumerate(candidates, start=1)
        ]
        details_line = f'User\'s mood details: "{entry.details}"\n' if entry.details else ""
        return EXERCISE_PROMPT.format(
            limit=limit,
            rating=entry.rating,
            scale=MOOD_SCALE,
            details_line=details_line,
            candidates="\n".join(candidate_lines),
        )

    def build_activity_prompt(
        self,
        rating: int,
        details: str,
        candidates: Sequence[CatalogItem],
        limit: int,
        recent_entries: Sequence[MoodEntry] = (),
    ) -> str:
        """
        활동 추천 프롬프트 구성

        자유 텍스트가 있으면 그것을, 없으면 기분 점수와 최근 기분 흐름을 사용자 정보로 넣습니다.
        """
        if details:
            user_line = f'User\'s current input: "{details}"'
        else:
            user_line = f"User's current mood rating: {rating}/5 {MOOD_SCALE}"
            if recent_entries:
                pattern = ", ".join(f"{e.date.isoformat()}: {e.rating}/5" for e in recent_entries)
                user_line += f"\nRecent mood pattern: {pattern}"

        candidate_lines = [
            f"{index}. {item.title} - {item.description} - Category: {item.category}"
            f" - Tags: {', '.join(getattr(item, 'tags', ()))}"
            for index, item in enumerate(candidates, start=1)
        ]
        return ACTIVITY_PROMPT.format(
            limit=limit,
            user_line=user_line,
            candidates="\n".join(candidate_lines),
        )


class JournalPromptGenerator:
    """
    저널 프롬프트 생성기 클래스

    선택기가 있으면 LLM으로 생성하고, 없거나 실패하면 기분 점수별 기본 프롬프트 중 하나를 고릅니다.
    """

    def __init__(
        self,
        selector: Optional[OpenAIRecommendationSelector] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.selector = selector
        self.rng = rng or random.Random()

    def generate(self, rating: float) -> str:
        rating = clamp_rating(rating)
        if self.selector is not None:
            try:
                text = self.selector.complete(JOURNAL_PROMPT.format(rating=rating, scale=MOOD_SCALE))
                if text:
                    return text
            except Exception as exc:
                logger.error(f"Journal prompt generation failed: {exc}")
            logger.info("Falling back to default journal prompts")
        return self.rng.choice(DEFAULT_JOURNAL_PROMPTS[rating])


class ExplanationGenerator:
    """
    추천 설명 생성기 클래스 (템플릿 기반)

    점수 토큰을 기반으로 사용자 친화적인 추천 설명을 생성합니다.
    """

    def __init__(self, threshold: float = 0.0) -> None:
        # 이 값보다 큰 토큰만 이유로 사용
        self.threshold = threshold

    def build_message(self, scored: ScoredItem) -> str:
        """
        점수가 매겨진 추천 항목에 대한 설명 메시지 생성

        Args:
            scored: 스코러가 반환한 항목과 토큰

        Returns:
            사용자 친화적인 추천 설명 문자열
        """
        tokens = scored.reasoning_tokens
        picked = [
            label
            for key, label in EN_REASON_LABELS.items()
            if tokens.get(key, 0.0) > self.threshold
        ]

        # 선별된 이유가 없으면 기본 이유 사용
        if not picked:
            picked.append(DEFAULT_EN_REASON)

        return EN_EXPLANATION_TEMPLATE.format(title=scored.item.title, reasons="; ".join(picked))
