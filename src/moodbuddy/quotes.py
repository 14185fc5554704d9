"""오늘의 명언 모듈: LLM 명언 생성, 명언/출처 분리, 기본 명언 순환 선택

이 모듈은 다음 기능들을 제공합니다:
- LLM 응답 텍스트에서 명언 본문과 출처를 분리 (정해진 패턴 순서대로 시도)
- LLM을 사용할 수 없을 때 기본 명언을 중복 없이 순환 선택
"""
from __future__ import annotations

import logging
import random
import re
from typing import List, Optional, Sequence, TYPE_CHECKING

from .data_models import Quote

if TYPE_CHECKING:
    from .llm import OpenAIRecommendationSelector

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"

# 기본 명언이 모두 사용된 뒤 다시 섞을 때 제외할 최근 명언 수
RECENT_QUOTES_KEPT = 5

QUOTE_PROMPT = (
    "Give me a quote about mental health within 2 sentences, with the author as well. "
    "Put the quote in normal text and the author in bold. "
    "Do not say anything except the quote, and make sure it is a real quote, e.g. "
    "Your mental health is a priority. Your happiness is essential. "
    "Your self-care is a necessity **Unknown**"
)

FALLBACK_QUOTES = (
    Quote("Your mental health is a priority. Your happiness is essential. Your self-care is a necessity."),
    Quote("Mental health problems don't define who you are. They are something you experience.",
          "Roy Chisholm"),
    Quote("You don't have to be positive all the time. It's perfectly okay to feel sad, angry, "
          "annoyed, frustrated, scared and anxious.", "Lori Deschene"),
    Quote("There is hope, even when your brain tells you there isn't.", "John Green"),
    Quote("Self-care is not self-indulgence, it is self-preservation.", "Audre Lorde"),
    Quote("You are not alone in this. You are seen, you are loved, and you matter.", "Sophie Turner"),
    Quote("Recovery is not one and done. It is a lifelong journey that takes place one day, "
          "one step at a time."),
    Quote("It's okay to not be okay, it means that your mind is trying to heal itself.", "Jasmine Warga"),
    Quote("The strongest people are those who win battles we know nothing about."),
    Quote("Be gentle with yourself, you're doing the best you can."),
    Quote("Healing is not linear. It's okay to have setbacks."),
    Quote("Your feelings are valid, no matter what they are."),
    Quote("Small steps still move you forward."),
    Quote("Progress is still progress, no matter how small."),
    Quote("Breathe. You're going to be okay."),
    Quote("Every day is a fresh start."),
)

DASHES = "-–—"

# (본문, 출처) 패턴: 앞에서부터 순서대로 시도
QUOTE_PATTERNS = (
    # 본문 **출처**
    re.compile(r"^(.+?)\s*\*\*(.+?)\*\*\s*$"),
    # “본문” - 출처
    re.compile(r"^[\"“](.+?)[\"”]\s*[-–—]\s*(.+)$"),
    # 본문 - 출처 (마지막 공백 뒤 대시 기준)
    re.compile(r"^(.+)\s[-–—]\s*(.+)$"),
    # 본문 by 출처
    re.compile(r"^(.+)\s+by\s+([^.!?]{1,40})$", re.IGNORECASE),
    # 본문 from 출처
    re.compile(r"^(.+)\s+from\s+([^.!?]{1,40})$", re.IGNORECASE),
)

# 마지막 문장이 짧으면 출처로 간주
TRAILING_AUTHOR_PATTERN = re.compile(r"^(.*[.!?])\s+([^.!?\"]{1,39})$")


def _clean_quote(text: str) -> str:
    return text.strip().rstrip(DASHES).strip().strip("\"'“”").strip()


def _clean_author(text: str) -> str:
    return text.strip().strip("*").strip().lstrip(DASHES).strip()


def extract_quote_and_author(text: Optional[str]) -> Quote:
    """
    LLM 응답 텍스트에서 명언 본문과 출처를 분리하는 함수

    패턴 목록을 순서대로 시도한 뒤, 붙어 있는 대시, 짧은 마지막 문장 순으로 확인하고,
    모두 실패하면 전체를 본문으로, 출처는 Unknown으로 둡니다.

    Args:
        text: LLM 응답 텍스트

    Returns:
        본문과 출처
    """
    clean = re.sub(r"\s*\n+\s*", " ", text or "").strip()
    clean = re.sub(r"^[\"']|[\"']$", "", clean).strip()
    if not clean:
        return Quote("", UNKNOWN_AUTHOR)

    for pattern in QUOTE_PATTERNS:
        match = pattern.match(clean)
        if match:
            quote, author = _clean_quote(match.group(1)), _clean_author(match.group(2))
            if quote and author:
                return Quote(quote, author)

    # 공백 없이 붙은 en/em 대시 뒤를 출처로 간주
    dash_index = max(clean.rfind("–"), clean.rfind("—"))
    if dash_index > 0:
        quote, author = _clean_quote(clean[:dash_index]), _clean_author(clean[dash_index + 1:])
        if quote and author:
            return Quote(quote, author)

    match = TRAILING_AUTHOR_PATTERN.match(clean)
    if match:
        return Quote(_clean_quote(match.group(1)), _clean_author(match.group(2)))

    logger.debug(f"No author found in quote text: {clean}")
    return Quote(_clean_quote(clean), UNKNOWN_AUTHOR)


class QuoteGenerator:
    """
    오늘의 명언 생성기 클래스

    선택기가 있으면 LLM으로 명언을 받아 분리하고, 없거나 실패하면
    기본 명언 중 아직 사용하지 않은 것을 고릅니다.
    """

    def __init__(
        self,
        selector: Optional[OpenAIRecommendationSelector] = None,
        rng: Optional[random.Random] = None,
        fallback_quotes: Sequence[Quote] = FALLBACK_QUOTES,
        keep_recent: int = RECENT_QUOTES_KEPT,
    ) -> None:
        self.selector = selector
        self.rng = rng or random.Random()
        self.fallback_quotes = tuple(fallback_quotes)
        self.keep_recent = keep_recent
        self._used: List[Quote] = []

    def generate(self) -> Quote:
        if self.selector is not None:
            try:
                quote = extract_quote_and_author(self.selector.complete(QUOTE_PROMPT))
                if quote.text:
                    return quote
            except Exception as exc:
                logger.error(f"Quote generation failed: {exc}")
            logger.info("Falling back to built-in quotes")
        return self.next_fallback()

    def next_fallback(self) -> Quote:
        """
        기본 명언을 중복 없이 하나 고르는 함수

        모두 사용했으면 최근 keep_recent개만 사용 기록에 남기고 나머지를 다시 후보로 돌립니다.
        """
        available = [quote for quote in self.fallback_quotes if quote not in self._used]
        if not available:
            self._used = self._used[-self.keep_recent:] if self.keep_recent > 0 else []
            available = [quote for quote in self.fallback_quotes if quote not in self._used]
            available = available or list(self.fallback_quotes)

        quote = self.rng.choice(available)
        self._used.append(quote)
        return quote
