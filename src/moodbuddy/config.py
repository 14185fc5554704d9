"""설정 모듈: .env 파일과 환경변수에서 실행 설정을 읽고 로깅을 구성하는 모듈"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_TEMPERATURE = 0.2
DEFAULT_OPENAI_MAX_TOKENS = 200
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ANALYSIS_WINDOW_DAYS = 30

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    """
    실행 설정을 담는 데이터 클래스

    openai_api_key가 없으면 LLM 선택기 없이 휴리스틱 경로만 사용합니다.
    """
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    openai_temperature: float = DEFAULT_OPENAI_TEMPERATURE
    openai_max_tokens: int = DEFAULT_OPENAI_MAX_TOKENS
    log_level: str = DEFAULT_LOG_LEVEL
    analysis_window_days: int = DEFAULT_ANALYSIS_WINDOW_DAYS

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    .env 파일을 읽은 뒤 환경변수로부터 설정을 만드는 함수

    이미 설정된 환경변수는 .env 값으로 덮어쓰지 않습니다.

    Args:
        env_file: .env 파일 경로 (None이면 현재 작업 디렉터리부터 상위로 탐색)

    Returns:
        실행 설정

    Raises:
        ValueError: 숫자 설정값을 해석할 수 없을 때
    """
    path = env_file or find_dotenv(usecwd=True)
    if path:
        load_dotenv(path)

    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("MOODBUDDY_OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        openai_temperature=_env_number(
            "MOODBUDDY_OPENAI_TEMPERATURE", DEFAULT_OPENAI_TEMPERATURE, float
        ),
        openai_max_tokens=_env_number("MOODBUDDY_OPENAI_MAX_TOKENS", DEFAULT_OPENAI_MAX_TOKENS, int),
        log_level=os.getenv("MOODBUDDY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        analysis_window_days=_env_number(
            "MOODBUDDY_ANALYSIS_WINDOW_DAYS", DEFAULT_ANALYSIS_WINDOW_DAYS, int
        ),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    # 알 수 없는 레벨 이름은 INFO로 처리
    numeric = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=LOG_FORMAT)


def build_selector(settings: Settings):
    """
    설정으로 LLM 선택기를 만드는 함수

    API 키가 없거나 openai 패키지가 없으면 None을 반환하여 휴리스틱 경로만 사용합니다.
    """
    if not settings.llm_enabled:
        logger.info("No OpenAI API key configured, using heuristic recommendations")
        return None

    from .llm import OpenAIRecommendationSelector

    try:
        return OpenAIRecommendationSelector(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )
    except RuntimeError as exc:
        logger.warning(f"OpenAI selector unavailable: {exc}")
        return None
