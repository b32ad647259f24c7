"""
목적:
- 검색 전략 공통 인터페이스와 결과 생성 유틸을 제공한다.

설명:
- 오케스트레이터는 `TemplateSearchStrategy` 프로토콜만 의존해 전략을 주입받는다.
- 전략 내부에서 잡은 예외를 `SearchError` 코드로 분류한다.

디자인 패턴:
- 전략 패턴(Strategy Pattern).

참조:
- src_py/template_resolver/search/lexical.py
- src_py/template_resolver/search/semantic.py
- src_py/template_resolver/orchestration/resolver.py
"""

from __future__ import annotations

import time
from typing import Protocol

from pydantic import ValidationError

from template_resolver.contracts.query_models import SearchQuery
from template_resolver.contracts.result_models import SearchErrorCode, SearchResult
from template_resolver.exceptions import TemplateResolverError

EMPTY_INPUT_MESSAGE = "Both title and description are empty. Search skipped."

# 색인/카탈로그/네트워크 계열 실패. 그 외 예외는 UNKNOWN_ERROR로 분류한다.
_BACKEND_ERRORS: tuple[type[BaseException], ...] = (
    TemplateResolverError,
    ValidationError,
    TimeoutError,
    OSError,
)


class TemplateSearchStrategy(Protocol):
    """템플릿 검색 전략 인터페이스."""

    async def search(self, query: SearchQuery) -> SearchResult: ...


def classify_error(exc: BaseException) -> SearchErrorCode:
    """잡힌 예외를 결과 오류 코드로 분류한다."""
    if isinstance(exc, _BACKEND_ERRORS):
        return "SEARCH_ERROR"
    return "UNKNOWN_ERROR"


def describe_error(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or type(exc).__name__


def is_blank_query(query: SearchQuery) -> bool:
    """제목과 설명이 모두 공백인지 확인한다."""
    return not (query.title or "").strip() and not (query.description or "").strip()


def elapsed_ms(started: float) -> int:
    return max(0, int((time.perf_counter() - started) * 1000))
