"""
목적:
- Template Resolver 계층의 예외 타입을 표준화한다.

설명:
- 입력 검증 오류만 호출자에게 전파되고, 백엔드 오류는 전략 계층에서
  `SearchError` 결과로 변환된다.
- 예외 타입을 명시적으로 구분해 전략 계층이 오류 코드를 선택할 수 있게 한다.

디자인 패턴:
- 계층형 예외(Hierarchical Exception).

참조:
- src_py/template_resolver/orchestration/resolver.py
- src_py/template_resolver/search/lexical.py
"""

from __future__ import annotations

from typing import Any


class TemplateResolverError(Exception):
    """Template Resolver 공통 베이스 예외."""


class ConfigurationError(TemplateResolverError):
    """설정값이 유효하지 않을 때 발생한다."""


class QueryValidationError(TemplateResolverError):
    """검색 쿼리 입력이 유효하지 않을 때 발생한다."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class IndexBackendError(TemplateResolverError):
    """색인 엔진 호출 또는 응답 해석에 실패했을 때 사용한다."""


class CatalogUnavailableError(TemplateResolverError):
    """템플릿 카탈로그를 읽을 수 없을 때 발생한다."""


class DependencyUnavailableError(TemplateResolverError):
    """Redis 등 선택 의존성을 사용할 수 없을 때 발생한다."""
