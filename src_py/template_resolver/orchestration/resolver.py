"""
목적:
- 템플릿 해석 요청을 검증하고 두 검색 전략을 고정 순서로 실행한다.

설명:
- 입력 검증 실패만 `QueryValidationError`로 호출자에게 전파한다.
- 어휘 전략이 hit를 내거나 오류를 반환하면 그 결과를 그대로 반환한다.
- 어휘 전략이 오류 없이 0건일 때만 시맨틱 전략을 실행한다.
- 결과를 병합/재정렬하지 않으며 한 전략의 결과만 반환한다.

디자인 패턴:
- 조정자(Coordinator) + 폴백 체인(Fallback Chain).

참조:
- src_py/template_resolver/search/lexical.py
- src_py/template_resolver/search/semantic.py
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from template_resolver.catalog.repository import CandidateRepository
from template_resolver.config.models import ResolverConfig
from template_resolver.contracts.query_models import SearchQuery
from template_resolver.contracts.result_models import SearchResult
from template_resolver.exceptions import QueryValidationError
from template_resolver.index.query import IndexBackend
from template_resolver.llm.langchain_picker import AiTemplatePicker
from template_resolver.search.lexical import LexicalIndexStrategy
from template_resolver.search.semantic import SemanticPickStrategy
from template_resolver.search.strategy import TemplateSearchStrategy

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """어휘 -> 시맨틱 폴백 체인 템플릿 해석기."""

    def __init__(
        self,
        lexical: TemplateSearchStrategy,
        semantic: TemplateSearchStrategy | None = None,
    ) -> None:
        self._lexical = lexical
        self._semantic = semantic

    async def resolve(self, query: SearchQuery | Mapping[str, Any]) -> SearchResult:
        """요청을 검증하고 폴백 체인으로 템플릿을 해석한다."""
        validated = validate_query(query)

        lexical_result = await self._lexical.search(validated)
        if lexical_result.hits or lexical_result.error is not None:
            _log_outcome(lexical_result)
            return lexical_result

        if self._semantic is None:
            _log_outcome(lexical_result)
            return lexical_result

        semantic_result = await self._semantic.search(validated)
        _log_outcome(semantic_result)
        return semantic_result


def validate_query(query: SearchQuery | Mapping[str, Any]) -> SearchQuery:
    """원시 입력을 `SearchQuery`로 검증한다."""
    if isinstance(query, SearchQuery):
        return query

    if not isinstance(query, Mapping):
        raise QueryValidationError(f"query는 객체여야 합니다: {type(query).__name__}")

    try:
        return SearchQuery.model_validate(dict(query))
    except ValidationError as exc:
        raise QueryValidationError(
            f"검색 요청 형식이 잘못되었습니다: {exc}",
            errors=exc.errors(include_url=False),
        ) from exc


def build_default_orchestrator(
    *,
    config: ResolverConfig,
    index: IndexBackend,
    repository: CandidateRepository,
    chat_model,
) -> SearchOrchestrator:
    """운영 전략 구성으로 해석기를 생성한다."""
    lexical = LexicalIndexStrategy(backend=index, config=config.lexical)
    semantic = None
    if config.enable_semantic_fallback:
        picker = AiTemplatePicker(chat_model=chat_model, repository=repository, config=config.semantic)
        semantic = SemanticPickStrategy(picker=picker, config=config.semantic)
    return SearchOrchestrator(lexical=lexical, semantic=semantic)


def _log_outcome(result: SearchResult) -> None:
    logger.info(
        "템플릿 해석 완료: strategy=%s hits=%d error=%s ai_status=%s",
        result.meta.strategy,
        len(result.hits),
        result.error.code if result.error else None,
        result.meta.ai_status,
    )
