"""
목적:
- LLM 템플릿 선택기를 공통 검색 결과 형태로 감싸는 전략을 제공한다.

설명:
- `ok` 판정은 confidence/reason을 담은 hit 1건으로, `not_found`/`inconsistent`는
  빈 hits와 meta.ai_status/ai_reason으로 매핑한다.
- 선택기에서 새어 나온 예외는 SEARCH_ERROR + ai_status `not_found`로 변환해
  호출자가 "백엔드 장애"와 "일치 없음"을 같은 경로로 처리하게 한다.

디자인 패턴:
- 전략 패턴(Strategy Pattern) + 어댑터(Adapter).

참조:
- src_py/template_resolver/llm/langchain_picker.py
- src_py/template_resolver/search/strategy.py
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

from template_resolver.config.models import SemanticSearchConfig
from template_resolver.contracts.query_models import SearchQuery
from template_resolver.contracts.result_models import (
    AiStatus,
    SearchError,
    SearchHit,
    SearchMeta,
    SearchResult,
)
from template_resolver.llm.contracts import AiPick
from template_resolver.search.strategy import (
    EMPTY_INPUT_MESSAGE,
    describe_error,
    elapsed_ms,
    is_blank_query,
)

logger = logging.getLogger(__name__)


class TemplatePicker(Protocol):
    async def pick(self, query: SearchQuery) -> AiPick: ...


class SemanticPickStrategy:
    """LLM 선택 결과를 검색 결과로 변환하는 시맨틱 전략."""

    def __init__(self, picker: TemplatePicker, config: SemanticSearchConfig | None = None) -> None:
        self._picker = picker
        self._config = config or SemanticSearchConfig()

    async def search(self, query: SearchQuery) -> SearchResult:
        started = time.perf_counter()

        if is_blank_query(query):
            return self._empty_result(
                started,
                ai_status="not_found",
                ai_reason="Empty input",
                error=SearchError(code="VALIDATION_ERROR", message=EMPTY_INPUT_MESSAGE),
            )

        try:
            pick = await self._picker.pick(query)
        except Exception as exc:  # noqa: BLE001
            logger.warning("시맨틱 템플릿 선택 실패", exc_info=True)
            return self._empty_result(
                started,
                ai_status="not_found",
                ai_reason="Search failed",
                error=SearchError(
                    code="SEARCH_ERROR",
                    message=describe_error(exc),
                    cause=type(exc).__name__,
                ),
            )

        if pick.status == "ok" and pick.template_id:
            return SearchResult(
                hits=[
                    SearchHit(
                        template_id=pick.template_id,
                        confidence=pick.confidence,
                        reason=pick.reason,
                    )
                ],
                meta=SearchMeta(
                    strategy="semantic",
                    index_name=self._config.index_name,
                    execution_ms=elapsed_ms(started),
                    ai_status="ok",
                    ai_reason=pick.reason,
                ),
            )

        # ok + templateId 누락은 not_found와 동일하게 취급한다.
        status: AiStatus = "not_found" if pick.status == "ok" else pick.status
        return self._empty_result(started, ai_status=status, ai_reason=pick.reason)

    def _empty_result(
        self,
        started: float,
        *,
        ai_status: AiStatus,
        ai_reason: str | None,
        error: SearchError | None = None,
    ) -> SearchResult:
        return SearchResult(
            hits=[],
            meta=SearchMeta(
                strategy="semantic",
                index_name=self._config.index_name,
                execution_ms=elapsed_ms(started),
                ai_status=ai_status,
                ai_reason=ai_reason,
            ),
            error=error,
        )
