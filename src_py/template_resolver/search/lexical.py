"""
목적:
- 어휘 색인 기반 템플릿 검색 전략을 제공한다.

설명:
- 제목은 tags(가중치 8)와 description(가중치 2)에, 설명은 description(가중치 4)에
  일치시키는 should 복합 질의를 만든다.
- 원시 적중은 다시 검증한 뒤 점수 내림차순/limit/min_score를 적용해 hit로 변환한다.
- 어떤 백엔드 오류도 예외로 던지지 않고 빈 hits + SearchError 결과로 변환한다.

디자인 패턴:
- 전략 패턴(Strategy Pattern).

참조:
- src_py/template_resolver/index/query.py
- src_py/template_resolver/search/strategy.py
"""

from __future__ import annotations

import asyncio
import logging
import time

from pydantic import BaseModel, Field

from template_resolver.config.models import LexicalSearchConfig
from template_resolver.contracts.query_models import SearchQuery
from template_resolver.contracts.result_models import (
    SearchError,
    SearchHit,
    SearchMeta,
    SearchResult,
)
from template_resolver.exceptions import IndexBackendError
from template_resolver.index.query import CompoundQuery, IndexBackend, TextClause
from template_resolver.search.strategy import (
    EMPTY_INPUT_MESSAGE,
    classify_error,
    describe_error,
    elapsed_ms,
    is_blank_query,
)

logger = logging.getLogger(__name__)


class RawIndexHit(BaseModel):
    """색인 엔진 원시 적중 검증 모델."""

    id: str | int
    score: float
    highlights: dict[str, list[str]] | None = Field(default=None)


class LexicalIndexStrategy:
    """색인 엔진 복합 질의로 템플릿을 찾는 검색 전략."""

    def __init__(self, backend: IndexBackend, config: LexicalSearchConfig | None = None) -> None:
        self._backend = backend
        self._config = config or LexicalSearchConfig()

    async def search(self, query: SearchQuery) -> SearchResult:
        started = time.perf_counter()

        if is_blank_query(query):
            return self._empty_result(
                started,
                SearchError(code="VALIDATION_ERROR", message=EMPTY_INPUT_MESSAGE),
            )

        try:
            compound = self.build_query(query)
            raw_docs = await asyncio.wait_for(
                self._backend.search(compound),
                timeout=self._config.timeout_ms / 1000.0,
            )
            hits = self._to_hits(raw_docs)
        except Exception as exc:  # noqa: BLE001
            logger.warning("어휘 템플릿 검색 실패: index=%s", self._config.index_name, exc_info=True)
            return self._empty_result(
                started,
                SearchError(
                    code=classify_error(exc),
                    message=describe_error(exc),
                    cause=type(exc).__name__,
                ),
            )

        return SearchResult(
            hits=hits,
            meta=SearchMeta(
                strategy="lexical",
                index_name=self._config.index_name,
                execution_ms=elapsed_ms(started),
            ),
        )

    def build_query(self, query: SearchQuery) -> CompoundQuery:
        """제목/설명으로 가중치 should 복합 질의를 생성한다."""
        title = (query.title or "").strip()
        description = (query.description or "").strip()

        should: list[TextClause] = []
        if title:
            should.append(TextClause(query=title, path="tags", boost=self._config.title_tags_boost))
            should.append(
                TextClause(query=title, path="description", boost=self._config.title_description_boost)
            )
        if description:
            should.append(
                TextClause(query=description, path="description", boost=self._config.description_boost)
            )

        return CompoundQuery(
            index_name=self._config.index_name,
            should=should,
            minimum_should_match=1,
            highlight_paths=["description", "tags"],
            limit=self._config.limit,
        )

    def _to_hits(self, raw_docs: object) -> list[SearchHit]:
        if not isinstance(raw_docs, list):
            raise IndexBackendError("색인 엔진 응답은 배열이어야 합니다")

        docs = [RawIndexHit.model_validate(item) for item in raw_docs]
        docs.sort(key=lambda doc: -doc.score)
        docs = docs[: self._config.limit]

        min_score = self._config.min_score
        return [
            SearchHit(
                template_id=str(doc.id),
                score=doc.score,
                highlights=doc.highlights or None,
            )
            for doc in docs
            if min_score is None or doc.score >= min_score
        ]

    def _empty_result(self, started: float, error: SearchError) -> SearchResult:
        return SearchResult(
            hits=[],
            meta=SearchMeta(
                strategy="lexical",
                index_name=self._config.index_name,
                execution_ms=elapsed_ms(started),
            ),
            error=error,
        )
