"""
목적:
- 어휘 색인 엔진에 전달하는 복합 질의 표현과 엔진 인터페이스를 정의한다.

설명:
- 질의는 가중치가 붙은 `TextClause`의 should 조합이며,
  최소 `minimum_should_match`개 절이 일치해야 문서가 적중한다.
- 엔진은 `{id, score, highlights?}` 형태의 원시 문서 목록을 반환하고,
  형태 검증은 어휘 검색 전략이 담당한다.

디자인 패턴:
- 값 객체(Value Object) + 전략 인터페이스(Strategy Interface).

참조:
- src_py/template_resolver/index/memory_index.py
- src_py/template_resolver/search/lexical.py
"""

from __future__ import annotations

from typing import Any, Literal, Protocol

from pydantic import BaseModel, Field, field_validator

IndexedField = Literal["tags", "description"]


class TextClause(BaseModel):
    """단일 필드 텍스트 일치 절 모델."""

    query: str = Field(min_length=1)
    path: IndexedField
    boost: float = Field(default=1.0, gt=0.0)


class CompoundQuery(BaseModel):
    """should 조합 복합 질의 모델."""

    index_name: str = Field(min_length=1)
    should: list[TextClause] = Field(min_length=1)
    minimum_should_match: int = Field(default=1, ge=1)
    highlight_paths: list[IndexedField] = Field(default_factory=list)
    limit: int = Field(default=5, ge=1)

    @field_validator("minimum_should_match")
    @classmethod
    def validate_minimum_should_match(cls, value: int, info) -> int:
        should = info.data.get("should") or []
        if should and value > len(should):
            raise ValueError("minimum_should_match는 should 절 개수 이하이어야 합니다")
        return value


class IndexBackend(Protocol):
    """복합 질의를 실행하는 색인 엔진 인터페이스."""

    async def search(self, query: CompoundQuery) -> list[dict[str, Any]]: ...
