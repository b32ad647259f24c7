"""
목적:
- 검색 전략 공통 결과 인터페이스 모델을 정의한다.

설명:
- 어휘/시맨틱 전략이 같은 `SearchResult` 형태를 반환하도록 강제한다.
- 결과 불변식(오류 시 빈 hits, 시맨틱 전용 ai_status, 점수/신뢰도 배타성)을
  모델 검증기로 보장한다.

디자인 패턴:
- DTO(Data Transfer Object).

참조:
- src_py/template_resolver/search/lexical.py
- src_py/template_resolver/search/semantic.py
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

StrategyName = Literal["lexical", "semantic"]
SearchErrorCode = Literal["VALIDATION_ERROR", "SEARCH_ERROR", "UNKNOWN_ERROR"]
AiStatus = Literal["ok", "not_found", "inconsistent"]


class SearchHit(BaseModel):
    """검색 결과 단일 템플릿 적중 모델."""

    template_id: str = Field(min_length=1)
    score: float | None = Field(default=None)
    highlights: dict[str, list[str]] | None = Field(default=None)
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    reason: str | None = Field(default=None)

    @model_validator(mode="after")
    def validate_origin(self) -> SearchHit:
        if self.score is not None and (self.confidence is not None or self.reason is not None):
            raise ValueError("score와 confidence/reason은 한 hit에 함께 존재할 수 없습니다")
        return self


class SearchMeta(BaseModel):
    """검색 실행 메타데이터 모델."""

    strategy: StrategyName
    index_name: str = Field(min_length=1)
    execution_ms: int | None = Field(default=None, ge=0)
    ai_status: AiStatus | None = Field(default=None)
    ai_reason: str | None = Field(default=None)

    @model_validator(mode="after")
    def validate_ai_fields(self) -> SearchMeta:
        if self.strategy != "semantic" and (self.ai_status is not None or self.ai_reason is not None):
            raise ValueError("ai_status/ai_reason은 semantic 전략에서만 허용됩니다")
        return self


class SearchError(BaseModel):
    """검색 실패 설명 모델."""

    code: SearchErrorCode
    message: str = Field(min_length=1)
    cause: str | None = Field(default=None)


class SearchResult(BaseModel):
    """검색 전략 최종 결과 모델."""

    hits: list[SearchHit] = Field(default_factory=list)
    meta: SearchMeta
    error: SearchError | None = Field(default=None)

    @model_validator(mode="after")
    def validate_error_hits(self) -> SearchResult:
        if self.error is not None and self.hits:
            raise ValueError("error가 있는 결과는 hits가 비어 있어야 합니다")
        return self

    @property
    def is_empty(self) -> bool:
        """오류 없이 적중이 0건인지 여부를 반환한다."""
        return not self.hits and self.error is None
