"""
목적:
- 템플릿 해석 요청 입력 인터페이스 모델을 정의한다.

설명:
- 프로젝트 제목/설명과 후보 한도를 경계에서 명시적으로 검증한다.
- 문자열은 엄격 타입으로 받아 숫자/None 등의 암묵 변환을 허용하지 않는다.
- 후보 한도는 `candidateLimit`(외부 계약 이름)과 `candidate_limit` 둘 다 받는다.
- 후보 한도 기본값(30)은 시맨틱 선택기가 적용하며, 이 모델은 비워 둔다.

디자인 패턴:
- DTO(Data Transfer Object).

참조:
- src_py/template_resolver/orchestration/resolver.py
- src_py/template_resolver/llm/langchain_picker.py
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

MAX_CANDIDATE_LIMIT = 200


class SearchQuery(BaseModel):
    """템플릿 해석 요청 모델."""

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        frozen=True,
        populate_by_name=True,
    )

    title: StrictStr = Field(min_length=1)
    description: StrictStr = Field(min_length=1)
    candidate_limit: StrictInt | None = Field(
        default=None,
        alias="candidateLimit",
        ge=1,
        le=MAX_CANDIDATE_LIMIT,
    )
