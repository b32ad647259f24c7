"""
목적:
- 템플릿 카탈로그 레코드와 후보 투영 모델을 정의한다.

설명:
- `Template`은 외부 영속 계층이 소유한 카탈로그 레코드다.
- `Candidate`는 요청마다 생성되는 압축 투영으로, 프롬프트 크기를 제한한다.

디자인 패턴:
- 값 객체(Value Object).

참조:
- src_py/template_resolver/catalog/repository.py
- src_py/template_resolver/llm/langchain_picker.py
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Template(BaseModel):
    """카탈로그 템플릿 레코드 모델."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    description: str | None = Field(default=None)
    required_target_metrics: dict[str, Any] | None = Field(default=None)
    activity_guidelines: dict[str, Any] | None = Field(default=None)

    def to_candidate(self) -> Candidate:
        """LLM 프롬프트용 후보 투영을 생성한다."""
        return Candidate(
            id=self.id,
            name=self.name,
            tags=list(self.tags),
            description=self.description,
        )


class Candidate(BaseModel):
    """시맨틱 선택 입력 후보 모델."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    description: str | None = Field(default=None)
