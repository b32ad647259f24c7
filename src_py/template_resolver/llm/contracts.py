"""
목적:
- LLM 템플릿 선택 응답 모델을 정의한다.

설명:
- LangChain 채팅 모델의 JSON 응답을 해석기 도메인 결과로 안전하게 매핑한다.
- 모델은 `templateId` 키를 사용하며, 정의되지 않은 필드는 거부한다.
- `status == "ok"`의 후보 집합 소속 검증은 선택기가 담당한다. 빈 문자열 id도 그 검증에서 거른다.

디자인 패턴:
- DTO(Data Transfer Object).

참조:
- src_py/template_resolver/llm/langchain_picker.py
- src_py/template_resolver/search/semantic.py
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from template_resolver.contracts.result_models import AiStatus


class AiPick(BaseModel):
    """LLM 템플릿 선택 판정 모델."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    status: AiStatus
    template_id: str | None = Field(default=None, alias="templateId")
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    reason: str | None = Field(default=None)
