"""
목적:
- LangChain `ainvoke` 기반 템플릿 선택기를 제공한다.

설명:
- 카탈로그에서 제한된 후보를 읽어 프롬프트에 나열하고, 채팅 모델의 JSON 판정을 받는다.
- 빈 카탈로그는 모델을 호출하지 않고 `not_found`로 종료한다.
- 빈 응답/JSON 파싱 실패/스키마 위반은 `not_found` 판정으로 변환한다.
- `ok` 판정의 templateId는 이번 호출에 전달한 후보 집합에 속할 때만 인정한다.
- 저장소/모델 호출 자체의 실패는 예외로 전파되며, 시맨틱 전략이 결과로 변환한다.

디자인 패턴:
- 어댑터(Adapter).

참조:
- src_py/template_resolver/llm/contracts.py
- src_py/template_resolver/llm/prompts.py
- src_py/template_resolver/search/semantic.py
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from template_resolver.catalog.repository import CandidateRepository
from template_resolver.config.models import SemanticSearchConfig
from template_resolver.contracts.catalog_models import Candidate
from template_resolver.contracts.query_models import SearchQuery
from template_resolver.llm.contracts import AiPick
from template_resolver.llm.prompts import (
    PICK_TEMPLATE_HUMAN_PROMPT,
    PICK_TEMPLATE_SYSTEM_PROMPT,
    format_candidates_block,
)

logger = logging.getLogger(__name__)

NO_TEMPLATES_REASON = "No templates in catalog"
EMPTY_RESPONSE_REASON = "Empty model response"
NON_JSON_REASON = "Model returned non-JSON"
NON_OBJECT_REASON = "Model returned non-object JSON"
SCHEMA_VIOLATION_REASON = "Model response failed schema validation"
UNGROUNDED_PICK_REASON = "Picked id not in candidates"


class AiTemplatePicker:
    """LangChain 채팅 모델로 카탈로그 템플릿 하나를 고르는 선택기."""

    def __init__(
        self,
        chat_model,
        repository: CandidateRepository,
        config: SemanticSearchConfig | None = None,
    ) -> None:
        self._chat_model = chat_model
        self._repository = repository
        self._config = config or SemanticSearchConfig()
        self._prompt = ChatPromptTemplate.from_messages(
            [
                ("system", PICK_TEMPLATE_SYSTEM_PROMPT),
                ("human", PICK_TEMPLATE_HUMAN_PROMPT),
            ]
        )

    async def pick(self, query: SearchQuery) -> AiPick:
        candidates = await self._load_candidates(query)
        if not candidates:
            logger.info("카탈로그가 비어 있어 LLM 호출을 생략합니다")
            return AiPick(status="not_found", reason=NO_TEMPLATES_REASON)

        prompt_value = self._prompt.invoke(
            {
                "title": query.title,
                "description": query.description,
                "candidates_block": format_candidates_block(candidates),
            }
        )
        response = await asyncio.wait_for(
            self._chat_model.ainvoke(prompt_value, **self._invoke_kwargs()),
            timeout=self._config.timeout_ms / 1000.0,
        )

        pick = _parse_pick(_read_message_text(response))
        return _ground_pick(pick, candidates)

    async def _load_candidates(self, query: SearchQuery) -> list[Candidate]:
        limit = query.candidate_limit or self._config.candidate_limit
        templates = await asyncio.wait_for(
            self._repository.list_templates(limit),
            timeout=self._config.timeout_ms / 1000.0,
        )
        return [template.to_candidate() for template in templates[:limit]]

    def _invoke_kwargs(self) -> dict[str, Any]:
        if not self._config.json_mode:
            return {}
        return {"response_format": {"type": "json_object"}}


def _read_message_text(message) -> str:
    content = getattr(message, "content", None)
    if isinstance(content, str):
        return content.strip()

    # 멀티모달 모델은 content를 블록 리스트로 반환한다.
    if isinstance(content, list):
        parts: list[str] = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and isinstance(block.get("text"), str):
                parts.append(block["text"])
        return "".join(parts).strip()

    return ""


def _strip_code_fence(text: str) -> str:
    if not text.startswith("```"):
        return text
    lines = text.splitlines()[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines).strip()


def _parse_pick(text: str) -> AiPick:
    if not text:
        return AiPick(status="not_found", reason=EMPTY_RESPONSE_REASON)

    try:
        raw = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError:
        logger.warning("템플릿 선택 LLM 응답 JSON 파싱 실패: %.200s", text)
        return AiPick(status="not_found", reason=NON_JSON_REASON)

    if not isinstance(raw, dict):
        return AiPick(status="not_found", reason=NON_OBJECT_REASON)

    try:
        return AiPick.model_validate(raw)
    except ValidationError as exc:
        logger.warning("템플릿 선택 LLM 응답 스키마 위반: %s", exc.errors(include_url=False))
        return AiPick(status="not_found", reason=SCHEMA_VIOLATION_REASON)


def _ground_pick(pick: AiPick, candidates: list[Candidate]) -> AiPick:
    if pick.status != "ok":
        return pick

    candidate_ids = {candidate.id for candidate in candidates}
    if not pick.template_id or pick.template_id not in candidate_ids:
        logger.warning("LLM이 후보 집합에 없는 templateId를 선택했습니다: %s", pick.template_id)
        return AiPick(status="not_found", reason=UNGROUNDED_PICK_REASON)
    return pick
