"""
목적:
- 템플릿 선택 LLM 프롬프트를 정의한다.

설명:
- 시스템 지시는 JSON 전용 응답, 후보 집합 내 선택, `inconsistent`/`not_found`
  상태 사용 규칙을 고정한다.
- 사용자 메시지는 프로젝트 입력과 후보 목록, 기대 JSON 형태를 나열한다.
- ChatPromptTemplate 변수 치환을 피하기 위해 JSON 예시의 중괄호는 이중으로 쓴다.

디자인 패턴:
- 템플릿 상수(Template Constant).

참조:
- src_py/template_resolver/llm/langchain_picker.py
"""

from __future__ import annotations

import json

from template_resolver.contracts.catalog_models import Candidate

PICK_TEMPLATE_SYSTEM_PROMPT = """You select the best existing configuration template for a fitness project.

Rules:
- Return ONLY valid JSON.
- No markdown.
- Choose ONLY from the provided candidates and copy the candidate id exactly.
- If title/description is contradictory or too ambiguous, return status: "inconsistent".
- If none fits, return status: "not_found".
"""

PICK_TEMPLATE_HUMAN_PROMPT = """Project input:
- title: {title}
- description: {description}

Candidates:
{candidates_block}

Return JSON with shape:
{{
  "status": "ok" | "not_found" | "inconsistent",
  "templateId"?: string,
  "confidence"?: number between 0 and 1,
  "reason"?: string
}}"""


def format_candidates_block(candidates: list[Candidate]) -> str:
    """후보 목록을 프롬프트용 텍스트 블록으로 변환한다."""
    lines: list[str] = []
    for candidate in candidates:
        lines.append(f"- id: {candidate.id}")
        lines.append(f"  name: {candidate.name}")
        lines.append(f"  tags: {json.dumps(candidate.tags, ensure_ascii=False)}")
        lines.append(f"  description: {candidate.description or ''}")
    return "\n".join(lines)
