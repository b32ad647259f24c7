"""
목적:
- 템플릿 카탈로그 읽기 인터페이스와 메모리 구현을 제공한다.

설명:
- 해석기 코어는 `CandidateRepository` 프로토콜만 의존한다.
- `InMemoryTemplateRepository`는 JSON 카탈로그 파일 또는 리스트로 초기화되며,
  드라이버 스크립트와 테스트에서 사용한다.
- 목록 순서는 적재 순서를 유지한다.

디자인 패턴:
- 저장소 패턴(Repository Pattern).

참조:
- src_py/template_resolver/catalog/redis_repository.py
- src_py/template_resolver/llm/langchain_picker.py
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import ValidationError

from template_resolver.contracts.catalog_models import Template
from template_resolver.exceptions import CatalogUnavailableError, ConfigurationError


@runtime_checkable
class CandidateRepository(Protocol):
    """읽기 전용 템플릿 카탈로그 인터페이스."""

    async def list_templates(self, limit: int) -> list[Template]: ...

    async def get_template_by_id(self, template_id: str) -> Template | None: ...


class InMemoryTemplateRepository:
    """메모리에 적재된 템플릿 카탈로그."""

    def __init__(self, templates: Iterable[Template] = ()) -> None:
        self._templates: dict[str, Template] = {}
        for template in templates:
            if template.id in self._templates:
                raise ConfigurationError(f"템플릿 id가 중복되었습니다: {template.id}")
            self._templates[template.id] = template

    @classmethod
    def from_json_file(cls, path: Path) -> InMemoryTemplateRepository:
        """JSON 배열 카탈로그 파일에서 저장소를 생성한다."""
        if not path.exists():
            raise CatalogUnavailableError(f"카탈로그 파일이 존재하지 않습니다: {path}")

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CatalogUnavailableError(f"카탈로그 JSON 파싱 실패: {exc}") from exc

        if not isinstance(raw, list):
            raise CatalogUnavailableError("카탈로그 파일은 JSON 배열이어야 합니다")

        try:
            templates = [Template.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise CatalogUnavailableError(f"카탈로그 항목 형식이 잘못되었습니다: {exc}") from exc
        return cls(templates)

    def __len__(self) -> int:
        return len(self._templates)

    async def list_templates(self, limit: int) -> list[Template]:
        """적재 순서대로 최대 limit개 템플릿을 반환한다."""
        if limit < 1:
            raise ConfigurationError("limit은 1 이상이어야 합니다")
        return list(self._templates.values())[:limit]

    async def get_template_by_id(self, template_id: str) -> Template | None:
        """id로 템플릿을 조회한다."""
        return self._templates.get(template_id)

    def all_templates(self) -> list[Template]:
        """카탈로그 전체 스냅샷을 반환한다."""
        return list(self._templates.values())
