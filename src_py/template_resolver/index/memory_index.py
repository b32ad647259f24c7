"""
목적:
- 템플릿 태그/설명 위에 임베디드 역색인 엔진을 제공한다.

설명:
- 필드(tags, description)마다 `rank_bm25.BM25Plus` 모델을 두고, 절 가중치 x BM25 점수로 계산한다.
- 문서에 실제로 존재하는 질의 토큰의 점수만 합산한다. BM25Plus의 delta 항은 일치하지 않는
  문서에도 더해지므로 토큰 단위로 점수를 구해 일치 여부로 거른다.
- 태그의 밑줄/하이픈은 단어 경계로 취급해 `bench_press`가 "bench press"와 일치한다.
- 일치한 태그와 설명을 하이라이트 조각으로 반환한다.
- BM25 모델은 문서 추가 시 무효화되고 다음 검색에서 다시 만든다.

디자인 패턴:
- 역색인(Inverted Index).

참조:
- src_py/template_resolver/index/query.py
- src_py/template_resolver/catalog/repository.py
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from rank_bm25 import BM25Plus

from template_resolver.catalog.repository import CandidateRepository
from template_resolver.contracts.catalog_models import Template
from template_resolver.exceptions import ConfigurationError
from template_resolver.index.query import CompoundQuery, IndexedField, TextClause

_TOKEN_PATTERN = re.compile(r"[^\W_]+", re.UNICODE)
DEFAULT_REPOSITORY_SCAN_LIMIT = 10_000


_FIELDS: tuple[IndexedField, ...] = ("tags", "description")


@dataclass(slots=True)
class IndexedDocument:
    """색인된 단일 템플릿 문서."""

    template_id: str
    tags: list[str]
    description: str
    field_tokens: dict[str, list[str]]
    field_terms: dict[str, frozenset[str]]


class InMemoryTemplateIndex:
    """메모리 BM25 색인 기반 템플릿 검색 엔진."""

    def __init__(self, index_name: str = "template_text") -> None:
        self._index_name = index_name
        self._documents: dict[str, IndexedDocument] = {}
        self._models: dict[str, BM25Plus | None] | None = None

    @classmethod
    def from_templates(
        cls,
        templates: Iterable[Template],
        index_name: str = "template_text",
    ) -> InMemoryTemplateIndex:
        """템플릿 목록으로 색인을 생성한다."""
        index = cls(index_name=index_name)
        for template in templates:
            index.add(template)
        index._build_models()
        return index

    @classmethod
    async def from_repository(
        cls,
        repository: CandidateRepository,
        index_name: str = "template_text",
        limit: int = DEFAULT_REPOSITORY_SCAN_LIMIT,
    ) -> InMemoryTemplateIndex:
        """카탈로그 저장소 전체를 읽어 색인을 생성한다."""
        templates = await repository.list_templates(limit)
        return cls.from_templates(templates, index_name=index_name)

    @property
    def index_name(self) -> str:
        return self._index_name

    def __len__(self) -> int:
        return len(self._documents)

    def add(self, template: Template) -> None:
        """템플릿 한 건을 색인에 추가한다."""
        if template.id in self._documents:
            raise ConfigurationError(f"이미 색인된 템플릿 id입니다: {template.id}")

        description = template.description or ""
        field_tokens = {
            "tags": [token for tag in template.tags for token in tokenize(tag)],
            "description": tokenize(description),
        }
        self._documents[template.id] = IndexedDocument(
            template_id=template.id,
            tags=list(template.tags),
            description=description,
            field_tokens=field_tokens,
            field_terms={path: frozenset(tokens) for path, tokens in field_tokens.items()},
        )
        self._models = None

    async def search(self, query: CompoundQuery) -> list[dict[str, Any]]:
        """복합 질의를 실행해 점수 내림차순 원시 문서를 반환한다."""
        if query.index_name != self._index_name:
            raise ConfigurationError(
                f"색인 이름이 일치하지 않습니다: expected={self._index_name}, actual={query.index_name}"
            )

        models = self._build_models()
        documents = list(self._documents.values())
        clause_results = [
            self._score_clause(models[clause.path], documents, clause) for clause in query.should
        ]

        scored: list[dict[str, Any]] = []
        for position, document in enumerate(documents):
            total = 0.0
            matched_clauses = 0
            matched_terms: dict[str, set[str]] = {"tags": set(), "description": set()}

            for clause, per_document in zip(query.should, clause_results):
                clause_score, terms = per_document[position]
                if not terms:
                    continue
                matched_clauses += 1
                total += clause_score
                matched_terms[clause.path].update(terms)

            if matched_clauses < query.minimum_should_match:
                continue

            raw: dict[str, Any] = {"id": document.template_id, "score": round(float(total), 6)}
            highlights = _build_highlights(document, matched_terms, query.highlight_paths)
            if highlights:
                raw["highlights"] = highlights
            scored.append(raw)

        scored.sort(key=lambda item: (-item["score"], item["id"]))
        return scored[: query.limit]

    def _build_models(self) -> dict[str, BM25Plus | None]:
        if self._models is None:
            models: dict[str, BM25Plus | None] = {}
            for path in _FIELDS:
                corpus = [document.field_tokens[path] for document in self._documents.values()]
                # 토큰이 하나도 없는 필드는 평균 문서 길이가 0이라 모델을 만들지 않는다.
                models[path] = BM25Plus(corpus) if any(corpus) else None
            self._models = models
        return self._models

    @staticmethod
    def _score_clause(
        model: BM25Plus | None,
        documents: list[IndexedDocument],
        clause: TextClause,
    ) -> list[tuple[float, set[str]]]:
        results: list[tuple[float, set[str]]] = [(0.0, set()) for _ in documents]
        if model is None:
            return results

        for token in set(tokenize(clause.query)):
            token_scores = None
            for position, document in enumerate(documents):
                if token not in document.field_terms[clause.path]:
                    continue
                if token_scores is None:
                    token_scores = model.get_scores([token])
                score, terms = results[position]
                terms.add(token)
                results[position] = (score + clause.boost * float(token_scores[position]), terms)
        return results


def tokenize(text: str) -> list[str]:
    """소문자 단어 토큰 목록을 반환한다."""
    return _TOKEN_PATTERN.findall(text.lower())


def _build_highlights(
    document: IndexedDocument,
    matched_terms: dict[str, set[str]],
    paths: list[IndexedField],
) -> dict[str, list[str]]:
    highlights: dict[str, list[str]] = {}
    for path in paths:
        terms = matched_terms.get(path)
        if not terms:
            continue
        if path == "tags":
            fragments = [tag for tag in document.tags if terms.intersection(tokenize(tag))]
        else:
            fragments = [document.description]
        if fragments:
            highlights[path] = fragments
    return highlights
