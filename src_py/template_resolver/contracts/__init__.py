"""
목적:
- Python 계약 모델 계층의 공개 심볼을 제공한다.

설명:
- 질의/카탈로그/결과 모델을 하나의 네임스페이스에서 재노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/template_resolver/contracts/query_models.py
- src_py/template_resolver/contracts/catalog_models.py
- src_py/template_resolver/contracts/result_models.py
"""

from .catalog_models import Candidate, Template
from .query_models import MAX_CANDIDATE_LIMIT, SearchQuery
from .result_models import (
    AiStatus,
    SearchError,
    SearchErrorCode,
    SearchHit,
    SearchMeta,
    SearchResult,
    StrategyName,
)

__all__ = [
    "MAX_CANDIDATE_LIMIT",
    "SearchQuery",
    "Template",
    "Candidate",
    "SearchHit",
    "SearchMeta",
    "SearchError",
    "SearchResult",
    "StrategyName",
    "SearchErrorCode",
    "AiStatus",
]
