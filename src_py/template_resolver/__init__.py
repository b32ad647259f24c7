"""
목적:
- Template Resolver Python 패키지의 공개 진입점을 제공한다.

설명:
- 핵심 진입점은 `SearchOrchestrator.resolve` 하나다.
- 설정/계약 모델/전략/카탈로그/색인/예외를 함께 노출한다.

디자인 패턴:
- 퍼사드(Facade).

참조:
- src_py/template_resolver/orchestration/resolver.py
"""

from .catalog import CandidateRepository, InMemoryTemplateRepository, RedisTemplateRepository
from .config.models import (
    LexicalSearchConfig,
    RedisCatalogConfig,
    ResolverConfig,
    SemanticSearchConfig,
)
from .contracts import (
    Candidate,
    SearchError,
    SearchHit,
    SearchMeta,
    SearchQuery,
    SearchResult,
    Template,
)
from .exceptions import (
    CatalogUnavailableError,
    ConfigurationError,
    DependencyUnavailableError,
    IndexBackendError,
    QueryValidationError,
    TemplateResolverError,
)
from .index import CompoundQuery, InMemoryTemplateIndex, TextClause
from .llm import AiPick, AiTemplatePicker
from .orchestration import SearchOrchestrator, build_default_orchestrator
from .search import LexicalIndexStrategy, SemanticPickStrategy, TemplateSearchStrategy
from .version import __version__

__all__ = [
    "__version__",
    "SearchOrchestrator",
    "build_default_orchestrator",
    "LexicalIndexStrategy",
    "SemanticPickStrategy",
    "TemplateSearchStrategy",
    "AiTemplatePicker",
    "AiPick",
    "CompoundQuery",
    "TextClause",
    "InMemoryTemplateIndex",
    "CandidateRepository",
    "InMemoryTemplateRepository",
    "RedisTemplateRepository",
    "ResolverConfig",
    "LexicalSearchConfig",
    "SemanticSearchConfig",
    "RedisCatalogConfig",
    "SearchQuery",
    "Template",
    "Candidate",
    "SearchHit",
    "SearchMeta",
    "SearchError",
    "SearchResult",
    "TemplateResolverError",
    "ConfigurationError",
    "QueryValidationError",
    "IndexBackendError",
    "CatalogUnavailableError",
    "DependencyUnavailableError",
]
