"""
목적:
- 어휘 색인 계층의 공개 진입점을 제공한다.

설명:
- 복합 질의 모델, 엔진 인터페이스, 메모리 역색인 구현을 외부에 노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/template_resolver/index/query.py
- src_py/template_resolver/index/memory_index.py
"""

from .memory_index import InMemoryTemplateIndex, tokenize
from .query import CompoundQuery, IndexBackend, TextClause

__all__ = [
    "CompoundQuery",
    "TextClause",
    "IndexBackend",
    "InMemoryTemplateIndex",
    "tokenize",
]
