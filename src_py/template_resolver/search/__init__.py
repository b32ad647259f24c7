"""
목적:
- 검색 전략 계층의 공개 진입점을 제공한다.

설명:
- 전략 인터페이스와 어휘/시맨틱 전략 클래스를 외부에 노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/template_resolver/search/lexical.py
- src_py/template_resolver/search/semantic.py
"""

from .lexical import LexicalIndexStrategy
from .semantic import SemanticPickStrategy
from .strategy import TemplateSearchStrategy

__all__ = [
    "TemplateSearchStrategy",
    "LexicalIndexStrategy",
    "SemanticPickStrategy",
]
