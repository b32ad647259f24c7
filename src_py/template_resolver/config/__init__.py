"""
목적:
- 설정 모델 계층의 공개 심볼을 제공한다.

설명:
- 전략/카탈로그 설정 모델을 하나의 네임스페이스에서 재노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/template_resolver/config/models.py
"""

from .models import (
    LexicalSearchConfig,
    RedisCatalogConfig,
    ResolverConfig,
    SemanticSearchConfig,
)

__all__ = [
    "LexicalSearchConfig",
    "SemanticSearchConfig",
    "RedisCatalogConfig",
    "ResolverConfig",
]
