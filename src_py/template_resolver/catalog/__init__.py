"""
목적:
- 템플릿 카탈로그 계층의 공개 진입점을 제공한다.

설명:
- 카탈로그 프로토콜과 메모리/Redis 구현을 외부에 노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/template_resolver/catalog/repository.py
- src_py/template_resolver/catalog/redis_repository.py
"""

from .redis_repository import RedisTemplateRepository
from .repository import CandidateRepository, InMemoryTemplateRepository

__all__ = [
    "CandidateRepository",
    "InMemoryTemplateRepository",
    "RedisTemplateRepository",
]
