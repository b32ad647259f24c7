"""
목적:
- 해석 오케스트레이션 계층의 공개 진입점을 제공한다.

설명:
- 폴백 체인 해석기와 기본 구성 팩토리를 외부에 노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/template_resolver/orchestration/resolver.py
"""

from .resolver import SearchOrchestrator, build_default_orchestrator, validate_query

__all__ = [
    "SearchOrchestrator",
    "build_default_orchestrator",
    "validate_query",
]
