"""
목적:
- LLM 주입 계층의 공개 진입점을 제공한다.

설명:
- 템플릿 선택 DTO와 LangChain 선택기를 외부에 노출한다.

디자인 패턴:
- 모듈 퍼사드(Module Facade).

참조:
- src_py/template_resolver/llm/contracts.py
- src_py/template_resolver/llm/langchain_picker.py
"""

from .contracts import AiPick
from .langchain_picker import AiTemplatePicker

__all__ = [
    "AiPick",
    "AiTemplatePicker",
]
