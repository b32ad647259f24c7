"""
목적:
- Template Resolver 라이브러리의 설정 인터페이스를 정의한다.

설명:
- 어휘 검색/시맨틱 선택 전략의 한도, 가중치, 타임아웃을 단일 모델로 관리한다.
- Redis 카탈로그 연결 값을 별도 모델로 분리한다.
- LLM과 카탈로그 저장소는 설정 파일이 아닌 Python 인자 주입으로 전달한다.

디자인 패턴:
- 값 객체(Value Object).

참조:
- scripts/run-resolve.py
- src_py/template_resolver/search/lexical.py
- src_py/template_resolver/llm/langchain_picker.py
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class LexicalSearchConfig(BaseModel):
    """어휘 색인 검색 전략 설정 모델."""

    index_name: str = Field(default="template_text", min_length=1)
    limit: int = Field(default=5, ge=1)
    min_score: float | None = Field(default=None, ge=0.0)
    title_tags_boost: float = Field(default=8.0, gt=0.0)
    title_description_boost: float = Field(default=2.0, gt=0.0)
    description_boost: float = Field(default=4.0, gt=0.0)
    timeout_ms: int = Field(default=3_000, ge=1)


class SemanticSearchConfig(BaseModel):
    """LLM 시맨틱 선택 전략 설정 모델."""

    index_name: str = Field(default="langchain", min_length=1)
    candidate_limit: int = Field(default=30, ge=1, le=200)
    # OpenAI 계열 `response_format` 인자를 보낸다. 이를 거부하는 모델은 False로 둔다.
    json_mode: bool = Field(default=True)
    timeout_ms: int = Field(default=20_000, ge=1)


class RedisCatalogConfig(BaseModel):
    """Redis 기반 템플릿 카탈로그 연결 설정 모델."""

    host: str = Field(min_length=1)
    port: int = Field(default=6379, ge=1, le=65535)
    db: int = Field(default=0, ge=0)
    username: str | None = Field(default=None)
    password: str | None = Field(default=None)
    use_ssl: bool = Field(default=False)
    key_prefix: str = Field(default="template", min_length=1)

    @field_validator("key_prefix")
    @classmethod
    def validate_key_prefix(cls, value: str) -> str:
        if ":" in value:
            raise ValueError("key_prefix에는 ':' 문자를 사용할 수 없습니다")
        return value


class ResolverConfig(BaseModel):
    """템플릿 해석기 전체 설정 모델."""

    lexical: LexicalSearchConfig = Field(default_factory=LexicalSearchConfig)
    semantic: SemanticSearchConfig = Field(default_factory=SemanticSearchConfig)
    enable_semantic_fallback: bool = Field(default=True)
