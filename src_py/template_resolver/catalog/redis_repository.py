"""
목적:
- Redis 해시 기반 템플릿 카탈로그 저장소를 제공한다.

설명:
- 템플릿은 `{prefix}:{id}` 해시로, 목록 순서는 `{prefix}:ids` 정렬 집합으로 저장한다.
- 리스트/딕셔너리 필드는 JSON 문자열로 직렬화한다.
- 연결은 호출자가 명시적으로 생성/종료하며 전역 클라이언트를 두지 않는다.
- 목록 조회는 id 목록을 읽은 뒤 HGETALL을 파이프라인 한 번으로 보낸다.

디자인 패턴:
- 저장소 패턴(Repository Pattern).

참조:
- src_py/template_resolver/catalog/repository.py
- src_py/template_resolver/config/models.py
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from template_resolver.config.models import RedisCatalogConfig
from template_resolver.contracts.catalog_models import Template
from template_resolver.exceptions import (
    CatalogUnavailableError,
    ConfigurationError,
    DependencyUnavailableError,
)


class RedisTemplateRepository:
    """Redis에 저장된 템플릿 카탈로그 저장소."""

    def __init__(self, config: RedisCatalogConfig, client=None) -> None:
        self._config = config
        self._redis = client if client is not None else self._create_client(config)

    @staticmethod
    def _create_client(config: RedisCatalogConfig):
        try:
            from redis import asyncio as redis_asyncio
        except Exception as exc:  # pragma: no cover - 런타임 환경 의존
            raise DependencyUnavailableError(f"redis 패키지를 불러오지 못했습니다: {exc}") from exc

        return redis_asyncio.Redis(
            host=config.host,
            port=config.port,
            db=config.db,
            username=config.username,
            password=config.password,
            ssl=config.use_ssl,
            decode_responses=True,
        )

    @property
    def config(self) -> RedisCatalogConfig:
        """카탈로그 설정 객체를 반환한다."""
        return self._config

    async def __aenter__(self) -> RedisTemplateRepository:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Redis 연결을 종료한다."""
        await self._redis.aclose()

    async def list_templates(self, limit: int) -> list[Template]:
        """등록 순서대로 최대 limit개 템플릿을 반환한다."""
        if limit < 1:
            raise ConfigurationError("limit은 1 이상이어야 합니다")

        try:
            template_ids = await self._redis.zrange(self._ids_key(), 0, limit - 1)
        except Exception as exc:
            raise CatalogUnavailableError(f"Redis zrange 조회 실패: {exc}") from exc

        if not template_ids:
            return []

        try:
            async with self._redis.pipeline(transaction=False) as pipe:
                for template_id in template_ids:
                    pipe.hgetall(self._template_key(template_id))
                records = await pipe.execute()
        except Exception as exc:
            raise CatalogUnavailableError(f"Redis hgetall 파이프라인 조회 실패: {exc}") from exc

        # 목록에는 있으나 해시가 지워진 id는 건너뛴다.
        return [_decode_template(record) for record in records if record]

    async def get_template_by_id(self, template_id: str) -> Template | None:
        """id로 템플릿을 조회한다."""
        try:
            record = await self._redis.hgetall(self._template_key(template_id))
        except Exception as exc:
            raise CatalogUnavailableError(f"Redis hgetall 조회 실패: {exc}") from exc

        if not record:
            return None
        return _decode_template(record)

    async def upsert_template(self, template: Template) -> None:
        """템플릿을 저장하고 목록 끝에 등록한다. 카탈로그 적재 스크립트용."""
        try:
            if await self._redis.zscore(self._ids_key(), template.id) is None:
                position = await self._redis.zcard(self._ids_key())
                await self._redis.zadd(self._ids_key(), {template.id: position})
            await self._redis.hset(
                self._template_key(template.id),
                mapping=_encode_template(template),
            )
        except Exception as exc:
            raise CatalogUnavailableError(f"Redis 템플릿 저장 실패: {exc}") from exc

    def _ids_key(self) -> str:
        return f"{self._config.key_prefix}:ids"

    def _template_key(self, template_id: str) -> str:
        return f"{self._config.key_prefix}:{template_id}"


def _encode_template(template: Template) -> dict[str, str]:
    return {
        "id": template.id,
        "name": template.name,
        "tags": json.dumps(template.tags, ensure_ascii=False),
        "description": template.description or "",
        "required_target_metrics": json.dumps(template.required_target_metrics, ensure_ascii=False),
        "activity_guidelines": json.dumps(template.activity_guidelines, ensure_ascii=False),
    }


def _decode_template(record: dict[str, str]) -> Template:
    try:
        payload: dict[str, Any] = {
            "id": record.get("id", ""),
            "name": record.get("name", ""),
            "tags": json.loads(record.get("tags") or "[]"),
            "description": record.get("description") or None,
            "required_target_metrics": json.loads(record.get("required_target_metrics") or "null"),
            "activity_guidelines": json.loads(record.get("activity_guidelines") or "null"),
        }
        return Template.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise CatalogUnavailableError(f"Redis 템플릿 레코드 형식이 잘못되었습니다: {exc}") from exc
