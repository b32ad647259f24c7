"""
목적:
- 루트 `.env`를 읽어 SearchOrchestrator를 실행하는 드라이버 스크립트를 제공한다.

설명:
- 라이브러리 본체는 환경 파일을 직접 읽지 않는다.
- 이 스크립트는 카탈로그 적재 -> 색인 생성 -> 템플릿 해석 흐름을 데모한다.
- LLM은 LangChain 객체를 팩토리 함수로 생성해 인자로 주입한다.

디자인 패턴:
- 드라이버(Driver Script).

참조:
- src_py/template_resolver/config/models.py
- src_py/template_resolver/orchestration/resolver.py
"""

from __future__ import annotations

import argparse
import asyncio
import importlib
import logging
import os
import sys
from pathlib import Path

from template_resolver import (
    InMemoryTemplateIndex,
    InMemoryTemplateRepository,
    LexicalSearchConfig,
    ResolverConfig,
    SemanticSearchConfig,
    build_default_orchestrator,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Template Resolver 드라이버")
    parser.add_argument("--title", required=True, help="프로젝트 제목")
    parser.add_argument("--description", required=True, help="프로젝트 설명")
    parser.add_argument("--candidate-limit", type=int, default=None, help="LLM 후보 최대 개수 (1~200)")
    parser.add_argument(
        "--catalog",
        default="scripts/sample-catalog.json",
        help="루트 기준 템플릿 카탈로그 JSON 경로",
    )
    parser.add_argument(
        "--llm-factory",
        default=None,
        help="LangChain 채팅 모델 팩토리 경로 (예: app.llm_factories:create_picker_llm). 생략 시 시맨틱 폴백 비활성화",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="루트 기준 환경 파일 경로 (기본: .env, 없으면 건너뜀)",
    )
    return parser.parse_args()


def load_env_file(path: Path) -> None:
    if not path.exists():
        return

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        os.environ[key] = value


def build_config(enable_semantic: bool) -> ResolverConfig:
    min_score_raw = os.environ.get("LEXICAL_MIN_SCORE", "").strip()
    lexical = LexicalSearchConfig(
        index_name=os.environ.get("LEXICAL_INDEX_NAME", "template_text"),
        limit=int(os.environ.get("LEXICAL_LIMIT", "5")),
        min_score=float(min_score_raw) if min_score_raw else None,
        timeout_ms=int(os.environ.get("LEXICAL_TIMEOUT_MS", "3000")),
    )
    semantic = SemanticSearchConfig(
        candidate_limit=int(os.environ.get("SEMANTIC_CANDIDATE_LIMIT", "30")),
        json_mode=parse_bool_env("SEMANTIC_JSON_MODE", "true"),
        timeout_ms=int(os.environ.get("SEMANTIC_TIMEOUT_MS", "20000")),
    )
    return ResolverConfig(
        lexical=lexical,
        semantic=semantic,
        enable_semantic_fallback=enable_semantic,
    )


def parse_bool_env(key: str, default: str) -> bool:
    raw = os.environ.get(key, default).strip().lower()
    if raw in {"1", "true", "yes", "y"}:
        return True
    if raw in {"0", "false", "no", "n"}:
        return False
    raise RuntimeError(f"불리언 환경 변수 형식이 잘못되었습니다: {key}={raw}")


def load_factory(spec: str):
    if ":" not in spec:
        raise RuntimeError("--llm-factory 형식은 module:function 이어야 합니다")
    module_name, function_name = spec.split(":", 1)
    module = importlib.import_module(module_name)
    return getattr(module, function_name)


async def main() -> int:
    args = parse_args()
    repo_root = Path(__file__).resolve().parents[1]
    load_env_file(repo_root / args.env_file)
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = build_config(enable_semantic=args.llm_factory is not None)
    repository = InMemoryTemplateRepository.from_json_file(repo_root / args.catalog)
    index = InMemoryTemplateIndex.from_templates(
        repository.all_templates(),
        index_name=config.lexical.index_name,
    )

    llm = load_factory(args.llm_factory)() if args.llm_factory else None
    orchestrator = build_default_orchestrator(
        config=config,
        index=index,
        repository=repository,
        chat_model=llm,
    )

    query: dict[str, object] = {"title": args.title, "description": args.description}
    if args.candidate_limit is not None:
        query["candidate_limit"] = args.candidate_limit

    result = await orchestrator.resolve(query)
    print("[result]", result.model_dump_json(exclude_none=True))

    if result.hits:
        template = await repository.get_template_by_id(result.hits[0].template_id)
        if template is not None:
            print("[template]", template.model_dump_json(exclude_none=True))
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(asyncio.run(main()))
    except Exception as exc:  # noqa: BLE001
        print(f"[error] {exc}", file=sys.stderr)
        raise SystemExit(1)
