import asyncio
import json

import pytest

from template_resolver.catalog import InMemoryTemplateRepository
from template_resolver.config import SemanticSearchConfig
from template_resolver.contracts import SearchQuery, Template
from template_resolver.exceptions import CatalogUnavailableError
from template_resolver.llm import AiTemplatePicker

from fakes import FailingRepository, FakeChatModel


def _query(candidate_limit: int | None = None) -> SearchQuery:
    return SearchQuery(
        title="bench press strength",
        description="increase my bench press",
        candidate_limit=candidate_limit,
    )


def _pick(chat_model: FakeChatModel, repository, config: SemanticSearchConfig | None = None):
    picker = AiTemplatePicker(chat_model=chat_model, repository=repository, config=config)
    return asyncio.run(picker.pick(_query()))


def test_grounded_pick_is_returned_unchanged(repository) -> None:
    model = FakeChatModel(json.dumps({"status": "ok", "templateId": "ai1", "confidence": 0.9, "reason": "fits"}))

    pick = _pick(model, repository)

    assert pick.status == "ok"
    assert pick.template_id == "ai1"
    assert pick.confidence == 0.9
    assert pick.reason == "fits"


def test_prompt_enumerates_candidates_and_query(repository) -> None:
    model = FakeChatModel('{"status": "not_found"}')

    _pick(model, repository)

    prompt_text = model.last_prompt_text()
    for candidate_id in ("t1", "t2", "ai1"):
        assert f"- id: {candidate_id}" in prompt_text
    assert 'tags: ["strength", "bench_press"]' in prompt_text
    assert "title: bench press strength" in prompt_text
    assert "description: increase my bench press" in prompt_text
    assert "Choose ONLY from the provided candidates" in prompt_text
    assert '"templateId"?: string' in prompt_text


def test_json_mode_requests_json_response_format(repository) -> None:
    model = FakeChatModel('{"status": "not_found"}')

    _pick(model, repository)
    _, kwargs = model.calls[-1]
    assert kwargs == {"response_format": {"type": "json_object"}}

    _pick(model, repository, SemanticSearchConfig(json_mode=False))
    _, kwargs = model.calls[-1]
    assert kwargs == {}


class _NoKwargsChatModel(FakeChatModel):
    async def ainvoke(self, prompt_value, **kwargs):
        if kwargs:
            raise TypeError(f"unexpected keyword arguments: {sorted(kwargs)}")
        return await super().ainvoke(prompt_value)


def test_json_mode_off_supports_models_without_response_format(repository) -> None:
    model = _NoKwargsChatModel('{"status": "ok", "templateId": "t2", "confidence": 0.7}')

    pick = _pick(model, repository, SemanticSearchConfig(json_mode=False))

    assert pick.status == "ok"
    assert pick.template_id == "t2"

    with pytest.raises(TypeError, match="response_format"):
        _pick(model, repository)


def test_empty_catalog_never_calls_model() -> None:
    model = FakeChatModel('{"status": "ok", "templateId": "t1"}')

    pick = _pick(model, InMemoryTemplateRepository())

    assert model.calls == []
    assert pick.status == "not_found"
    assert pick.reason == "No templates in catalog"


def test_hallucinated_template_id_is_downgraded(repository) -> None:
    model = FakeChatModel('{"status": "ok", "templateId": "ghost", "confidence": 0.99}')

    pick = _pick(model, repository)

    assert pick.status == "not_found"
    assert pick.template_id is None
    assert pick.reason == "Picked id not in candidates"


@pytest.mark.parametrize(
    "content",
    [
        '{"status": "ok", "confidence": 0.8}',
        '{"status": "ok", "templateId": ""}',
        '{"status": "ok", "templateId": null}',
    ],
)
def test_ok_without_template_id_is_downgraded(repository, content: str) -> None:
    pick = _pick(FakeChatModel(content), repository)

    assert pick.status == "not_found"
    assert pick.reason == "Picked id not in candidates"


def test_id_outside_candidate_limit_is_not_grounded(catalog_templates) -> None:
    repository = InMemoryTemplateRepository(catalog_templates)
    model = FakeChatModel('{"status": "ok", "templateId": "ai1"}')
    picker = AiTemplatePicker(chat_model=model, repository=repository)

    pick = asyncio.run(picker.pick(_query(candidate_limit=1)))

    assert "- id: ai1" not in model.last_prompt_text()
    assert pick.status == "not_found"


def test_default_candidate_limit_is_thirty() -> None:
    templates = [Template(id=f"t{i}", name=f"Template {i}") for i in range(40)]
    model = FakeChatModel('{"status": "not_found"}')

    _pick(model, InMemoryTemplateRepository(templates))

    prompt_text = model.last_prompt_text()
    assert "- id: t29\n" in prompt_text
    assert "- id: t30\n" not in prompt_text


def test_inconsistent_keeps_model_reason(repository) -> None:
    pick = _pick(FakeChatModel('{"status": "inconsistent", "reason": "contradictory goals"}'), repository)

    assert pick.status == "inconsistent"
    assert pick.reason == "contradictory goals"


@pytest.mark.parametrize(
    ("content", "reason"),
    [
        ("", "Empty model response"),
        ("   ", "Empty model response"),
        ("I think t1 is best", "Model returned non-JSON"),
        ('["t1"]', "Model returned non-object JSON"),
        ('{"status": "ok", "templateId": "t1", "score": 3}', "Model response failed schema validation"),
        ('{"templateId": "t1"}', "Model response failed schema validation"),
    ],
)
def test_unusable_responses_become_not_found(repository, content: str, reason: str) -> None:
    pick = _pick(FakeChatModel(content), repository)

    assert pick.status == "not_found"
    assert pick.reason == reason


def test_markdown_fenced_json_is_accepted(repository) -> None:
    content = '```json\n{"status": "ok", "templateId": "t2", "confidence": 0.6}\n```'

    pick = _pick(FakeChatModel(content), repository)

    assert pick.status == "ok"
    assert pick.template_id == "t2"


def test_content_blocks_are_joined(repository) -> None:
    content = [{"type": "text", "text": '{"status": "ok",'}, {"type": "text", "text": ' "templateId": "t1"}'}]

    pick = _pick(FakeChatModel(content), repository)

    assert pick.template_id == "t1"


def test_repository_failure_propagates() -> None:
    model = FakeChatModel('{"status": "not_found"}')

    with pytest.raises(CatalogUnavailableError):
        _pick(model, FailingRepository(CatalogUnavailableError("catalog down")))
    assert model.calls == []


def test_model_timeout_propagates(repository) -> None:
    model = FakeChatModel('{"status": "not_found"}', delay=0.5)

    with pytest.raises(TimeoutError):
        _pick(model, repository, SemanticSearchConfig(timeout_ms=10))
