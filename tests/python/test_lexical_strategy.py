import asyncio

from template_resolver.config import LexicalSearchConfig
from template_resolver.contracts import SearchQuery, Template
from template_resolver.exceptions import IndexBackendError
from template_resolver.index import InMemoryTemplateIndex
from template_resolver.search import LexicalIndexStrategy

from fakes import FakeIndexBackend


def _query(title: str = "bench press strength", description: str = "increase my bench press") -> SearchQuery:
    return SearchQuery(title=title, description=description)


def test_bench_press_query_hits_strength_template() -> None:
    index = InMemoryTemplateIndex.from_templates(
        [Template(id="t1", name="Strength", tags=["strength", "bench_press"])]
    )
    strategy = LexicalIndexStrategy(backend=index)

    result = asyncio.run(strategy.search(_query()))

    assert result.error is None
    assert result.hits[0].template_id == "t1"
    assert result.hits[0].score is not None and result.hits[0].score > 0
    assert result.hits[0].confidence is None
    assert result.meta.strategy == "lexical"
    assert result.meta.index_name == "template_text"
    assert result.meta.execution_ms is not None
    assert result.meta.ai_status is None


def test_build_query_uses_weighted_should_clauses() -> None:
    strategy = LexicalIndexStrategy(backend=FakeIndexBackend())

    compound = strategy.build_query(_query(title="bench", description="get stronger"))

    assert [(c.query, c.path, c.boost) for c in compound.should] == [
        ("bench", "tags", 8.0),
        ("bench", "description", 2.0),
        ("get stronger", "description", 4.0),
    ]
    assert compound.minimum_should_match == 1
    assert compound.limit == 5
    assert compound.highlight_paths == ["description", "tags"]


def test_hits_are_sorted_capped_and_filtered_by_min_score() -> None:
    backend = FakeIndexBackend(
        docs=[
            {"id": "low", "score": 0.5},
            {"id": "top", "score": 9.0, "highlights": {"tags": ["strength"]}},
            {"id": "mid", "score": 3.0},
            {"id": "cut", "score": 2.0},
        ]
    )
    strategy = LexicalIndexStrategy(backend=backend, config=LexicalSearchConfig(limit=3, min_score=1.0))

    result = asyncio.run(strategy.search(_query()))

    assert [hit.template_id for hit in result.hits] == ["top", "mid", "cut"]
    assert result.hits[0].highlights == {"tags": ["strength"]}
    assert result.hits[1].highlights is None


def test_numeric_ids_are_stringified() -> None:
    strategy = LexicalIndexStrategy(backend=FakeIndexBackend(docs=[{"id": 42, "score": 1.0}]))

    result = asyncio.run(strategy.search(_query()))

    assert result.hits[0].template_id == "42"


def test_backend_error_becomes_search_error() -> None:
    backend = FakeIndexBackend(error=IndexBackendError("index offline"))
    strategy = LexicalIndexStrategy(backend=backend)

    result = asyncio.run(strategy.search(_query()))

    assert result.hits == []
    assert result.error is not None
    assert result.error.code == "SEARCH_ERROR"
    assert result.error.message == "index offline"
    assert result.meta.strategy == "lexical"


def test_connection_error_becomes_search_error() -> None:
    strategy = LexicalIndexStrategy(backend=FakeIndexBackend(error=ConnectionRefusedError("refused")))

    result = asyncio.run(strategy.search(_query()))

    assert result.error is not None
    assert result.error.code == "SEARCH_ERROR"


def test_unexpected_exception_becomes_unknown_error() -> None:
    strategy = LexicalIndexStrategy(backend=FakeIndexBackend(error=KeyError("score")))

    result = asyncio.run(strategy.search(_query()))

    assert result.hits == []
    assert result.error is not None
    assert result.error.code == "UNKNOWN_ERROR"
    assert result.error.cause == "KeyError"


def test_malformed_backend_payload_becomes_search_error() -> None:
    for docs in ({"result": []}, [{"id": "t1"}], [{"id": "t1", "score": "high"}]):
        strategy = LexicalIndexStrategy(backend=FakeIndexBackend(docs=docs))

        result = asyncio.run(strategy.search(_query()))

        assert result.hits == []
        assert result.error is not None
        assert result.error.code == "SEARCH_ERROR"


def test_backend_timeout_becomes_search_error() -> None:
    backend = FakeIndexBackend(docs=[{"id": "t1", "score": 1.0}], delay=0.5)
    strategy = LexicalIndexStrategy(backend=backend, config=LexicalSearchConfig(timeout_ms=10))

    result = asyncio.run(strategy.search(_query()))

    assert result.hits == []
    assert result.error is not None
    assert result.error.code == "SEARCH_ERROR"


def test_blank_query_skips_backend_with_validation_error() -> None:
    backend = FakeIndexBackend(docs=[{"id": "t1", "score": 1.0}])
    strategy = LexicalIndexStrategy(backend=backend)
    blank = SearchQuery.model_construct(title="  ", description="")

    result = asyncio.run(strategy.search(blank))

    assert backend.queries == []
    assert result.hits == []
    assert result.error is not None
    assert result.error.code == "VALIDATION_ERROR"


def test_title_only_query_omits_description_clause() -> None:
    backend = FakeIndexBackend()
    strategy = LexicalIndexStrategy(backend=backend)
    title_only = SearchQuery.model_construct(title="bench", description=" ")

    result = asyncio.run(strategy.search(title_only))

    assert result.error is None
    assert [clause.path for clause in backend.queries[0].should] == ["tags", "description"]
