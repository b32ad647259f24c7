from __future__ import annotations

import pytest

from template_resolver.catalog.repository import InMemoryTemplateRepository
from template_resolver.contracts.catalog_models import Template


@pytest.fixture
def catalog_templates() -> list[Template]:
    return [
        Template(
            id="t1",
            name="Strength Beginner",
            tags=["strength", "bench_press"],
            description="Base strength plan for novices with big lifts.",
        ),
        Template(
            id="t2",
            name="Fat Loss Conditioning",
            tags=["fatloss", "conditioning", "cardio"],
            description="Conditioning focus with simple tracking.",
        ),
        Template(
            id="ai1",
            name="Mobility + Recovery",
            tags=["mobility", "recovery"],
            description="Low intensity routine for recovery and consistency.",
        ),
    ]


@pytest.fixture
def repository(catalog_templates: list[Template]) -> InMemoryTemplateRepository:
    return InMemoryTemplateRepository(catalog_templates)
