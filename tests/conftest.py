"""Shared test fixtures: exercise catalog, fake model and catalog clients."""

from __future__ import annotations

import json
from typing import Callable, List

import pytest

from app.schema import ExerciseCatalogEntry
from services.plan_generator import PlanGeneratorService


class FakeCatalog:
    def __init__(self, exercises: List[ExerciseCatalogEntry]):
        self.exercises = exercises
        self.loads = 0

    def load(self) -> List[ExerciseCatalogEntry]:
        self.loads += 1
        return list(self.exercises)


class FakeModel:
    """Returns a canned completion and remembers the prompts it was sent."""

    def __init__(self, completion: str):
        self.completion = completion
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.completion


class SequentialIds:
    def __init__(self):
        self.issued: List[str] = []

    def __call__(self, prefix: str = "item") -> str:
        value = f"{prefix}-{len(self.issued) + 1}"
        self.issued.append(value)
        return value


@pytest.fixture
def press_banca() -> ExerciseCatalogEntry:
    return ExerciseCatalogEntry(
        name="Press banca", equipment="Barra", muscle="Pecho", category="Fuerza"
    )


@pytest.fixture
def catalog(press_banca) -> List[ExerciseCatalogEntry]:
    return [
        press_banca,
        ExerciseCatalogEntry(
            name="Aperturas con mancuernas",
            equipment="Mancuernas",
            muscle="Pecho",
            category="Hipertrofia",
        ),
        ExerciseCatalogEntry(
            name="Fondos en paralelas", equipment="Paralelas", muscle="Tríceps", category="Fuerza"
        ),
        ExerciseCatalogEntry(
            name="Bench Press", equipment="Barbell", muscle="Chest", category="Strength"
        ),
    ]


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def make_service(catalog, ids) -> Callable[..., PlanGeneratorService]:
    def _make(completion, exercises=None) -> PlanGeneratorService:
        if not isinstance(completion, str):
            completion = json.dumps(completion, ensure_ascii=False)
        return PlanGeneratorService(
            FakeCatalog(catalog if exercises is None else exercises),
            FakeModel(completion),
            id_factory=ids,
        )

    return _make
