from typing import Any, Callable

import pytest

from api.models.enums import FALLBACK_ORDER, ModelId
from api.models.questions import (
    FillInTheBlankQuestion,
    MatchingPair,
    MatchingQuestion,
    MultipleChoiceQuestion,
    SingleChoiceQuestion,
)
from api.services.model_selector import ModelRegistry


class FakeModel:
    """Returns a preset result (or raises a preset error) and records calls.

    ``outcome`` may also be a dict keyed by response schema.
    """

    def __init__(self, model_id: ModelId, outcome: Any = None):
        self.model_id = model_id
        self.outcome = outcome
        self.calls: list[tuple[list[Any], type]] = []

    def generate(self, contents, response_schema):
        self.calls.append((list(contents), response_schema))
        outcome = self.outcome
        if isinstance(outcome, dict):
            outcome = outcome[response_schema]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def make_registry() -> Callable[..., ModelRegistry]:
    """Registry of fake models; ``outcomes`` maps model id to result or error."""

    def factory(outcomes: dict[ModelId, Any] | None = None, default: Any = None) -> ModelRegistry:
        outcomes = outcomes or {}
        return ModelRegistry(
            {model_id: FakeModel(model_id, outcomes.get(model_id, default)) for model_id in FALLBACK_ORDER}
        )

    return factory


@pytest.fixture
def fill_question() -> FillInTheBlankQuestion:
    return FillInTheBlankQuestion(
        type="fill-in-the-blank",
        question_text="The capital of France is ___.",
        correct_answer="Paris",
    )


@pytest.fixture
def single_question() -> SingleChoiceQuestion:
    return SingleChoiceQuestion(
        type="single-choice",
        question_text="Which city is the capital of France?",
        options=["Berlin", "Paris", "Madrid"],
        correct_answer="Paris",
    )


@pytest.fixture
def multiple_question() -> MultipleChoiceQuestion:
    return MultipleChoiceQuestion(
        type="multiple-choice",
        question_text="Which of these are prime numbers?",
        options=["2", "3", "4", "6"],
        correct_answers=["2", "3"],
    )


@pytest.fixture
def matching_question() -> MatchingQuestion:
    return MatchingQuestion(
        type="matching",
        question_text="Match the countries with their capitals.",
        prompts=["France", "Germany"],
        options=["Paris", "Berlin"],
        correct_matches=[
            MatchingPair(prompt="France", option="Paris"),
            MatchingPair(prompt="Germany", option="Berlin"),
        ],
    )
