import logging

import pytest

from api.models.enums import Difficulty, ModelId, QuestionType
from api.models.questions import (
    FillInTheBlankSet,
    MatchingSet,
    MultipleChoiceSet,
    SingleChoiceSet,
    question_set_schema,
)
from api.services import question_service
from api.services.errors import ContentValidationError

SUMMARY = "France is a country in Europe. Its capital is Paris."


@pytest.mark.parametrize(
    ("question_type", "schema"),
    [
        (QuestionType.FILL_IN_THE_BLANK, FillInTheBlankSet),
        (QuestionType.SINGLE_CHOICE, SingleChoiceSet),
        (QuestionType.MULTIPLE_CHOICE, MultipleChoiceSet),
        (QuestionType.MATCHING, MatchingSet),
        ("matching", MatchingSet),
    ],
)
def test_schema_per_question_type(question_type, schema) -> None:
    assert question_set_schema(question_type) is schema


def test_unknown_question_type() -> None:
    with pytest.raises(ValueError, match="Unsupported question type: essay"):
        question_set_schema("essay")
    with pytest.raises(ContentValidationError):
        question_service.generate(SUMMARY, 3, Difficulty.EASY, "essay")


def test_generate_requests_type_schema(make_registry, single_question) -> None:
    registry = make_registry(default=SingleChoiceSet(questions=[single_question]))
    result = question_service.generate(
        SUMMARY, 1, Difficulty.HARD, QuestionType.SINGLE_CHOICE, ModelId.FLASH, registry
    )

    assert result.questions == [single_question]
    assert result.used_model is ModelId.FLASH
    assert result.fallback_used is False

    (prompt,), schema = registry.get(ModelId.FLASH).calls[0]
    assert schema is SingleChoiceSet
    assert SUMMARY in prompt
    assert "single-choice" in prompt
    assert "hard" in prompt


def test_generate_validates_input(make_registry) -> None:
    registry = make_registry()
    with pytest.raises(ContentValidationError):
        question_service.generate("   ", 3, Difficulty.EASY, QuestionType.MATCHING, registry=registry)
    with pytest.raises(ContentValidationError):
        question_service.generate(SUMMARY, 0, Difficulty.EASY, QuestionType.MATCHING, registry=registry)
    with pytest.raises(ContentValidationError):
        question_service.generate(SUMMARY, 3, "impossible", QuestionType.MATCHING, registry=registry)
    assert all(not registry.get(model_id).calls for model_id in registry.order)


def test_generate_falls_back_and_logs(make_registry, fill_question, caplog: pytest.LogCaptureFixture) -> None:
    registry = make_registry(
        {
            ModelId.FLASH: RuntimeError("503 Service Unavailable"),
            ModelId.FLASH_LITE: FillInTheBlankSet(questions=[fill_question, fill_question]),
        }
    )
    with caplog.at_level(logging.INFO):
        result = question_service.generate(
            SUMMARY, 3, Difficulty.MEDIUM, QuestionType.FILL_IN_THE_BLANK, ModelId.FLASH, registry
        )

    assert result.used_model is ModelId.FLASH_LITE
    assert result.fallback_used is True
    assert len(result.questions) == 2
    assert "question generation (fill-in-the-blank)" in caplog.text
    assert "Requested 3 questions, model returned 2" in caplog.text


def test_generate_does_not_retry_bad_request(make_registry) -> None:
    registry = make_registry({ModelId.FLASH_LITE: RuntimeError("400 invalid argument")})
    with pytest.raises(RuntimeError, match="400"):
        question_service.generate(SUMMARY, 2, Difficulty.EASY, QuestionType.MATCHING, ModelId.FLASH_LITE, registry)
    assert not registry.get(ModelId.FLASH).calls
