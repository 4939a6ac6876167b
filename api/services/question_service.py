"""Test question generation."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from api.config import MAX_QUESTIONS
from api.models.enums import Difficulty, ModelId, QuestionType
from api.models.questions import GeneratedQuestion, question_set_schema
from api.services.errors import ContentValidationError
from api.services.model_selector import ModelRegistry, default_model, get_registry, run_with_fallback
from api.services.prompts import build_question_prompt

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuestionGenerationResult:
    questions: list[GeneratedQuestion]
    used_model: ModelId
    fallback_used: bool


def generate(
    lecture_content: str,
    number_of_questions: int,
    difficulty: Difficulty | str,
    question_type: QuestionType | str,
    preferred_model: ModelId | None = None,
    registry: ModelRegistry | None = None,
) -> QuestionGenerationResult:
    """Generate questions of one type; the output schema is chosen per call."""
    if not lecture_content or not lecture_content.strip():
        raise ContentValidationError("Lecture content is required to generate questions.")
    if not 1 <= number_of_questions <= MAX_QUESTIONS:
        raise ContentValidationError(
            f"Number of questions must be between 1 and {MAX_QUESTIONS}, got {number_of_questions}."
        )
    try:
        question_type = QuestionType(question_type)
        difficulty = Difficulty(difficulty)
    except ValueError as exc:
        raise ContentValidationError(str(exc)) from exc

    schema = question_set_schema(question_type)
    prompt = build_question_prompt(lecture_content, number_of_questions, difficulty, question_type)
    registry = registry or get_registry()
    preferred = preferred_model or default_model()

    log.info(
        "Generating %d %s question(s) of %s difficulty, preferred model %s",
        number_of_questions,
        question_type.value,
        difficulty.value,
        preferred.value,
    )

    def task(model_id: ModelId):
        return registry.get(model_id).generate([prompt], schema)

    outcome = run_with_fallback(
        task,
        preferred,
        registry.order,
        label=f"question generation ({question_type.value})",
    )
    questions = list(outcome.result.questions)
    if len(questions) != number_of_questions:
        log.info("Requested %d questions, model returned %d", number_of_questions, len(questions))
    return QuestionGenerationResult(
        questions=questions,
        used_model=outcome.used_model,
        fallback_used=outcome.fallback_used,
    )
