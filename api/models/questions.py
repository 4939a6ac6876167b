"""Generated question contracts.

Each question type is its own model; ``GeneratedQuestion`` is the tagged
union over ``type``. Question-set schemas are built per type so that the
model can only emit the variant that was requested.
"""
from typing import Annotated, Literal, Union

from pydantic import Field

from api.config import DEFAULT_QUESTION_COUNT, MAX_QUESTIONS
from api.models.base import CamelModel
from api.models.enums import Difficulty, ModelId, QuestionType


class FillInTheBlankQuestion(CamelModel):
    type: Literal["fill-in-the-blank"] = Field(..., description="The type of the question.")
    question_text: str = Field(
        ...,
        description="The main text of the question, with '___' as a placeholder for the blank space.",
    )
    correct_answer: str = Field(
        ..., description="The word or phrase that correctly fills the blank."
    )


class SingleChoiceQuestion(CamelModel):
    type: Literal["single-choice"] = Field(..., description="The type of the question.")
    question_text: str = Field(..., description="The main text of the question.")
    options: list[str] = Field(
        ..., min_length=3, max_length=5, description="An array of 3 to 5 unique answer options."
    )
    correct_answer: str = Field(
        ...,
        description="The single correct answer, which must exactly match one of the provided options.",
    )


class MultipleChoiceQuestion(CamelModel):
    type: Literal["multiple-choice"] = Field(..., description="The type of the question.")
    question_text: str = Field(..., description="The main text of the question.")
    options: list[str] = Field(
        ..., min_length=3, max_length=5, description="An array of 3 to 5 unique answer options."
    )
    correct_answers: list[str] = Field(
        ...,
        min_length=2,
        description="AT LEAST TWO correct answers, each must exactly match one of the provided options.",
    )


class MatchingPair(CamelModel):
    prompt: str = Field(..., description="An item from the 'prompts' array.")
    option: str = Field(..., description="The matching item from the 'options' array.")


class MatchingQuestion(CamelModel):
    type: Literal["matching"] = Field(..., description="The type of the question.")
    question_text: str = Field(..., description="The main text of the question.")
    prompts: list[str] = Field(
        ..., min_length=2, max_length=8, description="An array of 2 to 8 items to be matched."
    )
    options: list[str] = Field(
        ..., min_length=2, max_length=8, description="An array of 2 to 8 unique options to match from."
    )
    correct_matches: list[MatchingPair] = Field(
        ...,
        description="Each object is a correct pair of a prompt and an option.",
    )


GeneratedQuestion = Annotated[
    Union[FillInTheBlankQuestion, SingleChoiceQuestion, MultipleChoiceQuestion, MatchingQuestion],
    Field(discriminator="type"),
]


class FillInTheBlankSet(CamelModel):
    questions: list[FillInTheBlankQuestion] = Field(
        ..., description="An array of generated test questions."
    )


class SingleChoiceSet(CamelModel):
    questions: list[SingleChoiceQuestion] = Field(
        ..., description="An array of generated test questions."
    )


class MultipleChoiceSet(CamelModel):
    questions: list[MultipleChoiceQuestion] = Field(
        ..., description="An array of generated test questions."
    )


class MatchingSet(CamelModel):
    questions: list[MatchingQuestion] = Field(
        ..., description="An array of generated test questions."
    )


QUESTION_SET_SCHEMAS: dict[QuestionType, type[CamelModel]] = {
    QuestionType.FILL_IN_THE_BLANK: FillInTheBlankSet,
    QuestionType.SINGLE_CHOICE: SingleChoiceSet,
    QuestionType.MULTIPLE_CHOICE: MultipleChoiceSet,
    QuestionType.MATCHING: MatchingSet,
}


def question_set_schema(question_type: QuestionType | str) -> type[CamelModel]:
    """Output schema for a generation call of the given question type."""
    try:
        return QUESTION_SET_SCHEMAS[QuestionType(question_type)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported question type: {question_type}") from None


class GenerateQuestionsRequest(CamelModel):
    number_of_questions: int = Field(default=DEFAULT_QUESTION_COUNT, ge=1, le=MAX_QUESTIONS)
    difficulty: Difficulty = Difficulty.MEDIUM
    question_type: QuestionType
    preferred_model: ModelId | None = None
