"""Editable question items.

Options and prompts get a synthetic ``id`` so that they keep their identity
while their text is edited. Correct answers are stored by text; matching
pairs are stored as ``{prompt text: option text}``.
"""
from typing import Annotated, Literal, Union

from pydantic import Field

from api.models.base import CamelModel
from api.models.questions import (
    FillInTheBlankQuestion,
    MatchingQuestion,
    MultipleChoiceQuestion,
    SingleChoiceQuestion,
)


class EditableOption(CamelModel):
    id: str
    text: str


class _EditableBase(CamelModel):
    id: str
    selected: bool = True
    edited_question_text: str


class EditableFillInTheBlank(_EditableBase):
    type: Literal["fill-in-the-blank"] = "fill-in-the-blank"
    original_question: FillInTheBlankQuestion
    edited_correct_answer: str


class EditableSingleChoice(_EditableBase):
    type: Literal["single-choice"] = "single-choice"
    original_question: SingleChoiceQuestion
    edited_options: list[EditableOption]
    edited_correct_answer: str


class EditableMultipleChoice(_EditableBase):
    type: Literal["multiple-choice"] = "multiple-choice"
    original_question: MultipleChoiceQuestion
    edited_options: list[EditableOption]
    edited_correct_answers: list[str]


class EditableMatching(_EditableBase):
    type: Literal["matching"] = "matching"
    original_question: MatchingQuestion
    edited_prompts: list[EditableOption]
    edited_options: list[EditableOption]
    edited_correct_matches: dict[str, str] = Field(default_factory=dict)


EditableQuestion = Annotated[
    Union[EditableFillInTheBlank, EditableSingleChoice, EditableMultipleChoice, EditableMatching],
    Field(discriminator="type"),
]


# Request bodies for edit routes


class QuestionUpdate(CamelModel):
    question_text: str | None = None
    selected: bool | None = None
    correct_answer: str | None = None


class OptionCreate(CamelModel):
    is_prompt: bool = False


class OptionRename(CamelModel):
    text: str
    is_prompt: bool = False


class SingleAnswerUpdate(CamelModel):
    option_text: str


class MultipleAnswerToggle(CamelModel):
    option_text: str
    included: bool


class MatchUpdate(CamelModel):
    option_text: str
