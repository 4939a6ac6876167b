from __future__ import annotations

import re
from typing import Any, Iterable

from api.models.editable import (
    EditableFillInTheBlank,
    EditableMatching,
    EditableMultipleChoice,
    EditableQuestion,
    EditableSingleChoice,
)
from api.models.questions import (
    FillInTheBlankQuestion,
    GeneratedQuestion,
    MatchingPair,
    MatchingQuestion,
    MultipleChoiceQuestion,
    SingleChoiceQuestion,
)
from api.utils.json_utils import json_dump


GIFT_TITLE = "::Вопрос {index}::"
GIFT_BLANK = "___"
GIFT_SPECIAL_CHARS = re.compile(r"([~=#{}])")


def to_generated(item: EditableQuestion) -> GeneratedQuestion:
    """Project an editable item back to a plain generated question.

    Built without validation: edits may legitimately leave a question outside
    the generation bounds (e.g. a choice question with two options).
    """
    if isinstance(item, EditableFillInTheBlank):
        return FillInTheBlankQuestion.model_construct(
            type=item.type,
            question_text=item.edited_question_text,
            correct_answer=item.edited_correct_answer,
        )
    if isinstance(item, EditableSingleChoice):
        return SingleChoiceQuestion.model_construct(
            type=item.type,
            question_text=item.edited_question_text,
            options=[option.text for option in item.edited_options],
            correct_answer=item.edited_correct_answer,
        )
    if isinstance(item, EditableMultipleChoice):
        return MultipleChoiceQuestion.model_construct(
            type=item.type,
            question_text=item.edited_question_text,
            options=[option.text for option in item.edited_options],
            correct_answers=list(item.edited_correct_answers),
        )
    if isinstance(item, EditableMatching):
        return MatchingQuestion.model_construct(
            type=item.type,
            question_text=item.edited_question_text,
            prompts=[prompt.text for prompt in item.edited_prompts],
            options=[option.text for option in item.edited_options],
            correct_matches=[
                MatchingPair(prompt=prompt, option=option)
                for prompt, option in item.edited_correct_matches.items()
            ],
        )
    raise TypeError(f"Unsupported editable question: {type(item).__name__}")


def selected_questions(items: Iterable[EditableQuestion]) -> list[GeneratedQuestion]:
    """Selected items, in collection order, as plain generated questions."""
    return [to_generated(item) for item in items if item.selected]


def questions_payload(questions: list[GeneratedQuestion]) -> dict[str, Any]:
    return {"questions": [question.model_dump(mode="json", by_alias=True) for question in questions]}


def serialize_questions_json(questions: list[GeneratedQuestion]) -> str:
    return json_dump(questions_payload(questions))


def escape_gift(text: str) -> str:
    return GIFT_SPECIAL_CHARS.sub(r"\\\1", text)


def format_weight(weight: float) -> str:
    if float(weight).is_integer():
        return str(int(weight))
    return repr(float(weight))


def _gift_body(question: GeneratedQuestion) -> str:
    text = escape_gift(question.question_text)

    if isinstance(question, FillInTheBlankQuestion):
        return text.replace(GIFT_BLANK, f"{{={escape_gift(question.correct_answer)}}}", 1)

    if isinstance(question, SingleChoiceQuestion):
        answers = " ".join(
            f"={escape_gift(option)}" if option == question.correct_answer else f"~{escape_gift(option)}"
            for option in question.options
        )
        return f"{text} {{{answers}}}"

    if isinstance(question, MultipleChoiceQuestion):
        correct = question.correct_answers
        weight = format_weight(100 / len(correct)) if correct else "0"
        answers = " ".join(
            f"~%{weight if option in correct else '0'}%{escape_gift(option)}"
            for option in question.options
        )
        return f"{text} {{{answers}}}"

    if isinstance(question, MatchingQuestion):
        pairs = " ".join(
            f"={escape_gift(pair.prompt)} -> {escape_gift(pair.option)}"
            for pair in question.correct_matches
        )
        return f"{text} {{{pairs}}}"

    raise TypeError(f"Unsupported question type for GIFT format: {getattr(question, 'type', question)}")


def serialize_questions_gift(questions: list[GeneratedQuestion]) -> str:
    """Render questions in the GIFT quiz markup, one block per question."""
    return "\n\n".join(
        f"{GIFT_TITLE.format(index=index)}{_gift_body(question)}"
        for index, question in enumerate(questions, start=1)
    )
