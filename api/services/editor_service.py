"""Editable question collection and its edit operations.

Every operation finds the question by id, builds a replacement copy and
swaps it into a new list; items are never mutated in place. Bounds on
options and prompts are checked before anything changes, so a rejected
operation leaves the collection exactly as it was.

Correct answers are kept by text, so renaming or removing an option must
carry the change over to ``edited_correct_answer(s)`` and, for matching
questions, to the ``{prompt text: option text}`` map.
"""
from __future__ import annotations

import logging
import uuid
from typing import Iterable, Sequence

from api.models.editable import (
    EditableFillInTheBlank,
    EditableMatching,
    EditableMultipleChoice,
    EditableOption,
    EditableQuestion,
    EditableSingleChoice,
)
from api.models.questions import (
    FillInTheBlankQuestion,
    GeneratedQuestion,
    MatchingQuestion,
    MultipleChoiceQuestion,
    SingleChoiceQuestion,
)
from api.services.errors import (
    OptionLimitError,
    OptionNotFoundError,
    QuestionNotFoundError,
    QuestionTypeMismatchError,
)

log = logging.getLogger(__name__)

MIN_ITEMS = 2
MAX_CHOICE_OPTIONS = 5
MAX_MATCHING_ITEMS = 8

ChoiceQuestion = (EditableSingleChoice, EditableMultipleChoice)


def new_id() -> str:
    return uuid.uuid4().hex


def _editable_options(texts: Iterable[str]) -> list[EditableOption]:
    return [EditableOption(id=new_id(), text=text) for text in texts]


def to_editable(question: GeneratedQuestion) -> EditableQuestion | None:
    """Wrap one generated question; unknown types are logged and dropped."""
    if not isinstance(
        question, (FillInTheBlankQuestion, SingleChoiceQuestion, MultipleChoiceQuestion, MatchingQuestion)
    ):
        log.error("Unknown question type from model: %r", getattr(question, "type", question))
        return None

    base = {"id": new_id(), "selected": True, "edited_question_text": question.question_text}
    if isinstance(question, FillInTheBlankQuestion):
        return EditableFillInTheBlank(
            **base,
            original_question=question,
            edited_correct_answer=question.correct_answer,
        )
    if isinstance(question, SingleChoiceQuestion):
        return EditableSingleChoice(
            **base,
            original_question=question,
            edited_options=_editable_options(question.options),
            edited_correct_answer=question.correct_answer,
        )
    if isinstance(question, MultipleChoiceQuestion):
        return EditableMultipleChoice(
            **base,
            original_question=question,
            edited_options=_editable_options(question.options),
            edited_correct_answers=list(question.correct_answers),
        )
    return EditableMatching(
        **base,
        original_question=question,
        edited_prompts=_editable_options(question.prompts),
        edited_options=_editable_options(question.options),
        edited_correct_matches={pair.prompt: pair.option for pair in question.correct_matches},
    )


def build_editable_questions(questions: Iterable[GeneratedQuestion]) -> list[EditableQuestion]:
    editable = (to_editable(question) for question in questions)
    return [item for item in editable if item is not None]


def _find_item(items: Sequence[EditableOption], item_id: str) -> EditableOption:
    for item in items:
        if item.id == item_id:
            return item
    raise OptionNotFoundError(f"Option '{item_id}' not found")


def _renamed(items: Sequence[EditableOption], item_id: str, new_text: str) -> list[EditableOption]:
    return [item.model_copy(update={"text": new_text}) if item.id == item_id else item for item in items]


class QuestionEditor:
    """Owns the live list of editable questions."""

    def __init__(self, items: Iterable[EditableQuestion] = ()):
        self._items: list[EditableQuestion] = list(items)

    @property
    def items(self) -> list[EditableQuestion]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def replace_all(self, items: Iterable[EditableQuestion]) -> None:
        self._items = list(items)

    def get(self, question_id: str) -> EditableQuestion:
        for item in self._items:
            if item.id == question_id:
                return item
        raise QuestionNotFoundError(f"Question '{question_id}' not found")

    def _get_typed(self, question_id: str, expected: type | tuple[type, ...], operation: str):
        item = self.get(question_id)
        if not isinstance(item, expected):
            raise QuestionTypeMismatchError(f"Cannot {operation} on a '{item.type}' question")
        return item

    def _replace(self, updated: EditableQuestion) -> EditableQuestion:
        self._items = [updated if item.id == updated.id else item for item in self._items]
        return updated

    # -- plain field edits -------------------------------------------------

    def set_question_text(self, question_id: str, text: str) -> EditableQuestion:
        item = self.get(question_id)
        return self._replace(item.model_copy(update={"edited_question_text": text}))

    def set_selected(self, question_id: str, selected: bool) -> EditableQuestion:
        item = self.get(question_id)
        return self._replace(item.model_copy(update={"selected": selected}))

    def set_fill_blank_answer(self, question_id: str, answer: str) -> EditableQuestion:
        item = self._get_typed(question_id, EditableFillInTheBlank, "set the blank answer")
        return self._replace(item.model_copy(update={"edited_correct_answer": answer}))

    # -- renames -----------------------------------------------------------

    def rename_option(self, question_id: str, option_id: str, new_text: str) -> EditableQuestion:
        """Rename a choice option and carry the rename over to the answers."""
        item = self._get_typed(question_id, ChoiceQuestion, "rename a choice option")
        old_text = _find_item(item.edited_options, option_id).text
        update: dict[str, object] = {"edited_options": _renamed(item.edited_options, option_id, new_text)}

        if isinstance(item, EditableSingleChoice):
            if item.edited_correct_answer == old_text:
                update["edited_correct_answer"] = new_text
        elif old_text in item.edited_correct_answers:
            update["edited_correct_answers"] = [
                new_text if answer == old_text else answer for answer in item.edited_correct_answers
            ]
        return self._replace(item.model_copy(update=update))

    def rename_prompt_or_option(
        self, question_id: str, item_id: str, new_text: str, is_prompt: bool
    ) -> EditableQuestion:
        """Rename a matching prompt or option and repair the match map."""
        item = self._get_typed(question_id, EditableMatching, "rename a matching item")
        matches = dict(item.edited_correct_matches)

        if is_prompt:
            old_text = _find_item(item.edited_prompts, item_id).text
            if old_text in matches:
                matches[new_text] = matches.pop(old_text)
            update = {"edited_prompts": _renamed(item.edited_prompts, item_id, new_text)}
        else:
            old_text = _find_item(item.edited_options, item_id).text
            matches = {prompt: new_text if option == old_text else option for prompt, option in matches.items()}
            update = {"edited_options": _renamed(item.edited_options, item_id, new_text)}

        update["edited_correct_matches"] = matches
        return self._replace(item.model_copy(update=update))

    def rename_item(
        self, question_id: str, item_id: str, new_text: str, is_prompt: bool = False
    ) -> EditableQuestion:
        if isinstance(self.get(question_id), EditableMatching):
            return self.rename_prompt_or_option(question_id, item_id, new_text, is_prompt)
        if is_prompt:
            raise QuestionTypeMismatchError("Only matching questions have prompts")
        return self.rename_option(question_id, item_id, new_text)

    # -- correct answers ---------------------------------------------------

    def set_single_choice_answer(self, question_id: str, option_text: str) -> EditableQuestion:
        item = self._get_typed(question_id, EditableSingleChoice, "set a single correct answer")
        return self._replace(item.model_copy(update={"edited_correct_answer": option_text}))

    def toggle_multiple_choice_answer(
        self, question_id: str, option_text: str, included: bool
    ) -> EditableQuestion:
        item = self._get_typed(question_id, EditableMultipleChoice, "toggle a correct answer")
        answers = [answer for answer in item.edited_correct_answers if answer != option_text]
        if included:
            answers.append(option_text)
        return self._replace(item.model_copy(update={"edited_correct_answers": answers}))

    def set_matching_pair(self, question_id: str, prompt_id: str, option_text: str) -> EditableQuestion:
        item = self._get_typed(question_id, EditableMatching, "set a matching pair")
        prompt_text = _find_item(item.edited_prompts, prompt_id).text
        matches = {**item.edited_correct_matches, prompt_text: option_text}
        return self._replace(item.model_copy(update={"edited_correct_matches": matches}))

    # -- structural edits --------------------------------------------------

    def add_option(self, question_id: str, is_prompt: bool = False) -> EditableOption:
        """Append an option (or matching prompt) with placeholder text."""
        item = self.get(question_id)
        if isinstance(item, EditableMatching):
            field = "edited_prompts" if is_prompt else "edited_options"
            limit = MAX_MATCHING_ITEMS
        elif isinstance(item, ChoiceQuestion):
            if is_prompt:
                raise QuestionTypeMismatchError("Only matching questions have prompts")
            field = "edited_options"
            limit = MAX_CHOICE_OPTIONS
        else:
            raise QuestionTypeMismatchError(f"Cannot add options to a '{item.type}' question")

        current: list[EditableOption] = getattr(item, field)
        noun = "элементов" if is_prompt else "вариантов"
        if len(current) >= limit:
            raise OptionLimitError(f"Максимум {noun}", f"Можно добавить не более {limit} {noun}.")

        placeholder = "Новый элемент" if is_prompt else "Новый вариант"
        option = EditableOption(id=new_id(), text=f"{placeholder} {len(current) + 1}")
        self._replace(item.model_copy(update={field: [*current, option]}))
        return option

    def remove_option(self, question_id: str, item_id: str, is_prompt: bool = False) -> EditableQuestion:
        """Remove an option (or matching prompt) and repair the correct answers."""
        item = self.get(question_id)
        if isinstance(item, ChoiceQuestion):
            if is_prompt:
                raise QuestionTypeMismatchError("Only matching questions have prompts")
            return self._remove_choice_option(item, item_id)
        if isinstance(item, EditableMatching):
            return self._remove_matching_item(item, item_id, is_prompt)
        raise QuestionTypeMismatchError(f"Cannot remove options from a '{item.type}' question")

    def _remove_choice_option(self, item, option_id: str) -> EditableQuestion:
        if len(item.edited_options) <= MIN_ITEMS:
            raise OptionLimitError(
                "Минимум вариантов", f"Должно быть не менее {MIN_ITEMS} вариантов ответа."
            )
        removed = _find_item(item.edited_options, option_id)
        options = [option for option in item.edited_options if option.id != option_id]
        update: dict[str, object] = {"edited_options": options}

        if isinstance(item, EditableSingleChoice):
            if item.edited_correct_answer == removed.text:
                update["edited_correct_answer"] = options[0].text if options else ""
        elif removed.text in item.edited_correct_answers:
            update["edited_correct_answers"] = [
                answer for answer in item.edited_correct_answers if answer != removed.text
            ]
        return self._replace(item.model_copy(update=update))

    def _remove_matching_item(self, item: EditableMatching, item_id: str, is_prompt: bool) -> EditableQuestion:
        field = "edited_prompts" if is_prompt else "edited_options"
        current: list[EditableOption] = getattr(item, field)
        noun = "элементов" if is_prompt else "вариантов"
        if len(current) <= MIN_ITEMS:
            raise OptionLimitError("Минимум элементов", f"Должно быть не менее {MIN_ITEMS} {noun}.")

        removed = _find_item(current, item_id)
        if is_prompt:
            matches = {p: o for p, o in item.edited_correct_matches.items() if p != removed.text}
        else:
            matches = {p: o for p, o in item.edited_correct_matches.items() if o != removed.text}
        return self._replace(
            item.model_copy(
                update={
                    field: [entry for entry in current if entry.id != item_id],
                    "edited_correct_matches": matches,
                }
            )
        )

    def delete_question(self, question_id: str) -> EditableQuestion:
        item = self.get(question_id)
        self._items = [entry for entry in self._items if entry.id != question_id]
        return item
