"""Question editing endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_workspace
from api.models.editable import (
    EditableFillInTheBlank,
    EditableQuestion,
    MatchUpdate,
    MultipleAnswerToggle,
    OptionCreate,
    OptionRename,
    QuestionUpdate,
    SingleAnswerUpdate,
)
from api.models.workspace import OptionResponse, QuestionResponse
from api.services.workspace_service import Workspace

router = APIRouter(prefix="/api/workspaces/{workspace_id}/questions", tags=["questions"])

WorkspaceDep = Annotated[Workspace, Depends(get_workspace)]


@router.get("")
def list_questions(workspace: WorkspaceDep) -> list[EditableQuestion]:
    """All questions of the workspace, in order."""
    return workspace.editor.items


@router.get("/{question_id}")
def get_question(question_id: str, workspace: WorkspaceDep) -> QuestionResponse:
    return QuestionResponse(question=workspace.editor.get(question_id))


@router.patch("/{question_id}")
def update_question(
    question_id: str,
    payload: QuestionUpdate,
    workspace: WorkspaceDep,
) -> QuestionResponse:
    """Update question text, selection flag and/or the fill-in-the-blank answer."""
    editor = workspace.editor
    question = editor.get(question_id)
    if payload.correct_answer is not None and not isinstance(question, EditableFillInTheBlank):
        raise HTTPException(
            status_code=400,
            detail="correctAnswer can only be set directly on fill-in-the-blank questions",
        )

    if payload.question_text is not None:
        question = editor.set_question_text(question_id, payload.question_text)
    if payload.selected is not None:
        question = editor.set_selected(question_id, payload.selected)
    if payload.correct_answer is not None:
        question = editor.set_fill_blank_answer(question_id, payload.correct_answer)
    return QuestionResponse(question=question)


@router.delete("/{question_id}")
def delete_question(question_id: str, workspace: WorkspaceDep) -> QuestionResponse:
    """Delete question from the collection."""
    return QuestionResponse(question=workspace.editor.delete_question(question_id))


@router.post("/{question_id}/options")
def add_option(
    question_id: str,
    workspace: WorkspaceDep,
    payload: OptionCreate | None = None,
) -> OptionResponse:
    """Append an option, or a prompt of a matching question."""
    is_prompt = payload.is_prompt if payload else False
    option = workspace.editor.add_option(question_id, is_prompt)
    return OptionResponse(question=workspace.editor.get(question_id), option=option)


@router.patch("/{question_id}/options/{item_id}")
def rename_option(
    question_id: str,
    item_id: str,
    payload: OptionRename,
    workspace: WorkspaceDep,
) -> QuestionResponse:
    """Rename an option or prompt; correct answers follow the new text."""
    question = workspace.editor.rename_item(question_id, item_id, payload.text, payload.is_prompt)
    return QuestionResponse(question=question)


@router.delete("/{question_id}/options/{item_id}")
def remove_option(
    question_id: str,
    item_id: str,
    workspace: WorkspaceDep,
    is_prompt: bool = False,
) -> QuestionResponse:
    """Remove an option or prompt (at least two must remain)."""
    question = workspace.editor.remove_option(question_id, item_id, is_prompt)
    return QuestionResponse(question=question)


@router.put("/{question_id}/answer")
def set_single_answer(
    question_id: str,
    payload: SingleAnswerUpdate,
    workspace: WorkspaceDep,
) -> QuestionResponse:
    """Choose the correct answer of a single-choice question."""
    question = workspace.editor.set_single_choice_answer(question_id, payload.option_text)
    return QuestionResponse(question=question)


@router.post("/{question_id}/answers")
def toggle_answer(
    question_id: str,
    payload: MultipleAnswerToggle,
    workspace: WorkspaceDep,
) -> QuestionResponse:
    """Mark or unmark one correct answer of a multiple-choice question."""
    question = workspace.editor.toggle_multiple_choice_answer(
        question_id, payload.option_text, payload.included
    )
    return QuestionResponse(question=question)


@router.put("/{question_id}/matches/{prompt_id}")
def set_match(
    question_id: str,
    prompt_id: str,
    payload: MatchUpdate,
    workspace: WorkspaceDep,
) -> QuestionResponse:
    """Set the option matched to a prompt."""
    question = workspace.editor.set_matching_pair(question_id, prompt_id, payload.option_text)
    return QuestionResponse(question=question)
