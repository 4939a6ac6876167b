"""Workspace, upload, analysis and generation endpoints."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from api.config import MAX_UPLOAD_BYTES
from api.dependencies import get_model_registry, get_workspace, get_workspace_store
from api.models.analysis import AnalyzeRequest
from api.models.content import ContentItem
from api.models.enums import ModelId
from api.models.questions import GenerateQuestionsRequest
from api.models.workspace import (
    AnalysisResponse,
    GenerationResponse,
    WorkspaceCreate,
    WorkspaceResponse,
)
from api.services.errors import LectureQuizError
from api.services.model_selector import ModelRegistry
from api.services.workspace_service import Workspace, WorkspaceStore, run_analysis, run_generation
from api.utils import read_upload, upload_name
from lecture_extract import extract_upload, to_content_items

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/workspaces", tags=["workspaces"])


@router.post("")
def create_workspace(
    store: Annotated[WorkspaceStore, Depends(get_workspace_store)],
    payload: WorkspaceCreate | None = None,
) -> WorkspaceResponse:
    """Create an empty workspace."""
    workspace = store.create(payload.selected_model if payload else None)
    return workspace.to_response()


@router.get("/{workspace_id}")
def get_workspace_state(workspace: Annotated[Workspace, Depends(get_workspace)]) -> WorkspaceResponse:
    """Current files, analysis and questions."""
    return workspace.to_response()


@router.delete("/{workspace_id}")
def delete_workspace(
    workspace_id: str,
    store: Annotated[WorkspaceStore, Depends(get_workspace_store)],
) -> dict[str, str]:
    store.delete(workspace_id)
    return {"status": "deleted"}


def _analyze(
    workspace: Workspace,
    items: list[ContentItem],
    preferred_model: ModelId | None,
    registry: ModelRegistry,
) -> AnalysisResponse:
    try:
        result, notice = run_analysis(workspace, items, preferred_model, registry)
    except LectureQuizError:
        raise
    except Exception as exc:
        log.exception("Error analyzing %d content item(s)", len(items))
        raise HTTPException(status_code=502, detail=f"Failed to analyze content: {exc}") from exc
    return AnalysisResponse(
        analysis=result,
        files=workspace.files,
        selected_model=workspace.selected_model,
        notice=notice,
    )


@router.post("/{workspace_id}/uploads")
def upload_files(
    workspace: Annotated[Workspace, Depends(get_workspace)],
    registry: Annotated[ModelRegistry, Depends(get_model_registry)],
    files: Annotated[list[UploadFile], File(...)],
    preferred_model: Annotated[ModelId | None, Form()] = None,
) -> AnalysisResponse:
    """Extract uploaded lecture files and analyze them as one batch."""
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")

    infos = [
        extract_upload(upload_name(upload), upload.content_type, read_upload(upload, MAX_UPLOAD_BYTES))
        for upload in files
    ]
    workspace.files = infos
    items = to_content_items(infos)
    return _analyze(workspace, items, preferred_model, registry)


@router.post("/{workspace_id}/analysis")
def analyze_contents(
    payload: AnalyzeRequest,
    workspace: Annotated[Workspace, Depends(get_workspace)],
    registry: Annotated[ModelRegistry, Depends(get_model_registry)],
) -> AnalysisResponse:
    """Analyze already-extracted content items."""
    workspace.files = []
    return _analyze(workspace, payload.contents, payload.preferred_model, registry)


@router.post("/{workspace_id}/questions/generate")
def generate_questions(
    payload: GenerateQuestionsRequest,
    workspace: Annotated[Workspace, Depends(get_workspace)],
    registry: Annotated[ModelRegistry, Depends(get_model_registry)],
) -> GenerationResponse:
    """Generate questions from the current analysis; replaces the question list."""
    try:
        result, notice = run_generation(workspace, payload, registry)
    except LectureQuizError:
        raise
    except Exception as exc:
        log.exception("Error generating %s questions", payload.question_type.value)
        raise HTTPException(status_code=502, detail=f"Failed to generate questions: {exc}") from exc
    return GenerationResponse(
        questions=workspace.editor.items,
        used_model=result.used_model,
        fallback_used=result.fallback_used,
        selected_model=workspace.selected_model,
        notice=notice,
    )
