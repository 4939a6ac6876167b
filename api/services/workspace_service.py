"""In-memory workspaces: the live analysis result and question collection.

Nothing is persisted. A workspace holds at most one analysis result and one
editable question collection; each is replaced wholesale when a new task
completes.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Sequence

from api.models.analysis import AnalysisResult
from api.models.content import ContentItem, UploadedFileInfo
from api.models.enums import MODEL_LABELS, ModelId
from api.models.questions import GenerateQuestionsRequest
from api.models.workspace import WorkspaceResponse
from api.services import analysis_service, question_service
from api.services.editor_service import QuestionEditor, build_editable_questions
from api.services.errors import ContentValidationError, WorkspaceNotFoundError
from api.services.model_selector import ModelRegistry, default_model
from api.utils.time_utils import utc_now

log = logging.getLogger(__name__)


def fallback_notice(requested: ModelId, used: ModelId) -> str:
    return f"Модель «{MODEL_LABELS[requested]}» не отвечает — использована «{MODEL_LABELS[used]}»."


@dataclass
class Workspace:
    id: str
    selected_model: ModelId
    created_at: str = field(default_factory=utc_now)
    files: list[UploadedFileInfo] = field(default_factory=list)
    analysis: AnalysisResult | None = None
    editor: QuestionEditor = field(default_factory=QuestionEditor)

    def to_response(self) -> WorkspaceResponse:
        return WorkspaceResponse(
            id=self.id,
            created_at=self.created_at,
            selected_model=self.selected_model,
            files=self.files,
            analysis=self.analysis,
            questions=self.editor.items,
        )


class WorkspaceStore:
    def __init__(self) -> None:
        self._workspaces: dict[str, Workspace] = {}

    def create(self, selected_model: ModelId | None = None) -> Workspace:
        workspace = Workspace(id=uuid.uuid4().hex, selected_model=selected_model or default_model())
        self._workspaces[workspace.id] = workspace
        log.info("Created workspace %s", workspace.id)
        return workspace

    def get(self, workspace_id: str) -> Workspace:
        try:
            return self._workspaces[workspace_id]
        except KeyError:
            raise WorkspaceNotFoundError(f"Workspace '{workspace_id}' not found") from None

    def delete(self, workspace_id: str) -> None:
        self.get(workspace_id)
        del self._workspaces[workspace_id]


_store = WorkspaceStore()


def get_store() -> WorkspaceStore:
    return _store


def run_analysis(
    workspace: Workspace,
    items: Sequence[ContentItem],
    preferred_model: ModelId | None = None,
    registry: ModelRegistry | None = None,
) -> tuple[AnalysisResult, str | None]:
    """Analyze a new batch; previous analysis and questions are discarded first."""
    workspace.analysis = None
    workspace.editor.replace_all([])

    requested = preferred_model or workspace.selected_model
    result = analysis_service.analyze(items, requested, registry)
    workspace.analysis = result

    notice = None
    if result.fallback_used:
        workspace.selected_model = result.used_model
        notice = fallback_notice(requested, result.used_model)
    return result, notice


def run_generation(
    workspace: Workspace,
    request: GenerateQuestionsRequest,
    registry: ModelRegistry | None = None,
) -> tuple[question_service.QuestionGenerationResult, str | None]:
    """Generate questions from the workspace summary and replace the collection."""
    if workspace.analysis is None or not workspace.analysis.summary:
        raise ContentValidationError("No analysis data to generate questions from.")

    workspace.editor.replace_all([])
    requested = request.preferred_model or workspace.selected_model
    result = question_service.generate(
        workspace.analysis.summary,
        request.number_of_questions,
        request.difficulty,
        request.question_type,
        requested,
        registry,
    )
    workspace.editor.replace_all(build_editable_questions(result.questions))

    notice = None
    if result.fallback_used:
        workspace.selected_model = result.used_model
        notice = fallback_notice(requested, result.used_model)
    return result, notice
