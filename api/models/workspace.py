"""Workspace request/response models."""
from pydantic import Field

from api.models.analysis import AnalysisResult
from api.models.base import CamelModel
from api.models.content import UploadedFileInfo
from api.models.editable import EditableOption, EditableQuestion
from api.models.enums import ModelId


class ModelInfo(CamelModel):
    id: ModelId
    label: str
    is_default: bool = False


class WorkspaceCreate(CamelModel):
    selected_model: ModelId | None = None


class WorkspaceResponse(CamelModel):
    id: str
    created_at: str
    selected_model: ModelId
    files: list[UploadedFileInfo] = Field(default_factory=list)
    analysis: AnalysisResult | None = None
    questions: list[EditableQuestion] = Field(default_factory=list)


class AnalysisResponse(CamelModel):
    analysis: AnalysisResult
    files: list[UploadedFileInfo] = Field(default_factory=list)
    selected_model: ModelId
    notice: str | None = None


class GenerationResponse(CamelModel):
    questions: list[EditableQuestion]
    used_model: ModelId
    fallback_used: bool
    selected_model: ModelId
    notice: str | None = None


class QuestionResponse(CamelModel):
    question: EditableQuestion


class OptionResponse(CamelModel):
    question: EditableQuestion
    option: EditableOption
