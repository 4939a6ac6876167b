"""Pydantic models."""
from api.models.analysis import AnalysisOutput, AnalysisResult, AnalyzeRequest
from api.models.content import ContentItem, ContentType, UploadedFileInfo
from api.models.editable import (
    EditableFillInTheBlank,
    EditableMatching,
    EditableMultipleChoice,
    EditableOption,
    EditableQuestion,
    EditableSingleChoice,
)
from api.models.enums import Difficulty, ModelId, QuestionType
from api.models.questions import (
    FillInTheBlankQuestion,
    GeneratedQuestion,
    GenerateQuestionsRequest,
    MatchingPair,
    MatchingQuestion,
    MultipleChoiceQuestion,
    SingleChoiceQuestion,
)

__all__ = [
    "AnalysisOutput",
    "AnalysisResult",
    "AnalyzeRequest",
    "ContentItem",
    "ContentType",
    "Difficulty",
    "EditableFillInTheBlank",
    "EditableMatching",
    "EditableMultipleChoice",
    "EditableOption",
    "EditableQuestion",
    "EditableSingleChoice",
    "FillInTheBlankQuestion",
    "GenerateQuestionsRequest",
    "GeneratedQuestion",
    "MatchingPair",
    "MatchingQuestion",
    "ModelId",
    "QuestionType",
    "SingleChoiceQuestion",
    "UploadedFileInfo",
]
