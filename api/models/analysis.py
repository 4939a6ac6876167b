"""Analysis task contracts."""
from pydantic import Field

from api.models.base import CamelModel
from api.models.content import ContentItem
from api.models.enums import ModelId


class AnalysisOutput(CamelModel):
    """Output schema the model must conform to."""

    key_concepts: list[str] = Field(
        ..., description="Key concepts identified from all lecture contents."
    )
    themes: list[str] = Field(
        ..., description="Main themes identified from all lecture contents."
    )
    summary: str = Field(
        ..., description="A brief combined summary of all lecture contents."
    )


class AnalysisResult(AnalysisOutput):
    """Model output plus which model actually produced it."""

    used_model: ModelId
    fallback_used: bool = False


class AnalyzeRequest(CamelModel):
    contents: list[ContentItem] = Field(..., min_length=1)
    preferred_model: ModelId | None = None
