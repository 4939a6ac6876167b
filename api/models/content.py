"""Lecture content models."""
from enum import Enum

from pydantic import Field

from api.models.base import CamelModel


class ContentType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    PDF = "pdf"


class ContentItem(CamelModel):
    """One normalized lecture file, ready to be sent to the model."""

    file_name: str = Field(..., description="The name of the file.")
    content_type: ContentType = Field(..., description="The type of the lecture content.")
    raw_text_content: str | None = Field(
        default=None, description="Raw text content for text files."
    )
    content_data_uri: str | None = Field(
        default=None,
        description=(
            "Lecture content (image or PDF) as a data URI: "
            "'data:<mimetype>;base64,<encoded_data>'."
        ),
    )


class UploadedFileInfo(CamelModel):
    """Result of local extraction of one uploaded file."""

    file_name: str
    file_type: str
    file_size: int
    text_content: str | None = None
    data_uri: str | None = None
    error: str | None = None
