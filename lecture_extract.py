from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Iterable

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table
from docx.text.paragraph import Paragraph
from PIL import Image, UnidentifiedImageError

from api.config import MAX_UPLOAD_BYTES
from api.models.content import ContentItem, ContentType, UploadedFileInfo
from api.services.errors import NoAnalyzableFilesError
from api.utils.data_uri import to_data_uri

log = logging.getLogger(__name__)

TEXT_EXTENSIONS = {".txt", ".md"}
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".bmp"}
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"
PDF_MIME = "application/pdf"

W_NS = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("cp1251", errors="replace")


def docx_to_text(data: bytes) -> str:
    """
    Plain text of a .docx document: paragraphs and table rows in body order,
    table cells separated by tabs.
    """
    document = Document(io.BytesIO(data))
    lines: list[str] = []
    for block in document.element.body.iterchildren():
        if block.tag == f"{W_NS}p":
            lines.append(Paragraph(block, document).text)
        elif block.tag == f"{W_NS}tbl":
            table = Table(block, document)
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                lines.append("\t".join(cells))
    return "\n".join(lines).strip()


def image_to_data_uri(data: bytes, fallback_mime: str) -> tuple[str, str]:
    """Verify image bytes with Pillow; returns (detected MIME type, data URI)."""
    with Image.open(io.BytesIO(data)) as img:
        image_format = img.format
        img.verify()
    mime = Image.MIME.get(image_format or "", fallback_mime)
    return mime, to_data_uri(data, mime)


def extract_upload(
    file_name: str,
    mime_type: str | None,
    data: bytes,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> UploadedFileInfo:
    """
    Turn one uploaded file into text or a data URI. Problems are reported in
    ``error`` so that one bad file does not sink the whole batch.
    """
    file_type = mime_type or "application/octet-stream"
    suffix = Path(file_name).suffix.lower()
    info = UploadedFileInfo(file_name=file_name, file_type=file_type, file_size=len(data))

    if len(data) > max_bytes:
        info.error = f"File is too large ({len(data)} bytes, limit {max_bytes})."
    elif file_type == "text/plain" or suffix in TEXT_EXTENSIONS:
        text = _decode_text(data)
        if text.strip():
            info.text_content = text
        else:
            info.error = "File contains no text."
    elif suffix == ".docx" or file_type == DOCX_MIME:
        try:
            text = docx_to_text(data)
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as exc:
            log.warning("Failed to extract text from %s: %s", file_name, exc)
            info.error = (
                "Could not extract text from the .docx file. "
                "The file may be corrupted or in an unsupported format."
            )
        else:
            if text:
                info.text_content = text
            else:
                info.error = "The .docx file contains no text."
    elif file_type.startswith("image/") or suffix in IMAGE_EXTENSIONS:
        try:
            info.file_type, info.data_uri = image_to_data_uri(data, file_type)
        except (UnidentifiedImageError, OSError) as exc:
            log.warning("Unreadable image %s: %s", file_name, exc)
            info.error = "Could not read the image file."
    elif suffix == ".pdf" or file_type == PDF_MIME:
        info.file_type = PDF_MIME
        info.data_uri = to_data_uri(data, PDF_MIME)
    elif suffix == ".doc" or file_type == DOC_MIME:
        info.error = (
            "Legacy .doc files (old Word format) cannot be analyzed. "
            "Please use .docx or convert the file."
        )
    else:
        info.error = (
            f"Unsupported file type: {mime_type or file_name}. "
            "Supported: .txt, .md, .docx, PDF, images."
        )

    if info.error:
        log.info("Skipping %s: %s", file_name, info.error)
    return info


def to_content_items(infos: Iterable[UploadedFileInfo]) -> list[ContentItem]:
    """Content items for every successfully extracted file."""
    items: list[ContentItem] = []
    for info in infos:
        if info.error:
            continue
        if info.text_content:
            items.append(
                ContentItem(
                    file_name=info.file_name,
                    content_type=ContentType.TEXT,
                    raw_text_content=info.text_content,
                )
            )
        elif info.data_uri and info.file_type.startswith("image/"):
            items.append(
                ContentItem(
                    file_name=info.file_name,
                    content_type=ContentType.IMAGE,
                    content_data_uri=info.data_uri,
                )
            )
        elif info.data_uri and info.file_type == PDF_MIME:
            items.append(
                ContentItem(
                    file_name=info.file_name,
                    content_type=ContentType.PDF,
                    content_data_uri=info.data_uri,
                )
            )
    if not items:
        raise NoAnalyzableFilesError("No files suitable for AI analysis in the uploaded batch.")
    return items
