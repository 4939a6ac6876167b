"""Export of the selected questions as downloadable files."""
import logging
from dataclasses import dataclass
from typing import Iterable

from api.config import EXPORT_GIFT_FILENAME, EXPORT_JSON_FILENAME
from api.models.editable import EditableQuestion
from api.services.errors import NoQuestionsSelectedError
from serialization import selected_questions, serialize_questions_gift, serialize_questions_json

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportFile:
    filename: str
    media_type: str
    content: str


def _require_selection(items: Iterable[EditableQuestion]):
    questions = selected_questions(items)
    if not questions:
        raise NoQuestionsSelectedError("Нет выбранных вопросов. Пожалуйста, выберите вопросы для сохранения.")
    return questions


def export_json(items: Iterable[EditableQuestion]) -> ExportFile:
    questions = _require_selection(items)
    log.info("Exporting %d question(s) to %s", len(questions), EXPORT_JSON_FILENAME)
    return ExportFile(
        filename=EXPORT_JSON_FILENAME,
        media_type="application/json",
        content=serialize_questions_json(questions),
    )


def export_gift(items: Iterable[EditableQuestion]) -> ExportFile:
    questions = _require_selection(items)
    log.info("Exporting %d question(s) to %s", len(questions), EXPORT_GIFT_FILENAME)
    return ExportFile(
        filename=EXPORT_GIFT_FILENAME,
        media_type="text/plain",
        content=serialize_questions_gift(questions),
    )
