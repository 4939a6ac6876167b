import argparse
import logging
import mimetypes
from pathlib import Path

from pydantic import ValidationError

from api.config import DEFAULT_QUESTION_COUNT, LOG_LEVEL, MAX_QUESTIONS
from api.models.enums import Difficulty, ModelId, QuestionType
from api.models.questions import GenerateQuestionsRequest
from api.services.errors import LectureQuizError
from api.services.export_service import export_gift, export_json
from api.services.workspace_service import WorkspaceStore, run_analysis, run_generation
from core.logging_setup import setup_console_logging
from lecture_extract import extract_upload, to_content_items

setup_console_logging(LOG_LEVEL)

log = logging.getLogger(__name__)


def _question_count(value: str) -> int:
    count = int(value)
    if not 1 <= count <= MAX_QUESTIONS:
        raise argparse.ArgumentTypeError(f"must be between 1 and {MAX_QUESTIONS}, got {count}")
    return count


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build test questions from lecture files")
    parser.add_argument("files", type=Path, nargs="+", help="Lecture files (.txt, .md, .docx, PDF, images)")
    parser.add_argument(
        "--type",
        dest="question_type",
        choices=[t.value for t in QuestionType],
        default=QuestionType.SINGLE_CHOICE.value,
        help="Question type to generate",
    )
    parser.add_argument(
        "--count",
        type=_question_count,
        default=DEFAULT_QUESTION_COUNT,
        help=f"Number of questions (1-{MAX_QUESTIONS})",
    )
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
    )
    parser.add_argument(
        "--model",
        choices=[m.value for m in ModelId],
        default=None,
        help="Preferred model; others are tried if it is unavailable",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("."),
        help="Output directory for the JSON and GIFT exports",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    preferred = ModelId(args.model) if args.model else None
    try:
        request = GenerateQuestionsRequest(
            number_of_questions=args.count,
            difficulty=Difficulty(args.difficulty),
            question_type=QuestionType(args.question_type),
        )
    except ValidationError as exc:
        log.error("Invalid generation settings: %s", exc)
        return 2
    workspace = WorkspaceStore().create(preferred)

    infos = []
    for path in args.files:
        mime_type, _ = mimetypes.guess_type(path.name)
        info = extract_upload(path.name, mime_type, path.read_bytes())
        if info.error:
            print(f"{path.name}: {info.error}")
        infos.append(info)
    workspace.files = infos

    try:
        analysis, notice = run_analysis(workspace, to_content_items(infos))
        if notice:
            print(notice)
        print(f"Summary ({analysis.used_model.value}):\n{analysis.summary}\n")

        _, notice = run_generation(workspace, request)
        if notice:
            print(notice)

        args.output.mkdir(parents=True, exist_ok=True)
        for export in (export_json(workspace.editor.items), export_gift(workspace.editor.items)):
            target = args.output / export.filename
            target.write_text(export.content, encoding="utf-8")
            print(f"Saved {len(workspace.editor)} question(s) to {target}")
    except LectureQuizError as exc:
        log.error("%s", exc)
        return 1
    except Exception:
        log.exception("Model request failed")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
