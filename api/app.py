"""Main FastAPI application with modularized routes."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import GEMINI_API_KEY, LOG_LEVEL
from api.routes import exports, models, questions, workspaces
from api.services.errors import (
    ContentValidationError,
    EmptyModelResponseError,
    LectureQuizError,
    NoQuestionsSelectedError,
    OptionLimitError,
    QuestionNotFoundError,
    QuestionTypeMismatchError,
    UnknownModelError,
    WorkspaceNotFoundError,
)
from api.services.model_selector import ModelRegistry, set_registry
from core.logging_setup import setup_console_logging

setup_console_logging(LOG_LEVEL)

log = logging.getLogger(__name__)

app = FastAPI(title="Lecture Quiz Builder API")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_CODES: tuple[tuple[type[LectureQuizError], int], ...] = (
    (WorkspaceNotFoundError, 404),
    (QuestionNotFoundError, 404),
    (OptionLimitError, 409),
    (QuestionTypeMismatchError, 400),
    (ContentValidationError, 400),
    (NoQuestionsSelectedError, 400),
    (UnknownModelError, 400),
    (EmptyModelResponseError, 502),
)


def status_code_for(exc: LectureQuizError) -> int:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


@app.exception_handler(LectureQuizError)
def handle_domain_error(request: Request, exc: LectureQuizError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
    content: dict[str, str] = {"detail": str(exc)}
    if isinstance(exc, OptionLimitError):
        content["title"] = exc.title
        content["notice"] = exc.notice
    return JSONResponse(status_code=status_code, content=content)


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Build the Gemini model registry when an API key is configured."""
    if GEMINI_API_KEY:
        set_registry(ModelRegistry.from_client())
    else:
        log.warning("GEMINI_API_KEY is not set; analysis and generation requests will fail")


# Include routers
app.include_router(models.router)
app.include_router(workspaces.router)
app.include_router(questions.router)
app.include_router(exports.router)
