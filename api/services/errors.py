"""Domain exceptions raised by the service layer.

The app maps these to HTTP status codes; the services themselves never
raise ``HTTPException``.
"""


class LectureQuizError(Exception):
    """Base class for all expected, user-facing failures."""


class ContentValidationError(LectureQuizError, ValueError):
    """Input content is unusable; raised before any model call."""


class NoAnalyzableFilesError(ContentValidationError):
    """None of the uploaded files produced content suitable for analysis."""


class UnknownModelError(LectureQuizError, KeyError):
    """Model identifier is not part of the catalogue."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "Unknown model"


class EmptyModelResponseError(LectureQuizError):
    """The model returned nothing that matches the output schema."""


class QuestionNotFoundError(LectureQuizError, LookupError):
    """No editable question with the given id."""


class QuestionTypeMismatchError(LectureQuizError):
    """Edit operation does not apply to the question's type."""


class OptionLimitError(LectureQuizError):
    """Add/remove would leave an options or prompts list out of bounds.

    ``title`` and ``notice`` are meant to be shown to the user as is.
    """

    def __init__(self, title: str, notice: str) -> None:
        super().__init__(notice)
        self.title = title
        self.notice = notice


class NoQuestionsSelectedError(LectureQuizError):
    """Export requested with an empty selection."""


class OptionNotFoundError(QuestionNotFoundError):
    """No option or prompt with the given id inside the question."""


class WorkspaceNotFoundError(LectureQuizError, LookupError):
    """No workspace with the given id."""
