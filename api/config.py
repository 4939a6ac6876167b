"""Application configuration and constants."""
import os


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Gemini
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
DEFAULT_MODEL = os.environ.get("DEFAULT_MODEL", "gemini-2.5-flash-lite")

# Uploads
MAX_UPLOAD_BYTES = _parse_int_env("MAX_UPLOAD_BYTES", 20 * 1024 * 1024)  # 20 MB

# Question generation
MAX_QUESTIONS = _parse_int_env("MAX_QUESTIONS", 20)
DEFAULT_QUESTION_COUNT = _parse_int_env("DEFAULT_QUESTION_COUNT", 5)

# Exports
EXPORT_JSON_FILENAME = "test_questions.json"
EXPORT_GIFT_FILENAME = "test_questions.txt"

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()
