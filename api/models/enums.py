"""Enumerations shared by requests, schemas and services."""
from enum import Enum


class ModelId(str, Enum):
    """Gemini variants, from most available to most capable."""

    FLASH_LITE = "gemini-2.5-flash-lite"
    FLASH = "gemini-2.5-flash"
    PRO = "gemini-2.5-pro"


# Fallback order and UI display order.
FALLBACK_ORDER: tuple[ModelId, ...] = (ModelId.FLASH_LITE, ModelId.FLASH, ModelId.PRO)

MODEL_LABELS: dict[ModelId, str] = {
    ModelId.FLASH_LITE: "Flash-Lite (по умолчанию)",
    ModelId.FLASH: "Flash",
    ModelId.PRO: "Pro",
}


class QuestionType(str, Enum):
    FILL_IN_THE_BLANK = "fill-in-the-blank"
    SINGLE_CHOICE = "single-choice"
    MULTIPLE_CHOICE = "multiple-choice"
    MATCHING = "matching"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
