"""Prompt templates and request content builders for the two model tasks."""
from __future__ import annotations

from typing import Iterable

from google.genai import types

from api.models.content import ContentItem, ContentType
from api.models.enums import Difficulty, QuestionType
from api.services.errors import ContentValidationError
from api.utils.data_uri import parse_data_uri

ANALYSIS_INSTRUCTIONS = """You are an expert in analyzing multiple lecture materials and synthesizing information.
Analyze the following lecture contents. Identify the key concepts and themes that span across all materials, and provide a single, coherent summary that integrates information from all provided content.
**Important**: Ensure that all outputs (key concepts, themes, and summary) are in the same language as the predominant language of the input content(s). If multiple languages are present, use the language of the first content item.

**ЕСЛИ КОНТЕНТ НА РУССКОМ ЯЗЫКЕ, ВСЕ ПОЛЯ В ВЫХОДНОМ JSON ДОЛЖНЫ БЫТЬ СТРОГО НА РУССКОМ ЯЗЫКЕ. (Ключевые понятия, Темы, Резюме).**
**IF THE CONTENT IS IN RUSSIAN, ALL FIELDS IN THE OUTPUT JSON MUST BE STRICTLY IN RUSSIAN.**
"""

ANALYSIS_CLOSING = """Output the combined key concepts, themes, and summary in the specified JSON format based on ALL the provided content.
Attached media (images, PDF documents) are part of the lecture material and must be analyzed together with the text."""

QUESTION_INSTRUCTIONS = """You are an expert educator creating practice test questions for students.
Based on the following lecture content, generate {number_of_questions} test questions of {difficulty} difficulty.
The questions should be of type: {question_type}.
**Important**: Ensure that the questions, options, and answers are generated in the same language as the provided 'Lecture Content'.

**ЕСЛИ КОНТЕНТ НА РУССКОМ ЯЗЫКЕ, ВЕСЬ ВЫВОД (вопросы, варианты, ответы) В JSON ДОЛЖЕН БЫТЬ СТРОГО НА РУССКОМ ЯЗЫКЕ.**
**IF THE CONTENT IS IN RUSSIAN, ALL OUTPUT (questions, options, answers) IN THE JSON MUST BE STRICTLY IN RUSSIAN.**

Lecture Content:
{lecture_content}

Format your response as a JSON object containing a "questions" array. Every object in the array must have "type" set to "{question_type}" and follow the schema for that type.

{type_rules}
"""

QUESTION_TYPE_RULES: dict[QuestionType, str] = {
    QuestionType.FILL_IN_THE_BLANK: """The "questionText" should include "___" to denote the blank.
Example:
{"questions": [{"type": "fill-in-the-blank", "questionText": "The capital of France is ___, known for the Eiffel Tower.", "correctAnswer": "Paris"}]}""",
    QuestionType.SINGLE_CHOICE: """Provide 3 to 5 unique options. "correctAnswer" must be exactly one of these options.
Example:
{"questions": [{"type": "single-choice", "questionText": "What is the chemical symbol for water?", "options": ["O2", "H2O", "CO2", "NaCl"], "correctAnswer": "H2O"}]}""",
    QuestionType.MULTIPLE_CHOICE: """Provide 3 to 5 unique options. "correctAnswers" must contain **AT LEAST TWO** correct options, each exactly matching one of the options.
Example:
{"questions": [{"type": "multiple-choice", "questionText": "Which of the following are primary colors?", "options": ["Red", "Green", "Blue", "Yellow"], "correctAnswers": ["Red", "Blue", "Yellow"]}]}""",
    QuestionType.MATCHING: """Provide 2 to 8 unique prompts and 2 to 8 unique options.
"correctMatches" is an array of objects, each with a "prompt" and its corresponding "option", copied exactly from the arrays.
Example:
{"questions": [{"type": "matching", "questionText": "Сопоставьте страны с их столицами.", "prompts": ["Франция", "Германия", "Испания"], "options": ["Берлин", "Мадрид", "Париж"], "correctMatches": [{"prompt": "Франция", "option": "Париж"}, {"prompt": "Германия", "option": "Берлин"}, {"prompt": "Испания", "option": "Мадрид"}]}]}""",
}


def _media_part(item: ContentItem) -> types.Part:
    try:
        mime_type, payload = parse_data_uri(item.content_data_uri or "")
    except ValueError as exc:
        raise ContentValidationError(
            f"Content item '{item.file_name}' has an invalid 'contentDataUri': {exc}"
        ) from exc
    return types.Part.from_bytes(data=payload, mime_type=mime_type)


def build_analysis_contents(items: Iterable[ContentItem]) -> list[types.Part]:
    """Render a batch of content items as one ordered list of request parts.

    Text items are inlined into the surrounding text; image and PDF items
    become binary attachments decoded from their data URI.
    """
    parts: list[types.Part] = []
    text_buffer: list[str] = [ANALYSIS_INSTRUCTIONS]

    def flush() -> None:
        if text_buffer:
            parts.append(types.Part.from_text(text="\n".join(text_buffer)))
            text_buffer.clear()

    for item in items:
        content_type = ContentType(item.content_type)
        text_buffer.append(f"--- START FILE: {item.file_name} (Type: {content_type.value}) ---")
        if content_type is ContentType.TEXT:
            text_buffer.append(item.raw_text_content or "")
        else:
            flush()
            parts.append(_media_part(item))
        text_buffer.append(f"--- END FILE: {item.file_name} ---")

    text_buffer.append(ANALYSIS_CLOSING)
    flush()
    return parts


def build_question_prompt(
    lecture_content: str,
    number_of_questions: int,
    difficulty: Difficulty,
    question_type: QuestionType,
) -> str:
    question_type = QuestionType(question_type)
    return QUESTION_INSTRUCTIONS.format(
        number_of_questions=number_of_questions,
        difficulty=Difficulty(difficulty).value,
        question_type=question_type.value,
        lecture_content=lecture_content,
        type_rules=QUESTION_TYPE_RULES[question_type],
    )
