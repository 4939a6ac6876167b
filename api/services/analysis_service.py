"""Lecture batch analysis."""
from __future__ import annotations

import logging
from typing import Sequence

from api.models.analysis import AnalysisOutput, AnalysisResult
from api.models.content import ContentItem, ContentType
from api.models.enums import ModelId
from api.services.errors import ContentValidationError
from api.services.model_selector import ModelRegistry, default_model, get_registry, run_with_fallback
from api.services.prompts import build_analysis_contents

log = logging.getLogger(__name__)


def validate_content_items(items: Sequence[ContentItem]) -> None:
    """Reject the batch if any item lacks the payload its type requires."""
    if not items:
        raise ContentValidationError("At least one content item is required for analysis.")
    for item in items:
        content_type = ContentType(item.content_type)
        if content_type is ContentType.TEXT:
            if not item.raw_text_content:
                raise ContentValidationError(
                    f"Content item '{item.file_name}' of type 'text' is missing 'rawTextContent'."
                )
        elif not item.content_data_uri:
            raise ContentValidationError(
                f"Content item '{item.file_name}' of type '{content_type.value}' is missing 'contentDataUri'."
            )


def analyze(
    items: Sequence[ContentItem],
    preferred_model: ModelId | None = None,
    registry: ModelRegistry | None = None,
) -> AnalysisResult:
    """Synthesize key concepts, themes and one summary across the whole batch."""
    validate_content_items(items)
    contents = build_analysis_contents(items)
    registry = registry or get_registry()
    preferred = preferred_model or default_model()

    log.info(
        "Analyzing %d content item(s) (%s), preferred model %s",
        len(items),
        ", ".join(item.file_name for item in items),
        preferred.value,
    )

    def task(model_id: ModelId) -> AnalysisOutput:
        return registry.get(model_id).generate(contents, AnalysisOutput)

    outcome = run_with_fallback(task, preferred, registry.order, label="content analysis")
    output = outcome.result
    return AnalysisResult(
        key_concepts=output.key_concepts,
        themes=output.themes,
        summary=output.summary,
        used_model=outcome.used_model,
        fallback_used=outcome.fallback_used,
    )
