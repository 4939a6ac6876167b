import pytest
from google.genai import types

from api.models.analysis import AnalysisOutput
from api.models.content import ContentItem, ContentType
from api.models.enums import ModelId
from api.services import analysis_service
from api.services.errors import ContentValidationError
from api.services.prompts import build_analysis_contents
from api.utils.data_uri import to_data_uri

OUTPUT = AnalysisOutput(
    key_concepts=["photosynthesis", "chlorophyll"],
    themes=["plant biology"],
    summary="Plants turn light into chemical energy.",
)


def _text(name: str = "notes.txt", text: str = "Plants need light.") -> ContentItem:
    return ContentItem(file_name=name, content_type=ContentType.TEXT, raw_text_content=text)


def _image(name: str = "leaf.png") -> ContentItem:
    return ContentItem(
        file_name=name,
        content_type=ContentType.IMAGE,
        content_data_uri=to_data_uri(b"\x89PNG\r\n", "image/png"),
    )


def test_validation_names_the_offending_item() -> None:
    with pytest.raises(ContentValidationError, match="'slides.pdf' of type 'pdf' is missing 'contentDataUri'"):
        analysis_service.validate_content_items(
            [_text(), ContentItem(file_name="slides.pdf", content_type=ContentType.PDF)]
        )
    with pytest.raises(ContentValidationError, match="'empty.txt' of type 'text' is missing 'rawTextContent'"):
        analysis_service.validate_content_items([_text("empty.txt", "")])
    with pytest.raises(ContentValidationError):
        analysis_service.validate_content_items([])


def test_invalid_item_fails_before_any_model_call(make_registry) -> None:
    registry = make_registry(default=OUTPUT)
    with pytest.raises(ContentValidationError):
        analysis_service.analyze([ContentItem(file_name="x.png", content_type=ContentType.IMAGE)], registry=registry)
    assert all(not registry.get(model_id).calls for model_id in registry.order)


def test_contents_keep_file_order_and_attach_media() -> None:
    parts = build_analysis_contents([_text("a.txt", "Alpha"), _image("b.png"), _text("c.txt", "Gamma")])

    assert len(parts) == 3
    assert "--- START FILE: a.txt (Type: text) ---" in parts[0].text
    assert "Alpha" in parts[0].text
    assert "--- START FILE: b.png (Type: image) ---" in parts[0].text
    assert parts[1].inline_data.mime_type == "image/png"
    assert parts[1].inline_data.data == b"\x89PNG\r\n"
    assert parts[2].text.index("--- END FILE: b.png ---") < parts[2].text.index("Gamma")
    assert all(isinstance(part, types.Part) for part in parts)


def test_broken_data_uri_is_a_validation_error() -> None:
    item = ContentItem(file_name="scan.pdf", content_type=ContentType.PDF, content_data_uri="data:nope")
    with pytest.raises(ContentValidationError, match="scan.pdf"):
        build_analysis_contents([item])


def test_analyze_with_preferred_model(make_registry) -> None:
    registry = make_registry(default=OUTPUT)
    result = analysis_service.analyze([_text()], ModelId.PRO, registry)

    assert result.summary == OUTPUT.summary
    assert result.key_concepts == OUTPUT.key_concepts
    assert result.used_model is ModelId.PRO
    assert result.fallback_used is False
    contents, schema = registry.get(ModelId.PRO).calls[0]
    assert schema is AnalysisOutput
    assert "Plants need light." in contents[0].text


def test_analyze_falls_back_on_quota_error(make_registry) -> None:
    registry = make_registry(
        {ModelId.FLASH_LITE: RuntimeError("429 quota exceeded")},
        default=OUTPUT,
    )
    result = analysis_service.analyze([_text()], ModelId.FLASH_LITE, registry)

    assert result.used_model is ModelId.FLASH
    assert result.fallback_used is True
    assert not registry.get(ModelId.PRO).calls
