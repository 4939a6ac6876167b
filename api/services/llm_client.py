"""Gemini structured-output client."""
from __future__ import annotations

import logging
from typing import Any, Protocol, Sequence, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel

from api.config import GEMINI_API_KEY
from api.models.enums import ModelId
from api.services.errors import EmptyModelResponseError

log = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class StructuredModel(Protocol):
    """Anything that turns prompt contents into a schema-conforming object."""

    model_id: ModelId

    def generate(self, contents: Sequence[Any], response_schema: type[SchemaT]) -> SchemaT:
        ...


def create_client(api_key: str | None = None) -> genai.Client:
    """Create a Gemini client; without a key the SDK reads GOOGLE_API_KEY itself."""
    key = api_key or GEMINI_API_KEY
    if key:
        return genai.Client(api_key=key)
    return genai.Client()


class GeminiStructuredModel:
    """One Gemini model variant bound to a shared client."""

    def __init__(self, client: genai.Client, model_id: ModelId, temperature: float | None = None):
        self.client = client
        self.model_id = model_id
        self.temperature = temperature

    def generate(self, contents: Sequence[Any], response_schema: type[SchemaT]) -> SchemaT:
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=response_schema,
            temperature=self.temperature,
        )
        log.debug(
            "Calling %s with %d content part(s), schema %s",
            self.model_id.value,
            len(contents),
            response_schema.__name__,
        )
        response = self.client.models.generate_content(
            model=self.model_id.value,
            contents=list(contents),
            config=config,
        )

        # Prefer the SDK-parsed object; fall back to the raw JSON text
        parsed = getattr(response, "parsed", None)
        if isinstance(parsed, response_schema):
            return parsed
        text = getattr(response, "text", None)
        if not text:
            raise EmptyModelResponseError(
                f"Model '{self.model_id.value}' returned no output for {response_schema.__name__}"
            )
        return response_schema.model_validate_json(text)
