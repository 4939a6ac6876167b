"""Model selection with ordered fallback on transient failures.

The preferred model is tried first, then the rest of the fixed order. A
retryable failure (quota, rate limit, server error, dropped connection,
timeout) moves on to the next model; anything else is raised at once.
Attempts are strictly sequential and there is no backoff: the calls are
user-initiated and interactive.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Mapping, TypeVar

import httpx
from google.genai import errors as genai_errors
from pydantic import ValidationError

from api.config import DEFAULT_MODEL
from api.models.enums import FALLBACK_ORDER, ModelId
from api.services.errors import LectureQuizError, UnknownModelError
from api.services.llm_client import GeminiStructuredModel, StructuredModel, create_client

log = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_SIGNATURES = (
    "429",
    "Too Many Requests",
    "quota",
    "503",
    "500",
    "ECONNRESET",
    "ETIMEDOUT",
)
# lowercase; matched against the lowercased message
RETRYABLE_PHRASES = ("timed out", "timeout", "connection reset")
RETRYABLE_STATUS_CODES = {429, 500, 503}
RETRYABLE_TRANSPORT_ERRORS = (
    ConnectionResetError,
    TimeoutError,
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(frozen=True)
class FallbackOutcome(Generic[T]):
    result: T
    used_model: ModelId
    fallback_used: bool


def default_model() -> ModelId:
    """Configured default, or the first model of the fallback order."""
    try:
        return ModelId(DEFAULT_MODEL)
    except ValueError:
        log.warning("DEFAULT_MODEL=%r is not a known model; using %s", DEFAULT_MODEL, FALLBACK_ORDER[0].value)
        return FALLBACK_ORDER[0]


def models_to_try(
    preferred: ModelId | None, order: Iterable[ModelId] = FALLBACK_ORDER
) -> list[ModelId]:
    """Preferred model first, then the remaining models in their fixed order."""
    sequence: list[ModelId] = []
    if preferred is not None:
        sequence.append(preferred)
    for model_id in order:
        if model_id not in sequence:
            sequence.append(model_id)
    return sequence


def is_retryable_error(exc: BaseException) -> bool:
    """Classify a failure as transient (worth trying the next model)."""
    if isinstance(exc, (ValidationError, LectureQuizError)):
        return False
    if isinstance(exc, RETRYABLE_TRANSPORT_ERRORS):
        return True
    if isinstance(exc, genai_errors.APIError) and exc.code in RETRYABLE_STATUS_CODES:
        return True
    message = str(exc)
    if any(signature in message for signature in RETRYABLE_SIGNATURES):
        return True
    lowered = message.lower()
    return any(phrase in lowered for phrase in RETRYABLE_PHRASES)


def run_with_fallback(
    task: Callable[[ModelId], T],
    preferred: ModelId | None = None,
    order: Iterable[ModelId] = FALLBACK_ORDER,
    *,
    label: str = "model task",
) -> FallbackOutcome[T]:
    """Run ``task(model_id)`` against each candidate until one succeeds."""
    order = tuple(order)
    if preferred is None:
        preferred = order[0]
    candidates = models_to_try(preferred, order)
    last_error: BaseException | None = None

    for model_id in candidates:
        try:
            result = task(model_id)
        except Exception as exc:
            last_error = exc
            if not is_retryable_error(exc):
                log.error("Non-retryable error in %s with model '%s': %s", label, model_id.value, exc)
                raise
            log.warning("Retryable error in %s with model '%s', trying next model: %s", label, model_id.value, exc)
            continue
        if model_id != preferred:
            log.info("%s succeeded with fallback model '%s' (preferred '%s')", label, model_id.value, preferred.value)
        return FallbackOutcome(result=result, used_model=model_id, fallback_used=model_id != preferred)

    assert last_error is not None
    log.error("%s failed with every model: %s", label, ", ".join(m.value for m in candidates))
    raise last_error


class ModelRegistry:
    """Model id -> configured model handle; built once, read-only afterwards."""

    def __init__(self, models: Mapping[ModelId, StructuredModel]):
        self._models = dict(models)

    @classmethod
    def from_client(cls, client=None, order: Iterable[ModelId] = FALLBACK_ORDER) -> "ModelRegistry":
        client = client or create_client()
        return cls({model_id: GeminiStructuredModel(client, model_id) for model_id in order})

    def get(self, model_id: ModelId | str) -> StructuredModel:
        try:
            return self._models[ModelId(model_id)]
        except (KeyError, ValueError):
            raise UnknownModelError(f"Unknown model: {getattr(model_id, 'value', model_id)}") from None

    @property
    def order(self) -> tuple[ModelId, ...]:
        return tuple(m for m in FALLBACK_ORDER if m in self._models)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models


_registry: ModelRegistry | None = None


def get_registry() -> ModelRegistry:
    """Process-wide registry, created on first use."""
    global _registry
    if _registry is None:
        _registry = ModelRegistry.from_client()
        log.info("Model registry ready: %s", ", ".join(m.value for m in _registry.order))
    return _registry


def set_registry(registry: ModelRegistry | None) -> None:
    """Install a registry (start-up wiring, tests)."""
    global _registry
    _registry = registry
