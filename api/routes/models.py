"""Model catalogue endpoint."""
from fastapi import APIRouter

from api.models.enums import FALLBACK_ORDER, MODEL_LABELS
from api.models.workspace import ModelInfo
from api.services.model_selector import default_model

router = APIRouter(prefix="/api/models", tags=["models"])


@router.get("")
def list_models() -> list[ModelInfo]:
    """List models in display (and fallback) order."""
    default = default_model()
    return [
        ModelInfo(id=model_id, label=MODEL_LABELS[model_id], is_default=model_id == default)
        for model_id in FALLBACK_ORDER
    ]
