"""FastAPI dependencies."""
from api.dependencies.workspace import get_model_registry, get_workspace, get_workspace_store

__all__ = ["get_model_registry", "get_workspace", "get_workspace_store"]
