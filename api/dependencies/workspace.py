"""Workspace and model registry dependencies for FastAPI."""
from typing import Annotated

from fastapi import Depends

from api.services.model_selector import ModelRegistry, get_registry
from api.services.workspace_service import Workspace, WorkspaceStore, get_store
from api.utils.validation import validate_id


def get_model_registry() -> ModelRegistry:
    """Shared model registry (overridden in tests)."""
    return get_registry()


def get_workspace_store() -> WorkspaceStore:
    return get_store()


def get_workspace(
    workspace_id: str,
    store: Annotated[WorkspaceStore, Depends(get_workspace_store)],
) -> Workspace:
    """Resolve the workspace addressed by the path.

    Raises:
        WorkspaceNotFoundError: translated to 404 by the app.
    """
    return store.get(validate_id("workspace_id", workspace_id))
