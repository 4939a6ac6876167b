"""API route modules."""
from api.routes import exports, models, questions, workspaces

__all__ = ["exports", "models", "questions", "workspaces"]
