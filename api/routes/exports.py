"""Export endpoints: JSON and Moodle GIFT downloads."""
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from api.dependencies import get_workspace
from api.services.export_service import ExportFile, export_gift, export_json
from api.services.workspace_service import Workspace

router = APIRouter(prefix="/api/workspaces/{workspace_id}/export", tags=["exports"])


def _download(export: ExportFile) -> Response:
    return Response(
        content=export.content,
        media_type=f"{export.media_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get("/json")
def download_json(workspace: Annotated[Workspace, Depends(get_workspace)]) -> Response:
    """Selected questions as a `{"questions": [...]}` JSON document."""
    return _download(export_json(workspace.editor.items))


@router.get("/gift")
def download_gift(workspace: Annotated[Workspace, Depends(get_workspace)]) -> Response:
    """Selected questions in GIFT format for Moodle import."""
    return _download(export_gift(workspace.editor.items))
