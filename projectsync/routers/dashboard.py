"""Dashboard router - aggregate views over the whole workspace."""
from fastapi import APIRouter, Depends

from projectsync.models.insights import Dashboard
from projectsync.services import insights
from projectsync.services.project_store import ProjectStore
from projectsync.workspace import get_store


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=Dashboard)
async def get_dashboard(store: ProjectStore = Depends(get_store)):
    """Stats, progress chart, recent projects and category list."""
    return insights.build_dashboard(store.projects)
