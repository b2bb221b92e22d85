"""Project router - API endpoints for project management."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from projectsync.errors import (
    AIServiceError,
    NotFoundError,
    ProtectedEntityError,
    RoadmapInProgressError,
    ValidationError,
)
from projectsync.models.goal import Goal, GoalCreate
from projectsync.models.insights import ProjectView
from projectsync.models.project import Project, ProjectCreate, ProjectUpdate
from projectsync.models.roadmap import RoadmapResult
from projectsync.services import insights
from projectsync.services.project_store import ProjectStore
from projectsync.services.roadmap_service import RoadmapService
from projectsync.workspace import get_roadmap_service, get_store


router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    store: ProjectStore = Depends(get_store),
):
    """
    Create a new project.

    Args:
        project: Project creation data
        store: Project store

    Returns:
        Created project object

    Raises:
        HTTPException: If title or description is empty (400)
    """
    try:
        return store.create_project(
            title=project.title,
            description=project.description,
            category=project.category,
            deadline=project.deadline,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.get("", response_model=list[ProjectView])
async def list_projects(
    search: str = Query("", description="Case-insensitive title search"),
    status_filter: str = Query(insights.ALL, alias="status", description="Filter by status"),
    category: str = Query(insights.ALL, description="Filter by category"),
    store: ProjectStore = Depends(get_store),
    service: RoadmapService = Depends(get_roadmap_service),
):
    """
    List projects, optionally filtered.

    - "All" disables the status or category filter
    - Each project carries its progress and roadmap loading flag
    """
    projects = insights.filter_projects(
        store.projects,
        search=search,
        status=status_filter,
        category=category,
    )
    return [insights.project_view(p, service.is_loading(p.id)) for p in projects]


@router.get("/{project_id}", response_model=ProjectView)
async def get_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
    service: RoadmapService = Depends(get_roadmap_service),
):
    """
    Get a project by id.

    Raises:
        HTTPException: If project not found (404)
    """
    try:
        project = store.get_project(project_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return insights.project_view(project, service.is_loading(project_id))


@router.get("/{project_id}/goals", response_model=list[Goal])
async def list_project_goals(
    project_id: str,
    store: ProjectStore = Depends(get_store),
):
    """
    List a project's goals, high priority first.

    Goals of equal priority keep their stored order.

    Raises:
        HTTPException: If project not found (404)
    """
    try:
        project = store.get_project(project_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return insights.sort_goals_by_priority(project.goals)


@router.patch("/{project_id}", response_model=Project)
async def update_project(
    project_id: str,
    project_update: ProjectUpdate,
    store: ProjectStore = Depends(get_store),
):
    """
    Update a project.

    Args:
        project_id: Project id
        project_update: Update data
        store: Project store

    Returns:
        Updated project object

    Raises:
        HTTPException: If project not found (404) or a required field is emptied (400)
    """
    try:
        return store.update_project(project_id, project_update)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
):
    """
    Delete a project and all of its goals.

    Raises:
        HTTPException: If project not found (404) or protected (403)
    """
    try:
        store.delete_project(project_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ProtectedEntityError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e),
        )
    return {"deleted": project_id}


@router.post("/{project_id}/goals", response_model=Goal, status_code=status.HTTP_201_CREATED)
async def add_goal(
    project_id: str,
    goal: GoalCreate,
    store: ProjectStore = Depends(get_store),
):
    """
    Add a goal to a project.

    - New goals start pending, at the top of the list
    """
    try:
        store.get_project(project_id)
        return store.add_goal(
            project_id,
            title=goal.title,
            description=goal.description,
            due_date=goal.due_date,
            priority=goal.priority,
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.post("/{project_id}/goals/{goal_id}/toggle", response_model=Goal)
async def toggle_goal(
    project_id: str,
    goal_id: str,
    store: ProjectStore = Depends(get_store),
):
    """
    Toggle a goal between pending and completed.

    Raises:
        HTTPException: If the goal is not in this project (404)
    """
    goal = store.toggle_goal_status(project_id, goal_id)
    if goal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Goal not found",
        )
    return goal


@router.post("/{project_id}/roadmap", response_model=RoadmapResult)
async def generate_roadmap(
    project_id: str,
    service: RoadmapService = Depends(get_roadmap_service),
):
    """
    Ask the AI advisor for a roadmap and add the suggested goals.

    Raises:
        HTTPException: If project not found (404), a roadmap for the project
            is already running (409), or the advisor failed (502)
    """
    try:
        return await service.generate_roadmap(project_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except RoadmapInProgressError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )
    except AIServiceError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )
