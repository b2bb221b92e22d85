"""Goal router - API endpoints for goals across all projects."""
from fastapi import APIRouter, Depends, HTTPException, Query, status

from projectsync.errors import NotFoundError, ValidationError
from projectsync.models.goal import Goal, GoalStatus, GoalUpdate
from projectsync.models.insights import GoalView
from projectsync.services import insights
from projectsync.services.project_store import ProjectStore
from projectsync.workspace import get_store


router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=list[GoalView])
async def list_goals(
    search: str = Query("", description="Case-insensitive title search"),
    priority: str = Query(insights.ALL, description="Filter by priority (low, medium, high)"),
    store: ProjectStore = Depends(get_store),
):
    """
    List goals of every project.

    - Each goal carries its project title
    - "All" disables the priority filter
    """
    return insights.filter_goals(
        insights.all_goals(store.projects),
        search=search,
        priority=priority,
    )


@router.get("/board", response_model=dict[GoalStatus, list[GoalView]])
async def get_board(store: ProjectStore = Depends(get_store)):
    """Goals grouped into one kanban column per status."""
    return insights.kanban_board(store.projects)


@router.get("/{goal_id}", response_model=Goal)
async def get_goal(
    goal_id: str,
    store: ProjectStore = Depends(get_store),
):
    """
    Get a single goal by id.

    Raises:
        HTTPException: If goal not found (404)
    """
    try:
        return store.get_goal(goal_id)
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.patch("/{goal_id}", response_model=Goal)
async def update_goal(
    goal_id: str,
    goal_update: GoalUpdate,
    store: ProjectStore = Depends(get_store),
):
    """
    Update a goal.

    - Setting ``projectId`` to another project moves the goal there
    - Setting ``status`` directly is how goals enter IN_PROGRESS (board drag-and-drop)
    """
    try:
        current = store.get_goal(goal_id)
        return store.update_goal(current.project_id, goal_id, goal_update)
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


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: str,
    store: ProjectStore = Depends(get_store),
):
    """Delete a goal from whichever project owns it (no-op if unknown)."""
    store.delete_goal(goal_id)
    return {"deleted": goal_id}
