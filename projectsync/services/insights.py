"""Pure queries over the project collection (dashboard, lists, board)."""
import math
from typing import Iterable, Sequence

from projectsync.models.goal import GoalPriority, GoalStatus
from projectsync.models.insights import ChartPoint, Dashboard, GoalView, ProjectStats, ProjectView
from projectsync.models.project import Project, ProjectStatus


ALL = "All"

PRIORITY_ORDER = {
    GoalPriority.HIGH: 0,
    GoalPriority.MEDIUM: 1,
    GoalPriority.LOW: 2,
}

CHART_NAME_LENGTH = 10


def _percent(part: int, whole: int) -> int:
    # Round half up; round() would round 12.5 down to 12
    if not whole:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def _matches(value: str, selected: str) -> bool:
    return selected == ALL or value == selected


def compute_stats(projects: Sequence[Project]) -> ProjectStats:
    """
    Aggregate dashboard counters.

    ``completion_rate`` is the rounded percentage of completed goals across
    all projects, 0 when there are no goals.
    """
    goals = [goal for project in projects for goal in project.goals]
    completed = sum(1 for goal in goals if goal.status == GoalStatus.COMPLETED)
    return ProjectStats(
        total_projects=len(projects),
        active_projects=sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
        total_goals=len(goals),
        completion_rate=_percent(completed, len(goals)),
    )


def filter_projects(
    projects: Iterable[Project],
    search: str = "",
    status: str = ALL,
    category: str = ALL,
) -> list[Project]:
    """
    Filter projects by title search, status and category.

    Args:
        projects: Projects to filter
        search: Case-insensitive substring of the title
        status: Exact status value, or "All"
        category: Exact category, or "All"

    Returns:
        Matching projects, in their original order
    """
    needle = search.lower()
    return [
        p
        for p in projects
        if needle in p.title.lower()
        and _matches(p.status.value, status)
        and _matches(p.category, category)
    ]


def list_categories(projects: Iterable[Project]) -> list[str]:
    """Return "All" followed by each distinct category in first-seen order."""
    categories = [ALL]
    for project in projects:
        if project.category not in categories:
            categories.append(project.category)
    return categories


def all_goals(projects: Iterable[Project]) -> list[GoalView]:
    """Flatten every project's goals, tagging each with its project title."""
    return [
        GoalView(**goal.model_dump(), project_title=project.title)
        for project in projects
        for goal in project.goals
    ]


def filter_goals(goals: Iterable[GoalView], search: str = "", priority: str = ALL) -> list[GoalView]:
    """Filter goals by case-insensitive title search and exact priority."""
    needle = search.lower()
    return [
        g for g in goals if needle in g.title.lower() and _matches(g.priority.value, priority)
    ]


def sort_goals_by_priority(goals):
    """Stable sort: high, then medium, then low."""
    return sorted(goals, key=lambda goal: PRIORITY_ORDER[goal.priority])


def project_progress(project: Project) -> int:
    """Percentage of the project's goals that are completed."""
    completed = sum(1 for goal in project.goals if goal.status == GoalStatus.COMPLETED)
    return _percent(completed, len(project.goals))


def project_view(project: Project, roadmap_loading: bool = False) -> ProjectView:
    """Annotate a project with its progress for project cards."""
    return ProjectView(
        **project.model_dump(),
        progress=project_progress(project),
        roadmap_loading=roadmap_loading,
    )


def progress_chart(projects: Iterable[Project]) -> list[ChartPoint]:
    """Completed vs total goals per project, with short display names."""
    points = []
    for project in projects:
        name = project.title
        if len(name) > CHART_NAME_LENGTH:
            name = name[:CHART_NAME_LENGTH] + "..."
        points.append(
            ChartPoint(
                name=name,
                completed=sum(1 for g in project.goals if g.status == GoalStatus.COMPLETED),
                total=len(project.goals) or 1,
            )
        )
    return points


def recent_projects(projects: Sequence[Project], limit: int = 3) -> list[Project]:
    return list(projects[:limit])


def kanban_board(projects: Iterable[Project]) -> dict[GoalStatus, list[GoalView]]:
    """Group all goals into one column per status; every column is present."""
    board: dict[GoalStatus, list[GoalView]] = {status: [] for status in GoalStatus}
    for goal in all_goals(projects):
        board[goal.status].append(goal)
    return board


def build_dashboard(projects: Sequence[Project]) -> Dashboard:
    """Assemble the dashboard view."""
    return Dashboard(
        stats=compute_stats(projects),
        chart=progress_chart(projects),
        recent_projects=recent_projects(projects),
        categories=list_categories(projects),
    )
