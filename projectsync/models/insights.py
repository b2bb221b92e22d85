"""Read-only views computed from the project collection."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from projectsync.models.goal import Goal
from projectsync.models.project import Project


class ProjectStats(BaseModel):
    """Dashboard counters."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_projects: int
    active_projects: int
    total_goals: int
    completion_rate: int


class ChartPoint(BaseModel):
    """Per-project progress bar."""

    name: str
    completed: int
    total: int


class GoalView(Goal):
    """Goal annotated with the title of its owning project."""

    project_title: str


class ProjectView(Project):
    """Project annotated with its progress and roadmap loading state."""

    progress: int
    roadmap_loading: bool = False


class Dashboard(BaseModel):
    """Everything the dashboard screen renders."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    stats: ProjectStats
    chart: list[ChartPoint]
    recent_projects: list[Project]
    categories: list[str]
