"""AI roadmap model definitions."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from projectsync.models.goal import Goal, GoalPriority
from projectsync.models.project import Project


class SuggestedGoal(BaseModel):
    """A single goal proposed by the roadmap advisor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    description: str
    priority: GoalPriority


class RoadmapRecommendation(BaseModel):
    """Structured roadmap returned by the advisor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    suggested_goals: list[SuggestedGoal]
    advice: str


class RoadmapResult(BaseModel):
    """Outcome of applying a roadmap to a project."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project: Project
    advice: str
    added_goals: list[Goal]
