"""Goal model definitions (short-term tasks owned by a project)."""
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GoalStatus(str, Enum):
    """Goal states (kanban columns)."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class GoalPriority(str, Enum):
    """Goal priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class GoalBase(BaseModel):
    """Base goal fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    description: str = ""
    priority: GoalPriority = GoalPriority.MEDIUM
    due_date: Optional[date] = None


class GoalCreate(GoalBase):
    """Goal creation model."""

    pass


class GoalUpdate(BaseModel):
    """Goal update model - all fields optional.

    Only fields that were explicitly set are applied, so ``dueDate: null``
    clears the due date. A ``project_id`` different from the current owner
    moves the goal.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[GoalStatus] = None
    priority: Optional[GoalPriority] = None
    due_date: Optional[date] = None
    project_id: Optional[str] = None


class Goal(GoalBase):
    """Full goal model as stored inside its project."""

    model_config = ConfigDict(frozen=True)

    id: str
    project_id: str
    status: GoalStatus = GoalStatus.PENDING
