"""Project model definitions."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from projectsync.models.goal import Goal


class ProjectStatus(str, Enum):
    """Project lifecycle states."""

    PLANNING = "PLANNING"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class ProjectBase(BaseModel):
    """Base project fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    description: str
    category: str = "General"
    deadline: Optional[date] = None


class ProjectCreate(ProjectBase):
    """Project creation model."""

    pass


class ProjectUpdate(BaseModel):
    """Project update model - all fields optional."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[ProjectStatus] = None
    deadline: Optional[date] = None


class Project(ProjectBase):
    """Full project model, one entry of the persisted snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str
    status: ProjectStatus = ProjectStatus.ACTIVE
    goals: tuple[Goal, ...] = ()
    created_at: datetime
    deletable: bool = True  # False only for the seeded Inbox
