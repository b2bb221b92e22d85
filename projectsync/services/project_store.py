"""Project store - the authoritative project collection and its mutations."""
import logging
import uuid
from datetime import date, datetime, timezone
from typing import Callable, Container, Iterable, Optional

from projectsync.errors import NotFoundError, ProtectedEntityError, ValidationError
from projectsync.models.goal import Goal, GoalCreate, GoalPriority, GoalStatus, GoalUpdate
from projectsync.models.project import Project, ProjectUpdate
from projectsync.storage import SnapshotRepository


logger = logging.getLogger(__name__)

INBOX_PROJECT_ID = "inbox-project"

Snapshot = tuple[Project, ...]


def new_id(taken: Container[str] = ()) -> str:
    """Generate a fresh opaque id not present in ``taken``."""
    while True:
        candidate = str(uuid.uuid4())
        if candidate not in taken:
            return candidate


def inbox_project() -> Project:
    """Build the reserved, non-deletable Inbox project."""
    return Project(
        id=INBOX_PROJECT_ID,
        title="Inbox",
        description="Tasks that don't belong to a project yet",
        category="General",
        created_at=datetime.now(timezone.utc),
        deletable=False,
    )


def _require(value: Optional[str], label: str) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required")


def _find_project(projects: Snapshot, project_id: str) -> Project:
    for project in projects:
        if project.id == project_id:
            return project
    raise NotFoundError("Project not found")


def _replace_project(projects: Snapshot, updated: Project) -> Snapshot:
    return tuple(updated if p.id == updated.id else p for p in projects)


def _index_goals(projects: Snapshot) -> dict[str, str]:
    return {goal.id: project.id for project in projects for goal in project.goals}


class ProjectStore:
    """
    In-memory project collection backed by a snapshot repository.

    Every change goes through ``mutate``: the change function builds a new
    snapshot from the current one, the snapshot is persisted once, and only
    then does it replace the current collection. A change that raises leaves
    both the collection and the persisted state untouched.
    """

    def __init__(self, repository: SnapshotRepository):
        """Load the persisted collection, seeding the Inbox if it is empty."""
        self.repository = repository
        projects = tuple(repository.load())
        if not projects:
            projects = (inbox_project(),)
            repository.save(projects)
            logger.info("Seeded empty workspace with the Inbox project")
        self._projects: Snapshot = projects
        self._goal_index = _index_goals(projects)

    @property
    def projects(self) -> Snapshot:
        """Current snapshot of the collection."""
        return self._projects

    def mutate(self, change: Callable[[Snapshot], Iterable[Project]]) -> Snapshot:
        """
        Apply ``change`` to the current snapshot and persist the result.

        Args:
            change: Function mapping the current snapshot to the next one

        Returns:
            The new snapshot
        """
        snapshot = tuple(change(self._projects))
        goal_index = _index_goals(snapshot)
        self.repository.save(snapshot)
        self._projects = snapshot
        self._goal_index = goal_index
        logger.debug("Persisted %d projects, %d goals", len(snapshot), len(goal_index))
        return snapshot

    def get_project(self, project_id: str) -> Project:
        """
        Get a project by id.

        Raises:
            NotFoundError: If project not found
        """
        return _find_project(self._projects, project_id)

    def get_goal(self, goal_id: str) -> Goal:
        """
        Get a goal by id, wherever it currently lives.

        Raises:
            NotFoundError: If goal not found
        """
        owner_id = self._goal_index.get(goal_id)
        if owner_id is None:
            raise NotFoundError("Goal not found")
        owner = _find_project(self._projects, owner_id)
        return next(goal for goal in owner.goals if goal.id == goal_id)

    def create_project(
        self,
        title: str,
        description: str,
        category: str = "General",
        deadline: Optional[date] = None,
    ) -> Project:
        """
        Create a new active project with no goals.

        Args:
            title: Project title
            description: Project description
            category: Free-text grouping label
            deadline: Optional deadline

        Returns:
            Created project

        Raises:
            ValidationError: If title or description is empty
        """
        _require(title, "Project title")
        _require(description, "Project description")

        project = Project(
            id=new_id({p.id for p in self._projects}),
            title=title,
            description=description,
            category=category,
            deadline=deadline,
            created_at=datetime.now(timezone.utc),
        )
        self.mutate(lambda projects: projects + (project,))
        logger.info("Created project %s (%s)", project.id, project.title)
        return project

    def update_project(self, project_id: str, patch: ProjectUpdate) -> Project:
        """
        Apply a field-level update to a project.

        Only fields explicitly set on ``patch`` are applied. ``deadline`` may
        be explicitly set to None to clear it; None on any other field is
        ignored.

        Raises:
            NotFoundError: If project not found
            ValidationError: If title or description is patched to empty
        """
        changes = patch.model_dump(exclude_unset=True)
        changes = {k: v for k, v in changes.items() if v is not None or k == "deadline"}
        if "title" in changes:
            _require(changes["title"], "Project title")
        if "description" in changes:
            _require(changes["description"], "Project description")

        def apply(projects: Snapshot) -> Snapshot:
            current = _find_project(projects, project_id)
            return _replace_project(projects, current.model_copy(update=changes))

        self.mutate(apply)
        return self.get_project(project_id)

    def delete_project(self, project_id: str) -> None:
        """
        Delete a project together with all of its goals.

        Confirmation is the caller's job; the store never prompts.

        Raises:
            NotFoundError: If project not found
            ProtectedEntityError: If the project is not deletable
        """

        def apply(projects: Snapshot) -> Snapshot:
            project = _find_project(projects, project_id)
            if not project.deletable:
                logger.warning("Refused to delete protected project %s", project_id)
                raise ProtectedEntityError(f"Project '{project.title}' cannot be deleted")
            return tuple(p for p in projects if p.id != project_id)

        self.mutate(apply)
        logger.info("Deleted project %s", project_id)

    def add_goal(
        self,
        project_id: str,
        title: str,
        description: str = "",
        due_date: Optional[date] = None,
        priority: GoalPriority = GoalPriority.MEDIUM,
    ) -> Goal:
        """
        Add a pending goal at the top of a project's goal list.

        Raises:
            ValidationError: If title is empty or the project does not exist
        """
        goal_create = GoalCreate(
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
        )
        return self.add_goals(project_id, [goal_create])[0]

    def add_goals(self, project_id: str, goals: Iterable[GoalCreate]) -> list[Goal]:
        """
        Add several pending goals to a project in a single change.

        The new goals keep their given order and are placed ahead of the
        project's existing goals.

        Raises:
            ValidationError: If any title is empty or the project does not exist
        """
        goal_creates = list(goals)
        for goal_create in goal_creates:
            if not goal_create.title or not goal_create.title.strip():
                logger.warning("Attempted to save task with missing title in project %s", project_id)
                raise ValidationError("Goal title is required")
        if not project_id or project_id not in {p.id for p in self._projects}:
            logger.warning("Attempted to save task for unknown project %r", project_id)
            raise ValidationError("Goal must belong to an existing project")

        taken = set(self._goal_index)
        new_goals = []
        for goal_create in goal_creates:
            goal = Goal(
                id=new_id(taken),
                project_id=project_id,
                status=GoalStatus.PENDING,
                **goal_create.model_dump(),
            )
            taken.add(goal.id)
            new_goals.append(goal)

        def apply(projects: Snapshot) -> Snapshot:
            project = _find_project(projects, project_id)
            updated = project.model_copy(update={"goals": tuple(new_goals) + project.goals})
            return _replace_project(projects, updated)

        self.mutate(apply)
        return new_goals

    def update_goal(self, project_id: str, goal_id: str, patch: GoalUpdate) -> Goal:
        """
        Update a goal, moving it to another project if the patch says so.

        The goal is located through the store's own index; ``project_id`` is
        the caller's view of the owner and is not trusted. A move removes the
        goal from its owner, inserts it at the top of the destination and
        rewrites its ``project_id`` in one change.

        Raises:
            NotFoundError: If the goal or the destination project does not exist
            ValidationError: If title is patched to empty
        """
        changes = patch.model_dump(exclude_unset=True)
        changes = {k: v for k, v in changes.items() if v is not None or k == "due_date"}
        if "title" in changes:
            _require(changes["title"], "Goal title")
        destination_id = changes.pop("project_id", None)

        owner_id = self._goal_index.get(goal_id)
        if owner_id is None:
            raise NotFoundError("Goal not found")
        if owner_id != project_id:
            logger.debug("Goal %s is owned by %s, not %s", goal_id, owner_id, project_id)

        def apply(projects: Snapshot) -> Snapshot:
            source = _find_project(projects, owner_id)
            goal = next(g for g in source.goals if g.id == goal_id)

            if destination_id is not None and destination_id != owner_id:
                destination = _find_project(projects, destination_id)
                moved = goal.model_copy(update={**changes, "project_id": destination_id})
                source = source.model_copy(
                    update={"goals": tuple(g for g in source.goals if g.id != goal_id)}
                )
                destination = destination.model_copy(update={"goals": (moved,) + destination.goals})
                return _replace_project(_replace_project(projects, source), destination)

            updated = goal.model_copy(update=changes)
            source = source.model_copy(
                update={"goals": tuple(updated if g.id == goal_id else g for g in source.goals)}
            )
            return _replace_project(projects, source)

        self.mutate(apply)
        return self.get_goal(goal_id)

    def toggle_goal_status(self, project_id: str, goal_id: str) -> Optional[Goal]:
        """
        Flip a goal between completed and pending.

        A completed goal becomes pending; anything else, including an
        in-progress goal, becomes completed. Does nothing and returns None if
        the goal is not in the given project.
        """
        if self._goal_index.get(goal_id) != project_id:
            return None
        goal = self.get_goal(goal_id)
        if goal.status == GoalStatus.COMPLETED:
            status = GoalStatus.PENDING
        else:
            status = GoalStatus.COMPLETED
        return self.update_goal(project_id, goal_id, GoalUpdate(status=status))

    def delete_goal(self, goal_id: str) -> None:
        """Delete a goal from whichever project owns it; no-op if unknown."""
        owner_id = self._goal_index.get(goal_id)
        if owner_id is None:
            return

        def apply(projects: Snapshot) -> Snapshot:
            owner = _find_project(projects, owner_id)
            updated = owner.model_copy(
                update={"goals": tuple(g for g in owner.goals if g.id != goal_id)}
            )
            return _replace_project(projects, updated)

        self.mutate(apply)
