"""Roadmap service - applies advisor suggestions to a project."""
import logging

from projectsync.errors import RoadmapInProgressError
from projectsync.models.goal import GoalCreate
from projectsync.models.roadmap import RoadmapResult
from projectsync.services.project_store import ProjectStore
from projectsync.services.roadmap_advisor import RoadmapAdvisor


logger = logging.getLogger(__name__)


class RoadmapService:
    """Runs roadmap requests, at most one in flight per project."""

    def __init__(self, store: ProjectStore, advisor: RoadmapAdvisor):
        """Initialize service with the project store and the advisor."""
        self.store = store
        self.advisor = advisor
        self._in_flight: set[str] = set()

    def is_loading(self, project_id: str) -> bool:
        """Whether a roadmap request for the project is currently running."""
        return project_id in self._in_flight

    async def generate_roadmap(self, project_id: str) -> RoadmapResult:
        """
        Request a roadmap for a project and add its goals to the project.

        The advisor only returns data; the suggested goals reach the
        collection through the store in a single change.

        Args:
            project_id: Project to break down

        Returns:
            The updated project, the advice and the goals that were added

        Raises:
            NotFoundError: If the project does not exist, or was deleted
                while the request was running
            RoadmapInProgressError: If a request for the project is running
            AIServiceError: If the advisor fails
        """
        project = self.store.get_project(project_id)
        if self.is_loading(project_id):
            raise RoadmapInProgressError("A roadmap is already being generated for this project")

        self._in_flight.add(project_id)
        try:
            recommendation = await self.advisor.request_roadmap(project.title, project.description)
        finally:
            self._in_flight.discard(project_id)

        # The project may have been deleted while we were waiting
        self.store.get_project(project_id)

        goal_creates = []
        for suggestion in recommendation.suggested_goals:
            if not suggestion.title.strip():
                logger.warning("Skipping untitled roadmap suggestion for %s", project_id)
                continue
            goal_creates.append(
                GoalCreate(
                    title=suggestion.title,
                    description=suggestion.description,
                    priority=suggestion.priority,
                )
            )

        added_goals = self.store.add_goals(project_id, goal_creates) if goal_creates else []
        logger.info("Added %d roadmap goals to %s", len(added_goals), project_id)

        return RoadmapResult(
            project=self.store.get_project(project_id),
            advice=recommendation.advice,
            added_goals=added_goals,
        )
