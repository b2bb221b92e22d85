"""Workspace wiring - the store and roadmap service shared by the routers."""
import logging
from typing import Optional

from projectsync.config import settings
from projectsync.services.project_store import ProjectStore
from projectsync.services.roadmap_advisor import RoadmapAdvisor
from projectsync.services.roadmap_service import RoadmapService
from projectsync.storage import FileStorage, SnapshotRepository, SnapshotStorage


logger = logging.getLogger(__name__)


class Workspace:
    """Holds the open project store for the lifetime of the app."""

    store: ProjectStore | None = None
    roadmap: RoadmapService | None = None

    def open(
        self,
        storage: Optional[SnapshotStorage] = None,
        advisor: Optional[RoadmapAdvisor] = None,
    ) -> None:
        """Load the snapshot and build the services."""
        if storage is None:
            storage = FileStorage(settings.data_dir)
        if advisor is None:
            advisor = RoadmapAdvisor.from_settings(settings)
        self.store = ProjectStore(SnapshotRepository(storage, settings.storage_key))
        self.roadmap = RoadmapService(self.store, advisor)
        logger.info("Opened workspace with %d projects", len(self.store.projects))

    def close(self) -> None:
        """Release the services."""
        if self.store:
            logger.info("Closed workspace")
        self.store = None
        self.roadmap = None


# Global workspace instance
workspace = Workspace()


def get_store() -> ProjectStore:
    """Dependency to get the project store."""
    if workspace.store is None:
        raise RuntimeError("Workspace not opened")
    return workspace.store


def get_roadmap_service() -> RoadmapService:
    """Dependency to get the roadmap service."""
    if workspace.roadmap is None:
        raise RuntimeError("Workspace not opened")
    return workspace.roadmap
