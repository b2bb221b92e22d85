"""Error taxonomy shared by the store, the advisor and the routers."""


class ProjectSyncError(Exception):
    """Base class for all ProjectSync errors."""


class ValidationError(ProjectSyncError):
    """A required field was empty or a reference did not resolve on create."""


class NotFoundError(ProjectSyncError):
    """An operation referenced a project or goal id that does not exist."""


class ProtectedEntityError(ProjectSyncError):
    """Attempted to delete a project that is not deletable (the Inbox)."""


class AIServiceError(ProjectSyncError):
    """The roadmap service failed or returned content that does not parse."""


class RoadmapInProgressError(ProjectSyncError):
    """A roadmap request for the same project is already in flight."""


class StorageError(ProjectSyncError):
    """The persisted snapshot could not be read back."""
