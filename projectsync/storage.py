"""Local snapshot storage for the project collection.

The whole collection lives in a single key-value slot as one JSON array of
projects. Reads and writes are synchronous and always cover the full
collection; there are no partial updates and no migrations.
"""
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from projectsync.errors import StorageError
from projectsync.models.project import Project


logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "ps_projects"

_snapshot_adapter = TypeAdapter(list[Project])


class SnapshotStorage(ABC):
    """Key-value slots holding serialized snapshots."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the stored text for ``key``, or None if the slot is empty."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the contents of ``key``."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Empty the slot for ``key``."""


class MemoryStorage(SnapshotStorage):
    """In-process storage, used by tests and throwaway workspaces."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        self.slots[key] = value

    def remove(self, key: str) -> None:
        self.slots.pop(key, None)


class FileStorage(SnapshotStorage):
    """One ``<key>.json`` file per slot inside ``directory``."""

    def __init__(self, directory: Path):
        self.directory = Path(directory).expanduser()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def write(self, key: str, value: str) -> None:
        """Write through a temporary file so readers never see a half-written snapshot."""
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


def dumps(projects: Iterable[Project]) -> str:
    """Serialize a project collection to the snapshot JSON format."""
    return _snapshot_adapter.dump_json(list(projects), by_alias=True).decode("utf-8")


def loads(text: str) -> list[Project]:
    """
    Parse a snapshot produced by ``dumps``.

    Raises:
        StorageError: If the text is not a valid project snapshot
    """
    try:
        return _snapshot_adapter.validate_json(text)
    except PydanticValidationError as e:
        raise StorageError(f"Invalid project snapshot: {e}") from e


class SnapshotRepository:
    """Loads and saves the full project collection under one storage key."""

    def __init__(self, storage: SnapshotStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> list[Project]:
        """Return the stored collection, or an empty list if nothing is stored."""
        text = self.storage.read(self.key)
        if text is None:
            return []
        projects = loads(text)
        logger.debug("Loaded %d projects from %s", len(projects), self.key)
        return projects

    def save(self, projects: Iterable[Project]) -> None:
        """Persist the whole collection, replacing the previous snapshot."""
        self.storage.write(self.key, dumps(projects))

    def clear(self) -> None:
        self.storage.remove(self.key)
