"""Tests for snapshot storage."""
import json
from datetime import date, datetime, timezone

import pytest

from projectsync.models.goal import Goal, GoalPriority, GoalStatus
from projectsync.models.project import Project, ProjectStatus


@pytest.fixture
def collection():
    """Two projects, one of them the protected Inbox."""
    return [
        Project(
            id="inbox-project",
            title="Inbox",
            description="Loose tasks",
            created_at=datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc),
            deletable=False,
            goals=(
                Goal(id="g1", project_id="inbox-project", title="Buy milk", priority=GoalPriority.LOW),
            ),
        ),
        Project(
            id="p1",
            title="Launch Website",
            description="Ship v1",
            category="Work",
            status=ProjectStatus.PLANNING,
            deadline=date(2025, 6, 30),
            created_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
            goals=(
                Goal(
                    id="g2",
                    project_id="p1",
                    title="Buy domain",
                    description="Something short",
                    status=GoalStatus.IN_PROGRESS,
                    priority=GoalPriority.HIGH,
                    due_date=date(2025, 3, 1),
                ),
                Goal(id="g3", project_id="p1", title="Pick theme", status=GoalStatus.COMPLETED),
            ),
        ),
    ]


class TestSnapshotFormat:
    """Tests for dumps/loads."""

    def test_round_trip(self, collection):
        """Test that serializing and parsing reproduces the collection."""
        from projectsync.storage import dumps, loads

        assert loads(dumps(collection)) == collection

    def test_snapshot_uses_wire_names(self, collection):
        """Test the JSON shape of the snapshot."""
        from projectsync.storage import dumps

        data = json.loads(dumps(collection))

        assert isinstance(data, list)
        assert data[1]["createdAt"].startswith("2025-02-01T00:00:00")
        assert data[1]["deadline"] == "2025-06-30"
        assert data[1]["status"] == "PLANNING"
        assert data[0]["deletable"] is False
        goal = data[1]["goals"][0]
        assert goal["projectId"] == "p1"
        assert goal["dueDate"] == "2025-03-01"
        assert goal["status"] == "IN_PROGRESS"
        assert goal["priority"] == "high"

    def test_loads_invalid_json(self):
        """Test that garbage is reported as a storage error."""
        from projectsync.errors import StorageError
        from projectsync.storage import loads

        with pytest.raises(StorageError):
            loads("{not json")

    def test_loads_wrong_shape(self):
        """Test that a snapshot missing fields is rejected."""
        from projectsync.errors import StorageError
        from projectsync.storage import loads

        with pytest.raises(StorageError):
            loads('[{"id": "p1"}]')


class TestMemoryStorage:
    """Tests for MemoryStorage."""

    def test_read_write_remove(self):
        """Test the basic slot operations."""
        from projectsync.storage import MemoryStorage

        storage = MemoryStorage()

        assert storage.read("ps_projects") is None
        storage.write("ps_projects", "[]")
        assert storage.read("ps_projects") == "[]"
        storage.remove("ps_projects")
        assert storage.read("ps_projects") is None

    def test_remove_missing_key(self):
        """Test that removing an empty slot is harmless."""
        from projectsync.storage import MemoryStorage

        MemoryStorage().remove("missing")


class TestFileStorage:
    """Tests for FileStorage."""

    def test_write_creates_directory(self, tmp_path):
        """Test that the data directory is created on first write."""
        from projectsync.storage import FileStorage

        storage = FileStorage(tmp_path / "data")
        storage.write("ps_projects", "[]")

        assert (tmp_path / "data" / "ps_projects.json").read_text(encoding="utf-8") == "[]"

    def test_write_replaces_and_leaves_no_temp_files(self, tmp_path):
        """Test that rewriting a slot replaces it cleanly."""
        from projectsync.storage import FileStorage

        storage = FileStorage(tmp_path)
        storage.write("ps_projects", "[1]")
        storage.write("ps_projects", "[2]")

        assert storage.read("ps_projects") == "[2]"
        assert [p.name for p in tmp_path.iterdir()] == ["ps_projects.json"]

    def test_read_missing_and_remove(self, tmp_path):
        """Test empty slots and removal."""
        from projectsync.storage import FileStorage

        storage = FileStorage(tmp_path)

        assert storage.read("ps_projects") is None
        storage.write("ps_projects", "[]")
        storage.remove("ps_projects")
        assert storage.read("ps_projects") is None
        storage.remove("ps_projects")


class TestSnapshotRepository:
    """Tests for SnapshotRepository."""

    def test_load_empty(self):
        """Test loading when nothing has been stored."""
        from projectsync.storage import MemoryStorage, SnapshotRepository

        assert SnapshotRepository(MemoryStorage()).load() == []

    def test_save_and_load(self, tmp_path, collection):
        """Test a full save/load cycle through a file."""
        from projectsync.storage import FileStorage, SnapshotRepository

        repository = SnapshotRepository(FileStorage(tmp_path), key="custom")
        repository.save(collection)

        assert (tmp_path / "custom.json").exists()
        assert SnapshotRepository(FileStorage(tmp_path), key="custom").load() == collection

    def test_clear(self, collection):
        """Test clearing the stored snapshot."""
        from projectsync.storage import MemoryStorage, SnapshotRepository

        repository = SnapshotRepository(MemoryStorage())
        repository.save(collection)
        repository.clear()

        assert repository.load() == []
