"""Clear the stored project snapshot so the next start seeds a fresh Inbox.

Usage:
    python scripts/reset_workspace.py
    python scripts/reset_workspace.py --data-dir /tmp/projectsync --key ps_projects
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from projectsync.config import settings
from projectsync.errors import StorageError
from projectsync.storage import FileStorage, SnapshotRepository


def reset_workspace(data_dir: Path, key: str) -> None:
    """Delete the snapshot stored under ``key`` in ``data_dir``."""
    storage = FileStorage(data_dir)
    repository = SnapshotRepository(storage, key)

    try:
        projects = repository.load()
    except StorageError as e:
        print(f"Snapshot is unreadable, removing anyway: {e}")
        projects = []
    goal_count = sum(len(p.goals) for p in projects)

    repository.clear()
    print(f"Removed {len(projects)} projects and {goal_count} goals from {storage.path_for(key)}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Reset the local ProjectSync workspace")
    parser.add_argument("--data-dir", type=Path, default=settings.data_dir)
    parser.add_argument("--key", default=settings.storage_key)
    args = parser.parse_args()

    reset_workspace(args.data_dir, args.key)
