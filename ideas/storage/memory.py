"""In-memory content store for dry runs and testing."""

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from ideas.storage.base import ContentStore, WriteResult


@dataclass
class StoredFile:
    """A file held by MemoryContentStore."""
    path: str
    content: str
    message: str


class MemoryContentStore(ContentStore):
    """
    In-memory append-only store.

    Use this when GitHub is not configured or for testing.
    Data is stored in memory and lost when the process ends.
    Safe to share between request threads.
    """

    def __init__(self, existing: Optional[List[str]] = None):
        self._lock = threading.Lock()
        self._files: Dict[str, StoredFile] = {}
        for path in existing or []:
            self._files[path] = StoredFile(path=path, content="", message="")

    @property
    def name(self) -> str:
        return "memory"

    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self._files

    def create_file(self, path: str, content: str, message: str) -> WriteResult:
        """Store a file unless the path is taken."""
        with self._lock:
            if path in self._files:
                return WriteResult.CONFLICT
            self._files[path] = StoredFile(path=path, content=content, message=message)
            return WriteResult.CREATED

    def get(self, path: str) -> Optional[StoredFile]:
        with self._lock:
            return self._files.get(path)

    def paths(self) -> List[str]:
        with self._lock:
            return sorted(self._files)

    def clear(self) -> None:
        """Clear all files (for testing)."""
        with self._lock:
            self._files.clear()

    def count(self) -> int:
        """Return number of stored files (for testing)."""
        with self._lock:
            return len(self._files)
