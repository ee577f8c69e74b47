"""
Storage module.

Append-only persistence of idea documents via GitHub or in memory.
"""

from ideas.storage.base import ContentStore, WriteResult
from ideas.storage.github import GitHubContentStore
from ideas.storage.memory import MemoryContentStore, StoredFile

__all__ = [
    "ContentStore",
    "WriteResult",
    "GitHubContentStore",
    "MemoryContentStore",
    "StoredFile",
]
