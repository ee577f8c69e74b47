"""
Base content store abstraction for Ideas.

Defines the interface of an append-only file store: a path is created once and
never updated. Creating a path that already exists reports a conflict instead
of overwriting, which is how the pipeline detects slug collisions.
"""

from abc import ABC, abstractmethod
from enum import Enum


class WriteResult(str, Enum):
    """Outcome of a create_file call that reached the store."""

    CREATED = "created"
    CONFLICT = "conflict"


class ContentStore(ABC):
    """
    Abstract base class for all content stores.

    Implementations must never overwrite an existing path. Any failure other
    than a conflict raises ideas.errors.UpstreamError.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Return the name of this store.

        Used for logging and debugging.
        """
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """
        Check whether a file is already stored at a path.

        Raises:
            UpstreamError: If the store cannot answer.
        """
        pass

    @abstractmethod
    def create_file(self, path: str, content: str, message: str) -> WriteResult:
        """
        Create a new file with a commit message.

        Args:
            path: Repository-relative path of the file.
            content: UTF-8 text content.
            message: Commit message.

        Returns:
            WriteResult.CREATED, or WriteResult.CONFLICT if the path exists.

        Raises:
            UpstreamError: On any other failure (timeout, auth, server error).
        """
        pass

    def __str__(self) -> str:
        return f"ContentStore({self.name})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
