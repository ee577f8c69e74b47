"""
Error taxonomy for the Ideas pipeline.

Every failure a caller can see derives from IdeasError and carries a
human-readable message suitable for the HTTP boundary.
"""

from typing import Optional


class IdeasError(Exception):
    """Base class for all pipeline errors."""


class ValidationError(IdeasError):
    """The submission is unusable; no external call was made."""


class MalformedResponse(IdeasError):
    """
    An LLM reply could not be turned into a StructuredResult.

    Attributes:
        raw: The reply exactly as received.
        repaired: The text after fence stripping and repair (None if parsing
            was attempted on unrepaired text).
    """

    def __init__(self, message: str, raw: str = "", repaired: Optional[str] = None):
        super().__init__(message)
        self.raw = raw
        self.repaired = repaired


class UpstreamError(IdeasError):
    """
    An external call (LLM or write API) failed.

    Attributes:
        stage: Pipeline stage or client operation that failed (e.g. "polish", "commit").
        status: HTTP status code when the upstream answered, None for transport errors.
    """

    def __init__(self, message: str, stage: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.stage = stage
        self.status = status

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"{self.stage}: {message}"
        return message


class Cancelled(UpstreamError):
    """The originating request went away before the next external call."""


class PartialCommit(IdeasError):
    """
    One language document was committed and the other was not.

    Attributes:
        committed: Language tag of the committed document.
        missing: Language tag of the document still to be written.
    """

    def __init__(self, message: str, committed: str, missing: str):
        super().__init__(message)
        self.committed = committed
        self.missing = missing
