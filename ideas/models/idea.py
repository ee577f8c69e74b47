"""
Idea submission model.

An IdeaSubmission is the request-scoped input of the pipeline: a short note,
an optional title and an optional pre-written augmentation block.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ideas.errors import ValidationError


@dataclass(frozen=True)
class IdeaSubmission:
    """
    A single idea as submitted by the CLI or the HTTP layer.

    Attributes:
        content: The note itself. Trimmed on construction; must not be empty.
        title: Optional title. Blank titles are treated as missing.
        augmented: Optional pre-written augmentation block, used verbatim.
        submitted_at: Submission time, used as the document date.
    """

    content: str
    title: Optional[str] = None
    augmented: Optional[str] = None
    submitted_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        """Normalize and validate fields after initialization."""
        if not isinstance(self.content, str):
            raise ValidationError("content must be a string")

        content = self.content.strip()
        if not content:
            raise ValidationError("content is required and cannot be empty")

        title = self.title.strip() if self.title else None
        augmented = self.augmented.strip() if self.augmented else None

        # frozen dataclass: normalized values are written once, here
        object.__setattr__(self, "content", content)
        object.__setattr__(self, "title", title or None)
        object.__setattr__(self, "augmented", augmented or None)

    @property
    def has_title(self) -> bool:
        return bool(self.title)

    @property
    def has_augmented(self) -> bool:
        return bool(self.augmented)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IdeaSubmission":
        """
        Create a submission from a request payload.

        Accepts the keys "title", "content" and "augmented"; unknown keys are
        ignored.

        Raises:
            ValidationError: If the payload is not an object, a field has the
                wrong type, or content is empty.
        """
        if not isinstance(data, dict):
            raise ValidationError("request body must be a JSON object")

        for key in ("title", "content", "augmented"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{key} must be a string")

        return cls(
            content=data.get("content") or "",
            title=data.get("title"),
            augmented=data.get("augmented"),
        )

    def __str__(self) -> str:
        label = self.title or self.content[:40]
        return f"IdeaSubmission({label!r})"
