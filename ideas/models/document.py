"""
Markdown document model.

One MarkdownDocument per language variant of an idea. Documents are written
exactly once to the content store and never updated in place.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ideas.models.language import Language


def _quote(value: str) -> str:
    """Double-quoted YAML scalar (JSON string syntax is valid YAML)."""
    return json.dumps(value, ensure_ascii=False)


@dataclass(frozen=True)
class MarkdownDocument:
    """
    A rendered-on-demand Markdown post with YAML front matter.

    Attributes:
        lang: Language of this variant.
        title: Title in `lang`.
        slug: Slug shared with the counterpart document.
        date: Submission time.
        body: Markdown body (content, optionally followed by the augmented section).
        path: Repository path this document is written to.
        counterpart_path: Repository path of the other language variant.
    """

    lang: Language
    title: str
    slug: str
    date: datetime
    body: str
    path: str
    counterpart_path: Optional[str] = None

    def front_matter(self) -> str:
        lines = [
            "---",
            f"title: {_quote(self.title)}",
            f"slug: {_quote(self.slug)}",
            f"date: {self.date.isoformat(timespec='seconds')}",
            f"lang: {self.lang.value}",
        ]
        if self.counterpart_path:
            lines.append(f"translation: {_quote(self.counterpart_path)}")
        lines.append("---")
        return "\n".join(lines)

    def render(self) -> str:
        """Full file content: front matter, blank line, body, trailing newline."""
        return f"{self.front_matter()}\n\n{self.body.rstrip()}\n"

    def __str__(self) -> str:
        return f"[{self.lang.value}] {self.path}"
