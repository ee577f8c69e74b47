"""
Data models module.

Defines data structures for submissions, languages, LLM results and documents.
"""

from ideas.models.language import Language
from ideas.models.idea import IdeaSubmission
from ideas.models.result import StructuredResult, parse_structured_result
from ideas.models.document import MarkdownDocument

__all__ = [
    "Language",
    "IdeaSubmission",
    "StructuredResult",
    "parse_structured_result",
    "MarkdownDocument",
]
