"""
Markdown module.

Assembles the bilingual Markdown documents of an idea.
"""

from ideas.markdown.assembler import (
    MarkdownAssembler,
    build_body,
    commit_message,
    document_path,
)

__all__ = [
    "MarkdownAssembler",
    "build_body",
    "commit_message",
    "document_path",
]
