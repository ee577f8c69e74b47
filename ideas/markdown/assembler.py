"""
Markdown assembly for bilingual ideas.

Builds the two persisted documents of an idea from a StructuredResult:
one in the source language, one in the other language. Both share the slug
and point at each other through the `translation` front matter key.

Output: {content_dir}/{lang}/{slug}.md

Pure transformation: no network calls happen here. Augmentation blocks are
fetched (and translated) by the pipeline before assembly.
"""

from datetime import datetime
from typing import Optional, Tuple

from ideas.config import CONTENT_DIR
from ideas.models.document import MarkdownDocument
from ideas.models.language import Language
from ideas.models.result import StructuredResult
from ideas.text.slug import sanitize_commit_message


AUGMENTED_HEADINGS = {
    Language.EN: "## Augmented",
    Language.ZH: "## 延伸阅读",
}


def document_path(content_dir: str, lang: Language, slug: str) -> str:
    """Repository path of one language variant."""
    return f"{content_dir.strip('/')}/{lang.value}/{slug}.md"


def build_body(content: str, augmented: Optional[str], lang: Language) -> str:
    """Content, followed by the augmented section when one is given."""
    body = content.strip()
    if augmented and augmented.strip():
        body += f"\n\n{AUGMENTED_HEADINGS[lang]}\n\n{augmented.strip()}"
    return body


def commit_message(document: MarkdownDocument) -> str:
    """Commit message for writing a document."""
    return sanitize_commit_message(f"ideas: {document.title} ({document.lang.value})")


class MarkdownAssembler:
    """
    Builds MarkdownDocument pairs.

    Usage:
        assembler = MarkdownAssembler("content/ideas")
        native, other = assembler.assemble(result, "my-idea", datetime.now())
    """

    def __init__(self, content_dir: str = None):
        self.content_dir = content_dir if content_dir is not None else CONTENT_DIR

    def assemble(
        self,
        result: StructuredResult,
        slug: str,
        date: datetime,
        augmented_native: Optional[str] = None,
        augmented_other: Optional[str] = None,
    ) -> Tuple[MarkdownDocument, MarkdownDocument]:
        """
        Build the native-language and other-language documents.

        Args:
            result: Parsed polish + translate result.
            slug: Slug shared by both documents.
            date: Submission time for the front matter.
            augmented_native: Augmentation block in result.lang.
            augmented_other: The same block in result.lang.other. When missing,
                the other document has no augmented section.

        Returns:
            Tuple of (native_document, other_document).
        """
        native_lang = result.lang
        other_lang = native_lang.other
        native_path = document_path(self.content_dir, native_lang, slug)
        other_path = document_path(self.content_dir, other_lang, slug)

        native = MarkdownDocument(
            lang=native_lang,
            title=result.polished_title.strip(),
            slug=slug,
            date=date,
            body=build_body(result.polished_content, augmented_native, native_lang),
            path=native_path,
            counterpart_path=other_path,
        )
        other = MarkdownDocument(
            lang=other_lang,
            title=result.translated_title.strip(),
            slug=slug,
            date=date,
            body=build_body(result.translated_content, augmented_other, other_lang),
            path=other_path,
            counterpart_path=native_path,
        )
        return native, other
