"""
Tests for Markdown assembly.

Both documents share the slug, point at each other, and carry their own
language's title and body.
"""

from datetime import datetime

import pytest

from ideas.markdown.assembler import (
    AUGMENTED_HEADINGS,
    MarkdownAssembler,
    build_body,
    commit_message,
    document_path,
)
from ideas.models.language import Language
from ideas.models.result import StructuredResult
from tests.sample_data import AUGMENTED_EN, AUGMENTED_ZH, EN_RESULT, ZH_RESULT


DATE = datetime(2025, 11, 2, 9, 30, 0)


@pytest.fixture
def assembler():
    return MarkdownAssembler("content/ideas")


@pytest.fixture
def en_result():
    return StructuredResult.from_dict(EN_RESULT)


# =============================================================================
# Test helpers
# =============================================================================

class TestHelpers:
    """Tests for path, body and commit message helpers."""

    def test_document_path(self):
        assert document_path("content/ideas", Language.ZH, "my-idea") == "content/ideas/zh/my-idea.md"

    def test_document_path_strips_slashes(self):
        assert document_path("/content/ideas/", Language.EN, "x") == "content/ideas/en/x.md"

    def test_body_without_augmentation(self):
        assert build_body("  Content.\n", None, Language.EN) == "Content."

    def test_blank_augmentation_is_ignored(self):
        assert build_body("Content.", "  \n", Language.EN) == "Content."

    def test_body_with_augmentation(self):
        body = build_body("Content.", "### Context\n\nMore.", Language.ZH)
        assert body == "Content.\n\n## 延伸阅读\n\n### Context\n\nMore."


# =============================================================================
# Test MarkdownAssembler
# =============================================================================

class TestAssemble:
    """Tests for MarkdownAssembler.assemble."""

    def test_pair_shares_slug_and_cross_references(self, assembler, en_result):
        native, other = assembler.assemble(en_result, "bilingual-notes", DATE)

        assert native.lang is Language.EN
        assert other.lang is Language.ZH
        assert native.slug == other.slug == "bilingual-notes"
        assert native.path == "content/ideas/en/bilingual-notes.md"
        assert other.path == "content/ideas/zh/bilingual-notes.md"
        assert native.counterpart_path == other.path
        assert other.counterpart_path == native.path

    def test_titles_and_bodies_follow_language(self, assembler, en_result):
        native, other = assembler.assemble(en_result, "bilingual-notes", DATE)

        assert native.title == EN_RESULT["polished_title"]
        assert native.body == EN_RESULT["polished_content"]
        assert other.title == EN_RESULT["translated_title"]
        assert other.body == EN_RESULT["translated_content"]

    def test_chinese_source_is_native(self, assembler):
        result = StructuredResult.from_dict(ZH_RESULT)
        native, other = assembler.assemble(result, "caching", DATE)

        assert native.lang is Language.ZH
        assert native.title == "关于缓存的想法"
        assert other.lang is Language.EN
        assert other.title == "A Thought on Caching"

    def test_augmented_sections(self, assembler, en_result):
        native, other = assembler.assemble(
            en_result, "bilingual-notes", DATE,
            augmented_native=AUGMENTED_EN,
            augmented_other=AUGMENTED_ZH,
        )

        assert native.body.endswith(f"{AUGMENTED_HEADINGS[Language.EN]}\n\n{AUGMENTED_EN}")
        assert other.body.endswith(f"{AUGMENTED_HEADINGS[Language.ZH]}\n\n{AUGMENTED_ZH}")

    def test_native_augmentation_only(self, assembler, en_result):
        native, other = assembler.assemble(
            en_result, "bilingual-notes", DATE, augmented_native=AUGMENTED_EN,
        )

        assert "## Augmented" in native.body
        assert "## 延伸阅读" not in other.body

    def test_embedded_newlines_preserved(self, assembler, en_result):
        native, _ = assembler.assemble(en_result, "bilingual-notes", DATE)
        rendered = native.render()

        assert "Every note I write should exist in two languages.\n\nThis makes it reachable.\n" in rendered

    def test_rendered_front_matter(self, assembler, en_result):
        _, other = assembler.assemble(en_result, "bilingual-notes", DATE)

        assert other.render().startswith(
            "---\n"
            'title: "笔记应当双语"\n'
            'slug: "bilingual-notes"\n'
            "date: 2025-11-02T09:30:00\n"
            "lang: zh\n"
            'translation: "content/ideas/en/bilingual-notes.md"\n'
            "---\n\n"
        )

    def test_commit_message(self, assembler, en_result):
        native, other = assembler.assemble(en_result, "bilingual-notes", DATE)

        assert commit_message(native) == "ideas: Notes Should Be Bilingual (en)"
        assert commit_message(other) == "ideas: 笔记应当双语 (zh)"
