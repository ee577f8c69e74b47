"""
Text processing module.

Language detection, JSON repair for LLM replies, and slug helpers.
"""

from ideas.text.language import detect_language, count_scripts
from ideas.text.repair import repair_json, extract_json_object
from ideas.text.slug import slugify, with_suffix, sanitize_commit_message

__all__ = [
    "detect_language",
    "count_scripts",
    "repair_json",
    "extract_json_object",
    "slugify",
    "with_suffix",
    "sanitize_commit_message",
]
