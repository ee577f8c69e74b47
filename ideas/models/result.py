"""
Structured result of one polish + translate cycle.

The LLM is asked for a JSON object with five string fields. Its reply is
treated as structurally validated text, not trusted data: it goes through
fence stripping and repair, and then every field is checked here. Parsing is
all-or-nothing.
"""

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict

from ideas.errors import MalformedResponse
from ideas.models.language import Language
from ideas.text.repair import extract_json_object, repair_json


REQUIRED_FIELDS = (
    "lang",
    "polished_title",
    "polished_content",
    "translated_title",
    "translated_content",
)


@dataclass(frozen=True)
class StructuredResult:
    """
    Polished text in the source language plus its translation.

    polished_* fields are in `lang`; translated_* fields are in `lang.other`.
    """

    lang: Language
    polished_title: str
    polished_content: str
    translated_title: str
    translated_content: str

    def title_for(self, lang: Language) -> str:
        """Title in the requested language."""
        return self.polished_title if lang == self.lang else self.translated_title

    def content_for(self, lang: Language) -> str:
        """Content in the requested language."""
        return self.polished_content if lang == self.lang else self.translated_content

    def to_dict(self) -> Dict[str, str]:
        data = asdict(self)
        data["lang"] = self.lang.value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "StructuredResult":
        """
        Build a result from decoded JSON.

        Raises:
            MalformedResponse: If data is not an object, a field is missing or
                not a string, or lang is not a known tag.
        """
        if not isinstance(data, dict):
            raise MalformedResponse(f"expected a JSON object, got {type(data).__name__}")

        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise MalformedResponse(f"missing fields: {', '.join(missing)}")

        wrong_type = [name for name in REQUIRED_FIELDS if not isinstance(data[name], str)]
        if wrong_type:
            raise MalformedResponse(f"fields must be strings: {', '.join(wrong_type)}")

        try:
            lang = Language.parse(data["lang"])
        except ValueError:
            raise MalformedResponse(f"unknown lang {data['lang']!r}")

        return cls(
            lang=lang,
            polished_title=data["polished_title"],
            polished_content=data["polished_content"],
            translated_title=data["translated_title"],
            translated_content=data["translated_content"],
        )

    @classmethod
    def from_json(cls, text: str) -> "StructuredResult":
        """
        Parse a JSON document into a result.

        Raises:
            MalformedResponse: If the text is not valid JSON or fails validation.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponse(f"invalid JSON: {e}", raw=text, repaired=text)

        try:
            return cls.from_dict(data)
        except MalformedResponse as e:
            e.raw = e.raw or text
            e.repaired = text if e.repaired is None else e.repaired
            raise


def parse_structured_result(raw: str) -> StructuredResult:
    """
    Turn an LLM reply into a StructuredResult.

    Strips a code fence, repairs unescaped control characters in strings, then
    parses. A MalformedResponse raised here carries the raw reply and the
    repaired text for diagnosis.
    """
    repaired = repair_json(extract_json_object(raw))
    try:
        return StructuredResult.from_json(repaired)
    except MalformedResponse as e:
        e.raw = raw
        e.repaired = repaired
        raise
