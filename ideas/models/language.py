"""Language tags for the two sides of a bilingual idea."""

from enum import Enum


class Language(str, Enum):
    """Language of a text: English or Chinese."""

    EN = "en"
    ZH = "zh"

    @property
    def other(self) -> "Language":
        """The opposite language of a bilingual pair."""
        return Language.ZH if self is Language.EN else Language.EN

    @property
    def display_name(self) -> str:
        """English name used in prompts."""
        return "English" if self is Language.EN else "Chinese"

    @classmethod
    def parse(cls, value: str) -> "Language":
        """
        Parse a tag such as "en", "EN" or " zh ".

        Raises:
            ValueError: If the tag is not a known language.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"language tag must be a string, got {type(value).__name__}")
        return cls(value.strip().lower())

    def __str__(self) -> str:
        return self.value
