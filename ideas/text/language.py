"""
Language detection for idea submissions.

Decides whether a text is predominantly English or Chinese by counting
Han ideographs against ASCII Latin letters. Digits, punctuation, Markdown
syntax and whitespace are ignored. Ties (including empty input) go to English.
"""

from ideas.models.language import Language


# Code point ranges of the Han script (ideographs, radicals, ideographic numerals).
HAN_RANGES = (
    (0x2E80, 0x2E99),
    (0x2E9B, 0x2EF3),
    (0x2F00, 0x2FD5),
    (0x3005, 0x3005),
    (0x3007, 0x3007),
    (0x3021, 0x3029),
    (0x3038, 0x303B),
    (0x3400, 0x4DBF),
    (0x4E00, 0x9FFF),
    (0xF900, 0xFA6D),
    (0xFA70, 0xFAD9),
    (0x20000, 0x2A6DF),
    (0x2A700, 0x2EBEF),
    (0x2F800, 0x2FA1D),
    (0x30000, 0x323AF),
)


def is_han(char: str) -> bool:
    """Return True if the character belongs to the Han script."""
    code = ord(char)
    if code < 0x2E80:
        return False
    for low, high in HAN_RANGES:
        if code < low:
            return False
        if code <= high:
            return True
    return False


def is_latin_letter(char: str) -> bool:
    """Return True for ASCII letters A-Z and a-z."""
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def count_scripts(text: str) -> tuple[int, int]:
    """
    Count Han ideographs and Latin letters in one pass.

    Returns:
        Tuple of (han_count, latin_count).
    """
    han = latin = 0
    for char in text:
        if is_latin_letter(char):
            latin += 1
        elif is_han(char):
            han += 1
    return han, latin


def detect_language(text: str) -> Language:
    """
    Classify text as Chinese or English.

    Returns Language.ZH iff Han ideographs strictly outnumber Latin letters,
    otherwise Language.EN.
    """
    han, latin = count_scripts(text)
    if han > latin:
        return Language.ZH
    return Language.EN
