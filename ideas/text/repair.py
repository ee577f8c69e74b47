"""
Repair of near-JSON LLM replies.

Chat models asked for a JSON object regularly put literal newlines, carriage
returns and tabs inside string values. Those control characters are illegal in
JSON strings, so the reply fails to parse although its meaning is clear.
repair_json() escapes exactly those characters and leaves everything else,
including sequences that are already escaped, untouched.
"""

import re


_ESCAPES = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\r?\n(.*?)\r?\n?```$", re.DOTALL)


def repair_json(raw: str) -> str:
    """
    Escape raw newline, carriage-return and tab characters inside JSON strings.

    Single left-to-right scan. A backslash protects the following character
    (so \\", \\\\, \\n or \\uXXXX are copied as they are), an unescaped quote
    toggles the in-string state, and control characters are only rewritten
    while inside a string. Bytes outside string literals are never changed,
    and running the function twice gives the same result as running it once.

    Other defects (missing commas, truncated output) are left for the JSON
    parser to report.
    """
    out = []
    in_string = False
    after_backslash = False

    for char in raw:
        if after_backslash:
            out.append(char)
            after_backslash = False
        elif char == "\\":
            out.append(char)
            after_backslash = True
        elif char == '"':
            out.append(char)
            in_string = not in_string
        elif in_string and char in _ESCAPES:
            out.append(_ESCAPES[char])
        else:
            out.append(char)

    return "".join(out)


def extract_json_object(text: str) -> str:
    """
    Strip a Markdown code fence wrapped around a JSON reply.

    Text that is not fenced is returned with surrounding whitespace removed
    and is otherwise unchanged.
    """
    stripped = text.strip()
    match = _FENCE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped
