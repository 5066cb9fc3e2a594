"""
Source normalization for Markdown arriving from chat back ends

Model output often reaches the client JSON-escaped once too often. This
module undoes that and tidies whitespace before the text is tokenized.
"""

import re


ESCAPES = {
    "\\\\": "\\",
    "\\n": "\n",
    "\\r": "\r",
    "\\t": "\t",
    '\\"': '"',
    "\\'": "'",
    "\\b": "\b",
    "\\f": "\f",
}

_ESCAPE_PATTERN = re.compile(r"\\[\\nrt\"'bf]|\\u([0-9a-fA-F]{4})")


def escapes_decode(text: str) -> str:
    r"""
    Replace backslash escape sequences by the characters they stand for

    Handles \\, \n, \r, \t, \", \', \b, \f and \uXXXX.

    Example:
        >>> escapes_decode(r"line\nnext \u00e9")
        'line\nnext é'
    """
    def replace(found: "re.Match[str]") -> str:
        if found.group(1):
            return chr(int(found.group(1), 16))
        return ESCAPES.get(found.group(0), found.group(0))

    return _ESCAPE_PATTERN.sub(replace, text)


def markdown_normalize(text: str) -> str:
    """
    Normalize Markdown before tokenizing

    Steps:
        1. Decode escape sequences
        2. Fix leftover double escapes of newline and tab
        3. CRLF line endings to LF
        4. Collapse three or more newlines into a paragraph break
        5. &nbsp; and U+00A0 to plain spaces

    Args:
        text: Raw text

    Returns:
        Normalized text ("" for None or empty input)
    """
    if not text:
        return ""
    processed = escapes_decode(text)
    processed = processed.replace("\\\\n", "\n").replace("\\\\t", "\t")
    processed = processed.replace("\r\n", "\n")
    processed = re.sub(r"\n{3,}", "\n\n", processed)
    processed = re.sub(r"&nbsp;|\u00a0", " ", processed)
    return processed
