"""
Verse API: Verse Text Normalizer
=================================

What:  Turns raw stored verse text into display text.
How:   1. Strip verse-number markers (`<S>123</S>`) and structural tags
       2. Trim leading/trailing whitespace
       3. Collapse every whitespace run to a single space

Tag rule:
    A tag is stripped only when the text between its angle brackets (after
    an optional leading `/`) contains no lowercase `a`, no lowercase `i` and
    no space. Anchors (`<a href=...>`), italics (`<i>`) and tags such as
    `<span>` survive; `<pb/>`, `<t>`, `<J>`, `<br/>` and `<S>` are removed.
    The rule is intentionally narrow; clients render the surviving markup.

Stripping is repeated until nothing matches: removing `<S>1</S>` from
`<<S>1</S>b>` would otherwise leave a fresh `<b>` behind, and the
normalizer must be idempotent.
"""

import re

_MARKUP = re.compile(r"<S>[0-9]+</S>|</?[^ai <>]+/?>")
_WHITESPACE = re.compile(r"\s+")


def strip_markup(text: str) -> str:
    """Remove verse markers and non-inline tags until none remain."""
    count = 1
    while count:
        text, count = _MARKUP.subn("", text)
    return text


def normalize_text(text: str) -> str:
    """
    Normalize raw verse text for display.

    Pure and total over str: empty or whitespace-only input yields "".

    Example:
        >>> normalize_text('<S>1</S>In the <a href="x">beginning</a>  God created')
        'In the <a href="x">beginning</a> God created'
    """
    cleaned = strip_markup(text)
    cleaned = cleaned.strip()
    return _WHITESPACE.sub(" ", cleaned)
