"""
String literal quoting and escaping.

Picks the quote character that needs the fewest escapes and escapes the text
for it. Double quote is always allowed; apostrophe and backtick only on request.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import string
import unicodedata

# Constants ------------------------------------------------------------------------------------------------------------

DQUOTE = '"'
APOS = "'"
BACKTICK = "`"

# Embedded-expression trigger inside backtick-quoted text
TEMPLATE_TRIGGER = "${"

# Characters allowed after the first one of a bare key, besides letters
KEY_TAIL_CHARS = frozenset(string.digits + "_")

_SIMPLE_ESCAPES = {
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
    "\\": "\\\\",
}


# Methods --------------------------------------------------------------------------------------------------------------


def choose_quote(text: str, allow_apos: bool = False, allow_backtick: bool = False) -> str:
    """
    Pick the quote character producing the fewest escapes for text.

    Ties prefer double quote, then apostrophe, then backtick. For backtick the
    cost also counts `${` sequences, which must be escaped too.

    Examples:
        >>> choose_quote('Quote is: "', allow_apos=True)
        "'"
        >>> choose_quote("it's")
        '"'
    """
    candidates = [DQUOTE]
    if allow_apos:
        candidates.append(APOS)
    if allow_backtick:
        candidates.append(BACKTICK)
    # min() keeps the first of equal costs, so candidate order is the tie-break
    return min(candidates, key=lambda q: escape_cost(text, q))


def escape(text: str, quote: str = DQUOTE) -> str:
    """
    Escape text for placement between the given quote characters.

    `\\r`, `\\n`, `\\t` become two-character escapes; backslash and the quote
    character get a backslash; in backtick mode so does `${`. Remaining
    non-printable code points (Unicode category C*) become `\\xHH` or `\\uHHHH`.

    Examples:
        >>> escape('say "hi"')
        'say \\\\"hi\\\\"'
        >>> escape("\\x00")
        '\\\\x00'
    """
    parts = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[c])
        elif c == quote:
            parts.append("\\" + c)
        elif quote == BACKTICK and c == "$" and text.startswith("{", i + 1):
            parts.append("\\${")
            i += 1
        elif unicodedata.category(c)[0] == "C":
            parts.append(_hex_escape(c))
        else:
            parts.append(c)
        i += 1
    return "".join(parts)


def quote_string(text: str, allow_apos: bool = False, allow_backtick: bool = False) -> str:
    """
    Return text as a quoted literal with minimal escaping.

    Examples:
        >>> quote_string("Text")
        '"Text"'
        >>> quote_string('Quote is: "', allow_backtick=True)
        '`Quote is: "`'
    """
    quote = choose_quote(text, allow_apos, allow_backtick)
    return quote + escape(text, quote) + quote


def is_identifier_key(key: str) -> bool:
    """
    True when key can be written bare: a letter or underscore, then letters, underscores or digits.

    Letters are any Unicode category L* code point; digits are ASCII 0-9 only.

    Examples:
        >>> is_identifier_key("prop0"), is_identifier_key("\u00b2x")
        (True, False)
    """
    if not key or not (key[0] == "_" or _is_letter(key[0])):
        return False
    return all(c in KEY_TAIL_CHARS or _is_letter(c) for c in key[1:])


def escape_cost(text: str, quote: str) -> int:
    """Number of escapes the quote character itself forces on text."""
    if quote == BACKTICK:
        return text.count(BACKTICK) + text.count(TEMPLATE_TRIGGER)
    return text.count(quote)


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_letter(c: str) -> bool:
    return unicodedata.category(c).startswith("L")


def _hex_escape(c: str) -> str:
    code = ord(c)
    if code <= 0xFF:
        return f"\\x{code:02X}"
    if code <= 0xFFFF:
        return f"\\u{code:04X}"
    # Outside the BMP: one escape per UTF-16 code unit
    code -= 0x10000
    high = 0xD800 + (code >> 10)
    low = 0xDC00 + (code & 0x3FF)
    return f"\\u{high:04X}\\u{low:04X}"
