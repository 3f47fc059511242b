"""
Numeric array packing.

Arrays whose elements are all numbers, booleans, None or UNDEFINED are laid out
as right-aligned columns, several values per line, instead of one value per line.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import numbers

from typing import Any, Iterator, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNDEFINED

# Constants ------------------------------------------------------------------------------------------------------------

TAB_WIDTH = 4

# Largest integer rendered as a plain number, larger magnitudes are big integers
MAX_SAFE_INTEGER = 2 ** 53 - 1

# Sentinel magnitudes standing in for keyword tokens when sizing a column,
# each has as many digits as its keyword has letters.
KEYWORD_MAGNITUDES = {
    "true": 1234,
    "false": 12345,
    "null": 1234,
    "undefined": 123456789,
}


# Methods --------------------------------------------------------------------------------------------------------------


def number_text(value: Any) -> str:
    """
    Default decimal text of a number.

    Non-finite floats use the NaN / Infinity spelling of the output format.

    Examples:
        >>> number_text(3)
        '3'
        >>> number_text(-0.5)
        '-0.5'
        >>> number_text(float("-inf"))
        '-Infinity'
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    return str(value)


def is_big_integer(value: Any) -> bool:
    """True for ints (not bools) whose magnitude exceeds MAX_SAFE_INTEGER."""
    return isinstance(value, int) and not isinstance(value, bool) and abs(value) > MAX_SAFE_INTEGER


def packed_token(value: Any) -> tuple[str, str]:
    """
    Text of a packable element together with its style category.

    Examples:
        >>> packed_token(True)
        ('true', 'keyword')
        >>> packed_token(12)
        ('12', 'number')
    """
    if value is None:
        return "null", "keyword"
    if value is UNDEFINED:
        return "undefined", "keyword"
    if isinstance(value, bool):
        return ("true" if value else "false"), "keyword"
    return number_text(value), "number"


def array_field_width(values: Sequence[Any]) -> int:
    """
    Column width needed to right-align every element of values.

    Returns -1 when the array cannot be packed, i.e. some element is not a real number,
    a bool, None or UNDEFINED. Keywords count with the digits of their sentinel magnitude
    (true 1234, false 12345, null 1234, undefined 123456789). The width is the text length
    of the largest non-negative value, at least 1, or of the most negative value if wider.

    Examples:
        >>> array_field_width([1, 2, 3])
        1
        >>> array_field_width([1, -20, 3])
        3
        >>> array_field_width([1, True])
        4
        >>> array_field_width([1, "2"])
        -1
    """
    max_width = 1
    min_width = 0
    for v in values:
        if v is None:
            width = len(str(KEYWORD_MAGNITUDES["null"]))
        elif v is UNDEFINED:
            width = len(str(KEYWORD_MAGNITUDES["undefined"]))
        elif isinstance(v, bool):
            width = len(str(KEYWORD_MAGNITUDES["true" if v else "false"]))
        elif isinstance(v, numbers.Real) and not is_big_integer(v):
            width = len(number_text(v))
            if v < 0:
                min_width = max(min_width, width)
                continue
        else:
            return -1
        max_width = max(max_width, width)
    return max(max_width, min_width)


def indent_width(indent: str) -> int:
    """
    Visual width of indentation text, tabs advance to the next stop of TAB_WIDTH columns.

    Examples:
        >>> indent_width("    ")
        4
        >>> indent_width("\\t\\t")
        8
    """
    return len(indent.expandtabs(TAB_WIDTH))


def fields_per_line(indent_cols: int, field_width: int, limit: int) -> int:
    """
    Number of columns per packed row, always a power of two.

    Starting from one field, doubles while the projected row still fits:
    indent + (field_width + 1) + (field_width + 3) * (2 * n - 1) <= limit.

    Examples:
        >>> fields_per_line(8, 1, 13)
        1
        >>> fields_per_line(8, 1, 14)
        2
        >>> fields_per_line(8, 1, 22)
        4
    """
    n = 1
    while indent_cols + (field_width + 1) + (field_width + 3) * (2 * n - 1) <= limit:
        n *= 2
    return n


def pack_rows(values: Sequence[Any], field_width: int, n_fields: int) -> Iterator[list[tuple[str, str, str]]]:
    """
    Split values into rows of at most n_fields padded tokens.

    Each token is a (padding, text, category) triple: the first column pads text to
    field_width, the following columns to field_width + 2, leaving room for the ", "
    before them. Category is the StyleMarkers attribute for the text.

    Examples:
        >>> list(pack_rows([1, 2, 3], 1, 2))
        [[('', '1', 'number'), ('  ', '2', 'number')], [('', '3', 'number')]]
    """
    for start in range(0, len(values), n_fields):
        row = []
        for j, v in enumerate(values[start:start + n_fields]):
            text, category = packed_token(v)
            width = field_width if j == 0 else field_width + 2
            row.append((" " * max(width - len(text), 0), text, category))
        yield row
