#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import re

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objfmt.options import reset_options

# Indent widths every layout table is checked with; -1 and 11 fall back to a tab
INDENT_WIDTHS = [-1, 0, 1, 3, 4, 8, 9, 10, 11]


# Sample Classes -------------------------------------------------------------------------------------------------------

class Class0:
    pass


class Class1:
    def __init__(self, prop0, prop1):
        self.prop0 = prop0
        self.prop1 = prop1


class CustomArray(list):
    pass


def sample_function():
    pass


# Helpers --------------------------------------------------------------------------------------------------------------

def expand_indent(expected: str, indent_width: int) -> str:
    """
    Adapt an expected rendering written with one tab per level to another indent width.

    A tab right after a non-space character is the Horstmann continuation indent,
    one column narrower than a full level.
    """
    if 0 <= indent_width <= 10:
        add_indent = " " * indent_width
        add_indent_short = " " * (indent_width - 1) if indent_width else ""
        expected = re.sub(r"\S\t", lambda m: m.group(0)[0] + add_indent_short, expected)
        expected = expected.replace("\t", add_indent)
    return expected


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_options():
    """Every test starts and ends with the default module configuration."""
    reset_options()
    yield
    reset_options()
