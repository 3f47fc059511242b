"""
Formatting options and module-level configuration.

FmtOptions is an immutable snapshot of every setting objfmt() understands.
The module keeps one current FmtOptions instance that objfmt() uses when no
explicit options are passed; configure() replaces it.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import threading

from dataclasses import dataclass, field, fields, replace
from enum import StrEnum, unique
from typing import Literal, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type, fmt_value

# Constants ------------------------------------------------------------------------------------------------------------

DEFAULT_INDENT_WIDTH = 4
DEFAULT_PREFER_LINE_WIDTH_LIMIT = 160
MAX_INDENT_SPACES = 10

# Integer indent width meaning "one tab per level"
TAB = -1

OnError = Literal["raise", "skip", "warn"]


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class IndentStyle(StrEnum):
    """
    Bracket placement convention.

    Attributes:
        KR: Kernighan & Ritchie, opening bracket ends the line of its label
            Example: "b: [" followed by members on new lines
        ALLMAN: Opening bracket on its own line, members start on the next line
        HORSTMANN: Opening bracket on its own line, first member follows it on that line
    """
    KR = "kr"
    ALLMAN = "allman"
    HORSTMANN = "horstmann"


@dataclass(frozen=True)
class StyleMarkers:
    """
    Begin/end marker strings inserted around each literal category.

    Each attribute is a (begin, end) pair. Markers are inserted verbatim and do not
    count towards line width computations, so they can carry terminal escape codes
    or markup without disturbing the layout.

    Attributes:
        string: Quoted strings and folded raw string text.
        key: Record keys.
        number: Numbers and big integers.
        keyword: true, false, null, undefined and the cycle marker.
        label: Type labels such as class names, Date, String.
        bracket: Opening and closing brackets and braces.

    Examples:
        >>> markers = StyleMarkers(number=("<n>", "</n>"))
        >>> markers.wrap("number", "42")
        '<n>42</n>'
    """
    string: tuple[str, str] = ("", "")
    key: tuple[str, str] = ("", "")
    number: tuple[str, str] = ("", "")
    keyword: tuple[str, str] = ("", "")
    label: tuple[str, str] = ("", "")
    bracket: tuple[str, str] = ("", "")

    def __post_init__(self) -> None:
        for f in fields(self):
            pair = getattr(self, f.name)
            if (not isinstance(pair, tuple) or len(pair) != 2
                    or not all(isinstance(s, str) for s in pair)):
                raise TypeError(f"StyleMarkers.{f.name} must be a (begin, end) tuple of str, "
                                f"got {fmt_value(pair)}")

    @property
    def is_plain(self) -> bool:
        """True when no category carries markers."""
        return all(getattr(self, f.name) == ("", "") for f in fields(self))

    def wrap(self, category: str, text: str) -> str:
        """Surround text with the markers of the given category."""
        begin, end = getattr(self, category)
        return begin + text + end


@dataclass(frozen=True)
class FmtOptions:
    """
    Configuration for objfmt() rendering.

    Attributes:
        indent_width: Indentation added per nesting level. A str made of spaces and/or tabs is
                      used verbatim; an int from 0 to 10 means that many spaces; any other int
                      (e.g. TAB = -1) means one tab.
        indent_style: Bracket placement, see IndentStyle. Plain strings like "allman" are accepted.
        prefer_line_width_limit: Soft line width used to pack numeric arrays several values
                                 per line and to decide when long strings are folded.
                                 Any int is accepted, a limit too small for two fields
                                 packs one value per line.
        string_allow_apos: Allow apostrophe-quoted string literals.
        string_allow_backtick: Allow backtick-quoted string literals.
        long_string_as_object: Render strings that would overflow the line width as a
                               `String { ... }` block holding the raw text.
        include_hidden: Also render underscore-prefixed attributes and properties of objects.
        use_to_dict: Replace objects exposing to_dict() with its result before rendering.
        no_to_dict_for: Class names for which the to_dict() substitution is skipped.
        markers: Begin/end markers around literal categories, see StyleMarkers.
        on_error: What to do when reading an object attribute raises:
                  "skip" omits it, "warn" omits it with a RuntimeWarning, "raise" propagates.

    Examples:
        >>> FmtOptions().add_indent
        '    '
        >>> FmtOptions(indent_width=TAB).add_indent
        '\\t'
        >>> FmtOptions.compact().merge(indent_style="allman").indent_style
        <IndentStyle.ALLMAN: 'allman'>
    """
    indent_width: int | str = DEFAULT_INDENT_WIDTH
    indent_style: IndentStyle = IndentStyle.KR
    prefer_line_width_limit: int = DEFAULT_PREFER_LINE_WIDTH_LIMIT
    string_allow_apos: bool = False
    string_allow_backtick: bool = False
    long_string_as_object: bool = False
    include_hidden: bool = False
    use_to_dict: bool = True
    no_to_dict_for: frozenset[str] = field(default_factory=frozenset)
    markers: StyleMarkers = field(default_factory=StyleMarkers)
    on_error: OnError = "skip"

    def __post_init__(self) -> None:
        """Validate field types and normalize indent_style and no_to_dict_for."""
        if isinstance(self.indent_width, bool) or not isinstance(self.indent_width, (int, str)):
            raise TypeError(f"indent_width must be an int or str, got {fmt_type(self.indent_width)}")

        try:
            style = IndentStyle(self.indent_style)
        except ValueError:
            valid = ", ".join(f"'{v.value}'" for v in IndentStyle)
            raise ValueError(f"Unknown indent_style value: {fmt_value(self.indent_style)}. "
                             f"Expected: {valid}") from None
        object.__setattr__(self, "indent_style", style)

        limit = self.prefer_line_width_limit
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise TypeError(f"prefer_line_width_limit must be an int, got {fmt_type(limit)}")

        if isinstance(self.no_to_dict_for, str):
            raise TypeError("no_to_dict_for must be a collection of class names, not a single str")
        object.__setattr__(self, "no_to_dict_for", frozenset(self.no_to_dict_for))

        if not isinstance(self.markers, StyleMarkers):
            raise TypeError(f"markers must be StyleMarkers, got {fmt_type(self.markers)}")

        if self.on_error not in ("raise", "skip", "warn"):
            raise ValueError(f"on_error must be 'raise', 'skip' or 'warn', got {fmt_value(self.on_error)}")

    # Class Methods ------------------------------------

    @classmethod
    def compact(cls) -> Self:
        """Two-space indent and a 120 columns width limit."""
        return cls(indent_width=2, prefer_line_width_limit=120)

    @classmethod
    def debug(cls) -> Self:
        """Show private attributes and properties, render objects as they are instead of via to_dict()."""
        return cls(include_hidden=True, use_to_dict=False)

    # Methods and Properties ---------------------

    @property
    def add_indent(self) -> str:
        """Indentation text of one nesting level."""
        return indent_text(self.indent_width)

    def merge(self, **kwargs) -> Self:
        """Return a copy with the given fields replaced, validated like a new instance."""
        return replace(self, **kwargs)


# Module Configuration -------------------------------------------------------------------------------------------------

_PRESETS = {
    "compact": FmtOptions.compact,
    "debug": FmtOptions.debug,
    "default": FmtOptions,
}

_lock = threading.Lock()
_options = FmtOptions()


def configure(preset: Literal["compact", "debug", "default"] | None = None, **kwargs) -> FmtOptions:
    """
    Update the module-level options used by objfmt() when no options are passed.

    Args:
        preset: Start from a preset instead of the current configuration.
        **kwargs: FmtOptions fields to override.

    Returns:
        The new module-level options.

    Raises:
        ValueError: If preset is unknown.

    Examples:
        >>> configure(preset="compact", indent_style="horstmann").indent_width
        2
        >>> configure(preset="default") == FmtOptions()
        True
    """
    global _options

    if preset is not None and preset not in _PRESETS:
        valid = ", ".join(f"'{p}'" for p in _PRESETS)
        raise ValueError(f"Unknown preset: {fmt_value(preset)}. Expected: {valid}")

    with _lock:
        base = _PRESETS[preset]() if preset is not None else _options
        _options = base.merge(**kwargs) if kwargs else base
        return _options


def get_options() -> FmtOptions:
    """Return the current module-level options."""
    with _lock:
        return _options


def reset_options() -> FmtOptions:
    """Restore the module-level options to defaults."""
    return configure(preset="default")


def indent_text(indent: int | str) -> str:
    """
    Normalize an indent given as text or as a number of spaces.

    Integers from 0 to 10 give that many spaces, other integers give a tab.

    Examples:
        >>> indent_text(2)
        '  '
        >>> indent_text(11)
        '\\t'
        >>> indent_text("\\t\\t")
        '\\t\\t'
    """
    if isinstance(indent, str):
        return indent
    if isinstance(indent, bool) or not isinstance(indent, int):
        raise TypeError(f"indent must be an int or str, got {fmt_type(indent)}")
    if 0 <= indent <= MAX_INDENT_SPACES:
        return " " * indent
    return "\t"
