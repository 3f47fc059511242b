"""
Text serializer used by the recursive renderer.

Serializer owns the output buffer and the indentation state machine. The renderer
calls begin_container() / end_container() around composite values and write_*()
for everything else, passing a Context that says where the value sits.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import re

from dataclasses import dataclass
from typing import Any, Callable, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import Classified, Variant
from .options import FmtOptions, IndentStyle
from .packing import fields_per_line, indent_width, number_text, pack_rows
from .quoting import is_identifier_key, quote_string
from .utils import callable_name

RE_NEWLINE = re.compile(r"\r\n?|\n")

CYCLE_MARKER = "<cycle>"


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class Context:
    """
    Position of the value being written.

    Attributes:
        indent: Indentation of the value's own line.
        index: Position among siblings. -1 marks the top-level value, which gets no
               trailing ",\\n". 0 marks a first member, whose line already holds the
               parent's bracket, so it only gets the short continuation indent.
        label: Record key text, or a callable that writes a map key in place.
        separator: Written after the label, ":" for records and " =>" for maps.
        is_key: The value is a map key: no lead indent, no trailing ",\\n", no folding.
    """
    indent: str = ""
    index: int = -1
    label: str | Callable[[], None] | None = None
    separator: str = ":"
    is_key: bool = False

    @property
    def is_top_level(self) -> bool:
        return self.index == -1

    @property
    def has_trailer(self) -> bool:
        return not self.is_top_level and not self.is_key


class Serializer:
    """
    Accumulates the rendered text.

    State is created fresh for each objfmt() call: the output buffer, one indentation
    level's text (add_indent) and its Horstmann variant with one trailing unit removed
    (add_indent_short), the bracket placement style and the preferred line width.
    """

    def __init__(self, options: FmtOptions | None = None) -> None:
        self.options = options or FmtOptions()
        self.add_indent = self.options.add_indent
        self.indent_style = self.options.indent_style
        self.prefer_line_width_limit = self.options.prefer_line_width_limit
        if self.add_indent == "\t" or self.indent_style != IndentStyle.HORSTMANN:
            self.add_indent_short = self.add_indent
        else:
            self.add_indent_short = self.add_indent[:-1]
        self._markers = self.options.markers
        self._parts: list[str] = []

    def getvalue(self) -> str:
        """Return the text written so far."""
        return "".join(self._parts)

    # Containers -----------------------------------

    def begin_container(self, ctx: Context, is_array: bool, length: int, label: str = "") -> str:
        """
        Write everything up to and including the opening bracket.

        Empty containers are written inline as `[]` / `{}`, prefixed by the label if any.

        Returns:
            Indentation for the members, unchanged for empty containers.
        """
        brackets = "[]" if is_array else "{}"
        if length == 0:
            self._prefix(ctx, with_space=True)
            if label:
                self._write(self._mark("label", label), " ")
            self._write(self._mark("bracket", brackets))
            return ctx.indent

        self._prefix(ctx, with_space=bool(label))
        if label:
            self._write(self._mark("label", label))
        want_new_line = bool(label) or ctx.label is not None
        opening = self._mark("bracket", brackets[0])
        if self.indent_style == IndentStyle.ALLMAN:
            if want_new_line:
                self._write("\n", ctx.indent)
            self._write(opening, "\n", ctx.indent)
        elif self.indent_style == IndentStyle.HORSTMANN:
            if want_new_line:
                self._write("\n", ctx.indent)
            self._write(opening)
        else:
            if want_new_line:
                self._write(" ")
            self._write(opening, "\n", ctx.indent)
        return ctx.indent + self.add_indent

    def end_container(self, ctx: Context, is_array: bool, length: int) -> None:
        """Write the closing bracket of a non-empty container, then the trailing comma."""
        if length != 0:
            self._write(ctx.indent, self._mark("bracket", "]" if is_array else "}"))
        self._trailer(ctx)

    # Leaves ---------------------------------------

    def write_leaf(self, ctx: Context, text: str, category: str | None = None, label: str = "") -> None:
        """Write a scalar literal, optionally wrapped in the markers of category and preceded by a label."""
        self._prefix(ctx, with_space=True)
        if label:
            self._write(self._mark("label", label), " ")
        self._write(self._mark(category, text) if category else text)
        self._trailer(ctx)

    def write_scalar(self, ctx: Context, classified: Classified) -> None:
        """Write a non-composite classified value in its literal form."""
        variant = classified.variant
        value = classified.value
        if variant is Variant.STRING:
            self.write_string(ctx, value)
        elif variant is Variant.NULL:
            self.write_leaf(ctx, "null", "keyword")
        elif variant is Variant.UNDEFINED:
            self.write_leaf(ctx, "undefined", "keyword")
        elif variant is Variant.BOOLEAN:
            self.write_leaf(ctx, "true" if value else "false", "keyword")
        elif variant is Variant.BIG_INTEGER:
            self.write_leaf(ctx, f"{value}n", "number")
        elif variant is Variant.DATE:
            self.write_leaf(ctx, self._quote(value.isoformat()), "string", label=classified.label)
        elif variant is Variant.FUNCTION:
            self.write_leaf(ctx, self._quote(callable_name(value)), "string", label=classified.label)
        else:
            self.write_leaf(ctx, number_text(value), "number")

    def write_string(self, ctx: Context, text: str) -> None:
        """
        Write a string as a quoted literal.

        With long_string_as_object enabled, a literal that would push its line past
        prefer_line_width_limit is written as a `String { raw text }` block instead.
        Line breaks inside the raw text are followed by the block indentation.
        """
        literal = self._quote(text)
        if not self.options.long_string_as_object or ctx.is_key or not self._overflows(ctx, literal):
            self.write_leaf(ctx, literal, "string")
            return

        child_indent = self.begin_container(ctx, False, 1, "String")
        self._lead(child_indent, 0)
        raw = RE_NEWLINE.sub(lambda m: m.group(0) + child_indent, text)
        self._write(self._mark("string", raw), "\n")
        self.end_container(ctx, False, 1)

    def write_cycle(self, ctx: Context, label: str = "") -> None:
        """Write the marker for a value that is already being rendered higher up the path."""
        self.write_leaf(ctx, CYCLE_MARKER, "keyword", label=label)

    def write_array_columns(self, entries: Sequence[Any], field_width: int, indent: str) -> None:
        """
        Write the members of a packable array as right-aligned columns.

        The number of columns is the largest power of two whose projected row
        fits prefer_line_width_limit at this indentation.
        """
        n_fields = fields_per_line(indent_width(indent), field_width, self.prefer_line_width_limit)
        for row_index, row in enumerate(pack_rows(entries, field_width, n_fields)):
            self._lead(indent, row_index * n_fields)
            for padding, text, category in row:
                self._write(padding, self._mark(category, text), ",")
            self._write("\n")

    def blank_line(self) -> None:
        self._write("\n")

    # Private --------------------------------------

    def _write(self, *parts: str) -> None:
        self._parts.extend(parts)

    def _mark(self, category: str, text: str) -> str:
        return self._markers.wrap(category, text)

    def _quote(self, text: str) -> str:
        return quote_string(text, self.options.string_allow_apos, self.options.string_allow_backtick)

    def _lead(self, indent: str, index: int) -> None:
        self._write(indent if index != 0 else self.add_indent_short)

    def _prefix(self, ctx: Context, with_space: bool) -> None:
        if not ctx.is_key:
            self._lead(ctx.indent, ctx.index)
        if ctx.label is None:
            return
        if callable(ctx.label):
            ctx.label()
        else:
            key = ctx.label if is_identifier_key(ctx.label) else self._quote(ctx.label)
            self._write(self._mark("key", key))
        self._write(ctx.separator)
        if with_space:
            self._write(" ")

    def _trailer(self, ctx: Context) -> None:
        if ctx.has_trailer:
            self._write(",\n")

    def _overflows(self, ctx: Context, literal: str) -> bool:
        width = indent_width(ctx.indent) + len(literal) + 1
        if isinstance(ctx.label, str):
            width += len(ctx.label) + 2
        return width > self.prefer_line_width_limit
