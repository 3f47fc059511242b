"""
objfmt() entry point and the recursive walk over a value.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from functools import partial
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .classify import Classified, Variant, classify, order_keys
from .options import FmtOptions, get_options, indent_text
from .packing import array_field_width
from .sentinels import UNSET
from .writer import Context, Serializer


# Methods --------------------------------------------------------------------------------------------------------------


def objfmt(
    value: Any,
    options: FmtOptions | None = None,
    indent_all: int | str = "",
    copy_keys_order_from: Any = UNSET,
    **kwargs,
) -> str:
    """
    Render a value as human-readable, indented text similar to an object literal.

    Composite values carry their class name (anonymous dict and list do not), dates
    render as `Date "<ISO-8601>"`, arrays of numbers are packed into aligned columns.

    Args:
        value: Any Python value.
        options: Rendering options. Defaults to the module configuration, see configure().
        indent_all: Indentation of the whole output, as text or a number of spaces
                    (0 to 10, any other int means a tab).
        copy_keys_order_from: Reference value of the same shape. Members present in both
                              are visited in the reference's order first, then members
                              found only in value, in their own order.
        **kwargs: FmtOptions fields overriding those of options.

    Returns:
        The rendered text, without a trailing newline.

    Examples:
        >>> print(objfmt({"a": 10, "b": []}))
        {
            a: 10,
            b: [],
        }

        >>> print(objfmt({"b": 1, "a": 2}, copy_keys_order_from={"a": 0}, indent_width=2))
        {
          a: 2,
          b: 1,
        }

        >>> objfmt('Quote is: "', string_allow_apos=True)
        '\\'Quote is: "\\''
    """
    opt = options if options is not None else get_options()
    if kwargs:
        opt = opt.merge(**kwargs)

    serializer = Serializer(opt)
    _Renderer(serializer, opt).walk(value, copy_keys_order_from, Context(indent=indent_text(indent_all)))
    return serializer.getvalue()


# Classes --------------------------------------------------------------------------------------------------------------

class _Renderer:
    """
    Depth-first, pre-order walk driving a Serializer.

    Keeps the identities of the composites on the current path; meeting one of them
    again renders the cycle marker instead of recursing.
    """

    def __init__(self, serializer: Serializer, options: FmtOptions) -> None:
        self.serializer = serializer
        self.options = options
        self._path: set[int] = set()

    def walk(self, value: Any, reference: Any, ctx: Context) -> None:
        classified = classify(value, self.options)
        if not classified.variant.is_composite:
            self.serializer.write_scalar(ctx, classified)
            return

        # value may differ from classified.value when to_dict() kicked in
        ids = {id(value), id(classified.value)}
        if not ids.isdisjoint(self._path):
            self.serializer.write_cycle(ctx, classified.label)
            return

        self._path |= ids
        self._walk_composite(classified, reference, ctx)
        self._path -= ids

    def _walk_composite(self, classified: Classified, reference: Any, ctx: Context) -> None:
        variant = classified.variant
        length = len(classified.members)
        indent = self.serializer.begin_container(ctx, variant.is_array, length, classified.label)
        if length:
            if variant is Variant.LIST:
                self._walk_list(classified, reference, indent)
            elif variant is Variant.SET:
                self._walk_list(classified, UNSET, indent)
            else:
                self._walk_keyed(classified, reference, indent)
        self.serializer.end_container(ctx, variant.is_array, length)

    def _walk_list(self, classified: Classified, reference: Any, indent: str) -> None:
        members = classified.members
        field_width = array_field_width(members)
        if field_width >= 0:
            self.serializer.write_array_columns(members, field_width, indent)
            return

        ref_members = self._reference_members(reference, Variant.LIST)
        for i, item in enumerate(members):
            item_ref = ref_members[i] if i < len(ref_members) else UNSET
            self.walk(item, item_ref, Context(indent, i))

    def _walk_keyed(self, classified: Classified, reference: Any, indent: str) -> None:
        lookup = dict(classified.members)
        keys = [k for k, _ in classified.members]

        ref_lookup = {}
        if reference is not UNSET:
            ref_classified = classify(reference, self.options)
            if ref_classified.variant in (Variant.RECORD, Variant.MAP):
                keys = order_keys(keys, ref_classified.keys)
                ref_lookup = dict(ref_classified.members)

        is_map = classified.variant is Variant.MAP
        for i, key in enumerate(keys):
            item_ref = ref_lookup.get(key, UNSET)
            if not is_map:
                self.walk(lookup[key], item_ref, Context(indent, i, label=key))
                continue
            if i > 0 and classified.spaced_entries:
                self.serializer.blank_line()
            write_key = partial(self.walk, key, UNSET, Context(indent, i, is_key=True))
            self.walk(lookup[key], item_ref, Context(indent, i, label=write_key, separator=" =>"))

    def _reference_members(self, reference: Any, variant: Variant) -> tuple:
        if reference is UNSET:
            return ()
        ref_classified = classify(reference, self.options)
        if ref_classified.variant is not variant:
            return ()
        return ref_classified.members
