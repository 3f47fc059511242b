"""
Value classification for rendering.

classify() maps any Python value onto a closed set of render variants, an optional
type label and, for composites, the ordered sequence of members to visit.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import array
import datetime as dt
import inspect
import numbers
import warnings

from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Any, Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .options import FmtOptions
from .packing import is_big_integer
from .sentinels import UNDEFINED
from .utils import class_name, display_label, fmt_value

# Repr length compared when ordering set members of mixed types
MAX_SORT_REPR = 1024


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Variant(StrEnum):
    """Render variant of a value."""
    NULL = "null"
    UNDEFINED = "undefined"
    BOOLEAN = "boolean"
    NUMBER = "number"
    BIG_INTEGER = "big_integer"
    STRING = "string"
    DATE = "date"
    FUNCTION = "function"
    LIST = "list"
    RECORD = "record"
    MAP = "map"
    SET = "set"

    @property
    def is_composite(self) -> bool:
        return self in _COMPOSITES

    @property
    def is_array(self) -> bool:
        """True for variants rendered between square brackets."""
        return self in (Variant.LIST, Variant.SET)


_COMPOSITES = frozenset({Variant.LIST, Variant.RECORD, Variant.MAP, Variant.SET})


@dataclass(frozen=True)
class Classified:
    """
    Result of classify().

    Attributes:
        variant: Render variant.
        value: The classified value, after the to_dict() substitution if any.
        label: Type label, empty for anonymous dict and list.
        members: Elements for LIST and SET, (key, value) pairs for RECORD and MAP,
                 empty for scalars.
        spaced_entries: MAP entries are separated by blank lines, set when any key is a composite.
    """
    variant: Variant
    value: Any
    label: str = ""
    members: tuple = ()
    spaced_entries: bool = False

    @property
    def keys(self) -> list:
        """Member keys: indices for LIST and SET, keys for RECORD and MAP."""
        if self.variant in (Variant.RECORD, Variant.MAP):
            return [k for k, _ in self.members]
        return list(range(len(self.members)))


# Methods --------------------------------------------------------------------------------------------------------------


def classify(value: Any, options: FmtOptions | None = None) -> Classified:
    """
    Classify value into its render variant, type label and members.

    Objects exposing a callable to_dict() are first replaced by its result, unless
    options.use_to_dict is False or the class name is in options.no_to_dict_for.

    Never raises for classification itself; errors raised by to_dict() propagate,
    attribute access errors follow options.on_error.

    Examples:
        >>> classify([1, 2]).variant
        <Variant.LIST: 'list'>
        >>> classify({1: "a"}).variant
        <Variant.MAP: 'map'>
        >>> classify((1,)).label
        'tuple'
    """
    opt = options or FmtOptions()
    value = to_plain(value, opt)

    if value is None:
        return Classified(Variant.NULL, value)
    if value is UNDEFINED:
        return Classified(Variant.UNDEFINED, value)
    if isinstance(value, bool):
        return Classified(Variant.BOOLEAN, value)
    if is_big_integer(value):
        return Classified(Variant.BIG_INTEGER, value)
    if isinstance(value, numbers.Number):
        return Classified(Variant.NUMBER, value)
    if isinstance(value, str):
        return Classified(Variant.STRING, value)
    if isinstance(value, dt.date):
        return Classified(Variant.DATE, value, label="Date")
    if inspect.isclass(value):
        return Classified(Variant.FUNCTION, value, label="Class")
    if inspect.isroutine(value):
        return Classified(Variant.FUNCTION, value, label="Function")

    label = display_label(value)

    if isinstance(value, abc.Mapping):
        items = tuple(value.items())
        if all(isinstance(k, str) for k, _ in items):
            return Classified(Variant.RECORD, value, label, items)
        spaced = any(classify(k, opt).variant.is_composite for k, _ in items)
        return Classified(Variant.MAP, value, label, items, spaced)

    if isinstance(value, abc.Set):
        return Classified(Variant.SET, value, label, _set_members(value))

    if _is_list_like(value):
        return Classified(Variant.LIST, value, label, tuple(value))

    members = tuple(object_members(value, opt))
    if not members and callable(value):
        # functools.partial, stateless callable instances
        return Classified(Variant.FUNCTION, value, label="Function")
    return Classified(Variant.RECORD, value, label, members)


def to_plain(value: Any, options: FmtOptions) -> Any:
    """
    Return value.to_dict() when the hook applies to value, value itself otherwise.

    The hook is skipped for classes (to_dict would be unbound), when options.use_to_dict
    is False, or when the class name of value is listed in options.no_to_dict_for.
    """
    if not options.use_to_dict or inspect.isclass(value):
        return value
    fn = getattr(value, "to_dict", None)
    if not callable(fn):
        return value
    if class_name(value) in options.no_to_dict_for:
        return value
    return fn()


def object_members(obj: Any, options: FmtOptions) -> list[tuple[str, Any]]:
    """
    Enumerate the (name, value) members of a plain object.

    Instance __dict__ entries come first in insertion order, then __slots__ along the MRO.
    Dunder names are always skipped. Underscore-prefixed names and public
    properties are included only with options.include_hidden.

    Attribute access errors are handled per options.on_error.
    """
    names = []
    seen = set()

    for name in _instance_attr_names(obj):
        if name in seen:
            continue
        seen.add(name)
        names.append(name)

    if options.include_hidden:
        for name in dir(type(obj)):
            if name in seen or name.startswith("_"):
                continue
            if isinstance(getattr(type(obj), name, None), property):
                seen.add(name)
                names.append(name)

    members = []
    for name in names:
        if name.startswith("__") and name.endswith("__"):
            continue
        if name.startswith("_") and not options.include_hidden:
            continue
        try:
            attr_value = getattr(obj, name)
        except AttributeError:
            # Unassigned slot
            continue
        except Exception as e:
            if options.on_error == "raise":
                raise
            if options.on_error == "warn":
                warnings.warn(
                    f"Failed to read {class_name(obj, fully_qualified=True)}.{name}: {type(e).__name__}: {e}",
                    RuntimeWarning,
                    stacklevel=2
                )
            continue
        members.append((name, attr_value))
    return members


def member_keys(value: Any, options: FmtOptions | None = None) -> list:
    """
    Natural member key order of a reference value.

    Returns an empty list for scalars.
    """
    return classify(value, options).keys


def order_keys(keys: Iterable[Any], reference_keys: Iterable[Any]) -> list:
    """
    Reorder keys against the key order of a reference value.

    Keys present in both come first in the reference's order, then keys unique to
    keys in their original order. Both key sequences must be hashable, which holds
    for mapping keys and attribute names.

    Examples:
        >>> order_keys(["c", "a", "b"], ["b", "x", "c"])
        ['b', 'c', 'a']
    """
    keys = list(keys)
    # Equal keys may differ in spelling (1, 1.0, True), the primary key objects are kept
    own = {k: k for k in keys}
    ref = dict.fromkeys(reference_keys)
    ordered = [own[k] for k in ref if k in own]
    ordered += [k for k in keys if k not in ref]
    return ordered


# Private Methods ------------------------------------------------------------------------------------------------------

def _instance_attr_names(obj: Any) -> list[str]:
    names = list(getattr(obj, "__dict__", None) or ())
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        names.extend(s for s in slots if s not in ("__dict__", "__weakref__"))
    return names


def _is_list_like(value: Any) -> bool:
    if isinstance(value, (bytes, bytearray, memoryview, array.array)):
        return True
    return isinstance(value, abc.Sequence)


def _set_members(value: abc.Set) -> tuple:
    members = tuple(value)
    try:
        return tuple(sorted(members))
    except Exception:
        # Not mutually orderable, fall back to type name then repr
        return tuple(sorted(members, key=lambda v: fmt_value(v, max_repr=MAX_SORT_REPR)))

