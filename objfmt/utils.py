"""
objfmt utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

# Anonymous container classes, rendered without a type label
ANONYMOUS_TYPES = (dict, list)


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
    """
    cls = obj if isinstance(obj, type) else obj.__class__

    if cls.__module__ == "builtins":
        qualify = fully_qualified_builtins
    else:
        qualify = fully_qualified

    if qualify:
        return cls.__module__ + "." + cls.__name__
    return cls.__name__


def display_label(obj: Any) -> str:
    """
    Type label shown in front of a composite value.

    Empty for the anonymous kinds (exactly `dict` or `list`), the class name otherwise.

    Examples:
        >>> display_label({})
        ''
        >>> display_label((1, 2))
        'tuple'
    """
    if type(obj) in ANONYMOUS_TYPES:
        return ""
    return class_name(obj)


def fmt_type(obj: Any) -> str:
    """
    Short type description for exception messages.

    Examples:
        >>> fmt_type(3)
        "<class 'int'>"
        >>> fmt_type(int)
        "<class 'int'>"
    """
    return f"<class '{class_name(obj)}'>"


def fmt_value(obj: Any, max_repr: int = 80) -> str:
    """
    Type-value pair for exception messages, with the repr truncated to max_repr characters.

    Examples:
        >>> fmt_value("tab")
        "<str: 'tab'>"
    """
    try:
        value_repr = repr(obj)
    except Exception:
        value_repr = "<repr failed>"
    if len(value_repr) > max_repr:
        value_repr = value_repr[:max(max_repr - 3, 0)] + "..."
    return f"<{class_name(obj)}: {value_repr}>"


def callable_name(obj: Any) -> str:
    """
    Display name of a callable.

    Qualified name for functions, methods and classes, the wrapped function's name
    for functools.partial, the class name for other callable instances.

    Examples:
        >>> callable_name(len)
        'len'
        >>> import functools
        >>> callable_name(functools.partial(int, base=2))
        'int'
    """
    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    if isinstance(name, str):
        return name
    wrapped = getattr(obj, "func", None)
    if callable(wrapped) and wrapped is not obj:
        return callable_name(wrapped)
    return class_name(obj)
