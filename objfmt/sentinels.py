"""
Sentinel objects used by the formatter.

All sentinels use identity checks (using 'is') rather than equality checks.

Sentinels:
    UNDEFINED: A value that is explicitly "undefined", rendered as the `undefined` keyword.
               Distinct from None, which renders as `null`.
    UNSET: Represents an unprovided optional argument (distinguishes from None)

Example:
    >>> UNDEFINED is UndefinedType()
    True
    >>> bool(UNDEFINED), repr(UNDEFINED)
    (False, '<UNDEFINED>')
"""

from typing import Any, Final

__all__ = [
    'UNDEFINED',
    'UNSET',
    'UndefinedType',
    'UnsetType',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for all sentinel objects.

    Sentinels are singleton objects optimized for identity checks.
    They provide clean representations and consistent behavior.
    """
    __slots__ = ('_name',)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        """Returns a clean string representation for debugging."""
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        """Ensures identity-based comparison."""
        return self is other

    def __hash__(self) -> int:
        """Returns a hash based on object identity."""
        return id(self)

    def __bool__(self) -> bool:
        """Returns False by default (sentinels are typically falsy)."""
        return False

    def __reduce__(self) -> tuple:
        """Ensures proper behavior during pickling."""
        return (self.__class__, (self._name,))


# Sentinel Types -----------------------------------------------------------------------------------------------------

class UndefinedType(_SentinelBase):
    """
    Sentinel type for UNDEFINED.

    Marks a value that exists but carries no definition, as opposed to None (null).
    Packed numeric arrays reserve 9 columns for it.
    """
    _instance: 'UndefinedType | None' = None

    def __new__(cls) -> 'UndefinedType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("UNDEFINED")

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Used to distinguish between 'not provided' and 'explicitly set to None'.
    objfmt() uses it for the reference value argument, where None is a valid reference.
    """
    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("UNSET")

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNDEFINED: Final[UndefinedType] = UndefinedType()
"""
Sentinel representing an undefined value.

Renders as the `undefined` keyword, next to `null` for None.
"""

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""

