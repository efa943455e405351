"""
Argstream utilities: the Unset marker and alias specifications.

Scope
- Helpers shared by the records, the faults, and the parser engine.

Overview
- UnsetType / Unset
  • Default of optional parameters whose real values may be "", 0 or None.

- coalesce(value, default=None)
  • Swap Unset for a default; every other value, falsey or not, is kept.

- aliases(spec)
  • Split a whitespace-delimited alias specification ("verbose v") into its spellings.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(0, 1)
    0
    >>> aliases("string s")
    ('string', 's')
"""
import functools
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker used as the default of optional parser parameters.

    Fallbacks such as "", 0 or None are real option values, so "the caller passed
    nothing" needs its own marker. There is exactly one instance, it is falsey,
    it survives copy and pickle as itself, and the type cannot be subclassed.

    The marker also composes with types, so `str | Unset` works in isinstance()
    checks against constructor arguments.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("the Unset marker type cannot be subclassed")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, and `object` otherwise.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def aliases(spec, /):
    """
    Split an alias specification into its individual spellings.

    Parameters
    - spec: str
      one or more alias spellings separated by whitespace, e.g. "verbose v".

    Returns
    - tuple[str, ...] in declaration order, duplicates removed.

    Raises
    - TypeError: when spec is not a string.
    - ValueError: when spec contains no alias at all.
    """
    if not isinstance(spec, str):
        raise TypeError("alias specification must be a string")
    if not (names := tuple(dict.fromkeys(spec.split()))):
        raise ValueError("alias specification must contain at least one name")
    return names


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "aliases",
)
