r"""
Argstream argument records and typed coercion.

Overview
- Records
  • Flag: presence-only switch; every occurrence increments its counter.
  • Option: value-bearing switch with a fixed value type (str, int or float),
    an ordered list of collected values, and a fallback used while the list is empty.

- Coercion
  • integer(token): strict, locale-independent base-10 integer parse.
  • floating(token): strict, locale-independent base-10 floating-point parse.
  Both raise InvalidNumericValueError, which aborts the whole parse.

Sharing
- All the aliases registered together map to the same record instance, so a value
  collected through one alias is visible through all its siblings.

Value view
- value:  last collected value, or the fallback when nothing was collected.
- values: copy of every collected value, in encounter order (never the fallback).
- count:  number of collected values (occurrences for flags).

Accepted numeric spellings
- integers: r"[+-]?[0-9]+" (ASCII digits only, no whitespace, no "_" separators)
- floats:   decimal or exponent notation, plus "inf", "infinity" and "nan"
"""
import re

from .faults import InvalidNumericValueError
from .utils import Unset, coalesce

_INTEGER = re.compile(r"[+-]?[0-9]+")
_FLOATING = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE
)


def integer(token, /):
    """
    Parse a token as a base-10 integer.

    Raises
    - InvalidNumericValueError: when the token is not a plain decimal integer.
    """
    if not _INTEGER.fullmatch(token):
        raise InvalidNumericValueError("cannot parse %r as an integer" % token, input=token)
    return int(token)


def floating(token, /):
    """
    Parse a token as a base-10 floating-point value.

    Raises
    - InvalidNumericValueError: when the token is not a plain decimal number.
    """
    if not _FLOATING.fullmatch(token):
        raise InvalidNumericValueError("cannot parse %r as a floating-point value" % token, input=token)
    return float(token)


def _verbatim(token, /):
    return token


# Value type -> converter; the keys are the only types an Option accepts.
_CONVERTERS = {
    str: _verbatim,
    int: integer,
    float: floating,
}


class Flag:
    """
    Presence-only record: a bare occurrence counter.

    Its value view reads as a boolean: False until found, then one True per occurrence.
    """
    __slots__ = ("count",)

    def __init__(self):
        self.count = 0

    def __repr__(self):
        return "flag(count=%d)" % self.count

    def hit(self):
        self.count += 1

    @property
    def value(self):
        return self.count > 0

    @property
    def values(self):
        return [True] * self.count


class Option:
    """
    Value-bearing record with a fixed value type.

    Parameters
    - type: str | int | float
      value type; tokens are coerced with the matching strict converter.
    - fallback: Any
      value returned by `value` while nothing was collected. When Unset, the
      zero value of the type is used ("", 0 or 0.0).

    Raises
    - TypeError: when type is not one of str, int or float, or when the fallback
      does not match it (an int fallback is accepted for a float option).
    """
    __slots__ = ("type", "fallback", "_values")

    def __init__(self, type=str, fallback=Unset, /):
        if type not in _CONVERTERS:
            raise TypeError("option 'type' must be one of str, int, or float")
        fallback = coalesce(fallback, type())
        if isinstance(fallback, bool) or not isinstance(fallback, (int, float) if type is float else type):
            raise TypeError("option 'fallback' must be of type %s" % type.__name__)
        self.type = type
        self.fallback = float(fallback) if type is float else fallback
        self._values = []

    def __repr__(self):
        return "option(type=%s, fallback=%r, values=%r)" % (self.type.__name__, self.fallback, self._values)

    @property
    def count(self):
        return len(self._values)

    @property
    def value(self):
        return self._values[-1] if self._values else self.fallback

    @property
    def values(self):
        return list(self._values)

    def append(self, token, /):
        """
        Coerce a raw token to the option's type and collect it.

        Raises
        - InvalidNumericValueError: when a numeric option receives a malformed token.
        """
        self._values.append(_CONVERTERS[self.type](token))


def convert_all(tokens, type, /):
    """
    Convert every token eagerly; the first failure aborts the whole conversion.

    Returns
    - list of converted values, never a partial one.
    """
    converter = _CONVERTERS[type]
    return [converter(token) for token in tokens]


__all__ = (
    "Flag",
    "Option",
    "integer",
    "floating",
    "convert_all",
)
