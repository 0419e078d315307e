"""Runtime values of the minirepl language.

A runtime value is one of: an integer (Python `int`, at most
MAX_DIGITS decimal digits wide), a boolean
(Python `bool`), a string (Python `str`) or `NIL`, the absence of a
value. Because `bool` is a subclass of `int` in Python, the helpers in
this module always test for booleans before integers so that `true`
never passes for the number 1.
"""

from __future__ import annotations

from typing import Any


class Nil:
    """Marker type for the `nil` value. Use the `NIL` instance."""
    def __repr__(self) -> str:
        return 'nil'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Nil)

    def __hash__(self) -> int:
        return hash(Nil)


NIL = Nil()

# Python refuses to convert integers wider than this to or from decimal text
MAX_DIGITS = 4300
NUMBER_LIMIT = 10 ** MAX_DIGITS


def is_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def in_range(value: int) -> bool:
    """True if `value` has at most MAX_DIGITS decimal digits."""
    return -NUMBER_LIMIT < value < NUMBER_LIMIT


def type_name(value: Any) -> str:
    """Return the language-level name of a runtime value's kind."""
    if isinstance(value, Nil):
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, int):
        return 'number'
    if isinstance(value, str):
        return 'string'
    raise TypeError(f"not a runtime value: {value!r}")


def is_truthy(value: Any) -> bool:
    # only nil and false are falsy; 0 and "" are truthy
    if isinstance(value, Nil):
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality without coercion between kinds."""
    if isinstance(a, Nil) or isinstance(b, Nil):
        return isinstance(a, Nil) and isinstance(b, Nil)
    if type_name(a) != type_name(b):
        return False
    return a == b


def to_string(value: Any) -> str:
    """Render a runtime value the way `print` shows it."""
    if isinstance(value, Nil):
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)
