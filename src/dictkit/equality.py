""" Structural equality for arbitrary values, used by :class:`~dictkit.dictionary.Dictionary` to compare values. """

from __future__ import annotations

import dataclasses
from typing import Any, Mapping

_MISSING = object()


def deep_equal(a: Any, b: Any) -> bool:
    """Compare *a* and *b* structurally.

    Values of different types are never equal. Mappings, lists and tuples are compared element by element,
    dataclasses field by field, and plain objects that do not define their own ``__eq__`` by their attributes
    rather than by identity. Anything else falls back to ``==``. Self-referencing structures are supported.
    """

    return _deep_equal(a, b, set())


def _deep_equal(a: Any, b: Any, visited: set[tuple[int, int]]) -> bool:
    if a is b:
        return True
    if type(a) is not type(b):
        return False

    if isinstance(a, (str, bytes, int, float, complex, set, frozenset)):
        return bool(a == b)

    # A pair that is already being compared further up the stack is assumed equal; any difference will
    # be reported by the outer comparison.
    pair = (id(a), id(b))
    if pair in visited:
        return True
    visited.add(pair)

    if isinstance(a, Mapping):
        if len(a) != len(b):
            return False
        for key, value in a.items():
            other = b.get(key, _MISSING)
            if other is _MISSING or not _deep_equal(value, other, visited):
                return False
        return True

    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_deep_equal(x, y, visited) for x, y in zip(a, b))

    if dataclasses.is_dataclass(a):
        return all(
            _deep_equal(getattr(a, field.name), getattr(b, field.name), visited)
            for field in dataclasses.fields(a)
            if field.compare
        )

    if type(a).__eq__ is object.__eq__:
        return _deep_equal(_attributes(a), _attributes(b), visited)

    return bool(a == b)


def _attributes(obj: Any) -> dict[str, Any]:
    attrs = dict(getattr(obj, "__dict__", {}))
    for cls in type(obj).__mro__:
        slots = cls.__dict__.get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            if name not in ("__dict__", "__weakref__") and hasattr(obj, name):
                attrs[name] = getattr(obj, name)
    return attrs
