""" This module provides the :class:`Dictionary`, a mutable key-value container with convenience accessors and
set-style predicates (subset, superset, disjoint, equality) that compare values structurally.

The container is not synchronized. Wrap it in a lock if it is shared between threads. """

from __future__ import annotations

import copy
import logging
import reprlib
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, MutableMapping, TypeVar, cast, get_args

from nr.stream import NotSet

from dictkit.equality import deep_equal
from dictkit.frozen import FrozenDictionary
from dictkit.util.repr import safe_repr
from dictkit.zero import ZeroFactory, inferred_zero_factory, zero_factory

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class Dictionary(MutableMapping[K, V]):
    """A mutable mapping from keys of type *K* to values of type *V*.

    Every mutating method changes the instance in place. :meth:`copy` is the only way to obtain an independent
    container. Values are compared with :func:`~dictkit.equality.deep_equal`.

    Looking up an absent key with :meth:`get_value` returns the *zero value* of *V* instead of raising. The zero
    value is determined by, in order of precedence:

    1. *default_factory*, called on every lookup of an absent key;
    2. a deep copy of *default*;
    3. the zero value of *value_type* (see :func:`~dictkit.zero.zero_factory`);
    4. the value type of the generic alias the instance was created from, e.g. `Dictionary[str, int]()`, or `None` if
       that type cannot be constructed without arguments;
    5. `None`.

    Note that unless you check :meth:`contains_key` (or use :meth:`try_get`), an absent key cannot be told apart
    from a key that is bound to the zero value.

    The usual mapping protocol is supported as well. Unlike :meth:`get_value`, `d[key]` raises a :class:`KeyError`
    for absent keys.

    .. code:: Example

        d = Dictionary.of("one", 1)
        d.set_value("two", 2)
        assert d.get_value("three") == 0
        assert d.is_superset(Dictionary.of("one", 1))
    """

    def __init__(
        self,
        *items: Mapping[K, V] | Iterable[tuple[K, V]],
        value_type: Any | NotSet = NotSet.Value,
        default: V | NotSet = NotSet.Value,
        default_factory: Callable[[], V] | NotSet = NotSet.Value,
    ) -> None:
        assert len(items) <= 1, "expected 0 or 1 positional argument"
        self._data: Dict[K, V] = dict(items[0]) if items else {}
        self._zero = _configured_zero(value_type, default, default_factory)

    @staticmethod
    def of(
        key: K,
        value: V,
        *,
        value_type: Any | NotSet = NotSet.Value,
        default: V | NotSet = NotSet.Value,
        default_factory: Callable[[], V] | NotSet = NotSet.Value,
    ) -> Dictionary[K, V]:
        """Create a dictionary that contains only *key* bound to *value*. If no zero value is configured, it is
        derived from the type of *value* when it is first needed, falling back to `None` if that type cannot be
        constructed without arguments. Creating the dictionary does not construct anything."""

        if value_type is NotSet.Value and default is NotSet.Value and default_factory is NotSet.Value:
            default_factory = cast(Callable[[], V], inferred_zero_factory(type(value)))
        return Dictionary(
            {key: value},
            value_type=value_type,
            default=default,
            default_factory=default_factory,
        )

    @staticmethod
    def empty(
        *,
        value_type: Any | NotSet = NotSet.Value,
        default: V | NotSet = NotSet.Value,
        default_factory: Callable[[], V] | NotSet = NotSet.Value,
    ) -> Dictionary[K, V]:
        """Create a dictionary without entries."""

        return Dictionary(value_type=value_type, default=default, default_factory=default_factory)

    # Accessors

    def get_value(self, key: K) -> V:
        """Return the value bound to *key*, or the zero value if *key* is absent."""

        try:
            return self._data[key]
        except KeyError:
            return self._zero_value()

    def try_get(self, key: K) -> tuple[V, bool]:
        """Like :meth:`get_value`, but also returns whether *key* was present."""

        try:
            return self._data[key], True
        except KeyError:
            return self._zero_value(), False

    def set_value(self, key: K, value: V) -> None:
        self._data[key] = value

    def delete_value(self, key: K) -> None:
        """Remove *key*. Does nothing if it is absent."""

        self._data.pop(key, None)

    def get_keys(self) -> list[K]:
        """Return all keys. The order is not defined."""

        return list(self._data)

    def get_values(self) -> list[V]:
        """Return all values. The order is not defined, but matches :meth:`get_keys` as long as the dictionary is
        not modified between the two calls."""

        return list(self._data.values())

    def get_length(self) -> int:
        return len(self._data)

    def contains_key(self, key: K) -> bool:
        return key in self._data

    def contains_value(self, value: V) -> bool:
        """Returns `True` if any value is structurally equal to *value*."""

        return any(deep_equal(candidate, value) for candidate in self._data.values())

    def is_empty(self) -> bool:
        return not self._data

    # Mutation

    def merge(self, other: Mapping[K, V]) -> None:
        """Bind every key of *other* to its value in this dictionary, replacing existing bindings."""

        logger.debug("merging %d entries into dictionary of %d", len(other), len(self._data))
        for key, value in other.items():
            self._data[key] = value

    def clear(self) -> None:
        self._data.clear()

    def copy(self) -> Dictionary[K, V]:
        """Return a new dictionary with the same entries and zero value. Values are not copied."""

        new = copy.copy(self)
        new._data = dict(self._data)
        return new

    def freeze(self) -> FrozenDictionary[K, V]:
        """Return an immutable, hashable snapshot of the current entries."""

        return FrozenDictionary(self._data, zero=self._zero_factory())

    # Relations

    def is_equal(self, other: Mapping[K, V]) -> bool:
        """Returns `True` if *other* has the same size and binds every key of this dictionary to an equal value."""

        if len(self._data) != len(other):
            return False
        for key, value in self._data.items():
            if key not in other or not deep_equal(value, other[key]):
                return False
        return True

    def is_subset(self, other: Mapping[K, V], check_keys: bool = False) -> bool:
        """Returns `True` if every entry of this dictionary has an equal counterpart in *other*.

        A key that is absent from *other* is looked up as the zero value of *other*, so an entry bound to the
        zero value matches even if *other* lacks the key. Pass *check_keys* to require the key to be present.
        """

        if len(self._data) > len(other):
            return False
        for key, value in self._data.items():
            if check_keys and key not in other:
                return False
            if not deep_equal(value, self._lookup(other, key)):
                return False
        return True

    def is_superset(self, other: Mapping[K, V], check_keys: bool = False) -> bool:
        """Returns `True` if every entry of *other* has an equal counterpart in this dictionary. The same zero
        value rules as for :meth:`is_subset` apply."""

        if len(self._data) < len(other):
            return False
        for key, value in other.items():
            if check_keys and key not in self._data:
                return False
            if not deep_equal(value, self.get_value(key)):
                return False
        return True

    def is_disjoint(self, other: Mapping[K, V]) -> bool:
        """Returns `True` if no key of this dictionary is present in *other*. Values are not compared."""

        return not any(key in other for key in self._data)

    # Internals

    def _lookup(self, other: Mapping[K, V], key: K) -> V:
        if isinstance(other, (Dictionary, FrozenDictionary)):
            return cast(V, other.get_value(key))
        if key in other:
            return other[key]
        return self._zero_value()

    def _zero_factory(self) -> ZeroFactory:
        if self._zero is None:
            # `__orig_class__` is only assigned after `__init__()` returns, so the generic alias is inspected lazily.
            args = get_args(getattr(self, "__orig_class__", None))
            self._zero = inferred_zero_factory(args[1]) if len(args) == 2 else zero_factory(None)
            logger.debug("resolved zero value factory %r for %s", self._zero, type(self).__qualname__)
        return self._zero

    def _zero_value(self) -> V:
        return cast(V, self._zero_factory()())

    # MutableMapping

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __setitem__(self, key: K, value: V) -> None:
        self._data[key] = value

    def __delitem__(self, key: K) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.is_equal(other)

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        entries = ", ".join(f"{safe_repr(key)}: {safe_repr(value)}" for key, value in self._data.items())
        return f"{type(self).__name__}({{{entries}}})"


def _configured_zero(
    value_type: Any | NotSet,
    default: Any | NotSet,
    default_factory: Callable[[], Any] | NotSet,
) -> ZeroFactory | None:
    if default is not NotSet.Value and default_factory is not NotSet.Value:
        raise TypeError("`default` and `default_factory` are mutually exclusive")
    if default_factory is not NotSet.Value:
        if not callable(default_factory):
            raise TypeError(f"`default_factory` must be callable, got {type(default_factory).__name__}")
        return default_factory
    if default is not NotSet.Value:
        return lambda: copy.deepcopy(default)
    if value_type is not NotSet.Value:
        return zero_factory(value_type)
    return None
