from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Iterator, Mapping, TypeVar, cast

from dictkit.equality import deep_equal
from dictkit.zero import ZeroFactory, zero_factory

if TYPE_CHECKING:
    from dictkit.dictionary import Dictionary

K = TypeVar("K")
V = TypeVar("V")


class FrozenDictionary(Mapping[K, V]):
    """A hashable, immutable snapshot of a :class:`~dictkit.dictionary.Dictionary`.

    Equality compares values with :func:`~dictkit.equality.deep_equal`, which may consider values equal that hash
    differently, so the hash only covers the keys. Snapshots holding unhashable values are hashable too."""

    def __init__(self, items: Mapping[K, V] | Iterable[tuple[K, V]] = (), zero: ZeroFactory | None = None) -> None:
        self._data: Dict[K, V] = dict(items)
        self._zero = zero or zero_factory(None)
        self._hash: int | None = None

    def __repr__(self) -> str:
        return f"FrozenDictionary({self._data})"

    def __getitem__(self, __k: K) -> V:
        return self._data[__k]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data.keys())

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return len(self) == len(other) and all(k in other and deep_equal(v, other[k]) for k, v in self._data.items())

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((len(self._data), frozenset(self._data)))
        return self._hash

    def get_value(self, key: K) -> V:
        """Return the value bound to *key*, or the zero value of the snapshot if *key* is absent."""

        try:
            return self._data[key]
        except KeyError:
            return cast(V, self._zero())

    def thaw(self) -> Dictionary[K, V]:
        """Return a new mutable dictionary with the entries and zero value of this snapshot."""

        from dictkit.dictionary import Dictionary

        return Dictionary(self._data, default_factory=self._zero)
