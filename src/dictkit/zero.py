""" Derives the zero value of a type from its type hint. A :class:`~dictkit.dictionary.Dictionary` returns the zero
value of its value type when a key is absent. """

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, cast

from typeapi import ClassTypeHint, TypeHint, UnionTypeHint, get_annotations
from typing_extensions import TypeAlias

logger = logging.getLogger(__name__)

ZeroFactory: TypeAlias = Callable[[], Any]


def _none() -> None:
    return None


def zero_factory(hint: Any) -> ZeroFactory:
    """Return a function that produces a fresh zero value for the type described by *hint* on every call.

    * `None`, `Any`, `object` and hints that do not resolve to a class (e.g. type variables) produce `None`.
    * Unions produce `None` if `None` is a member, otherwise the zero value of the first member.
    * Dataclasses are constructed with the zero value of each field that has no default.
    * Any other class is called without arguments, e.g. `int` produces `0` and `List[str]` produces `[]`.

    Raises:
        TypeError: If *hint* names a class that cannot be constructed without arguments, or a dataclass whose
            required fields refer back to itself.
    """

    factory = _resolve(hint, frozenset())
    try:
        factory()
    except Exception as exc:
        raise TypeError(f"cannot derive a zero value for {hint!r}: {exc}") from exc
    return factory


def inferred_zero_factory(hint: Any) -> ZeroFactory:
    """Like :func:`zero_factory`, but for a type that was inferred rather than asked for. Nothing is constructed
    until the returned function is first called, and if the zero value cannot be derived or constructed the function
    returns `None` instead of raising."""

    factory: ZeroFactory | None = None

    def _factory() -> Any:
        nonlocal factory
        try:
            if factory is None:
                factory = _resolve(hint, frozenset())
            return factory()
        except Exception:
            logger.debug("no zero value for %r, falling back to None", hint, exc_info=True)
            factory = _none
            return None

    return _factory


def _resolve(hint: Any, seen: frozenset[type]) -> ZeroFactory:
    if hint is None or hint is Any or hint is object:
        return _none

    type_hint = hint if isinstance(hint, TypeHint) else TypeHint(hint)

    if isinstance(type_hint, UnionTypeHint):
        members = list(type_hint)
        if any(_is_none_type(member) for member in members):
            return _none
        return _resolve(members[0], seen)

    if not isinstance(type_hint, ClassTypeHint) or _is_none_type(type_hint) or type_hint.type is object:
        return _none

    cls = type_hint.type
    if dataclasses.is_dataclass(cls):
        if cls in seen:
            raise TypeError(f"dataclass {cls.__qualname__} requires a value of its own type")
        return _dataclass_factory(cls, seen | {cls})
    return cast(ZeroFactory, cls)


def _is_none_type(type_hint: TypeHint) -> bool:
    return type_hint.hint is None or (isinstance(type_hint, ClassTypeHint) and type_hint.type is type(None))


def _dataclass_factory(cls: type, seen: frozenset[type]) -> ZeroFactory:
    annotations = get_annotations(cls)
    required: dict[str, ZeroFactory] = {}
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        if field.default is not dataclasses.MISSING or field.default_factory is not dataclasses.MISSING:
            continue
        required[field.name] = _resolve(annotations.get(field.name, field.type), seen)

    logger.debug("zero value of dataclass %s fills fields %s", cls.__qualname__, list(required))

    def _factory() -> Any:
        return cls(**{name: factory() for name, factory in required.items()})

    return _factory
