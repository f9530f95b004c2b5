"""Adapters turning sequences, array-likes and iterables into Iterators."""

from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

from lazyiter.core import DONE, Iterator, Step, yield_value
from lazyiter.utils import NotIterable

_MISSING = object()


class SourceKind(str, Enum):
    """How a source is turned into an Iterator"""
    ITERATOR = "iterator"
    SEQUENCE = "sequence"
    FACTORY = "factory"
    ARRAY_LIKE = "array_like"


class IndexCursor(Iterator[Any]):
    """Walks a sequence or array-like by index from 0 to len - 1."""

    def __init__(self, items):
        self._items = items
        self._index = 0
        self._done = False

    def next_step(self) -> Step[Any]:
        if self._done:
            return DONE
        if self._index >= len(self._items):
            self._done = True
            self._items = None
            return DONE
        value = self._items[self._index]
        self._index += 1
        return yield_value(value)


class NativeIteratorAdapter(Iterator[Any]):
    """Pulls values from a Python iterator obtained through __iter__."""

    def __init__(self, native):
        self._native = native

    def next_step(self) -> Step[Any]:
        if self._native is None:
            return DONE
        value = next(self._native, _MISSING)
        if value is _MISSING:
            self._native = None
            return DONE
        return yield_value(value)


def _is_array_like(source) -> bool:
    return hasattr(source, "__len__") and hasattr(source, "__getitem__")


def classify_source(source) -> SourceKind:
    """Decide once how a source will be adapted. Raises NotIterable."""
    if isinstance(source, Iterator):
        return SourceKind.ITERATOR
    if isinstance(source, Sequence):
        return SourceKind.SEQUENCE
    if isinstance(source, Iterable):
        return SourceKind.FACTORY
    if _is_array_like(source):
        return SourceKind.ARRAY_LIKE
    raise NotIterable(f"Cannot iterate over object of type {type(source).__name__}")


def to_iterator(source) -> Iterator[Any]:
    """
    Return an Iterator over source.

    Library Iterators are returned unchanged. Sequences and array-likes are
    read by index; anything else with __iter__ is asked for a fresh Python
    iterator, whose values are pulled one at a time.
    """
    kind = classify_source(source)
    if kind is SourceKind.ITERATOR:
        return source
    if kind is SourceKind.FACTORY:
        native = iter(source)
        if isinstance(native, Iterator):
            return native
        return NativeIteratorAdapter(native)
    return IndexCursor(source)


class SourceIterator(Iterator[Any]):
    """Base for combinators that read a single upstream source."""

    def __init__(self, source):
        self._source = to_iterator(source)
        self._finished = False

    def _pull(self) -> Step[Any]:
        # Upstream is never touched again once it has reported DONE.
        if self._finished:
            return DONE
        step = self._source.next_step()
        if step.done:
            self._finished = True
        return step
