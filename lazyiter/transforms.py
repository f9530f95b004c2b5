"""
Transform combinators.

Each function takes one source and returns a lazy Iterator. Nothing is read
from the source until the result is pulled, and each pull reads only as many
upstream values as the next result needs. Callbacks receive the value alone.
"""

import operator
from typing import Any, Callable

from lazyiter.core import DONE, Step, yield_value
from lazyiter.sources import SourceIterator

_MISSING = object()


class MapIterator(SourceIterator):

    def __init__(self, source, func: Callable[[Any], Any]):
        super().__init__(source)
        self._func = func

    def next_step(self) -> Step[Any]:
        step = self._pull()
        if step.done:
            return DONE
        return yield_value(self._func(step.value))


class FilterIterator(SourceIterator):
    """Yields values whose predicate result matches ``keep``."""

    def __init__(self, source, pred: Callable[[Any], Any], keep: bool = True):
        super().__init__(source)
        self._pred = pred
        self._keep = keep

    def next_step(self) -> Step[Any]:
        while True:
            step = self._pull()
            if step.done:
                return DONE
            if bool(self._pred(step.value)) is self._keep:
                return step


class DropWhileIterator(SourceIterator):

    def __init__(self, source, pred: Callable[[Any], Any]):
        super().__init__(source)
        self._pred = pred
        self._dropping = True

    def next_step(self) -> Step[Any]:
        while self._dropping:
            step = self._pull()
            if step.done:
                return DONE
            if not self._pred(step.value):
                self._dropping = False
                return step
        return self._pull()


class TakeWhileIterator(SourceIterator):
    """Stops for good at the first value failing the predicate; that value is lost."""

    def __init__(self, source, pred: Callable[[Any], Any]):
        super().__init__(source)
        self._pred = pred
        self._taking = True

    def next_step(self) -> Step[Any]:
        if not self._taking:
            return DONE
        step = self._pull()
        if not step.done and self._pred(step.value):
            return step
        self._taking = False
        return DONE


class AccumulateIterator(SourceIterator):

    def __init__(self, source, op: Callable[[Any, Any], Any]):
        super().__init__(source)
        self._op = op
        self._total = _MISSING

    def next_step(self) -> Step[Any]:
        step = self._pull()
        if step.done:
            return DONE
        if self._total is _MISSING:
            self._total = step.value
        else:
            self._total = self._op(self._total, step.value)
        return yield_value(self._total)


class LimitIterator(SourceIterator):

    def __init__(self, source, count: int):
        super().__init__(source)
        self._remaining = max(0, int(count))

    def next_step(self) -> Step[Any]:
        if self._remaining <= 0:
            return DONE
        step = self._pull()
        if step.done:
            self._remaining = 0
            return DONE
        self._remaining -= 1
        return step


class ConsumeIterator(SourceIterator):
    """Discards the first ``count`` values on the first pull."""

    def __init__(self, source, count: int):
        super().__init__(source)
        self._to_skip = max(0, int(count))

    def next_step(self) -> Step[Any]:
        while self._to_skip > 0:
            self._to_skip -= 1
            if self._pull().done:
                self._to_skip = 0
        return self._pull()


class EnumerateIterator(SourceIterator):

    def __init__(self, source, start: int = 0):
        super().__init__(source)
        self._counter = start

    def next_step(self) -> Step[Any]:
        step = self._pull()
        if step.done:
            return DONE
        pair = (self._counter, step.value)
        self._counter += 1
        return yield_value(pair)


class BatchIterator(SourceIterator):

    def __init__(self, source, size: int):
        super().__init__(source)
        size = int(size)
        if size < 1:
            raise ValueError("Batch size must be >= 1")
        self._size = size

    def next_step(self) -> Step[Any]:
        bucket = []
        while len(bucket) < self._size:
            step = self._pull()
            if step.done:
                break
            bucket.append(step.value)
        if not bucket:
            return DONE
        return yield_value(tuple(bucket))


def map(source, func):
    """Apply func to every value."""
    return MapIterator(source, func)


def filter(source, pred):
    """Keep values for which pred is truthy."""
    return FilterIterator(source, pred, keep=True)


def filter_false(source, pred):
    """Keep values for which pred is falsy."""
    return FilterIterator(source, pred, keep=False)


def drop_while(source, pred):
    return DropWhileIterator(source, pred)


def take_while(source, pred):
    return TakeWhileIterator(source, pred)


def accumulate(source, op=operator.add):
    """Running totals, seeded with the first value."""
    return AccumulateIterator(source, op)


def limit(source, count):
    """At most the first count values."""
    return LimitIterator(source, count)


def consume(source, count):
    """Everything after the first count values."""
    return ConsumeIterator(source, count)


def enumerate(source, start=0):
    return EnumerateIterator(source, start)


def slice(source, start, stop=None):
    """
    Values from index start up to, but not including, stop.

    A missing stop runs to the end of the source. A start past the end, or a
    stop at or before start, gives an empty iterator.
    """
    start = max(0, int(start))
    it = consume(source, start)
    if stop is not None:
        it = limit(it, int(stop) - start)
    return it


def batch(source, size):
    """Tuples of size consecutive values; the last may be shorter."""
    return BatchIterator(source, size)
