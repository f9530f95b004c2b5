"""Sources that produce values instead of reading them."""

from typing import Any

from lazyiter.core import DONE, Iterator, Step, yield_value
from lazyiter.utils import InvalidStep


class CountIterator(Iterator[Any]):
    """start, start + step, start + 2 * step, ... without end."""

    def __init__(self, start=0, step=1):
        self._value = start
        self._step = step

    def next_step(self) -> Step[Any]:
        value = self._value
        # Plain incremental accumulation; float steps drift the usual way.
        self._value += self._step
        return yield_value(value)


class RepeatIterator(Iterator[Any]):

    def __init__(self, value):
        self._value = value

    def next_step(self) -> Step[Any]:
        return yield_value(self._value)


class RangeIterator(Iterator[Any]):
    """Bounded arithmetic sequence; empty when step points away from stop."""

    def __init__(self, start, stop, step):
        self._next = start
        self._stop = stop
        self._step = step

    def next_step(self) -> Step[Any]:
        if self._step is None:
            return DONE
        value = self._next
        if (self._step > 0 and value >= self._stop) or (self._step < 0 and value <= self._stop):
            self._step = None
            return DONE
        self._next = value + self._step
        return yield_value(value)


def count(start=0, step=1):
    return CountIterator(start, step)


def repeat(value):
    """The same object on every pull, forever."""
    return RepeatIterator(value)


def range(start_or_stop, stop=None, step=1):
    """
    Lazy arithmetic range. range(5) is 0..4; range(0, 5, 2) is 0, 2, 4.

    Raises InvalidStep for a step of zero, since the direction is undefined.
    """
    if step == 0:
        raise InvalidStep("Range step argument must not be zero")
    if stop is None:
        start, stop = 0, start_or_stop
    else:
        start = start_or_stop
    return RangeIterator(start, stop, step)
