"""
Consumers: functions that drive an iterator and return a plain result.

These are the points where a lazy chain does its work. All of them accept any
source ``to_iterator`` understands; none of them terminates on an infinite
source unless it can short-circuit.
"""

import operator
from typing import Any, Callable, List

from lazyiter.combinators import zip_longest
from lazyiter.sources import to_iterator


def to_array(source) -> List[Any]:
    """Every remaining value, in order."""
    it = to_iterator(source)
    values = []
    step = it.next_step()
    while not step.done:
        values.append(step.value)
        step = it.next_step()
    return values


def for_each(source, func: Callable[[Any], Any]) -> None:
    it = to_iterator(source)
    step = it.next_step()
    while not step.done:
        func(step.value)
        step = it.next_step()


def reduce(source, func: Callable[[Any, Any], Any], seed):
    """Left fold of func over source, starting from seed."""
    result = seed
    it = to_iterator(source)
    step = it.next_step()
    while not step.done:
        result = func(result, step.value)
        step = it.next_step()
    return result


def some(source, pred: Callable[[Any], Any]) -> bool:
    """True as soon as one value satisfies pred."""
    it = to_iterator(source)
    step = it.next_step()
    while not step.done:
        if pred(step.value):
            return True
        step = it.next_step()
    return False


def every(source, pred: Callable[[Any], Any]) -> bool:
    """False as soon as one value fails pred."""
    it = to_iterator(source)
    step = it.next_step()
    while not step.done:
        if not pred(step.value):
            return False
        step = it.next_step()
    return True


def join(source, separator) -> str:
    return str(separator).join(str(value) for value in to_iterator(source))


# Fill value for equals(); no caller can produce it.
_NO_VALUE = object()


def equals(a, b, eq: Callable[[Any, Any], Any] = operator.eq) -> bool:
    """
    True when a and b have the same length and eq holds for every pair.

    Comparing an iterator with itself drains it from both sides at once, so it
    is only "equal" to itself when empty.
    """
    def pair_matches(pair):
        left, right = pair
        if left is _NO_VALUE or right is _NO_VALUE:
            return False
        return eq(left, right)

    return every(zip_longest(_NO_VALUE, a, b), pair_matches)


def next_or_value(source, default):
    """The next value, or default once the source is exhausted."""
    step = to_iterator(source).next_step()
    return default if step.done else step.value
