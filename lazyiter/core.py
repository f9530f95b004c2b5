"""
Iterator core for lazyiter.

Every sequence handle in the library is an ``Iterator``. Subclasses implement
one primitive, ``next_step()``, which returns a ``Step`` and never raises for
ordinary exhaustion. The legacy protocol (``next_value_or_throw()`` and
Python's ``__next__``) is derived from it and is sealed: it raises the shared
``STOP_ITERATION`` instance once the sequence is done. Because the standard
primitive never calls back into the legacy one, no subclass can set up a
mutual recursion between the two.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from lazyiter.utils import SealedMethodError

T = TypeVar("T")


@dataclass(frozen=True)
class Step(Generic[T]):
    """Outcome of a single fetch: a value, or exhaustion."""
    value: Optional[T] = None
    done: bool = False


DONE: Step = Step(None, True)

# Identity-distinguishable exhaustion marker for the legacy protocol.
STOP_ITERATION = StopIteration("lazyiter: iteration exhausted")


def yield_value(value: T) -> Step[T]:
    return Step(value, False)


def to_legacy_next(step: Step[T]) -> T:
    """
    Return the step's value, or raise STOP_ITERATION when it is DONE.

    The sentinel is shared, so each raise starts from an empty traceback;
    otherwise frames from every earlier exhaustion would pile up on it.
    """
    if step.done:
        raise STOP_ITERATION.with_traceback(None)
    return step.value


def step_from_legacy(fetch: Callable[[], T]) -> Step[T]:
    """Call a legacy-style fetch and turn its StopIteration into DONE."""
    try:
        return yield_value(fetch())
    except StopIteration:
        return DONE


class IteratorMeta(type):
    """
    Metaclass keeping the legacy bridge out of reach of subclasses.

    A sealed name must resolve to the root Iterator class, so defining it in
    the class body or inheriting it from a base ahead of Iterator in the MRO
    are both rejected.
    """

    SEALED = ("next_value_or_throw", "__next__")

    def __new__(mcs, name, bases, namespace, **kwargs):
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)
        roots = [klass for klass in cls.__mro__[1:] if isinstance(klass, IteratorMeta)]
        if not roots:
            return cls
        root = roots[-1]
        for method_name in mcs.SEALED:
            owner = next(klass for klass in cls.__mro__ if method_name in vars(klass))
            if owner is not root:
                raise SealedMethodError(
                    f"Class {name} may not override sealed method {method_name} "
                    f"(defined by {owner.__name__}); implement next_step() instead"
                )
        return cls


class Iterator(Generic[T], metaclass=IteratorMeta):
    """
    Stateful handle over an ordered, possibly infinite sequence.

    The base class is an empty sequence. Exhaustion is sticky: every
    implementation in this package keeps reporting DONE once it has done so.
    """

    def next_step(self) -> Step[T]:
        return DONE

    # The bridge frames end up in the sentinel's traceback, so they drop
    # their reference to the iterator before converting the step.
    def next_value_or_throw(self) -> T:
        step = self.next_step()
        del self
        return to_legacy_next(step)

    def __next__(self) -> T:
        step = self.next_step()
        del self
        return to_legacy_next(step)

    def __iter__(self) -> "Iterator[T]":
        return self

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"
