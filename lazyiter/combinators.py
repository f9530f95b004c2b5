"""
Combination combinators: iterators built from several sources, or from one
source read by several consumers.

``tee`` and ``cycle`` share a ``CacheBuffer``: the source is pulled exactly once
and every value is stored in an append-only list that independent cursors read
at their own pace.
"""

import logging
import operator
import weakref
from typing import Any, Callable, List, Optional, Tuple

from lazyiter import transforms
from lazyiter.core import DONE, Iterator, Step, yield_value
from lazyiter.sources import SourceIterator, to_iterator
from lazyiter.utils import get_config

logger = logging.getLogger(__name__)


# ---------- Cache buffer ----------

class CacheBuffer:
    """
    Append-only store of the values of one source.

    Slot ``i`` holds the ``i``-th value ever pulled from the source. With
    reclamation on, slots every registered cursor has moved past are dropped
    and ``offset`` records how many slots were dropped so indexes stay stable.

    Dropped slots are blanked at once so their values can be collected, but
    the backing list is only compacted once the dead prefix outgrows the live
    part, which keeps a lagging reader's drain linear.
    """

    def __init__(self, source, reclaim: bool = False):
        self._source = to_iterator(source)
        self._values: List[Any] = []
        self._base = 0      # absolute index of self._values[0]
        self._offset = 0    # first slot still held
        self._reclaim = reclaim
        self._cursors = weakref.WeakSet()
        self.exhausted = False

    def __len__(self) -> int:
        return self._base + len(self._values)

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def held(self) -> int:
        """Number of slots currently kept in memory."""
        return len(self) - self._offset

    def get(self, index: int) -> Step[Any]:
        """Value at slot index; reading the first unfilled slot pulls the source."""
        if index < self._offset:
            raise IndexError(f"Slot {index} was already reclaimed")
        if index == len(self):
            if self.exhausted:
                return DONE
            step = self._source.next_step()
            if step.done:
                self.exhausted = True
                self._source = None
                logger.debug(f"Cache buffer source exhausted after {len(self)} values")
                return DONE
            self._values.append(step.value)
        return yield_value(self._values[index - self._base])

    def cursor(self) -> "CacheCursor":
        """A new reader starting at the oldest slot still held."""
        return CacheCursor(self, self._offset)

    def register(self, cursor: "CacheCursor") -> None:
        self._cursors.add(cursor)

    def reclaim(self) -> None:
        """Drop slots that every live cursor has already read."""
        if not self._reclaim:
            return
        positions = [c.position for c in self._cursors]
        if not positions:
            return
        new_offset = min(positions)
        if new_offset <= self._offset:
            return
        for i in range(self._offset - self._base, new_offset - self._base):
            self._values[i] = None
        self._offset = new_offset

        dead = self._offset - self._base
        if dead > len(self._values) - dead:
            del self._values[:dead]
            self._base = self._offset


class CacheCursor(Iterator[Any]):
    """One reader of a CacheBuffer; keeps its own position."""

    def __init__(self, buffer: CacheBuffer, position: int = 0):
        self._buffer = buffer
        self.position = position
        buffer.register(self)

    def next_step(self) -> Step[Any]:
        step = self._buffer.get(self.position)
        if step.done:
            return DONE
        self.position += 1
        self._buffer.reclaim()
        return step


# ---------- Chaining ----------

class ChainIterator(Iterator[Any]):
    """Drains each source from a lazy outer sequence in turn."""

    def __init__(self, sources):
        self._outer = to_iterator(sources)
        self._current: Optional[Iterator[Any]] = None
        self._finished = False

    def next_step(self) -> Step[Any]:
        while not self._finished:
            if self._current is None:
                outer = self._outer.next_step()
                if outer.done:
                    self._finished = True
                    self._outer = None
                    break
                self._current = to_iterator(outer.value)
            step = self._current.next_step()
            if not step.done:
                return step
            self._current = None
        return DONE


def chain(*sources):
    """Values of every source, in argument order."""
    return ChainIterator(sources)


def chain_from_iterable(sources):
    """Like chain, but the sources themselves come from a (lazy) sequence."""
    return ChainIterator(sources)


# ---------- Zipping ----------

class ZipIterator(Iterator[Tuple[Any, ...]]):

    def __init__(self, sources):
        self._sources = [to_iterator(s) for s in sources]
        self._finished = not self._sources

    def next_step(self) -> Step[Tuple[Any, ...]]:
        if self._finished:
            return DONE
        values = []
        for source in self._sources:
            step = source.next_step()
            if step.done:
                # Later sources are not probed for this tuple.
                self._finished = True
                return DONE
            values.append(step.value)
        return yield_value(tuple(values))


class ZipLongestIterator(Iterator[Tuple[Any, ...]]):

    def __init__(self, fill, sources):
        self._fill = fill
        self._sources = [to_iterator(s) for s in sources]
        self._live = [True] * len(self._sources)
        self._finished = not self._sources

    def next_step(self) -> Step[Tuple[Any, ...]]:
        if self._finished:
            return DONE
        values = []
        for i, source in enumerate(self._sources):
            if not self._live[i]:
                values.append(self._fill)
                continue
            step = source.next_step()
            if step.done:
                self._live[i] = False
                values.append(self._fill)
            else:
                values.append(step.value)
        if not any(self._live):
            self._finished = True
            return DONE
        return yield_value(tuple(values))


def zip(*sources):
    """Tuples of one value per source; ends with the shortest source."""
    return ZipIterator(sources)


def zip_longest(fill, *sources):
    """Tuples of one value per source; exhausted sources contribute fill."""
    return ZipLongestIterator(fill, sources)


def compress(data, selectors):
    """Values of data whose matching selector is truthy."""
    pairs = zip(data, selectors)
    selected = transforms.filter(pairs, operator.itemgetter(1))
    return transforms.map(selected, operator.itemgetter(0))


# ---------- Product ----------

class ProductIterator(Iterator[Tuple[Any, ...]]):
    """Cartesian product in odometer order; every source is read up front."""

    def __init__(self, sources):
        self._pools = [list(to_iterator(s)) for s in sources]
        if self._pools and all(self._pools):
            self._indices: Optional[List[int]] = [0] * len(self._pools)
        else:
            self._indices = None
        logger.debug(f"Product over pools of sizes {[len(p) for p in self._pools]}")

    def next_step(self) -> Step[Tuple[Any, ...]]:
        if self._indices is None:
            return DONE
        result = tuple(self._pools[k][i] for k, i in enumerate(self._indices))

        for k in reversed(range(len(self._indices))):
            self._indices[k] += 1
            if self._indices[k] < len(self._pools[k]):
                break
            self._indices[k] = 0
        else:
            self._indices = None
            self._pools = None

        return yield_value(result)


def product(*sources):
    return ProductIterator(sources)


# ---------- Grouping and mapping ----------

def _identity(value):
    return value


class GroupByIterator(SourceIterator):
    """
    Groups consecutive values with equal keys into (key, [values]) pairs.

    Only adjacent runs are merged: a key that shows up again later starts a
    new group. Finding the end of a group means reading one value past it, so
    that value and its key are held until the next pull.
    """

    def __init__(self, source, key_func: Optional[Callable[[Any], Any]] = None):
        super().__init__(source)
        self._key_func = key_func if key_func is not None else _identity
        self._lookahead: Optional[Tuple[Any, Any]] = None

    def next_step(self) -> Step[Tuple[Any, List[Any]]]:
        if self._lookahead is None:
            step = self._pull()
            if step.done:
                return DONE
            self._lookahead = (self._key_func(step.value), step.value)

        key, value = self._lookahead
        self._lookahead = None
        group = [value]
        while True:
            step = self._pull()
            if step.done:
                break
            next_key = self._key_func(step.value)
            if next_key != key:
                self._lookahead = (next_key, step.value)
                break
            group.append(step.value)
        return yield_value((key, group))


def group_by(source, key_func=None):
    return GroupByIterator(source, key_func)


def star_map(source, func, *extra_args):
    """func(*value, *extra_args) for every value of source."""
    return transforms.map(source, lambda args: func(*args, *extra_args))


# ---------- Tee and cycle ----------

def tee(source, n=None, reclaim=None):
    """
    n independent iterators over the same sequence.

    The source is read once into a shared CacheBuffer; each returned iterator
    is a cursor into it.
    """
    config = get_config()
    n = config.default_tee_count if n is None else int(n)
    if n < 0:
        raise ValueError("tee() needs n >= 0")
    reclaim = config.tee_reclaim if reclaim is None else reclaim

    buffer = CacheBuffer(source, reclaim=reclaim)
    logger.debug(f"tee: {n} cursors over one cache buffer (reclaim={reclaim})")
    return tuple(CacheCursor(buffer) for _ in range(n))


class CycleIterator(Iterator[Any]):
    """Repeats the source forever, replaying it from a cache after the first pass."""

    def __init__(self, source):
        self._buffer = CacheBuffer(source)
        self._position = 0

    def next_step(self) -> Step[Any]:
        step = self._buffer.get(self._position)
        if step.done:
            if len(self._buffer) == 0:
                return DONE
            self._position = 0
            step = self._buffer.get(0)
        self._position += 1
        return step


def cycle(source):
    return CycleIterator(source)
