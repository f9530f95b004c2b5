"""
Permutations and combinations.

The source is read once into a pool; results are tuples of pool values chosen
by an index vector that is advanced in place, one selection per pull, in
lexicographic order of the indexes.
"""

from typing import Any, List, Optional, Tuple

from lazyiter.core import DONE, Iterator, Step, yield_value
from lazyiter.sources import to_iterator


class IndexSelectionIterator(Iterator[Tuple[Any, ...]]):
    """Base for iterators yielding pool values picked by an index vector."""

    def __init__(self, source, length: Optional[int]):
        self._pool = list(to_iterator(source))
        if length is None:
            length = len(self._pool)
        length = int(length)
        if length < 0:
            raise ValueError("Selection length must be >= 0")
        self._length = length
        self._indices: Optional[List[int]] = self._initial(len(self._pool), length)

    def _initial(self, n: int, r: int) -> Optional[List[int]]:
        raise NotImplementedError

    def _advance(self, n: int, r: int) -> bool:
        raise NotImplementedError

    def next_step(self) -> Step[Tuple[Any, ...]]:
        if self._indices is None:
            return DONE
        result = tuple(self._pool[i] for i in self._indices[:self._length])
        if not self._advance(len(self._pool), self._length):
            self._indices = None
            self._pool = None
        return yield_value(result)


class PermutationsIterator(IndexSelectionIterator):

    def _initial(self, n, r):
        if r > n:
            return None
        self._cycles = list(range(n, n - r, -1))
        return list(range(n))

    def _advance(self, n, r):
        indices, cycles = self._indices, self._cycles
        for i in reversed(range(r)):
            cycles[i] -= 1
            if cycles[i] == 0:
                # Rotate position i to the end and reset its countdown.
                indices[i:] = indices[i + 1:] + indices[i:i + 1]
                cycles[i] = n - i
            else:
                j = cycles[i]
                indices[i], indices[-j] = indices[-j], indices[i]
                return True
        return False


class CombinationsIterator(IndexSelectionIterator):

    def _initial(self, n, r):
        if r > n:
            return None
        return list(range(r))

    def _advance(self, n, r):
        indices = self._indices
        for i in reversed(range(r)):
            if indices[i] != i + n - r:
                break
        else:
            return False
        indices[i] += 1
        for j in range(i + 1, r):
            indices[j] = indices[j - 1] + 1
        return True


class CombinationsWithReplacementIterator(IndexSelectionIterator):

    def _initial(self, n, r):
        if n == 0 and r > 0:
            return None
        return [0] * r

    def _advance(self, n, r):
        indices = self._indices
        for i in reversed(range(r)):
            if indices[i] != n - 1:
                break
        else:
            return False
        indices[i:] = [indices[i] + 1] * (r - i)
        return True


def permutations(source, length=None):
    """
    Ordered selections of length distinct positions (all of them by default).

    permutations(range(3)) gives (0, 1, 2), (0, 2, 1), (1, 0, 2), (1, 2, 0),
    (2, 0, 1), (2, 1, 0).
    """
    return PermutationsIterator(source, length)


def combinations(source, length):
    """Selections of length positions in increasing position order."""
    return CombinationsIterator(source, length)


def combinations_with_replacement(source, length):
    """Like combinations, but a position may be chosen more than once."""
    return CombinationsWithReplacementIterator(source, length)
