from lazyiter import combinators, consumers, transforms
from lazyiter.combinators import CacheBuffer
from lazyiter.core import Iterator
from lazyiter.sources import to_iterator

_MISSING = object()


class LazyCollection:
    """
    A chainable, lazy collection. Transformations are recorded and turned into
    a chain of Iterators only when you iterate. Optionally caches realized
    results in a CacheBuffer so the pipeline runs at most once.

    Each iteration rebuilds the chain from the source, so a list or range
    source can be consumed many times; an Iterator source only once.
    """
    def __init__(self, source, ops=None, cache_enabled=False):
        self._source = source
        self._ops = ops or []          # sequence of ("op_name", arg)
        self._cache_enabled = cache_enabled
        self._cache = None             # CacheBuffer, filled on first cached pass

    # --------- chainable operators (lazy) ----------
    def map(self, fn):
        return self._with_op(("map", fn))

    def filter(self, pred):
        return self._with_op(("filter", pred))

    def filter_false(self, pred):
        return self._with_op(("filter_false", pred))

    def take_while(self, pred):
        return self._with_op(("take_while", pred))

    def drop_while(self, pred):
        return self._with_op(("drop_while", pred))

    def skip(self, n):
        return self._with_op(("skip", int(n)))

    def take(self, n):
        return self._with_op(("take", int(n)))

    def enumerate(self, start=0):
        return self._with_op(("enumerate", start))

    def batch(self, size):
        size = int(size)
        if size < 1:
            raise ValueError("Batch size must be >= 1")
        return self._with_op(("batch", size))

    def chunk(self, size):
        """Alias for batch() - groups elements into chunks of specified size"""
        return self.batch(size)

    def chain(self, *others):
        return self._with_op(("chain", others))

    def zip(self, *others):
        return self._with_op(("zip", others))

    def group_by(self, key_fn=None):
        """Group consecutive elements with equal keys into (key, [items]) pairs"""
        return self._with_op(("group_by", key_fn))

    def page(self, page_number, page_size):
        """Get a specific page of results (1-indexed)"""
        if page_number < 1:
            raise ValueError("Page number must be >= 1")
        offset = (page_number - 1) * page_size
        return self.skip(offset).take(page_size)

    def paginate(self, page_size):
        """Return an iterator of pages, each containing up to page_size elements"""
        page_num = 1
        while True:
            page_data = self.page(page_num, page_size).to_list()
            if not page_data:
                break
            yield page_data
            page_num += 1

    def cache(self, enabled=True):
        c = self._clone()
        c._cache_enabled = enabled
        return c

    # --------- forcing evaluation ----------
    def to_list(self):
        return consumers.to_array(iter(self))

    # --------- reducing operations (force evaluation) ----------
    def reduce(self, fn, initial=_MISSING):
        """Apply a function of two arguments cumulatively to items, from left to right"""
        it = iter(self)
        if initial is _MISSING:
            initial = consumers.next_or_value(it, _MISSING)
            if initial is _MISSING:
                raise TypeError("reduce() of empty collection with no initial value")
        return consumers.reduce(it, fn, initial)

    def sum(self, start=0):
        """Return the sum of all elements"""
        return consumers.reduce(iter(self), lambda total, item: total + item, start)

    def count(self):
        """Return the count of elements"""
        return consumers.reduce(iter(self), lambda n, _: n + 1, 0)

    def min(self, default=_MISSING):
        """Return the minimum element"""
        if default is _MISSING:
            return min(iter(self))
        return min(iter(self), default=default)

    def max(self, default=_MISSING):
        """Return the maximum element"""
        if default is _MISSING:
            return max(iter(self))
        return max(iter(self), default=default)

    def first(self, default=None):
        """Return the first element, or default if empty"""
        return consumers.next_or_value(iter(self), default)

    def last(self, default=None):
        """Return the last element, or default if empty"""
        return consumers.reduce(iter(self), lambda _, item: item, default)

    def any(self, pred=None):
        """Return True if any element is truthy (or satisfies predicate)"""
        return consumers.some(iter(self), pred or bool)

    def all(self, pred=None):
        """Return True if all elements are truthy (or satisfy predicate)"""
        return consumers.every(iter(self), pred or bool)

    def find(self, pred):
        """Return the first element that satisfies the predicate, or None"""
        return consumers.next_or_value(transforms.filter(iter(self), pred), None)

    def join(self, separator=""):
        return consumers.join(iter(self), separator)

    # --------- iterator protocol ----------
    def __iter__(self) -> Iterator:
        if not self._cache_enabled:
            return self._build()
        # The pipeline runs once; every pass reads the cache through its own cursor
        if self._cache is None:
            self._cache = CacheBuffer(self._build())
        return self._cache.cursor()

    def _build(self) -> Iterator:
        it = to_iterator(self._source)
        for op, arg in self._ops:
            if op == "map":
                it = transforms.map(it, arg)
            elif op == "filter":
                it = transforms.filter(it, arg)
            elif op == "filter_false":
                it = transforms.filter_false(it, arg)
            elif op == "take_while":
                it = transforms.take_while(it, arg)
            elif op == "drop_while":
                it = transforms.drop_while(it, arg)
            elif op == "skip":
                it = transforms.consume(it, arg)
            elif op == "take":
                it = transforms.limit(it, arg)
            elif op == "enumerate":
                it = transforms.enumerate(it, arg)
            elif op == "batch":
                it = transforms.batch(it, arg)
            elif op == "chain":
                it = combinators.chain(it, *arg)
            elif op == "zip":
                it = combinators.zip(it, *arg)
            elif op == "group_by":
                it = combinators.group_by(it, arg)
            else:
                raise ValueError(f"Unknown op: {op}")
        return it

    # --------- helpers ----------
    def _with_op(self, op_tuple):
        return LazyCollection(self._source, self._ops + [op_tuple], self._cache_enabled)

    def _clone(self):
        # Clones start with an empty cache; caches are never shared between pipelines
        return LazyCollection(self._source, list(self._ops), self._cache_enabled)
