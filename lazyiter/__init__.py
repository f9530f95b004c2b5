"""
lazyiter - lazy, composable iteration over sequences.

Usage::

    import lazyiter as li

    evens = li.filter(li.count(), lambda n: n % 2 == 0)
    li.to_array(li.limit(evens, 3))     # [0, 2, 4]
"""

from lazyiter.core import (
    DONE,
    STOP_ITERATION,
    Iterator,
    Step,
    step_from_legacy,
    to_legacy_next,
    yield_value,
)
from lazyiter.sources import SourceKind, classify_source, to_iterator
from lazyiter.transforms import (
    accumulate,
    batch,
    consume,
    drop_while,
    enumerate,
    filter,
    filter_false,
    limit,
    map,
    slice,
    take_while,
)
from lazyiter.combinators import (
    CacheBuffer,
    chain,
    chain_from_iterable,
    compress,
    cycle,
    group_by,
    product,
    star_map,
    tee,
    zip,
    zip_longest,
)
from lazyiter.generators import count, range, repeat
from lazyiter.consumers import (
    equals,
    every,
    for_each,
    join,
    next_or_value,
    reduce,
    some,
    to_array,
)
from lazyiter.combinatorics import (
    combinations,
    combinations_with_replacement,
    permutations,
)
from lazyiter.lazy import LazyCollection
from lazyiter.models import IterConfig, PerformanceReport
from lazyiter.utils import (
    InvalidStep,
    LazyIterError,
    NotIterable,
    SealedMethodError,
    get_config,
    load_config,
    set_config,
    setup_logging,
)

__version__ = "0.1.0"
