"""Demo: run with ``python -m lazyiter``."""

from time import sleep

import lazyiter as li
from lazyiter.utils import get_performance_summary, measure_performance, setup_logging


def main(delay=0.05):
    logger = setup_logging()

    def expensive_transform(x):
        # Simulate a costly step so laziness is visible
        print(f"  computing f({x}) ...")
        sleep(delay)
        return x * x

    print("\n--- Demo: laziness (no work until iterated) ---")
    pipeline = li.limit(
        li.filter(li.map(li.range(1, 10_000), expensive_transform), lambda v: v % 2 == 0),
        5,
    )
    print("Constructed pipeline. No output yet (nothing computed).")
    out, report = measure_performance("lazy_pipeline", li.to_array, pipeline)
    print(f"Result: {out}")
    print(f"Time: {report.execution_time_ms:.2f} ms\n")

    print("--- Demo: tee (one source, independent readers) ---")
    left, right = li.tee(li.map(li.count(1), expensive_transform))
    print("left: ", li.to_array(li.limit(left, 3)))
    print("right:", li.to_array(li.limit(right, 3)), "(replayed from cache, no recomputation)\n")

    print("--- Demo: grouping consecutive runs ---")
    for key, group in li.group_by("AAABBBBCDDA"):
        print(f"  {key}: {group}")
    print()

    print("--- Demo: combinatorics ---")
    print("permutations:", li.to_array(li.permutations("ABC", 2)))
    print("combinations:", li.to_array(li.combinations(range(4), 3)))
    print()

    print("--- Demo: caching (first pass computes; second pass reuses) ---")
    cached = li.LazyCollection(range(1, 6)).map(expensive_transform).cache(True)
    _, first_pass = measure_performance("cached_first_pass", cached.to_list)
    _, second_pass = measure_performance("cached_second_pass", cached.to_list)
    print(f"First pass:  {first_pass.summary_line()}")
    print(f"Second pass: {second_pass.summary_line()}")

    summary = get_performance_summary()
    logger.info(f"Measured {summary['total_operations']} operations in {summary['total_time_ms']:.2f} ms")
    return summary


if __name__ == "__main__":
    main()
