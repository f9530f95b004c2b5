import pytest

import lazyiter as li


class TestMapFilter:
    """Test map, filter and filter_false"""

    def test_map(self):
        result = li.join(li.map(li.range(4), lambda x: x * x), "")
        assert result == "0149", f"Expected 0149, got {result}"

    def test_map_receives_value_only(self):
        """Callbacks are called with the value alone, no index"""
        seen_args = []

        def record(*args):
            seen_args.append(args)
            return args[0]

        li.to_array(li.map(["a", "b"], record))
        assert seen_args == [("a",), ("b",)], f"Unexpected call arguments: {seen_args}"

    def test_filter(self):
        assert li.join(li.filter(li.range(5), lambda x: x > 1), "") == "234"

    def test_filter_false(self):
        assert li.join(li.filter_false(li.range(5), lambda x: x < 2), "") == "234"

    def test_chained_filters_call_order(self):
        """Chained filters pull lazily, interleaving predicate calls"""
        calls = []

        def is_even(v):
            calls.append(f"a{v}")
            return v % 2 == 0

        def at_least_five(v):
            calls.append(f"b{v}")
            return v >= 5

        evens = li.filter(li.range(10), is_even)
        result = li.join(li.filter(evens, at_least_five), "")

        assert result == "68", f"Expected 68, got {result}"
        assert "".join(calls) == "a0b0a1a2b2a3a4b4a5a6b6a7a8b8a9"

    def test_chained_filter_false_call_order(self):
        calls = []

        def is_even(v):
            calls.append(f"a{v}")
            return v % 2 == 0

        def at_most_five(v):
            calls.append(f"b{v}")
            return v <= 5

        odds = li.filter_false(li.range(10), is_even)
        result = li.join(li.filter_false(odds, at_most_five), "")

        assert result == "79", f"Expected 79, got {result}"
        assert "".join(calls) == "a0a1b1a2a3b3a4a5b5a6a7b7a8a9b9"

    def test_callback_errors_propagate(self):
        """Errors raised by callbacks reach the caller unchanged"""
        def explode(x):
            raise RuntimeError(f"bad value {x}")

        it = li.map([1, 2], explode)
        with pytest.raises(RuntimeError, match="bad value 1"):
            it.next_step()


class TestDropTakeWhile:
    """Test drop_while and take_while"""

    def test_drop_while(self):
        assert li.join(li.drop_while(li.range(10), lambda v: v < 5), "") == "56789"
        assert li.join(li.drop_while(li.range(10), lambda v: v != 5), "") == "56789"

    def test_drop_while_keeps_later_matches(self):
        """Only the leading run is dropped"""
        result = li.to_array(li.drop_while([1, 2, 5, 1, 2], lambda v: v < 3))
        assert result == [5, 1, 2], f"Unexpected result: {result}"

    def test_take_while(self):
        """The first failing element is consumed but not yielded"""
        source = li.range(10)
        assert li.join(li.take_while(source, lambda v: v < 5), "") == "01234"
        assert li.join(source, "") == "6789"

    def test_take_while_stops_permanently(self):
        """Later passing elements are never offered after the first failure"""
        calls = []

        def pred(v):
            calls.append(v)
            return v != 5

        source = li.range(10)
        it = li.take_while(source, pred)
        assert li.join(it, "") == "01234"
        assert it.next_step().done
        assert calls == [0, 1, 2, 3, 4, 5], f"Predicate called too often: {calls}"
        assert li.join(source, "") == "6789"


class TestAccumulateEnumerate:
    """Test accumulate and enumerate"""

    def test_accumulate_array(self):
        assert li.to_array(li.accumulate([1, 2, 3, 4, 5])) == [1, 3, 6, 10, 15]

    def test_accumulate_iterator(self):
        assert li.to_array(li.accumulate(li.range(1, 6))) == [1, 3, 6, 10, 15]

    def test_accumulate_float(self):
        result = li.to_array(li.accumulate([1.0, 2.5, 0.5, 1.5, 0.5]))
        assert result == [1.0, 3.5, 4.0, 5.5, 6.0]

    def test_accumulate_custom_op(self):
        result = li.to_array(li.accumulate([3, 1, 4, 1, 5], max))
        assert result == [3, 3, 4, 4, 5]

    def test_accumulate_empty(self):
        assert li.to_array(li.accumulate([])) == []

    def test_enumerate(self):
        assert li.to_array(li.enumerate("ABC")) == [(0, "A"), (1, "B"), (2, "C")]
        assert li.to_array(li.enumerate("DEF", 3)) == [(3, "D"), (4, "E"), (5, "F")]


class TestLimitConsumeSlice:
    """Test limit, consume and slice"""

    def test_limit(self):
        assert li.join(li.limit("ABCDEFG", 3), "") == "ABC"
        assert li.join(li.limit("ABCDEFG", 10), "") == "ABCDEFG"

    def test_limit_does_not_overread(self):
        """Once the limit is reached, upstream is left alone"""
        source = li.range(10)
        li.to_array(li.limit(source, 3))
        assert li.next_or_value(source, None) == 3

    def test_negative_limit(self):
        assert li.to_array(li.limit("ABC", -1)) == []

    def test_consume(self):
        assert li.join(li.consume("ABCDEFG", 3), "") == "DEFG"
        assert li.consume("ABCDEFG", 10).next_step().done

    def test_consume_triggers_side_effects(self):
        """Discarded values are still computed"""
        seen = []
        it = li.consume(li.map(range(5), lambda x: seen.append(x) or x), 3)
        assert seen == [], "consume must not pull before the first fetch"
        assert it.next_value_or_throw() == 3
        assert seen == [0, 1, 2, 3]

    def test_slice_start(self):
        assert li.join(li.slice("ABCDEFG", 2), "") == "CDEFG"

    def test_slice_start_stop(self):
        assert li.join(li.slice("ABCDEFG", 2, 4), "") == "CD"

    def test_slice_empty_ranges(self):
        """start == stop, stop < start and start past the end are all empty"""
        assert li.slice("ABCDEFG", 1, 1).next_step().done
        assert li.slice("ABCDEFG", 4, 2).next_step().done
        assert li.slice("ABCDEFG", 10).next_step().done

    def test_slice_infinite_source(self):
        assert li.to_array(li.slice(li.count(20), 0, 5)) == [20, 21, 22, 23, 24]


class TestBatch:
    """Test batch"""

    def test_batch(self):
        result = li.to_array(li.batch(range(7), 3))
        assert result == [(0, 1, 2), (3, 4, 5), (6,)], f"Unexpected batches: {result}"

    def test_batch_exact_and_empty(self):
        assert li.to_array(li.batch(range(4), 2)) == [(0, 1), (2, 3)]
        assert li.to_array(li.batch([], 2)) == []

    def test_batch_invalid_size(self):
        with pytest.raises(ValueError):
            li.batch([1], 0)
