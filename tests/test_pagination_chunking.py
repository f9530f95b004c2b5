import pytest

from lazyiter.lazy import LazyCollection


class TestPaginationChunking:
    """Test pagination and chunking functionality"""

    def test_page(self):
        data = list(range(100))
        assert LazyCollection(data).page(1, 10).to_list() == list(range(0, 10))
        assert LazyCollection(data).page(2, 10).to_list() == list(range(10, 20))
        assert LazyCollection(data).page(10, 10).to_list() == list(range(90, 100))
        assert LazyCollection(data).page(11, 10).to_list() == []

    def test_page_number_must_be_positive(self):
        with pytest.raises(ValueError):
            LazyCollection(range(10)).page(0, 5)

    def test_pagination_with_filtering(self):
        evens = LazyCollection(range(100)).filter(lambda x: x % 2 == 0)
        assert evens.page(1, 5).to_list() == [0, 2, 4, 6, 8]
        assert evens.page(2, 5).to_list() == [10, 12, 14, 16, 18]

    def test_paginate(self):
        pages = list(LazyCollection(range(1, 51)).map(lambda x: x * 2).filter(lambda x: x % 4 == 0).paginate(5))
        assert len(pages) == 5, f"Expected 5 pages, got {len(pages)}"
        assert pages[0] == [4, 8, 12, 16, 20]
        assert pages[-1] == [84, 88, 92, 96, 100]

    def test_paginate_exact_boundaries(self):
        pages = list(LazyCollection(range(20)).paginate(5))
        expected_pages = [
            [0, 1, 2, 3, 4],
            [5, 6, 7, 8, 9],
            [10, 11, 12, 13, 14],
            [15, 16, 17, 18, 19],
        ]
        assert pages == expected_pages, f"Pages failed: {pages}"

    def test_paginate_partial_last_page(self):
        assert list(LazyCollection(range(7)).paginate(3)) == [[0, 1, 2], [3, 4, 5], [6]]

    def test_paginate_empty(self):
        assert list(LazyCollection([]).paginate(3)) == []

    def test_batch(self):
        result = (
            LazyCollection(range(1, 21))
            .map(lambda x: x * x)
            .filter(lambda x: x % 3 == 0)
            .take(6)
            .batch(2)
            .to_list()
        )
        assert result == [(9, 36), (81, 144), (225, 324)], f"Unexpected batches: {result}"

    def test_chunk_is_batch(self):
        assert LazyCollection(range(5)).chunk(2).to_list() == [(0, 1), (2, 3), (4,)]

    def test_batch_then_map(self):
        sums = LazyCollection(range(100)).batch(10).map(sum).to_list()
        assert sums == [45, 145, 245, 345, 445, 545, 645, 745, 845, 945], f"Chunk sums failed: {sums}"

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            LazyCollection(range(5)).batch(0)

    def test_large_dataset_page(self):
        middle_page = LazyCollection(range(100000)).map(lambda x: x * 2).page(51, 1000).to_list()

        assert len(middle_page) == 1000, f"Expected 1000 items, got {len(middle_page)}"
        assert middle_page[0] == 100000, f"First item should be 100000, got {middle_page[0]}"
        assert middle_page[-1] == 101998, f"Last item should be 101998, got {middle_page[-1]}"
