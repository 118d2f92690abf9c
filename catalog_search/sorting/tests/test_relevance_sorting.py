"""Tests for relevance sorting and pagination."""

from datetime import date, datetime

import pytest

from catalog_search.models import RankedDocument, SortOrder, SortSpec
from catalog_search.sorting import RelevanceSorter, compare_values


def ranked(doc_id, score, **attributes):
    return RankedDocument(id=doc_id, score=score, document={"id": doc_id, **attributes})


class TestCompareValues:
    """Test secondary-field value comparison."""

    def test_numbers(self):
        assert compare_values(1, 2) == -1
        assert compare_values(2.5, 1) == 1
        assert compare_values(3, 3.0) == 0

    def test_strings_ignore_case_and_accents(self):
        assert compare_values("abacaxi", "Éclair") == -1
        assert compare_values("Banana", "abacaxi") == 1

    def test_accent_breaks_exact_ties(self):
        assert compare_values("é", "e") == 1
        assert compare_values("e", "e") == 0

    def test_dates(self):
        assert compare_values(date(2024, 1, 1), date(2024, 6, 1)) == -1
        assert compare_values(datetime(2024, 6, 1, 12), date(2024, 6, 1)) == 1

    def test_incomparable_values_are_equal(self):
        assert compare_values("a", 1) == 0
        assert compare_values(None, 5) == 0


class TestRelevanceSorter:
    """Test suite for RelevanceSorter.sort."""

    @pytest.fixture
    def sorter(self):
        return RelevanceSorter()

    def ids(self, results):
        return [r.id for r in results]

    def test_score_descending(self, sorter):
        results = [ranked("a", 1.0), ranked("b", 3.0), ranked("c", 2.0)]
        assert self.ids(sorter.sort(results)) == ["b", "c", "a"]

    def test_near_tie_uses_secondary_field(self, sorter):
        results = [ranked("caro", 5.0, preco=30), ranked("barato", 4.8, preco=10)]
        ordered = sorter.sort(results, SortSpec(field="preco"))
        assert self.ids(ordered) == ["barato", "caro"]

    def test_large_gap_keeps_relevance_order(self, sorter):
        results = [ranked("caro", 10.0, preco=30), ranked("barato", 5.0, preco=10)]
        ordered = sorter.sort(results, SortSpec(field="preco"))
        assert self.ids(ordered) == ["caro", "barato"]

    def test_descending_direction(self, sorter):
        results = [ranked("a", 2.0, preco=10), ranked("b", 2.0, preco=30), ranked("c", 2.0, preco=20)]
        ordered = sorter.sort(results, SortSpec(field="preco", direction=SortOrder.DESC))
        assert self.ids(ordered) == ["b", "c", "a"]

    def test_direction_is_case_insensitive(self):
        assert SortSpec(field="preco", direction="DESC").direction == SortOrder.DESC

    def test_string_collation(self, sorter):
        results = [
            ranked("e", 1.0, nome="Éclair"),
            ranked("b", 1.0, nome="banana"),
            ranked("a", 1.0, nome="abacaxi"),
        ]
        ordered = sorter.sort(results, SortSpec(field="nome"))
        assert self.ids(ordered) == ["a", "b", "e"]

    def test_missing_sort_field_keeps_score_order(self, sorter):
        results = [ranked("a", 1.0), ranked("b", 1.2)]
        ordered = sorter.sort(results, SortSpec(field="preco"))
        assert self.ids(ordered) == ["b", "a"]

    def test_secondary_sort_never_jumps_a_clear_score_gap(self, sorter):
        results = [
            ranked("a", 1.93, p=7),
            ranked("b", 1.83, p=1),
            ranked("c", 1.44, p=6),
            ranked("d", 1.42, p=0),
            ranked("e", 1.28, p=3),
        ]
        ordered = sorter.sort(results, SortSpec(field="p"))

        assert self.ids(ordered) == ["b", "c", "a", "d", "e"]
        self.assert_no_inversions(ordered, sorter.epsilon)

    def test_chained_near_ties(self, sorter):
        # Neighbours are 0.3 apart, so every pair two steps away is a clear gap.
        results = [ranked(f"r{i}", 10.0 - 0.3 * i, preco=i) for i in range(10)]
        ordered = sorter.sort(results, SortSpec(field="preco", direction="desc"))

        self.assert_no_inversions(ordered, sorter.epsilon)
        assert self.ids(ordered)[:2] == ["r1", "r0"]

    def assert_no_inversions(self, ordered, epsilon):
        for i, earlier in enumerate(ordered):
            for later in ordered[i + 1:]:
                assert later.score - earlier.score <= epsilon, (earlier.id, later.id)

    def test_empty_and_single(self, sorter):
        assert sorter.sort([], SortSpec(field="preco")) == []
        single = [ranked("a", 1.0)]
        assert self.ids(sorter.sort(single, SortSpec(field="preco"))) == ["a"]


class TestPagination:
    """Test suite for RelevanceSorter.paginate."""

    @pytest.fixture
    def sorter(self):
        return RelevanceSorter()

    @pytest.fixture
    def results(self):
        return [ranked(f"p{i}", 100.0 - i) for i in range(25)]

    def test_first_page(self, sorter, results):
        page = sorter.paginate(results, page=1, page_size=12)

        assert len(page.items) == 12
        assert page.items[0].id == "p0"
        assert page.total == 25
        assert page.total_pages == 3

    def test_last_partial_page(self, sorter, results):
        page = sorter.paginate(results, page=3, page_size=12)
        assert [r.id for r in page.items] == ["p24"]

    def test_page_past_the_end(self, sorter, results):
        page = sorter.paginate(results, page=4, page_size=12)

        assert page.items == []
        assert page.total == 25
        assert page.total_pages == 3

    @pytest.mark.parametrize("page_number", [0, -1])
    def test_non_positive_page(self, sorter, results, page_number):
        assert sorter.paginate(results, page=page_number, page_size=12).items == []

    def test_page_size_clamped(self, sorter, results):
        page = sorter.paginate(results, page=2, page_size=0)

        assert page.page_size == 1
        assert page.total_pages == 25
        assert [r.id for r in page.items] == ["p1"]

    def test_no_results(self, sorter):
        page = sorter.paginate([], page=1, page_size=12)

        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0
