"""
Property-style tests for the effect syntax over list and Option records.
"""

import pytest

from pcats.data import Nothing, Some
from pcats.typeclasses import LIST, OPTION, Sum, identity

LIST_INPUTS = [[1, 2, 3], [], [4, 5], [6], [0, 0, 7]]
OPTION_INPUTS = [Some(1), Nothing(), Some(-3), Some(0)]


@pytest.fixture(params=["list", "option"])
def records(request):
    return LIST_INPUTS if request.param == "list" else OPTION_INPUTS


class TestFunctorLawsOnCollections:
    """Functor laws lifted onto PCollections."""

    def test_identity(self, pipeline, records):
        coll = pipeline.parallelize(records)
        assert coll.fx.map_f(identity).collect() == records

    def test_composition(self, pipeline, records):
        f = lambda x: x + 1  # noqa: E731
        g = lambda x: x * 3  # noqa: E731
        coll = pipeline.parallelize(records)

        assert (
            coll.fx.map_f(f).fx.map_f(g).collect()
            == coll.fx.map_f(lambda x: g(f(x))).collect()
        )


class TestCardinality:
    """Record counts after flatten, filter and the non-empty/empty family."""

    def test_flatten_count_is_sum_of_sizes(self, pipeline, records):
        coll = pipeline.parallelize(records)
        expected = sum(len(list(r)) for r in records)
        assert coll.fx.flatten().count() == expected

    def test_filter_f_is_idempotent(self, pipeline, records):
        p = lambda x: x > 0  # noqa: E731
        once = pipeline.parallelize(records).fx.filter_f(p)
        assert once.fx.filter_f(p).collect() == once.collect()

    def test_non_empty_and_empty_partition_input(self, pipeline, records):
        p = lambda x: x % 2 == 1  # noqa: E731
        coll = pipeline.parallelize(records)

        filtered = coll.fx.filter_f(p).collect()
        emptied = sum(1 for r in filtered if not list(r))

        non_empty = coll.fx.non_empty_f(p)
        empty = coll.fx.empty_f(p)

        assert non_empty.count() == len(records) - emptied
        assert empty.count() == emptied
        assert non_empty.count() + empty.count() == len(records)


class TestFoldExamples:
    """Worked examples for fold_f and min/max."""

    def test_fold_sum(self, pipeline):
        coll = pipeline.parallelize([[2, 3, 4], []])
        assert coll.fx.fold_f(Sum, F=LIST).collect() == [9, 0]

    def test_min_max(self, pipeline):
        coll = pipeline.parallelize([[5, 1, 3], []])
        assert coll.fx.min_option_f().collect() == [Some(1), Nothing()]
        assert coll.fx.max_option_f().collect() == [Some(5), Nothing()]


class TestSequenceRoundTrip:
    """sequence swaps layers; swapping back restores the record."""

    def test_list_option_round_trip(self, pipeline):
        coll = pipeline.parallelize([[Some(1)]])
        sequenced = coll.nested.sequence(G=OPTION)
        assert sequenced.collect() == [Some([1])]

        restored = sequenced.nested.sequence(G=LIST)
        assert restored.collect() == [[Some(1)]]

    def test_traverse_examples(self, pipeline):
        coll = pipeline.parallelize([[Some(1), Some(2)], [Some(1), Some(2), Nothing()]])
        assert coll.fx.traverse(identity, G=OPTION).collect() == [Some([1, 2]), Nothing()]
