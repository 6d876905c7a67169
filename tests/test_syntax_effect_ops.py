"""
Tests for EffectOps: operations over PCollections of F[A] records.
"""

import pytest

from pcats.data import Left, Nothing, Right, Some, from_mapping, option, partial
from pcats.distributed import JsonCoder
from pcats.typeclasses import (
    DICT,
    EITHER,
    LIST,
    OPTION,
    MissingInstanceError,
    Order,
    SetUnion,
    Sum,
    commutative_monoid,
    identity,
)


class TestFunctorOps:
    """Test cases for operations that need only a Functor."""

    def test_as(self, pipeline):
        coll = pipeline.parallelize([[1, 2, 3], [], [4]])
        assert coll.fx.as_("hello").collect() == [
            ["hello", "hello", "hello"],
            [],
            ["hello"],
        ]

    def test_tuple_left(self, pipeline):
        coll = pipeline.parallelize([["hello", "world"]])
        assert coll.fx.tuple_left(42).collect() == [[(42, "hello"), (42, "world")]]

    def test_tuple_right(self, pipeline):
        coll = pipeline.parallelize([["hello", "world"]])
        assert coll.fx.tuple_right(42).collect() == [[("hello", 42), ("world", 42)]]

    def test_map_f_on_dict(self, pipeline):
        coll = pipeline.parallelize([{1: "hi", 2: "there", 3: "you"}])
        assert coll.fx.map_f(lambda s: s + "!").collect() == [
            {1: "hi!", 2: "there!", 3: "you!"}
        ]

    def test_map_f_on_mixed_containers(self, pipeline):
        coll = pipeline.parallelize([[1, 2], Some(3), Nothing(), Right(4), Left("e")])
        assert coll.fx.map_f(lambda x: x * 10).collect() == [
            [10, 20],
            Some(30),
            Nothing(),
            Right(40),
            Left("e"),
        ]

    def test_product_f(self, pipeline):
        coll = pipeline.parallelize([Some(42), Nothing()])
        assert coll.fx.product_f(str).collect() == [Some((42, "42")), Nothing()]

    def test_explicit_instance(self, sequential_pipeline):
        coll = sequential_pipeline.parallelize([[1, 2]])
        assert coll.fx.map_f(str, F=LIST).collect() == [["1", "2"]]

    def test_explicit_instance_must_have_capability(self, sequential_pipeline):
        coll = sequential_pipeline.parallelize([Right(1)])
        with pytest.raises(MissingInstanceError):
            coll.fx.filter_f(bool, F=EITHER)

    def test_unresolvable_record(self, sequential_pipeline):
        coll = sequential_pipeline.parallelize([1, 2]).fx.map_f(str)
        with pytest.raises(MissingInstanceError):
            coll.collect()

    def test_record_count_preserved(self, pipeline, list_records):
        coll = pipeline.parallelize(list_records)
        assert coll.fx.map_f(str).count() == len(list_records)
        assert coll.fx.as_(0).count() == len(list_records)


class TestFlatMapOps:
    """Test cases for operations that need a FlatMap."""

    def test_flat_map_f(self, pipeline):
        coll = pipeline.parallelize([[1, 2], [], [3]])
        assert coll.fx.flat_map_f(lambda x: [x] * x).collect() == [[1, 2, 2], [], [3, 3, 3]]

    def test_flat_map_f_option(self, pipeline):
        coll = pipeline.parallelize([Some(4), Some(3), Nothing()])
        half = lambda x: Some(x // 2) if x % 2 == 0 else Nothing()  # noqa: E731
        assert coll.fx.flat_map_f(half).collect() == [Some(2), Nothing(), Nothing()]

    def test_mproduct_f(self, pipeline):
        coll = pipeline.parallelize([["12", "34", "56"]])
        assert coll.fx.mproduct_f(list).collect() == [
            [
                ("12", "1"),
                ("12", "2"),
                ("34", "3"),
                ("34", "4"),
                ("56", "5"),
                ("56", "6"),
            ]
        ]


class TestFilterOps:
    """Test cases for FunctorFilter-based operations."""

    def test_map_filter_f(self, pipeline):
        m = {1: "one", 3: "three"}
        lookup = lambda k: option(m.get(k))  # noqa: E731

        options = pipeline.parallelize([Some(1), Some(2), Nothing()])
        assert options.fx.map_filter_f(lookup).collect() == [
            Some("one"),
            Nothing(),
            Nothing(),
        ]

        lists = pipeline.parallelize([[1, 2, 3], [4, 5, 6]])
        assert lists.fx.map_filter_f(lookup).collect() == [["one", "three"], []]

    def test_collect_f(self, pipeline):
        coll = pipeline.parallelize([[1, 2, 3, 4], [5]])
        evens = partial(lambda x: x % 2 == 0, lambda x: f"even {x}")
        assert coll.fx.collect_f(evens).collect() == [["even 2", "even 4"], []]

    def test_collect_f_on_dict(self, pipeline):
        coll = pipeline.parallelize([{"a": 1, "b": 2}])
        assert coll.fx.collect_f(from_mapping({2: "two"})).collect() == [{"b": "two"}]

    def test_filter_f(self, pipeline):
        options = pipeline.parallelize([Some(1), Some(2), Nothing()])
        assert options.fx.filter_f(lambda x: x <= 1).collect() == [
            Some(1),
            Nothing(),
            Nothing(),
        ]

        lists = pipeline.parallelize([[1, 2, 3], [4, 5, 6]])
        assert lists.fx.filter_f(lambda x: x <= 1).collect() == [[1], []]

    def test_non_empty_f_with_predicate(self, pipeline):
        coll = pipeline.parallelize([[1, 2, 3], [-1, 0]])
        assert coll.fx.non_empty_f(lambda x: x > 1).collect() == [[2, 3]]

    def test_non_empty_f_without_predicate(self, pipeline):
        coll = pipeline.parallelize([[1], [], Some(1), Nothing(), {}, {"a": 1}])
        assert coll.fx.non_empty_f().collect() == [[1], Some(1), {"a": 1}]

    def test_empty_f_with_predicate(self, pipeline):
        coll = pipeline.parallelize([[1, 2, 3], [-1, 0]])
        assert coll.fx.empty_f(lambda x: x > 1).collect() == [[]]

    def test_empty_f_without_predicate(self, pipeline):
        coll = pipeline.parallelize([[1], [], Some(1), Nothing()])
        assert coll.fx.empty_f().collect() == [[], Nothing()]

    def test_empty_f_on_either(self, pipeline):
        # Either is Foldable but not FunctorFilter: only the predicate-free form applies
        coll = pipeline.parallelize([Left("e"), Right(1)])
        assert coll.fx.empty_f().collect() == [Left("e")]

    def test_filter_alias(self, pipeline):
        coll = pipeline.parallelize([[1, 2, 3], [-1, 0]])
        assert coll.fx.filter_(lambda x: x > 1).collect() == [[2, 3]]


class TestFlatten:
    """Test cases for flatten()."""

    def test_flatten_lists(self, pipeline):
        coll = pipeline.parallelize([[1, 2, 3], [], [4]])
        assert coll.fx.flatten().collect() == [1, 2, 3, 4]

    def test_flatten_options(self, pipeline, option_records):
        coll = pipeline.parallelize(option_records)
        assert coll.fx.flatten().collect() == [1, 2, 10]

    def test_flatten_dict_values(self, pipeline):
        coll = pipeline.parallelize([{"a": 1, "b": 2}, {}])
        assert coll.fx.flatten().collect() == [1, 2]

    def test_flatten_with_coder(self, sequential_pipeline):
        coder = JsonCoder()
        coll = sequential_pipeline.parallelize([[1, 2]]).fx.flatten(coder=coder)
        assert coll.coder is coder
        assert coll.collect() == [1, 2]


class TestFoldOps:
    """Test cases for fold_f, min_option_f and max_option_f."""

    def test_fold_f(self, pipeline):
        coll = pipeline.parallelize([[2, 3, 4], [], [10]])
        assert coll.fx.fold_f(Sum).collect() == [9, 0, 10]

    def test_fold_f_option(self, pipeline, option_records):
        coll = pipeline.parallelize(option_records)
        assert coll.fx.fold_f(Sum).collect() == [1, 2, 0, 10]

    def test_fold_f_custom_monoid(self, pipeline):
        coll = pipeline.parallelize([[{1}, {2}], [{1}, {1}]])
        assert coll.fx.fold_f(SetUnion).collect() == [frozenset({1, 2}), frozenset({1})]

        max_zero = commutative_monoid(0, max)
        assert pipeline.parallelize([[3, 9, 2]]).fx.fold_f(max_zero).collect() == [9]

    def test_fold_f_requires_commutative_monoid(self, sequential_pipeline):
        coll = sequential_pipeline.parallelize([[1]])
        with pytest.raises(MissingInstanceError):
            coll.fx.fold_f(sum)

    def test_min_max_option(self, pipeline):
        coll = pipeline.parallelize([[5, 1, 3], [], [7]])
        assert coll.fx.min_option_f().collect() == [Some(1), Nothing(), Some(7)]
        assert coll.fx.max_option_f().collect() == [Some(5), Nothing(), Some(7)]

    def test_min_max_option_custom_order(self, pipeline):
        coll = pipeline.parallelize([["ccc", "a", "bb"]])
        assert coll.fx.min_option_f(Order.by(len)).collect() == [Some("a")]
        assert coll.fx.max_option_f(Order.by(len).reverse()).collect() == [Some("a")]

    def test_min_option_dict(self, pipeline):
        coll = pipeline.parallelize([{"x": 4, "y": 2}])
        assert coll.fx.min_option_f(F=DICT).collect() == [Some(2)]


class TestTraverseOps:
    """Test cases for traverse and flat_traverse."""

    def test_traverse_identity(self, pipeline, nested_records):
        coll = pipeline.parallelize(nested_records)
        assert coll.fx.traverse(identity, G=OPTION).collect() == [
            Nothing(),
            Some([1, 2, 3]),
            Some([]),
            Some([5]),
        ]

    def test_traverse_with_function(self, pipeline):
        def parse(s):
            return Right(int(s)) if s.isdigit() else Left(f"not a number: {s}")

        coll = pipeline.parallelize([["1", "2"], ["3", "x"]])
        assert coll.fx.traverse(parse, G=EITHER).collect() == [
            Right([1, 2]),
            Left("not a number: x"),
        ]

    def test_traverse_requires_applicative(self, sequential_pipeline):
        coll = sequential_pipeline.parallelize([[1]])
        with pytest.raises(MissingInstanceError):
            coll.fx.traverse(identity, G=DICT)

    def test_flat_traverse(self, pipeline):
        def parse(s):
            return Some(int(s)) if s.isdigit() else Nothing()

        coll = pipeline.parallelize([Some(["1", "2", "3", "four"])])
        result = coll.fx.flat_traverse(lambda xs: [parse(x) for x in xs], G=LIST)
        assert result.collect() == [[Some(1), Some(2), Some(3), Nothing()]]

    def test_flat_traverse_list_in_option(self, pipeline):
        coll = pipeline.parallelize([[1, 2], [3]])
        result = coll.fx.flat_traverse(lambda x: Some([x, x * 10]), G=OPTION)
        assert result.collect() == [Some([1, 10, 2, 20]), Some([3, 30])]


class TestFailurePropagation:
    """Errors raised by user functions surface unchanged."""

    def test_map_f_error(self, pipeline):
        coll = pipeline.parallelize([[1, 2], [0]]).fx.map_f(lambda x: 10 // x)
        with pytest.raises(ZeroDivisionError):
            coll.collect()

    def test_traverse_error(self, pipeline):
        def bad(x):
            raise KeyError(x)

        coll = pipeline.parallelize([[1]]).fx.traverse(bad, G=OPTION)
        with pytest.raises(KeyError):
            coll.collect()


class TestTraverseShortCircuit:
    """traverse stops calling f once the effect has failed."""

    def test_stops_after_nothing(self, pipeline):
        def lookup(x):
            if x == 2:
                return Nothing()
            if x == 3:
                raise RuntimeError("called after Nothing")
            return Some(x)

        coll = pipeline.parallelize([[1, 2, 3], [1]])
        assert coll.fx.traverse(lookup, G=OPTION).collect() == [Nothing(), Some([1])]

    def test_stops_after_left(self, pipeline):
        def parse(s):
            if s == "boom":
                raise RuntimeError("called after Left")
            return Right(int(s)) if s.isdigit() else Left(f"bad: {s}")

        coll = pipeline.parallelize([["1", "x", "boom"]])
        assert coll.fx.traverse(parse, G=EITHER).collect() == [Left("bad: x")]

    def test_dict_stops_after_nothing(self, pipeline):
        def lookup(x):
            if x is None:
                raise RuntimeError("called after Nothing")
            return option(x if x > 0 else None)

        coll = pipeline.parallelize([{"a": 1, "b": -1, "c": None}])
        assert coll.fx.traverse(lookup, G=OPTION).collect() == [Nothing()]

    def test_sequence_large_record(self, sequential_pipeline):
        record = [Some(i) for i in range(100_000)]
        coll = sequential_pipeline.parallelize([record])
        assert coll.nested.sequence(G=OPTION).collect() == [Some(list(range(100_000)))]
