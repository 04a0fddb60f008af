"""Tests for the Hashtable container."""

import numpy as np
import pytest

from dataknobs_hashtable import PRESENT, Hashtable, Slice


def make_fruit_table():
    return Hashtable({"apple": 5, "banana": 3, "cherry": 8})


class TestPointOperations:
    """Test add/get/has/delete and their variants."""

    def test_add_then_get(self):
        table = Hashtable()
        table.add("apple", 5)
        assert table.get("apple") == (5, True)
        assert table.has("apple")
        assert not table.not_has("apple")

    def test_add_returns_self_for_chaining(self):
        table = Hashtable()
        assert table.add("a", 1).add("b", 2).delete("a") is table
        assert table == {"b": 2}

    def test_add_overwrites(self):
        table = Hashtable()
        table.add("banana", 3).add("banana", 10)
        assert table.get("banana") == (10, True)
        assert table.length() == 1

    def test_get_absent_returns_zero_value(self):
        assert Hashtable().get("nope") == (None, False)
        assert Hashtable(zero=int).get("nope") == (0, False)
        assert Hashtable(zero=str).fetch("nope") == ""

    def test_zero_factory_gives_fresh_values(self):
        table = Hashtable(zero=list)
        first, _ = table.get("x")
        first.append(1)
        assert table.get("x") == ([], False)
        assert table.is_empty()

    def test_fetch(self):
        table = Hashtable({"apple": 5}, zero=int)
        assert table.fetch("apple") == 5
        assert table.fetch("orange") == 0

    def test_add_ok_is_insert_if_absent(self):
        table = Hashtable()
        assert table.add_ok("apple", 5) is True
        assert table.add_ok("apple", 10) is False
        assert table.get("apple") == (5, True)

    def test_delete_is_idempotent(self):
        table = make_fruit_table()
        table.delete("apple")
        assert not table.has("apple")
        table.delete("apple")
        table.delete("never-there")
        assert not table.has("apple")
        assert table.length() == 2

    def test_delete_ok_reports_absence(self):
        table = make_fruit_table()
        assert table.delete_ok("apple") is True
        assert table.delete_ok("apple") is True
        assert table.delete_ok("grape") is True
        assert table.length() == 2

    def test_add_and_delete_length(self):
        table = Hashtable()
        assert table.add_length("apple", 5) == 1
        assert table.add_length("apple", 10) == 1
        assert table.add_length("banana", 3) == 2
        assert table.delete_length("apple") == 1
        assert table.delete_length("apple") == 1

    def test_sizes(self):
        table = Hashtable()
        assert table.is_empty()
        assert not table.is_populated()
        table.add("a", 1)
        assert not table.is_empty()
        assert table.is_populated()
        assert table.length() == len(table) == 1


class TestConstruction:
    def test_merges_sources_left_to_right(self):
        table = Hashtable({"a": 1, "b": 2}, [("b", 20), ("c", 3)], {"c": 30})
        assert table == {"a": 1, "b": 20, "c": 30}

    def test_empty(self):
        assert Hashtable() == {}
        assert Hashtable({}, []).is_empty()

    def test_does_not_alias_source(self):
        source = {"a": 1}
        table = Hashtable(source)
        table.add("b", 2)
        assert source == {"a": 1}

    def test_values_are_held_by_reference(self):
        basket = ["apple"]
        table = Hashtable({"basket": basket})
        basket.append("pear")
        assert table.fetch("basket") == ["apple", "pear"]
        table.fetch("basket").append("plum")
        assert basket == ["apple", "pear", "plum"]


class TestBulkOperations:
    def test_add_many_later_wins(self):
        table = Hashtable()
        result = table.add_many({"orange": 7, "grape": 4}, {"kiwi": 6, "grape": 9})
        assert result is table
        assert table == {"orange": 7, "grape": 9, "kiwi": 6}

    def test_add_many_accepts_pairs_and_tables(self):
        table = Hashtable()
        table.add_many([("a", 1)], Hashtable({"b": 2}))
        assert table == {"a": 1, "b": 2}

    def test_add_many_ok_refuses_existing_keys(self):
        table = Hashtable({"apple": 1})
        results = table.add_many_ok({"apple": 5}, {"kiwi": 6}, {"kiwi": 7})
        assert isinstance(results, Slice)
        assert results == [False, True, False]
        assert table == {"apple": 1, "kiwi": 6}

    def test_add_many_ok_one_result_per_pair(self):
        table = Hashtable()
        results = table.add_many_ok(
            {"apple": 5, "banana": 3}, {"banana": 10, "cherry": 8}
        )
        assert results.length() == 4
        assert sorted(results) == [False, True, True, True]
        assert table == {"apple": 5, "banana": 3, "cherry": 8}

    def test_add_many_func(self):
        seen_indexes = set()

        def accept(index, key, value):
            seen_indexes.add(index)
            return value > 0

        table = Hashtable({"apple": 1})
        result = table.add_many_func(
            [{"apple": 5, "orange": -3}, {"banana": 10, "pear": 0}], accept
        )
        assert result is table
        assert seen_indexes == {0, 1}
        assert table == {"apple": 5, "banana": 10}

    def test_delete_many(self):
        table = make_fruit_table()
        assert table.delete_many("apple", "durian", "banana") is table
        assert table == {"cherry": 8}

    def test_delete_many_ok(self):
        table = make_fruit_table()
        assert table.delete_many_ok("apple", "grape") == [True, True]
        assert table.keys_func(lambda k: k == "apple") == []

    def test_delete_many_func(self):
        table = make_fruit_table()
        assert table.delete_many_func(lambda k, v: v < 6) is table
        assert table == {"cherry": 8}

    def test_delete_many_values(self):
        table = Hashtable({"a": 5, "b": 3, "c": 5})
        table.delete_many_values(5)
        assert table == {"b": 3}

    def test_delete_many_values_multiple_matches(self):
        table = Hashtable({"a": 5, "b": 3, "c": 7})
        table.delete_many_values(5, 5, 3, 10)
        assert table == {"c": 7}

    def test_delete_many_values_is_structural(self):
        table = Hashtable(
            {
                "list": [1, 2],
                "dict": {"x": [1]},
                "array": np.array([1.0, 2.0]),
                "other": [2, 1],
            }
        )
        table.delete_many_values([1, 2], {"x": [1]}, np.array([1.0, 2.0]))
        assert table.keys() == ["other"]

    def test_delete_many_values_respects_value_types(self):
        table = Hashtable({"flag": True, "count": 1, "ratio": 1.0})
        table.delete_many_values(1)
        assert sorted(table.keys()) == ["flag", "ratio"]
        assert table.fetch("flag") is True

    def test_has_many(self):
        table = make_fruit_table()
        assert table.has_many("apple", "orange", "banana") == [True, False, True]
        assert table.has_many() == []

    def test_get_many_skips_absent_keys(self):
        table = Hashtable({"a": 1})
        assert table.get_many("a", "z") == [1]
        assert make_fruit_table().get_many("cherry", "nope", "apple") == [8, 5]


class TestFunctionalOperations:
    def test_each_visits_every_entry_once(self):
        seen = []
        table = make_fruit_table()
        assert table.each(lambda k, v: seen.append((k, v))) is table
        assert sorted(seen) == [("apple", 5), ("banana", 3), ("cherry", 8)]

    def test_each_break_stops(self):
        calls = []

        def visit(key, value):
            calls.append(key)
            return len(calls) < 2

        table = make_fruit_table()
        table.each_break(visit)
        assert len(calls) == 2
        assert len(calls) <= table.length()

    def test_each_break_stops_immediately(self):
        calls = []
        make_fruit_table().each_break(lambda k, v: calls.append(k) and False)
        assert len(calls) == 1

    def test_each_tolerates_mutation(self):
        table = make_fruit_table()
        table.each(lambda k, v: table.delete(k))
        assert table.is_empty()

    def test_key_and_value_projections(self):
        table = make_fruit_table()
        keys, values = [], []
        table.each_key(keys.append).each_value(values.append)
        assert sorted(keys) == ["apple", "banana", "cherry"]
        assert sorted(values) == [3, 5, 8]

        keys, values = [], []
        table.each_key_break(lambda k: keys.append(k) or False)
        table.each_value_break(lambda v: values.append(v) or len(values) < 2)
        assert len(keys) == 1
        assert len(values) == 2

    def test_map_is_in_place(self):
        table = Hashtable({"apple": 5, "banana": 3})
        result = table.map(lambda k, v: v * 2 if k == "banana" else v)
        assert result is table
        assert table == {"apple": 5, "banana": 6}

    def test_map_break_returns_new_table(self):
        table = Hashtable({"a": 1, "b": 2})
        result = table.map_break(lambda k, v: (v * 10, True))
        assert result is not table
        assert result == {"a": 10, "b": 20}
        assert table == {"a": 1, "b": 2}

    def test_map_break_drops_stopping_entry(self):
        table = make_fruit_table()
        result = table.map_break(lambda k, v: (v * 2, k != "banana"))
        assert "banana" not in result
        assert result.length() <= table.length() - 1
        for key, value in result.items():
            assert value == table.fetch(key) * 2
        assert table == {"apple": 5, "banana": 3, "cherry": 8}

    def test_map_break_stop_on_first(self):
        assert make_fruit_table().map_break(lambda k, v: (v, False)).is_empty()

    def test_filter(self):
        table = Hashtable({"a": 1, "b": 2})
        result = table.filter(lambda k, v: v > 1)
        assert result == {"b": 2}
        assert table.length() == 2

    def test_filter_keeps_zero_factory(self):
        result = Hashtable({"a": 1}, zero=int).filter(lambda k, v: False)
        assert result.get("a") == (0, False)

    def test_intersection_is_key_set(self):
        left = Hashtable({"a": 1, "b": 2})
        right = Hashtable({"b": 9, "c": 3})
        result = left.intersection(right)
        assert set(result.keys()) == {"b"}
        assert result.fetch("b") is PRESENT
        assert left == {"a": 1, "b": 2}
        assert right == {"b": 9, "c": 3}

    def test_intersection_with_mapping(self):
        result = make_fruit_table().intersection({"banana": 0, "durian": 0})
        assert result.keys() == ["banana"]

    def test_intersection_disjoint(self):
        assert Hashtable({"a": 1}).intersection(Hashtable({"b": 2})).is_empty()

    def test_merge(self):
        table = Hashtable({"a": 1})
        result = table.merge(Hashtable({"a": 2, "b": 2}), {"b": 3})
        assert result is table
        assert table == {"a": 2, "b": 3}


class TestExtraction:
    def test_keys_and_values(self):
        table = make_fruit_table()
        keys = table.keys()
        values = table.values()
        assert isinstance(keys, Slice)
        assert isinstance(values, Slice)
        assert sorted(keys) == ["apple", "banana", "cherry"]
        assert sorted(values) == [3, 5, 8]

    def test_empty_extraction(self):
        assert Hashtable().keys() == []
        assert Hashtable().values() == []

    def test_keys_func(self):
        table = make_fruit_table()
        assert sorted(table.keys_func(lambda k: len(k) > 5)) == ["banana", "cherry"]

    def test_values_func(self):
        table = make_fruit_table()
        assert sorted(table.values_func(lambda k, v: v > 4)) == [5, 8]

    def test_extraction_does_not_alias(self):
        table = make_fruit_table()
        keys = table.keys()
        keys.append("durian")
        assert not table.has("durian")

    def test_keys_get_many_round_trip(self):
        table = make_fruit_table()
        values = table.get_many(*table.keys())
        assert values.length() == table.length()
        assert sorted(values) == sorted(table.values())


class TestProtocolAndCopy:
    def test_container_protocol(self):
        table = make_fruit_table()
        assert "apple" in table
        assert "durian" not in table
        assert sorted(table) == ["apple", "banana", "cherry"]
        assert dict(table.items()) == {"apple": 5, "banana": 3, "cherry": 8}

    def test_equality(self):
        assert make_fruit_table() == make_fruit_table()
        assert make_fruit_table() != Hashtable({"apple": 5})
        assert make_fruit_table() != ["apple", "banana", "cherry"]

    def test_equality_with_array_values(self):
        left = Hashtable({"x": np.array([1, 2])})
        assert left == Hashtable({"x": np.array([1, 2])})
        assert left == {"x": np.array([1, 2])}
        assert left != Hashtable({"x": np.array([1, 3])})
        assert left != Hashtable({"y": np.array([1, 2])})

    def test_repr(self):
        assert repr(Hashtable({"a": 1})) == "Hashtable({'a': 1})"

    def test_copy_is_independent(self):
        table = make_fruit_table()
        clone = table.copy()
        clone.add("durian", 1).delete("apple")
        assert table == {"apple": 5, "banana": 3, "cherry": 8}
        assert clone.length() == 3

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Hashtable())
