# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for Collection: index resolution, views, export and cycling."""

import copy

import pytest

from pilekit._errors import (
    InvalidArgumentError,
    UnknownIndexError,
)
from pilekit.config import AppSettings
from pilekit.generic.collection import Collection


@pytest.fixture
def collection():
    return Collection(["Item1", "Item2", "Item3"])


@pytest.fixture
def person():
    return Collection({"name": "Alex", "job": "Web Dev", "fave_food": "Chinese"})


@pytest.fixture
def days():
    return Collection(["Mon", "Tues", "Weds", "Thurs", "Fri", "Sat", "Sun"])


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_construct(self, collection):
        assert isinstance(collection, Collection)
        assert len(collection) == 3

    def test_empty_constructor(self):
        c = Collection()
        assert len(c) == 0
        assert c.keys() == []

    def test_from_tuple(self):
        assert Collection(("a", "b")).to_dict() == {0: "a", 1: "b"}

    def test_from_collection_copies_contents(self, collection):
        collection.add_selector("^x$", lambda c, k, m: None)
        clone = Collection(collection)
        clone.append("Item4")
        assert len(collection) == 3
        assert clone == {0: "Item1", 1: "Item2", 2: "Item3", 3: "Item4"}
        assert len(clone.selectors) == 2

    def test_count(self, collection):
        assert collection.count() == 3
        assert len(collection) == 3

    def test_sort_constants(self):
        assert Collection.SORT_ASC == 1
        assert Collection.SORT_ASC_PRESERVE_KEYS == 2
        assert Collection.SORT_DESC == 3
        assert Collection.SORT_DESC_PRESERVE_KEYS == 4


# ---------------------------------------------------------------------------
# Index resolution
# ---------------------------------------------------------------------------


class TestResolve:
    def test_integer_index(self, collection):
        assert collection[0] == "Item1"

    def test_missing_integer_index(self, collection):
        with pytest.raises(UnknownIndexError):
            collection[10]

    def test_last_shortcut(self, collection):
        assert collection[":last"] == "Item3"

    def test_last_shortcut_on_empty(self):
        with pytest.raises(UnknownIndexError):
            Collection()[":last"]

    def test_last_shortcut_reads_key_size_minus_one(self):
        c = Collection(["a", "b", "c"])
        del c[0]
        assert c[":last"] == "b"

    def test_last_shortcut_is_exact(self, collection):
        with pytest.raises(UnknownIndexError):
            collection[":LAST"]

    def test_last_shortcut_from_settings(self, collection, monkeypatch):
        monkeypatch.setattr(
            "pilekit.generic.collection.settings",
            AppSettings(LAST_SHORTCUT=":end"),
        )
        assert collection[":end"] == "Item3"

    def test_integer_like_string_is_not_an_index(self, collection):
        with pytest.raises(UnknownIndexError):
            collection["1"]

    @pytest.mark.parametrize("key", [1.5, None, ("a",), b"0"])
    def test_unsupported_key_types(self, collection, key):
        with pytest.raises(UnknownIndexError):
            collection[key]

    def test_bool_is_not_an_index(self, collection):
        with pytest.raises(UnknownIndexError):
            collection[True]

    def test_string_key_read_with_get(self, person):
        assert person.get("name") == "Alex"
        assert person.get("missing", None) is None
        with pytest.raises(UnknownIndexError):
            person.get("missing")

    def test_string_key_read_goes_through_selectors(self, person):
        with pytest.raises(UnknownIndexError):
            person["name"]


class TestAssign:
    def test_append(self, collection):
        assert collection.append("NullItem") == 3
        assert len(collection) == 4
        assert collection[3] == "NullItem"

    def test_assign_none_appends(self, collection):
        assert collection.assign(None, "NullItem") == 3
        assert collection[3] == "NullItem"

    def test_set_index(self, collection):
        collection[3] = "Item4"
        assert len(collection) == 4
        assert collection[3] == "Item4"

    def test_overwrite_keeps_order(self, collection):
        collection[0] = "First"
        assert collection.to_list() == ["First", "Item2", "Item3"]

    def test_assign_does_not_dispatch(self, collection):
        collection["0:1"] = "literal"
        assert collection.exists("0:1")
        assert len(collection) == 4

    def test_assign_string_key(self, collection):
        collection["name"] = "Alex"
        assert collection.keys() == [0, 1, 2, "name"]

    def test_append_after_string_keys(self, person):
        assert person.append("x") == 0

    def test_append_after_unset(self, collection):
        del collection[2]
        assert collection.append("Item4") == 3

    def test_integer_like_string_key_normalized(self, collection):
        collection["27"] = "Phil"
        assert collection[27] == "Phil"
        assert collection.append("next") == 28

    def test_invalid_key_type(self, collection):
        with pytest.raises(InvalidArgumentError):
            collection[1.5] = "x"

    def test_size_grows_by_one(self, collection):
        before = len(collection)
        key = collection.append(object())
        assert len(collection) == before + 1
        assert collection.exists(key)


class TestExistsAndUnset:
    def test_isset(self, collection):
        assert 0 in collection
        assert collection.exists(0)

    def test_missing(self, collection):
        assert 5 not in collection
        assert "Item1" not in collection

    def test_integer_like_string(self, collection):
        assert collection.exists("0")

    def test_exists_does_not_dispatch(self, collection):
        assert not collection.exists("0:1")
        assert not collection.exists("0,1")

    def test_unset(self, collection):
        del collection[2]
        assert len(collection) == 2
        assert collection.keys() == [0, 1]

    def test_unset_missing_is_noop(self, collection):
        collection.unassign("missing")
        del collection[99]
        assert len(collection) == 3


# ---------------------------------------------------------------------------
# Views and export
# ---------------------------------------------------------------------------


class TestViews:
    def test_iterator(self, collection):
        iterations = 0
        for i, item in enumerate(collection):
            assert item == f"Item{i + 1}"
            iterations += 1
        assert iterations == len(collection)

    def test_keys(self, person):
        assert person.keys() == ["name", "job", "fave_food"]

    def test_values(self, person):
        assert person.values() == ["Alex", "Web Dev", "Chinese"]

    def test_items(self, person):
        assert person.items()[0] == ("name", "Alex")

    def test_to_dict(self):
        c = Collection(["Apple", "Orange", "Banana"])
        assert c.to_dict() == {0: "Apple", 1: "Orange", 2: "Banana"}

    def test_to_dict_reflects_sort(self):
        c = Collection(["Orange", "Apple"]).sort()
        assert c.to_dict() == {0: "Apple", 1: "Orange"}

    def test_round_trip_through_list(self, days):
        rebuilt = Collection(days.to_list())
        assert len(rebuilt) == len(days)
        for key in days.keys():
            assert rebuilt[key] == days[key]

    def test_round_trip_through_json(self, person):
        rebuilt = Collection.model_validate_json(person.model_dump_json())
        assert rebuilt == person

    def test_round_trip_through_json_integer_keys(self, collection):
        rebuilt = Collection.model_validate_json(collection.model_dump_json())
        assert rebuilt.keys() == [0, 1, 2]
        assert rebuilt["0:END"] == collection["0:END"]

    def test_deepcopy(self, collection):
        clone = copy.deepcopy(collection)
        clone.append("Item4")
        assert len(collection) == 3

    @pytest.mark.parametrize(
        "make_copy", [copy.copy, lambda c: c.model_copy()]
    )
    def test_copy_owns_selectors(self, collection, make_copy):
        clone = make_copy(collection)
        clone.add_selector(r"^first$", lambda c, k, m: c[0])
        assert clone["first"] == "Item1"
        assert len(clone.selectors) == 3
        assert len(collection.selectors) == 2
        with pytest.raises(UnknownIndexError):
            collection["first"]

    @pytest.mark.parametrize(
        "make_copy", [copy.copy, lambda c: c.model_copy()]
    )
    def test_copy_owns_cycle_cursor(self, days, make_copy):
        days.set_cycle_position(2)
        clone = make_copy(days)
        assert clone.cycle_position() == 2
        assert clone.cycle_forward() == "Thurs"
        assert days.cycle_position() == 2

    def test_copy_keeps_user_selectors(self, collection):
        collection.add_selector(r"^first$", lambda c, k, m: c[0])
        clone = copy.copy(collection)
        assert clone.selectors == collection.selectors
        assert clone["first"] == "Item1"

    def test_equality(self, collection):
        assert collection == Collection(["Item1", "Item2", "Item3"])
        assert collection == {0: "Item1", 1: "Item2", 2: "Item3"}
        assert collection != {1: "Item2", 0: "Item1", 2: "Item3"}
        assert collection != ["Item1", "Item2", "Item3"]

    def test_repr(self):
        assert repr(Collection(["a"])) == "Collection({0: 'a'})"


# ---------------------------------------------------------------------------
# Cycling
# ---------------------------------------------------------------------------


class TestCycle:
    def test_set_get_position(self, days):
        assert days.cycle_position() == 0
        days.set_cycle_position(3)
        assert days.cycle_position() == 3

    def test_set_position_under_bounds(self, days):
        days.set_cycle_position(-4)
        assert days.cycle_position() == 0

    def test_set_position_over_bounds(self, days):
        days.set_cycle_position(8)
        assert days.cycle_position() == 6

    def test_set_position_returns_collection(self, days):
        assert days.set_cycle_position(1) is days

    def test_forward_within_bounds(self, days):
        assert days.cycle_forward(1) == "Tues"
        assert days.cycle_forward(4) == "Sat"

    def test_forward_default_step(self, days):
        assert days.cycle_forward() == "Tues"

    def test_forward_over_bounds(self, days):
        assert days.cycle_forward(7) == "Mon"
        assert days.cycle_forward(10) == "Thurs"

    def test_backward_within_bounds(self, days):
        days.set_cycle_position(5)
        assert days.cycle_backward(1) == "Fri"
        assert days.cycle_backward(4) == "Mon"

    def test_backward_over_bounds(self, days):
        assert days.cycle_backward(7) == "Mon"
        assert days.cycle_backward(10) == "Fri"

    def test_forward_past_last_wraps_to_first(self, days):
        days.set_cycle_position(6)
        assert days.cycle_forward() == "Mon"

    def test_backward_past_first_wraps_to_last(self, days):
        assert days.cycle_backward() == "Sun"

    def test_cycle_is_positional(self):
        c = Collection({"a": 1, "b": 2})
        assert c.cycle_forward() == 2

    def test_iteration_does_not_move_cursor(self, days):
        days.cycle_forward(2)
        assert list(days) == days.to_list()
        assert days.cycle_position() == 2

    def test_cycling_does_not_disturb_iteration(self, days):
        seen = []
        for day in days:
            days.cycle_forward(3)
            seen.append(day)
        assert seen == days.to_list()

    def test_empty_collection(self):
        c = Collection()
        assert c.set_cycle_position(5).cycle_position() == 0
        with pytest.raises(UnknownIndexError):
            c.cycle_forward()
        with pytest.raises(UnknownIndexError):
            c.cycle_backward()

    def test_position_follows_shrinking_store(self, days):
        days.set_cycle_position(6)
        del days[6]
        assert days.cycle_position() == 5
