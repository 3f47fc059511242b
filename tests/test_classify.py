#
# objfmt - Classify Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import array
import datetime as dt
import functools

from collections import OrderedDict, deque
from dataclasses import dataclass

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from objfmt.classify import Variant, classify, member_keys, object_members, order_keys, to_plain
from objfmt.options import FmtOptions
from objfmt.sentinels import UNDEFINED

from conftest import Class0, Class1, CustomArray, sample_function


# Local Classes --------------------------------------------------------------------------------------------------------

@dataclass
class Point:
    x: int
    y: int


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self):
        self.a = 1


class WithHidden:
    def __init__(self):
        self.public = 1
        self._private = 2
        self.__mangled = 3

    @property
    def area(self):
        return 42


class Exporter:
    def __init__(self, payload):
        self.payload = payload

    def to_dict(self):
        return {"exported": self.payload}


class Incomparable:
    def __init__(self, name):
        self.name = name

    def __lt__(self, other):
        raise ValueError("no ordering")

    def __repr__(self):
        return f"Incomparable({self.name!r})"


class Greeter:
    def __call__(self, name):
        return f"hi {name}"


class Failing:
    def __init__(self):
        self.ok = 1

    def __getattribute__(self, name):
        if name == "ok":
            raise RuntimeError("unreadable")
        return super().__getattribute__(name)


# Tests ----------------------------------------------------------------------------------------------------------------

class TestVariants:
    @pytest.mark.parametrize(
        "value, variant, label",
        [
            pytest.param(None, Variant.NULL, "", id="none"),
            pytest.param(UNDEFINED, Variant.UNDEFINED, "", id="undefined"),
            pytest.param(True, Variant.BOOLEAN, "", id="bool"),
            pytest.param(3, Variant.NUMBER, "", id="int"),
            pytest.param(2.5, Variant.NUMBER, "", id="float"),
            pytest.param(2 ** 70, Variant.BIG_INTEGER, "", id="big-int"),
            pytest.param("s", Variant.STRING, "", id="str"),
            pytest.param(dt.date(2020, 1, 1), Variant.DATE, "Date", id="date"),
            pytest.param(dt.datetime(2020, 1, 1), Variant.DATE, "Date", id="datetime"),
            pytest.param(sample_function, Variant.FUNCTION, "Function", id="function"),
            pytest.param(print, Variant.FUNCTION, "Function", id="builtin"),
            pytest.param(Class1(1, 2).__init__, Variant.FUNCTION, "Function", id="method"),
            pytest.param(Class0, Variant.FUNCTION, "Class", id="class"),
            pytest.param([], Variant.LIST, "", id="list"),
            pytest.param((1,), Variant.LIST, "tuple", id="tuple"),
            pytest.param(CustomArray(), Variant.LIST, "CustomArray", id="list-subclass"),
            pytest.param(deque(), Variant.LIST, "deque", id="deque"),
            pytest.param(b"ab", Variant.LIST, "bytes", id="bytes"),
            pytest.param(array.array("i", [1]), Variant.LIST, "array", id="array"),
            pytest.param(range(3), Variant.LIST, "range", id="range"),
            pytest.param({}, Variant.RECORD, "", id="empty-dict"),
            pytest.param({"a": 1}, Variant.RECORD, "", id="dict"),
            pytest.param(OrderedDict(a=1), Variant.RECORD, "OrderedDict", id="ordered-dict"),
            pytest.param(frozendict(a=1), Variant.RECORD, "frozendict", id="frozendict"),
            pytest.param({1: "a"}, Variant.MAP, "", id="map"),
            pytest.param({"a": 1, 2: "b"}, Variant.MAP, "", id="mixed-keys"),
            pytest.param({1, 2}, Variant.SET, "set", id="set"),
            pytest.param(frozenset(), Variant.SET, "frozenset", id="frozenset"),
            pytest.param(Class0(), Variant.RECORD, "Class0", id="object"),
            pytest.param(Point(1, 2), Variant.RECORD, "Point", id="dataclass"),
        ],
    )
    def test_variant(self, value, variant, label):
        classified = classify(value)
        assert classified.variant is variant
        assert classified.label == label

    @pytest.mark.parametrize(
        "variant, composite, is_array",
        [
            pytest.param(Variant.LIST, True, True, id="list"),
            pytest.param(Variant.SET, True, True, id="set"),
            pytest.param(Variant.RECORD, True, False, id="record"),
            pytest.param(Variant.MAP, True, False, id="map"),
            pytest.param(Variant.STRING, False, False, id="string"),
            pytest.param(Variant.DATE, False, False, id="date"),
        ],
    )
    def test_variant_properties(self, variant, composite, is_array):
        assert variant.is_composite is composite
        assert variant.is_array is is_array


class TestMembers:
    def test_list_members(self):
        assert classify([1, "a"]).members == (1, "a")

    def test_record_members_keep_order(self):
        assert classify({"b": 1, "a": 2}).members == (("b", 1), ("a", 2))

    def test_set_members_sorted(self):
        assert classify({3, 1, 2}).members == (1, 2, 3)

    def test_set_members_unorderable(self):
        """Mixed types order by type name, then repr."""
        assert classify({"b", 2, "a", 1}).members == (1, 2, "a", "b")

    def test_set_members_failing_comparison(self):
        members = classify({Incomparable("y"), Incomparable("x")}).members
        assert [m.name for m in members] == ["x", "y"]

    def test_map_spacing(self):
        assert classify({1: "a"}).spaced_entries is False
        assert classify({(1, 2): "a"}).spaced_entries is True
        assert classify({frozendict(k=1): "a"}).spaced_entries is True

    def test_keys(self):
        assert classify({"a": 1, "b": 2}).keys == ["a", "b"]
        assert classify(["x", "y"]).keys == [0, 1]
        assert classify(5).keys == []

    def test_member_keys(self):
        assert member_keys(Class1(1, 2)) == ["prop0", "prop1"]
        assert member_keys(None) == []


class TestObjectMembers:
    def test_instance_dict(self):
        assert object_members(Class1("a", 1), FmtOptions()) == [("prop0", "a"), ("prop1", 1)]

    def test_dataclass(self):
        assert classify(Point(1, 2)).members == (("x", 1), ("y", 2))

    def test_slots_skip_unassigned(self):
        assert object_members(Slotted(), FmtOptions()) == [("a", 1)]

    def test_hidden_excluded_by_default(self):
        assert object_members(WithHidden(), FmtOptions()) == [("public", 1)]

    def test_include_hidden(self):
        members = dict(object_members(WithHidden(), FmtOptions(include_hidden=True)))
        assert members == {"public": 1, "_private": 2, "_WithHidden__mangled": 3, "area": 42}

    def test_error_skip(self):
        assert object_members(Failing(), FmtOptions()) == []

    def test_error_warn(self):
        with pytest.warns(RuntimeWarning, match="unreadable"):
            assert object_members(Failing(), FmtOptions(on_error="warn")) == []

    def test_error_raise(self):
        with pytest.raises(RuntimeError, match="unreadable"):
            object_members(Failing(), FmtOptions(on_error="raise"))


class TestToPlain:
    def test_hook_applied(self):
        assert to_plain(Exporter(1), FmtOptions()) == {"exported": 1}
        assert classify(Exporter(1)).variant is Variant.RECORD
        assert classify(Exporter(1)).label == ""

    def test_hook_disabled(self):
        classified = classify(Exporter(1), FmtOptions(use_to_dict=False))
        assert classified.label == "Exporter"
        assert classified.members == (("payload", 1),)

    def test_hook_excluded_by_class_name(self):
        classified = classify(Exporter(1), FmtOptions(no_to_dict_for={"Exporter"}))
        assert classified.label == "Exporter"

    def test_class_not_converted(self):
        assert to_plain(Exporter, FmtOptions()) is Exporter

    def test_non_callable_attribute_ignored(self):
        obj = Class0()
        obj.to_dict = "not callable"
        assert to_plain(obj, FmtOptions()) is obj


class TestOrderKeys:
    @pytest.mark.parametrize(
        "keys, reference, expected",
        [
            pytest.param(["c", "a", "b"], ["b", "x", "c"], ["b", "c", "a"], id="shared-first"),
            pytest.param(["a", "b"], [], ["a", "b"], id="empty-reference"),
            pytest.param([], ["a"], [], id="empty-keys"),
            pytest.param([2, 1, 3], [3, 2], [3, 2, 1], id="int-keys"),
        ],
    )
    def test_order(self, keys, reference, expected):
        assert order_keys(keys, reference) == expected

    def test_same_key_set(self):
        """With identical key sets the reference order is adopted entirely."""
        assert order_keys(["a", "b", "c"], ["c", "a", "b"]) == ["c", "a", "b"]

    @pytest.mark.parametrize(
        "keys, reference",
        [
            pytest.param([2, 1], [True], id="bool-reference"),
            pytest.param([2.0, 1.0], [1, 2], id="int-reference"),
            pytest.param([(1.0, 2), "x"], [(1, 2)], id="tuple-reference"),
        ],
    )
    def test_keeps_own_key_objects(self, keys, reference):
        """Shared keys come out as the primary's objects, not the reference's equal ones."""
        ordered = order_keys(keys, reference)
        assert sorted(map(repr, ordered)) == sorted(map(repr, keys))


class TestCallables:
    def test_partial(self):
        classified = classify(functools.partial(sample_function))
        assert (classified.variant, classified.label) == (Variant.FUNCTION, "Function")

    def test_callable_instance(self):
        assert classify(Greeter()).variant is Variant.FUNCTION

    def test_callable_with_state_is_record(self):
        greeter = Greeter()
        greeter.greeting = "hi"
        classified = classify(greeter)
        assert classified.variant is Variant.RECORD
        assert classified.members == (("greeting", "hi"),)
