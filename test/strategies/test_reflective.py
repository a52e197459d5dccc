"""
Test reflective and collection strategies.
"""

from pytest import raises

from assets.models import (
    Bar,
    BarCollection,
    Baz,
    Point,
    Record,
    Renamed,
    Slotted,
    WithList,
)
from mapcraft import (
    CollectionStrategy,
    FormatError,
    ReflectionError,
    build_serializer,
    get_type_id,
)
from mapcraft.inspecting.annotations import Annotation


def test_missing_members():
    """
    Test members missing from the data, or explicitly `None`, take their default.
    """
    serializer = build_serializer()
    arrays = {"key": "value", "array": {"key": "value"}}

    baz = serializer.deserialize(Baz, {"foobar": "foobar"})
    assert baz == Baz("foobar")
    assert baz.arrays == arrays

    baz = serializer.deserialize(Baz, {"foobar": None, "arrays": None})
    assert baz == Baz()

    # default factory creates a new value each time
    assert serializer.deserialize(Baz).arrays is not baz.arrays

    # unknown keys are ignored
    assert serializer.deserialize(Bar, {"foobar": "x", "other": 1}) == Bar("x")


def test_frozen():
    """
    Test reconstructing a frozen dataclass.
    """
    serializer = build_serializer()

    point = serializer.deserialize(Point, {"x": 1})
    assert point == Point(1, 0)
    assert serializer.deserialize(Point, serializer.serialize(Point(3, 4))) == Point(
        3, 4
    )


def test_slotted():
    """
    Test converting a class with `__slots__`.
    """
    serializer = build_serializer()

    serialized = serializer.serialize(Slotted(1, "b"))
    assert serialized == {"a": 1, "b": "b", "__type": get_type_id(Slotted)}
    assert serializer.deserialize(Slotted, serialized) == Slotted(1, "b")

    # unset slots are treated as None
    slotted = serializer.deserialize(Slotted, {"a": 1})
    assert slotted.b is None


def test_annotated_class():
    """
    Test converting a plain class with class-level annotations.
    """
    serializer = build_serializer()

    record = Record()
    record.name = "abc"
    record.tags = ["x"]

    serialized = serializer.serialize(record)
    assert serialized == {
        "name": "abc",
        "count": 1,
        "tags": ["x"],
        "__type": get_type_id(Record),
    }

    record = serializer.deserialize(Record, {"name": "def"})
    assert record.name == "def"
    assert record.count == 1
    assert record.tags is None


def test_invalid_data():
    """
    Test data of the wrong shape fails.
    """
    serializer = build_serializer()

    with raises(FormatError, match="Expected mapping"):
        _ = serializer.deserialize(Bar, ["foobar"])

    with raises(FormatError, match="Expected list of items"):
        _ = serializer.deserialize(BarCollection, {"items": "foobar"})

    with raises(FormatError, match="Expected list of items"):
        _ = serializer.deserialize(BarCollection, "foobar")


def test_collection_untagged_items():
    """
    Test untagged items are reconstructed as the declared item type.
    """
    serializer = build_serializer()

    bars = serializer.deserialize(
        BarCollection, {"items": [{"foobar": "a"}, None, {"foobar": "b"}]}
    )
    assert bars == BarCollection([Bar("a"), None, Bar("b")])  # type: ignore


def test_collection_strategy():
    """
    Test collection strategy with explicit item annotation.
    """
    strategy = CollectionStrategy(BarCollection, Annotation(Bar))

    assert strategy.type_id == get_type_id(BarCollection)
    assert strategy.item_annotation == Annotation(Bar)



def test_init_member_not_stored():
    """
    Test serializing a plain class which doesn't store its `__init__` parameters
    under the same names fails rather than losing data.
    """
    with raises(ReflectionError, match="has no attribute 'foo'"):
        _ = build_serializer().serialize(Renamed("x"))


def test_mutable_class_default():
    """
    Test instances missing a member with a mutable class-level default don't
    share the default.
    """
    serializer = build_serializer()

    first = serializer.deserialize(WithList, {})
    second = serializer.deserialize(WithList, {"tags": None})
    first.tags.append("x")

    assert first.tags == ["x"]
    assert second.tags == []
    assert WithList.tags == []
