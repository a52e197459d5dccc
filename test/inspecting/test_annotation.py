"""
Test `Annotation`.
"""

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, Literal, Optional, Union

from assets.models import Bar, BarCollection, Point
from mapcraft.inspecting.annotations import (
    ANY,
    Annotation,
    flatten_union,
    get_concrete_type,
    is_union,
)

type BarList = list[Bar]


def test_concrete_type():
    """
    Test concrete types of various annotations.
    """
    assert get_concrete_type(int) is int
    assert get_concrete_type(list[int]) is list
    assert get_concrete_type(Any) is object
    assert get_concrete_type("Bar") is object
    assert Annotation(BarList).concrete_type is list
    assert Annotation(Annotated[Bar, "extra"]).concrete_type is Bar
    assert Annotation(Annotated[Bar, "extra"]).extras == ("extra",)


def test_kinds():
    """
    Test classifying annotations by how values are converted.
    """
    assert ANY.is_any
    assert Annotation(int).is_scalar
    assert Annotation(Literal["a", "b"]).is_scalar
    assert Annotation(bytes).is_scalar

    assert Annotation(Bar).is_composite
    assert Annotation(BarCollection).is_composite

    for annotation in [int, list[Bar], dict[str, Bar], Sequence[int], Any, Bar | None]:
        assert not Annotation(annotation).is_composite

    assert Annotation(list[Bar]).is_native_container
    assert Annotation(frozenset[str]).native_type is frozenset
    assert Annotation(Sequence[Bar]).native_type is list
    assert Annotation(Mapping[str, Bar]).native_type is dict
    assert Annotation(BarCollection).native_type is None


def test_union():
    """
    Test union annotations and their options.
    """
    assert is_union(int | None)
    assert is_union(Union[int, str])
    assert is_union(Optional[int])
    assert not is_union(int)

    assert flatten_union(Bar | (Point | None)) == (Bar, Point, type(None))

    annotation = Annotation(Bar | None)
    assert annotation.is_union
    assert annotation.options == (Annotation(Bar),)
    assert Annotation(Bar | Point | None).options == (
        Annotation(Bar),
        Annotation(Point),
    )
    assert Annotation(Bar).options == (Annotation(Bar),)


def test_item_annotation():
    """
    Test getting annotations of collection items.
    """
    assert Annotation(list[Bar]).item_annotation() == Annotation(Bar)
    assert Annotation(set[str]).item_annotation() == Annotation(str)
    assert Annotation(tuple[int, ...]).item_annotation() == Annotation(int)
    assert Annotation(tuple[int, int]).item_annotation() == Annotation(int)
    assert Annotation(tuple[int, str]).item_annotation() == ANY
    assert Annotation(Sequence[Bar]).item_annotation() == Annotation(Bar)
    assert Annotation(BarCollection).item_annotation() == Annotation(Bar)
    assert Annotation(list).item_annotation() == ANY


def test_value_annotation():
    """
    Test getting annotations of mapping values.
    """
    assert Annotation(dict[str, Bar]).value_annotation() == Annotation(Bar)
    assert Annotation(Mapping[str, int]).value_annotation() == Annotation(int)
    assert Annotation(dict).value_annotation() == ANY
