"""
Test type identifiers.
"""

from datetime import date, datetime

from pytest import raises

from assets.models import Bar, Outer
from assets.other_models import InOtherModule
from mapcraft import ReflectionError, get_type_id, resolve_type


def test_get_type_id():
    """
    Test type identifiers of classes.
    """
    assert get_type_id(datetime) == "datetime.datetime"
    assert get_type_id(date) == "datetime.date"
    assert get_type_id(Bar) == "assets.models.Bar"
    assert get_type_id(Outer.Inner) == "assets.models.Outer.Inner"
    assert get_type_id(InOtherModule) == "assets.other_models.InOtherModule"

    with raises(TypeError, match="Not a class"):
        _ = get_type_id(Bar())  # type: ignore


def test_resolve_type():
    """
    Test resolving type identifiers back to classes.
    """
    for cls in [datetime, date, int, Bar, Outer.Inner, InOtherModule]:
        assert resolve_type(get_type_id(cls)) is cls


def test_resolve_type_fail():
    """
    Test resolving identifiers which don't name a class.
    """
    for type_id in [
        "",
        "Bar",
        "nonexistent.module.Bar",
        "assets.models.DoesNotExist",
        "assets.models.Outer.DoesNotExist",
        "assets..models.Bar",
    ]:
        with raises(ReflectionError):
            _ = resolve_type(type_id)

    with raises(ReflectionError, match="names"):
        _ = resolve_type("assets.models.default_arrays")

    class Local:
        pass

    with raises(ReflectionError, match="function scope"):
        _ = resolve_type(get_type_id(Local))
