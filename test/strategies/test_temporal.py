"""
Tests for temporal strategies.
"""

import inspect
from datetime import date, datetime, time

from pytest import raises

from mapcraft import (
    DateStrategy,
    DateTimeStrategy,
    FormatError,
    Frame,
    SerializerConfig,
    StrategyLocator,
    TimeStrategy,
    build_serializer,
)
from mapcraft.strategies import BaseTemporalStrategy

FRAME = Frame(StrategyLocator(), SerializerConfig())


def test_datetime_strategy():
    """
    Test DateTimeStrategy for datetime literals with second precision.
    """
    strategy = DateTimeStrategy()

    assert strategy.target_type is datetime
    assert strategy.type_id == "datetime.datetime"
    assert strategy.format == "%Y-%m-%d %H:%M:%S"

    value = datetime(2015, 1, 1, 12, 0, 0, 123456)
    assert strategy.to_map(value, FRAME) == "2015-01-01 12:00:00"
    assert strategy.from_map("2015-01-01 12:00:00", FRAME) == datetime(
        2015, 1, 1, 12, 0, 0
    )


def test_date_strategy():
    """
    Test DateStrategy reconstructs `date` rather than `datetime`.
    """
    strategy = DateStrategy()

    assert strategy.target_type is date
    assert strategy.to_map(date(2011, 1, 1), FRAME) == "2011-01-01"

    parsed = strategy.from_map("2011-01-01", FRAME)
    assert type(parsed) is date
    assert parsed == date(2011, 1, 1)


def test_time_strategy():
    """
    Test TimeStrategy for time literals.
    """
    strategy = TimeStrategy()

    assert strategy.target_type is time
    assert strategy.to_map(time(8, 30, 15), FRAME) == "08:30:15"
    assert strategy.from_map("08:30:15", FRAME) == time(8, 30, 15)


def test_invalid_literal():
    """
    Test parsing invalid literals fails.
    """

    with raises(FormatError, match="Could not parse datetime literal 'not-a-date'"):
        _ = DateTimeStrategy().from_map("not-a-date", FRAME)

    with raises(FormatError, match="Could not parse date literal"):
        _ = DateStrategy().from_map("2011-13-45", FRAME)

    with raises(FormatError, match="Expected time literal"):
        _ = TimeStrategy().from_map(123, FRAME)

    # format errors are also value errors
    with raises(ValueError):
        _ = DateStrategy().from_map("2011-01-01 12:00:00", FRAME)


def test_configured_format():
    """
    Test formats passed through configuration.
    """
    config = SerializerConfig(
        datetime_format="%d.%m.%Y %H:%M", date_format="%d.%m.%Y", time_format="%H:%M"
    )
    serializer = build_serializer(config=config)

    strategy = serializer.locator.resolve_type(datetime)
    assert isinstance(strategy, DateTimeStrategy)
    assert strategy.format == "%d.%m.%Y %H:%M"

    strategy = serializer.locator.resolve_type(time)
    assert isinstance(strategy, TimeStrategy)
    assert strategy.format == "%H:%M"


def test_base_abstract():
    """
    Test the temporal base must be subclassed with a conversion of the parsed
    value.
    """
    assert inspect.isabstract(BaseTemporalStrategy)

    class IncompleteStrategy(BaseTemporalStrategy[datetime]):
        default_format = "%Y"

    with raises(TypeError):
        _ = IncompleteStrategy()
