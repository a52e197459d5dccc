"""
Builtin strategies for temporal values, rendered as string literals rather than
tagged mappings.
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import date, datetime, time
from typing import TYPE_CHECKING, Any

from ..exceptions import FormatError
from .base import BaseStrategy

if TYPE_CHECKING:
    from ..frame import Frame

__all__ = [
    "DATETIME_FORMAT",
    "DATE_FORMAT",
    "TIME_FORMAT",
    "BaseTemporalStrategy",
    "DateTimeStrategy",
    "DateStrategy",
    "TimeStrategy",
]

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


class BaseTemporalStrategy[TargetT: date | time](BaseStrategy[TargetT]):
    """
    Renders a temporal value as a literal with a fixed format and parses it back
    with the same format.
    """

    default_format: str
    """
    Format used if none is passed upon construction.
    """

    __format: str

    def __init__(self, format: str | None = None):
        super().__init__()
        self.__format = format or self.default_format

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.__format!r})"

    @property
    def format(self) -> str:
        return self.__format

    def to_map(self, obj: TargetT, frame: Frame, /) -> str:
        _ = frame
        return obj.strftime(self.__format)

    def from_map(self, data: Any, frame: Frame, /) -> TargetT:
        _ = frame
        if not isinstance(data, str):
            raise FormatError(
                f"Expected {self.target_type.__name__} literal in format "
                f"'{self.__format}', got {data!r}"
            )
        try:
            parsed = datetime.strptime(data, self.__format)
        except ValueError as e:
            raise FormatError(
                f"Could not parse {self.target_type.__name__} literal {data!r} "
                f"with format '{self.__format}': {e}"
            ) from e
        return self._from_datetime(parsed)

    @abstractmethod
    def _from_datetime(self, parsed: datetime) -> TargetT:
        """
        Convert the parsed datetime to the target variant.
        """


class DateTimeStrategy(BaseTemporalStrategy[datetime]):
    """
    Strategy for `datetime` with second precision, e.g. `2015-01-01 12:00:00`.
    """

    default_format = DATETIME_FORMAT

    def _from_datetime(self, parsed: datetime) -> datetime:
        return parsed


class DateStrategy(BaseTemporalStrategy[date]):
    """
    Strategy for `date`, e.g. `2015-01-01`.
    """

    default_format = DATE_FORMAT

    def _from_datetime(self, parsed: datetime) -> date:
        return parsed.date()


class TimeStrategy(BaseTemporalStrategy[time]):
    """
    Strategy for `time` with second precision, e.g. `12:00:00`.
    """

    default_format = TIME_FORMAT

    def _from_datetime(self, parsed: datetime) -> time:
        return parsed.time()
