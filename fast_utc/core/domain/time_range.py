"""
TimeRange — Ленивая последовательность моментов с шагом

Итератор от start к end с шагом step. Всегда замкнут слева; справа
замкнут (right_closed) или открыт (right_open) в зависимости от
конструктора.

Правило на каждом шаге:
    right_closed: исчерпан, если cursor > end
    right_open:   исчерпан, если cursor >= end
    иначе: вернуть cursor, затем cursor += step

Нулевой шаг или шаг "от end" дают бесконечную последовательность:
это ответственность вызывающего кода, а не проверяемая ошибка.
Отрицательный шаг, упёршийся в ноль, повторяет ноль бесконечно.
Положительный шаг, целиком поглощённый clamp у U64_MAX, завершает
последовательность после этой границы.

Не возобновляется на месте: для повторного прохода создаётся новый TimeRange.

Examples:
    >>> from datetime import datetime, timedelta, timezone
    >>> start = datetime(2019, 4, 14, tzinfo=timezone.utc)
    >>> end = datetime(2019, 4, 16, tzinfo=timezone.utc)
    >>> len(list(TimeRange.right_closed(start, end, timedelta(hours=12))))
    5
"""

from datetime import datetime, timedelta
from typing import Iterator, Union

from pydantic import BaseModel, Field

from fast_utc.core.domain.time_delta import TimeDelta
from fast_utc.core.domain.timestamp import Timestamp


TimestampLike = Union[Timestamp, datetime]
TimeDeltaLike = Union[TimeDelta, timedelta]


def _as_timestamp(value: TimestampLike) -> Timestamp:
    if isinstance(value, Timestamp):
        return value
    if isinstance(value, datetime):
        return Timestamp.from_datetime(value)
    raise TypeError(f"Expected Timestamp or datetime, got {type(value).__name__}")


def _as_time_delta(value: TimeDeltaLike) -> TimeDelta:
    if isinstance(value, TimeDelta):
        return value
    if isinstance(value, timedelta):
        return TimeDelta.from_timedelta(value)
    raise TypeError(f"Expected TimeDelta or timedelta, got {type(value).__name__}")


# =============================================================================
# TIME RANGE
# =============================================================================


class TimeRange:
    """Итератор по моментам времени с шагом TimeDelta."""

    __slots__ = ("_cur", "_end", "_step", "_right_closed", "_exhausted")

    def __init__(
        self,
        start: TimestampLike,
        end: TimestampLike,
        step: TimeDeltaLike,
        right_closed: bool,
    ):
        """
        Args:
            start: Первый момент (включается)
            end: Правая граница
            step: Шаг курсора
            right_closed: Включать ли end
        """
        self._cur = _as_timestamp(start)
        self._end = _as_timestamp(end)
        self._step = _as_time_delta(step)
        self._right_closed = right_closed
        self._exhausted = False

    @classmethod
    def right_closed(cls, start: TimestampLike, end: TimestampLike, step: TimeDeltaLike) -> "TimeRange":
        """Диапазон, включающий end."""
        return cls(start, end, step, right_closed=True)

    @classmethod
    def right_open(cls, start: TimestampLike, end: TimestampLike, step: TimeDeltaLike) -> "TimeRange":
        """Диапазон, исключающий end."""
        return cls(start, end, step, right_closed=False)

    @property
    def end(self) -> Timestamp:
        return self._end

    @property
    def step(self) -> TimeDelta:
        return self._step

    @property
    def is_right_closed(self) -> bool:
        return self._right_closed

    def __iter__(self) -> Iterator[Timestamp]:
        return self

    def __next__(self) -> Timestamp:
        if self._exhausted:
            raise StopIteration

        if self._right_closed:
            past_end = self._cur > self._end
        else:
            past_end = self._cur >= self._end
        if past_end:
            self._exhausted = True
            raise StopIteration

        cur = self._cur
        self._cur = cur + self._step
        if self._cur == cur and self._step.is_positive():
            # Курсор прижат к U64_MAX
            self._exhausted = True
        return cur

    def __repr__(self) -> str:
        bound = "]" if self._right_closed else ")"
        return f"TimeRange([{self._cur!r}, {self._end!r}{bound}, step={self._step!r})"


# =============================================================================
# TIME RANGE SPEC
# =============================================================================


class TimeRangeSpec(BaseModel):
    """
    Сериализуемое описание диапазона.

    Immutable модель (frozen=True). Поля start/end/step сериализуются
    как целые в активных единицах.
    """

    start: Timestamp = Field(..., description="Первый момент (включается)")
    end: Timestamp = Field(..., description="Правая граница")
    step: TimeDelta = Field(..., description="Шаг курсора")
    right_closed: bool = Field(True, description="Включать ли end")

    model_config = {"frozen": True}

    def to_range(self) -> TimeRange:
        """Новый итератор по описанному диапазону."""
        return TimeRange(self.start, self.end, self.step, right_closed=self.right_closed)
