from typing import Tuple

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR


class Duration:
    ''' An immutable duration in days, hours and minutes.

    The value is kept as a signed number of minutes and normalized on every construction,
    i.e., minute overflow carries into hours and hour overflow into days.
    A negative duration (e.g., the result of subtracting a later time from an earlier one)
    keeps its magnitude normalized and is rendered with a leading '-'.

    Properties:
        day: number of whole days
        hour: hours within the day, 0..23
        minute: minutes within the hour, 0..59
        total_minutes: the signed total number of minutes
        is_negative: whether the duration is below zero

    Methods:
        from_hours(value: float) -> Duration
        from_minutes(minutes: int) -> Duration
        parse(text: str) -> Duration
        as_hours(self) -> float
        increment(self) -> Duration

    '''

    __slots__ = ('_total_minutes',)

    def __init__(self, hours: int = 0, minutes: int = 0, days: int = 0) -> None:
        self._total_minutes: int = int(days) * MINUTES_PER_DAY + \
            int(hours) * MINUTES_PER_HOUR + int(minutes)

    @classmethod
    def from_minutes(cls, minutes: int) -> 'Duration':
        return cls(minutes=minutes)

    @classmethod
    def from_hours(cls, value: float) -> 'Duration':
        ''' Create a duration from a number of hours given as a float.

        The integer part gives the hours and the fraction is rounded to whole minutes,
        e.g., 1.5 -> 01:30 and 0.999 -> 01:00.

        '''
        hours = int(value)
        minutes = round((value - hours) * MINUTES_PER_HOUR)
        return cls(hours, minutes)

    @classmethod
    def parse(cls, text: str) -> 'Duration':
        ''' Parse 'HH:MM' or 'DD:HH:MM' into a duration.

        Raises:
            ValueError: if the text is not two or three colon separated non-negative integers

        '''
        parts = str(text).strip().split(':')
        if len(parts) not in (2, 3) or not all(part.isdigit() for part in parts):
            raise ValueError(f'invalid time "{text}", expected HH:MM')
        numbers = [int(part) for part in parts]
        if len(numbers) == 2:
            return cls(numbers[0], numbers[1])
        return cls(numbers[1], numbers[2], days=numbers[0])

    @property
    def total_minutes(self) -> int:
        return self._total_minutes

    @property
    def is_negative(self) -> bool:
        return self._total_minutes < 0

    @property
    def day(self) -> int:
        return self._split()[0]

    @property
    def hour(self) -> int:
        return self._split()[1]

    @property
    def minute(self) -> int:
        return self._split()[2]

    def as_hours(self) -> float:
        return self._total_minutes / MINUTES_PER_HOUR

    def increment(self) -> 'Duration':
        ''' Return the duration one minute later.

        '''
        return Duration(minutes=self._total_minutes + 1)

    def _split(self) -> Tuple[int, int, int]:
        magnitude = abs(self._total_minutes)
        day, rest = divmod(magnitude, MINUTES_PER_DAY)
        hour, minute = divmod(rest, MINUTES_PER_HOUR)
        return day, hour, minute

    def __add__(self, other: 'Duration') -> 'Duration':
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(minutes=self._total_minutes + other._total_minutes)

    def __sub__(self, other: 'Duration') -> 'Duration':
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(minutes=self._total_minutes - other._total_minutes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_minutes == other._total_minutes

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_minutes != other._total_minutes

    def __lt__(self, other: 'Duration') -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_minutes < other._total_minutes

    def __le__(self, other: 'Duration') -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_minutes <= other._total_minutes

    def __gt__(self, other: 'Duration') -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_minutes > other._total_minutes

    def __ge__(self, other: 'Duration') -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_minutes >= other._total_minutes

    def __hash__(self) -> int:
        return hash(self._total_minutes)

    def __str__(self) -> str:
        day, hour, minute = self._split()
        sign = '-' if self.is_negative else ''
        if day != 0:
            return f'{sign}{day:02d}:{hour:02d}:{minute:02d}'
        return f'{sign}{hour:02d}:{minute:02d}'

    def __repr__(self) -> str:
        return f'Duration({self})'
