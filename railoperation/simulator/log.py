from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .duration import Duration
from .train import Train
from .vehicle import Vehicle, VehicleKind


class LogLevel(Enum):
    ''' How much is written for each train transition.

        - OFF: nothing
        - LOW: one summary line per transition
        - HIGH: the summary line plus the vehicle roster and every vehicle's history

    '''
    OFF = 'off'
    LOW = 'low'
    HIGH = 'high'

    @classmethod
    def parse(cls, text: str) -> 'LogLevel':
        aliases = {'silent': 'off', 'summary': 'low', 'detailed': 'high'}
        value = str(text).strip().lower()
        value = aliases.get(value, value)
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f'unknown log level "{text}", expected one of off, low, high') from None

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class LogRecord:
    ''' A single transition of a train as written to the log.

    Attributes:
        time: simulation time of the transition
        train_number: the train that changed state
        stage: 'assembled', 'incomplete', 'ready', 'departure', 'arrival' or 'disassembled'
        message: the summary line
        details: the extra lines written at `LogLevel.HIGH`, empty otherwise

    '''
    time: Duration
    train_number: int
    stage: str
    message: str
    details: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def lines(self) -> List[str]:
        return [self.message] + list(self.details)


class TrainLog:
    ''' Record train transitions and write them to a line-oriented log.

    The log is held by the controller and never consulted by the simulation itself,
    so the level changes only what is written, never the outcome of a run.
    Ignored trains (those which departed before the simulation start time) are never written.

    Attributes:
        level: the current LogLevel
        records: every record written so far

    Methods:
        record_when_assembled(self, t: Duration, train: Train, ready_time: Duration) -> Optional[LogRecord]
        record_when_incomplete(self, t: Duration, train: Train, next_try: Optional[Duration]) -> Optional[LogRecord]
        record_when_ready(self, t: Duration, train: Train) -> Optional[LogRecord]
        record_when_departure(self, t: Duration, train: Train) -> Optional[LogRecord]
        record_when_arrival(self, t: Duration, train: Train, disassembly_time: Duration) -> Optional[LogRecord]
        record_when_disassembled(self, t: Duration, train: Train, vehicles: Sequence[Vehicle]) -> Optional[LogRecord]

    '''

    def __init__(self, level: LogLevel = LogLevel.OFF,
                 log_path: Optional[Union[str, Path]] = None,
                 echo: bool = False) -> None:
        self.level: LogLevel = level
        self.records: List[LogRecord] = []
        self._echo: bool = echo
        self._log_path: Optional[Path] = Path(log_path) if log_path is not None else None

        # every run starts with a fresh log file
        if self._log_path is not None:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            self._log_path.write_text('', encoding='utf-8')

    @property
    def log_path(self) -> Optional[Path]:
        return self._log_path

    def record_when_assembled(self, t: Duration, train: Train, ready_time: Duration) -> Optional[LogRecord]:
        message = f'{t} {train} is now assembled, arriving at the platform at {ready_time}'
        return self._write(t, train, 'assembled', message,
                           lambda: ['Connected vehicles:'] + self._roster(train.vehicles))

    def record_when_incomplete(self, t: Duration, train: Train, next_try: Optional[Duration]) -> Optional[LogRecord]:
        if next_try is not None:
            message = f'{t} {train} is incomplete, next try at {next_try}'
        else:
            message = f'{t} {train} is incomplete, no further attempts today'
        return self._write(t, train, 'incomplete', message,
                           lambda: ['Missing vehicles:'] + self._kind_labels(train.required_kinds))

    def record_when_ready(self, t: Duration, train: Train) -> Optional[LogRecord]:
        message = f'{t} {train} is now at the platform, departing at {train.current_departure}'
        return self._write(t, train, 'ready', message,
                           lambda: ['Connected vehicles:'] + self._roster(train.vehicles))

    def record_when_departure(self, t: Duration, train: Train) -> Optional[LogRecord]:
        message = (f'{t} {train} has left the platform, travelling at speed '
                   f'{train.speed:g} ({train.top_speed:g})')
        return self._write(t, train, 'departure', message,
                           lambda: ['Connected vehicles:'] + self._roster(train.vehicles))

    def record_when_arrival(self, t: Duration, train: Train, disassembly_time: Duration) -> Optional[LogRecord]:
        message = f'{t} {train} has arrived at the platform, disassembly at {disassembly_time}'
        return self._write(t, train, 'arrival', message,
                           lambda: ['Connected vehicles:'] + self._roster(train.vehicles))

    def record_when_disassembled(self, t: Duration, train: Train, vehicles: Sequence[Vehicle]) -> Optional[LogRecord]:
        message = f'{t} {train} has been disassembled'
        return self._write(t, train, 'disassembled', message,
                           lambda: ['The train consisted of:'] + self._roster(vehicles))

    def _write(self, t: Duration, train: Train, stage: str, message: str, details) -> Optional[LogRecord]:
        if self.level == LogLevel.OFF or train.ignore:
            return None

        detail_lines: Tuple[str, ...] = ()
        if self.level == LogLevel.HIGH:
            detail_lines = tuple(details())
        record = LogRecord(t, train.number, stage, message, detail_lines)
        self.records.append(record)

        text = '\n'.join(record.lines)
        if self._echo:
            print(text)
        if self._log_path is not None:
            with open(self._log_path, 'a', encoding='utf-8') as file:
                file.write(text + '\n')
        return record

    @staticmethod
    def _roster(vehicles: Sequence[Vehicle]) -> List[str]:
        lines = []
        for vehicle in vehicles:
            lines.append(vehicle.info)
            lines.extend(vehicle.history_lines)
        return lines

    @staticmethod
    def _kind_labels(kinds: Sequence[VehicleKind]) -> List[str]:
        return [kind.label for kind in kinds]
