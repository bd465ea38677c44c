from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from railoperation.simulator.duration import Duration
from railoperation.simulator.log import LogLevel


@dataclass(frozen=True)
class VehicleRecord:
    vehicle_id: int
    kind_code: int
    params: Tuple[int, ...]
    station_name: str


@dataclass(frozen=True)
class DistanceRecord:
    station_0: str
    station_1: str
    distance: float


@dataclass(frozen=True)
class TrainRecord:
    number: int
    origin: str
    destination: str
    departure: Duration
    arrival: Duration
    top_speed: float
    required_kind_codes: Tuple[int, ...]


@dataclass(frozen=True)
class RunConfig:
    ''' The run settings read from `config.yaml`.

    Attributes:
        start_time: events before this time are processed silently and their trains are not reported
        end_time: the end of the simulated window, trains scheduled to depart later are not reported
        interval: default step for `Simulator.run_interval`
        log_level: log level switched on once the start time is reached
        log_file: the log file, None to keep the log in memory only
        echo: whether log lines are also printed to stdout

    '''
    start_time: Duration = Duration(0, 0)
    end_time: Duration = Duration(23, 59)
    interval: Duration = Duration(0, 10)
    log_level: LogLevel = LogLevel.LOW
    log_file: Optional[Path] = None
    echo: bool = False
