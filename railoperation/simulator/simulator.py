from typing import Dict, List, Optional

from railoperation.setup.blueprint import Blueprint
from railoperation.setup.config_dataclass import RunConfig

from .builder import Builder
from .controller import Controller
from .duration import Duration
from .event import Event
from .log import LogLevel, TrainLog
from .scheduler import Scheduler
from .station import Station
from .tracer import Statistics, Tracer
from .train import Train
from .vehicle import Vehicle


class Simulator:
    ''' The simulator that emulates the operation of a rail network over one day.

    On creation every train gets its assembly event. The events before the configured start time are
    processed silently, trains that already departed by then are ignored in the log and the statistics,
    and the configured log level is switched on at the start time.

    Properties:
        time: the current simulation time
        next_event_time: time of the next pending event, None if there is none
        is_finished: whether the end time has been reached
        is_done: whether no event is pending anymore
        log_level: the current log level, can be changed between steps
        trains, stations, vehicles: the runtime objects of this run

    Methods:
        step(self) -> Optional[Event]
        run_interval(self, interval: Optional[Duration] = None) -> List[Event]
        complete(self) -> List[Event]
        get_statistics(self) -> Statistics
        find_train(self, number: int) -> Optional[Train]
        find_station(self, name: str) -> Optional[Station]
        find_vehicle(self, vehicle_id: int) -> Optional[Vehicle]

    '''

    def __init__(self, blueprint: Blueprint, run_config: RunConfig) -> None:
        self._blueprint: Blueprint = blueprint
        self._run_config: RunConfig = run_config

        # A builder is used to create fresh runtime objects for this run
        builder = Builder(blueprint)
        stations = builder.create_stations()
        vehicles = builder.create_vehicles(stations)
        trains = builder.create_trains(stations)

        self._scheduler: Scheduler = Scheduler()
        # the log stays silent until the start time is reached
        self._train_log: TrainLog = TrainLog(
            LogLevel.OFF, run_config.log_file, run_config.echo)
        self._controller: Controller = Controller(
            self._scheduler, self._train_log, stations, vehicles, trains)
        self._tracer: Tracer = Tracer()

        self._controller.schedule_assembly_events()
        self._warm_up(run_config.start_time)
        self._train_log.level = run_config.log_level

    def _warm_up(self, start_time: Duration) -> None:
        while not self._scheduler.is_empty() and self._scheduler.next_event_time < start_time:
            self._scheduler.advance()
        self._controller.ignore_departed_trains(start_time)
        self._scheduler.set_time(start_time)

    @property
    def run_config(self) -> RunConfig:
        return self._run_config

    @property
    def time(self) -> Duration:
        return self._scheduler.time

    @property
    def next_event_time(self) -> Optional[Duration]:
        return self._scheduler.next_event_time

    @property
    def is_finished(self) -> bool:
        return self._scheduler.time >= self._run_config.end_time

    @property
    def is_done(self) -> bool:
        return self._scheduler.is_empty()

    @property
    def log_level(self) -> LogLevel:
        return self._train_log.level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._train_log.level = level

    @property
    def train_log(self) -> TrainLog:
        return self._train_log

    @property
    def controller(self) -> Controller:
        return self._controller

    @property
    def trains(self) -> List[Train]:
        return self._controller.trains

    @property
    def stations(self) -> Dict[str, Station]:
        return self._controller.stations

    @property
    def vehicles(self) -> Dict[int, Vehicle]:
        return self._controller.vehicles

    def step(self) -> Optional[Event]:
        ''' Process the next event, whatever its time.

        Once the clock has reached the end time the trains still under way are run to the end.

        Returns:
            the processed event, None if no event was pending

        '''
        if self._scheduler.is_empty():
            return None
        event = self._scheduler.advance()
        if self.is_finished:
            self._scheduler.drain_departed()
        return event

    def run_interval(self, interval: Optional[Duration] = None) -> List[Event]:
        ''' Process the events of the next `interval` (the configured interval by default).

        The events strictly before the stop time are processed, then the clock is set to the stop time.
        The stop time never goes beyond the end time; reaching it runs the trains still under way to the end.

        Returns:
            the processed events

        '''
        if interval is None:
            interval = self._run_config.interval
        stop_time = min(self._scheduler.time + interval, self._run_config.end_time)

        processed = self._advance_until(stop_time)
        if stop_time >= self._run_config.end_time:
            processed.extend(self._scheduler.drain_departed())
        return processed

    def complete(self) -> List[Event]:
        ''' Run to the end time and then run the trains still under way to the end.

        '''
        processed = self._advance_until(self._run_config.end_time)
        processed.extend(self._scheduler.drain_departed())
        return processed

    def _advance_until(self, stop_time: Duration) -> List[Event]:
        processed = []
        while not self._scheduler.is_empty() and self._scheduler.next_event_time < stop_time:
            processed.append(self._scheduler.advance())
        if self._scheduler.time < stop_time:
            self._scheduler.set_time(stop_time)
        return processed

    def get_statistics(self) -> Statistics:
        return self._tracer.get_statistics(self.trains, self._run_config.end_time)

    def format_statistics(self) -> str:
        return self._tracer.format_statistics(self.get_statistics())

    def find_train(self, number: int) -> Optional[Train]:
        return self._controller.find_train(number)

    def find_station(self, name: str) -> Optional[Station]:
        return self._controller.find_station(name)

    def find_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        return self._controller.find_vehicle(vehicle_id)

    def find_train_by_vehicle(self, vehicle_id: int) -> Optional[Train]:
        return self._controller.find_train_by_vehicle(vehicle_id)
