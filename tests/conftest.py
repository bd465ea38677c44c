from pathlib import Path
from typing import Dict, List, Sequence

import pytest

from railoperation.setup.blueprint import Blueprint
from railoperation.setup.config_dataclass import DistanceRecord, TrainRecord, VehicleRecord
from railoperation.simulator.controller import Controller
from railoperation.simulator.duration import Duration
from railoperation.simulator.log import LogLevel, TrainLog
from railoperation.simulator.scheduler import Scheduler
from railoperation.simulator.station import Station
from railoperation.simulator.train import Train
from railoperation.simulator.vehicle import Vehicle, VehicleKind, make_attributes

DEFAULT_PARAMS = {
    VehicleKind.COACH: (60, 1),
    VehicleKind.SLEEPER: (30,),
    VehicleKind.OPEN_WAGON: (40, 60),
    VehicleKind.COVERED_WAGON: (100,),
    VehicleKind.ELECTRIC_LOCOMOTIVE: (200, 5000),
    VehicleKind.DIESEL_LOCOMOTIVE: (140, 300),
}


def make_vehicle(vehicle_id: int, kind: VehicleKind, params: Sequence[int] = None) -> Vehicle:
    if params is None:
        params = DEFAULT_PARAMS[kind]
    return Vehicle(vehicle_id, kind, make_attributes(kind, params))


class World:
    ''' Two stations A and B, 100 km apart, wired to a scheduler, a log and a controller.

    '''

    def __init__(self, level: LogLevel = LogLevel.LOW) -> None:
        self.a = Station('A')
        self.b = Station('B')
        self.a.set_distance('B', 100.0)
        self.b.set_distance('A', 100.0)
        self.stations: Dict[str, Station] = {'A': self.a, 'B': self.b}
        self.vehicles: Dict[int, Vehicle] = {}
        self.trains: List[Train] = []
        self.scheduler = Scheduler()
        self.train_log = TrainLog(level)
        self.controller = Controller(self.scheduler, self.train_log,
                                     self.stations, self.vehicles, self.trains)

    def add_vehicle(self, station: Station, vehicle_id: int, kind: VehicleKind,
                    params: Sequence[int] = None) -> Vehicle:
        vehicle = make_vehicle(vehicle_id, kind, params)
        station.attach(vehicle)
        vehicle.add_history(f'Connected to train pool at station {station.name}', Duration())
        self.vehicles[vehicle_id] = vehicle
        return vehicle

    def add_train(self, number: int, departure: Duration, arrival: Duration,
                  kinds: Sequence[VehicleKind], top_speed: float = 200.0) -> Train:
        train = Train(number, self.a, self.b, departure, arrival, top_speed, kinds)
        self.trains.append(train)
        return train


@pytest.fixture
def world() -> World:
    return World()


@pytest.fixture
def blueprint() -> Blueprint:
    ''' Stations A and B, 100 km apart. Train 1 runs before 10:00, train 2 at noon.

    '''
    vehicle_records = [VehicleRecord(1, 0, (60, 1), 'A'),
                       VehicleRecord(2, 4, (200, 5000), 'A'),
                       VehicleRecord(3, 4, (160, 4000), 'A')]
    distance_records = [DistanceRecord('A', 'B', 100.0)]
    train_records = [TrainRecord(1, 'A', 'B', Duration(6, 0), Duration(7, 0), 150, (4, 0)),
                     TrainRecord(2, 'A', 'B', Duration(12, 0), Duration(13, 0), 150, (4,))]
    return Blueprint(['A', 'B'], vehicle_records, distance_records, train_records)


@pytest.fixture
def write_data(tmp_path: Path):
    ''' Write the three data files into `tmp_path` and return the directory.

    '''
    def _write(stations: str, distances: str, trains: str) -> Path:
        (tmp_path / 'TrainStations.txt').write_text(stations, encoding='utf-8')
        (tmp_path / 'TrainMap.txt').write_text(distances, encoding='utf-8')
        (tmp_path / 'Trains.txt').write_text(trains, encoding='utf-8')
        return tmp_path
    return _write


SAMPLE_STATIONS = '''A (1 0 60 1) (2 4 200 5000) (3 0 50 0)
B (4 1 30) (5 5 120 300)
C (6 3 100)
'''

SAMPLE_DISTANCES = '''A B 100
B C 60
'''

SAMPLE_TRAINS = '''1 A B 07:00 08:00 150 4 0
2 B C 09:00 10:00 150 5 1
3 A B 08:00 09:00 150 4 0 0
'''
