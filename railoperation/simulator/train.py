from enum import IntEnum
from typing import List, Optional, Sequence

from .duration import Duration
from .station import Station
from .vehicle import Vehicle, VehicleKind


class TrainStatus(IntEnum):
    ''' Lifecycle of a train. The order is the only direction a train may move in.

    '''
    NOT_ASSEMBLED = 0
    INCOMPLETE = 1
    ASSEMBLED = 2
    READY = 3
    RUNNING = 4
    ARRIVED = 5
    FINISHED = 6

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ')


class Train:
    ''' A train with an immutable manifest and a mutable running state.

    Attributes:
        number: unique train number
        origin: the station the train is assembled at and departs from
        destination: the station the train arrives at and is disassembled at
        original_departure, original_arrival: the timetable, never changed
        current_departure, current_arrival: the timetable after delays
        delay: arrival delay against the timetable
        departure_delay: delay accumulated before departure
        top_speed: km/h, only lowered by slower locomotives
        speed: the cruising speed chosen at departure
        ignore: suppress log output, set for trains that departed before the simulation start time

    Methods:
        set_status(self, status: TrainStatus) -> None
        attach_vehicle(self, vehicle: Vehicle) -> None
        detach_vehicle(self) -> Optional[Vehicle]
        add_delay(self, delay: Duration) -> None
        cap_top_speed(self, speed: float) -> None

    '''

    def __init__(self, number: int, origin: Station, destination: Station,
                 departure: Duration, arrival: Duration, top_speed: float,
                 required_kinds: Sequence[VehicleKind]) -> None:
        self._number: int = number
        self._origin: Station = origin
        self._destination: Station = destination

        self._original_departure: Duration = departure
        self._original_arrival: Duration = arrival
        self.current_departure: Duration = departure
        self.current_arrival: Duration = arrival
        self.delay: Duration = Duration()
        self.departure_delay: Duration = Duration()

        self._top_speed: float = float(top_speed)
        self.speed: float = 0.0

        # shrinks by one entry for every attached vehicle
        self._required_kinds: List[VehicleKind] = list(required_kinds)
        self._vehicles: List[Vehicle] = []

        self._status: TrainStatus = TrainStatus.NOT_ASSEMBLED
        self.ignore: bool = False

    def __repr__(self) -> str:
        return f'Train {self._number} ({self._status.label})'

    def __str__(self) -> str:
        return (f'Train {self._number} ({self._status.label}) from {self._origin.name} '
                f'{self._original_departure} ({self.current_departure}) to {self._destination.name} '
                f'{self._original_arrival} ({self.current_arrival}) delay ({self.delay}) '
                f'speed = {self.speed:g} km/h')

    @property
    def number(self) -> int:
        return self._number

    @property
    def origin(self) -> Station:
        return self._origin

    @property
    def destination(self) -> Station:
        return self._destination

    @property
    def original_departure(self) -> Duration:
        return self._original_departure

    @property
    def original_arrival(self) -> Duration:
        return self._original_arrival

    @property
    def top_speed(self) -> float:
        return self._top_speed

    @property
    def status(self) -> TrainStatus:
        return self._status

    @property
    def required_kinds(self) -> List[VehicleKind]:
        return list(self._required_kinds)

    @property
    def vehicles(self) -> List[Vehicle]:
        return list(self._vehicles)

    def set_status(self, status: TrainStatus) -> None:
        assert status >= self._status, \
            f'train {self._number} cannot go from {self._status.label} back to {status.label}'
        self._status = status

    def attach_vehicle(self, vehicle: Vehicle) -> None:
        ''' Attach a vehicle and strike one matching kind off the manifest.

        '''
        assert vehicle.kind in self._required_kinds, \
            f'train {self._number} does not require a {vehicle.kind.label}'
        self._required_kinds.remove(vehicle.kind)
        vehicle.set_train(self._number)
        self._vehicles.append(vehicle)

    def detach_vehicle(self) -> Optional[Vehicle]:
        ''' Detach the earliest attached vehicle, None once the train is empty.

        '''
        if not self._vehicles:
            return None
        vehicle = self._vehicles.pop(0)
        vehicle.set_train(None)
        return vehicle

    def add_delay(self, delay: Duration) -> None:
        self.current_departure = self.current_departure + delay
        self.current_arrival = self.current_arrival + delay
        self.delay = self.delay + delay
        self.departure_delay = self.departure_delay + delay

    def cap_top_speed(self, speed: float) -> None:
        self._top_speed = min(self._top_speed, speed)
