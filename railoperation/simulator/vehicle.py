from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple, Union

from .duration import Duration


class VehicleKind(IntEnum):
    ''' The closed set of rolling-stock kinds, numbered as in the input data files.

    '''
    COACH = 0
    SLEEPER = 1
    OPEN_WAGON = 2
    COVERED_WAGON = 3
    ELECTRIC_LOCOMOTIVE = 4
    DIESEL_LOCOMOTIVE = 5

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').title()

    @property
    def is_locomotive(self) -> bool:
        return self in (VehicleKind.ELECTRIC_LOCOMOTIVE, VehicleKind.DIESEL_LOCOMOTIVE)


@dataclass(frozen=True)
class CoachAttributes:
    seats: int
    internet: bool


@dataclass(frozen=True)
class SleeperAttributes:
    beds: int


@dataclass(frozen=True)
class OpenWagonAttributes:
    capacity: int   # tonnes
    area: int   # square meters


@dataclass(frozen=True)
class CoveredWagonAttributes:
    volume: int   # cubic meters


@dataclass(frozen=True)
class ElectricLocomotiveAttributes:
    top_speed: float   # km/h
    power: int   # kW


@dataclass(frozen=True)
class DieselLocomotiveAttributes:
    top_speed: float   # km/h
    fuel_consumption: int   # l/h


VehicleAttributes = Union[CoachAttributes, SleeperAttributes, OpenWagonAttributes,
                          CoveredWagonAttributes, ElectricLocomotiveAttributes, DieselLocomotiveAttributes]

# the number of integer parameters each kind carries in the stations file
PARAM_COUNT = {
    VehicleKind.COACH: 2,
    VehicleKind.SLEEPER: 1,
    VehicleKind.OPEN_WAGON: 2,
    VehicleKind.COVERED_WAGON: 1,
    VehicleKind.ELECTRIC_LOCOMOTIVE: 2,
    VehicleKind.DIESEL_LOCOMOTIVE: 2,
}


def make_attributes(kind: VehicleKind, params: Sequence[int]) -> VehicleAttributes:
    ''' Build the kind-specific attributes from the integer parameters of the stations file.

    Args:
        kind: the vehicle kind
        params: the parameters in file order, their number must match `PARAM_COUNT[kind]`

    Returns:
        the frozen attribute record for the kind

    '''
    assert len(params) == PARAM_COUNT[kind], \
        f'{kind.label} takes {PARAM_COUNT[kind]} parameters, got {len(params)}'
    if kind == VehicleKind.COACH:
        return CoachAttributes(seats=params[0], internet=bool(params[1]))
    elif kind == VehicleKind.SLEEPER:
        return SleeperAttributes(beds=params[0])
    elif kind == VehicleKind.OPEN_WAGON:
        return OpenWagonAttributes(capacity=params[0], area=params[1])
    elif kind == VehicleKind.COVERED_WAGON:
        return CoveredWagonAttributes(volume=params[0])
    elif kind == VehicleKind.ELECTRIC_LOCOMOTIVE:
        return ElectricLocomotiveAttributes(top_speed=float(params[0]), power=params[1])
    else:
        return DieselLocomotiveAttributes(top_speed=float(params[0]), fuel_consumption=params[1])


class Vehicle:
    ''' A unit of rolling stock.

    A vehicle is either idle in the pool of a station or attached to a train, never both.
    Both relations are kept as identifiers (station name, train number) into the registries
    owned by the controller.

    Attributes:
        vehicle_id: globally unique id
        kind: the vehicle kind
        attributes: the kind-specific attributes

    Methods:
        set_train(self, train_number: Optional[int]) -> None
        set_station(self, station_name: Optional[str]) -> None
        add_history(self, event: str, t: Duration) -> None

    '''

    def __init__(self, vehicle_id: int, kind: VehicleKind, attributes: VehicleAttributes) -> None:
        self.vehicle_id: int = vehicle_id
        self.kind: VehicleKind = kind
        self.attributes: VehicleAttributes = attributes

        self._train_number: Optional[int] = None
        self._station_name: Optional[str] = None
        # (time, event text), append-only
        self._history: List[Tuple[Duration, str]] = []

    def __repr__(self) -> str:
        return f'Vehicle {self.vehicle_id} ({self.kind.label})'

    @property
    def train_number(self) -> Optional[int]:
        return self._train_number

    @property
    def station_name(self) -> Optional[str]:
        return self._station_name

    @property
    def history(self) -> List[Tuple[Duration, str]]:
        return list(self._history)

    @property
    def history_lines(self) -> List[str]:
        return [f'{t} {event}' for t, event in self._history]

    @property
    def top_speed(self) -> Optional[float]:
        ''' The top speed of a locomotive, None for other kinds.

        '''
        if isinstance(self.attributes, (ElectricLocomotiveAttributes, DieselLocomotiveAttributes)):
            return self.attributes.top_speed
        return None

    @property
    def info(self) -> str:
        ''' A one-line, kind-specific description of the vehicle.

        '''
        head = f'[{self.kind.label}] id: {self.vehicle_id}'
        attrs = self.attributes
        if isinstance(attrs, CoachAttributes):
            return f'{head}, seats: {attrs.seats}, internet: {"yes" if attrs.internet else "no"}'
        elif isinstance(attrs, SleeperAttributes):
            return f'{head}, beds: {attrs.beds}'
        elif isinstance(attrs, OpenWagonAttributes):
            return f'{head}, capacity: {attrs.capacity} tn, cargo area: {attrs.area} m2'
        elif isinstance(attrs, CoveredWagonAttributes):
            return f'{head}, volume: {attrs.volume} m3'
        elif isinstance(attrs, ElectricLocomotiveAttributes):
            return f'{head}, top speed: {attrs.top_speed:g} km/h, power: {attrs.power} kw'
        else:
            return f'{head}, top speed: {attrs.top_speed:g} km/h, fuel consumption: {attrs.fuel_consumption} l/h'

    def set_train(self, train_number: Optional[int]) -> None:
        assert train_number is None or self._station_name is None, \
            f'vehicle {self.vehicle_id} is still in the pool of station {self._station_name}'
        self._train_number = train_number

    def set_station(self, station_name: Optional[str]) -> None:
        assert station_name is None or self._train_number is None, \
            f'vehicle {self.vehicle_id} is still attached to train {self._train_number}'
        self._station_name = station_name

    def add_history(self, event: str, t: Duration) -> None:
        self._history.append((t, event))
