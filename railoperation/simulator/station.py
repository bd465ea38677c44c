from typing import Dict, List, Optional

from .vehicle import Vehicle, VehicleKind


class Station:
    ''' A station owning a pool of idle vehicles and a distance table to other stations.

    Attributes:
        name: unique station name
        vehicles: vehicles currently idle at the station, in the order they entered the pool
        distances: {other station name -> distance in km}

    Methods:
        set_distance(self, station_name: str, distance: float) -> None
        distance_to(self, station_name: str) -> float
        attach(self, vehicle: Vehicle) -> None
        detach(self, kind: VehicleKind) -> Optional[Vehicle]
        count(self, kind: VehicleKind) -> int

    '''

    def __init__(self, name: str) -> None:
        self._name: str = name
        self._pool: List[Vehicle] = []
        self._distances: Dict[str, float] = {}

    def __repr__(self) -> str:
        return f'Station {self._name} with {len(self._pool)} vehicles'

    @property
    def name(self) -> str:
        return self._name

    @property
    def vehicles(self) -> List[Vehicle]:
        return list(self._pool)

    @property
    def distances(self) -> Dict[str, float]:
        return dict(self._distances)

    def set_distance(self, station_name: str, distance: float) -> None:
        self._distances[station_name] = distance

    def distance_to(self, station_name: str) -> float:
        return self._distances[station_name]

    def attach(self, vehicle: Vehicle) -> None:
        ''' Put a vehicle into the pool of this station.

        '''
        vehicle.set_station(self._name)
        self._pool.append(vehicle)

    def detach(self, kind: VehicleKind) -> Optional[Vehicle]:
        ''' Take the first vehicle of the given kind out of the pool.

        Args:
            kind: the requested vehicle kind

        Returns:
            the detached vehicle, or None if no vehicle of that kind is idle here

        '''
        for idx, vehicle in enumerate(self._pool):
            if vehicle.kind == kind:
                del self._pool[idx]
                vehicle.set_station(None)
                return vehicle
        return None

    def count(self, kind: VehicleKind) -> int:
        return len([vehicle for vehicle in self._pool if vehicle.kind == kind])
