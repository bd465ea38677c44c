from typing import Dict, List

from railoperation.setup.blueprint import Blueprint

from .duration import Duration
from .station import Station
from .train import Train
from .vehicle import Vehicle, VehicleKind, make_attributes


class Builder:
    ''' Create the runtime stations, vehicles and trains from a validated blueprint.

    Every call creates fresh objects, so one blueprint can be simulated any number of times.
    Stations have to be created first, vehicles and trains are resolved against them.

    Methods:
        create_stations(self) -> Dict[str, Station]
        create_vehicles(self, stations: Dict[str, Station]) -> Dict[int, Vehicle]
        create_trains(self, stations: Dict[str, Station]) -> List[Train]

    '''

    def __init__(self, blueprint: Blueprint) -> None:
        self._blueprint: Blueprint = blueprint

    def create_stations(self) -> Dict[str, Station]:
        stations: Dict[str, Station] = {}
        for name in self._blueprint.station_names:
            station = Station(name)
            for neighbour, distance in self._blueprint.network.distances_from(name).items():
                station.set_distance(neighbour, distance)
            stations[name] = station
        return stations

    def create_vehicles(self, stations: Dict[str, Station]) -> Dict[int, Vehicle]:
        ''' Create every vehicle and put it into the pool of its initial station at 00:00.

        '''
        vehicles: Dict[int, Vehicle] = {}
        for record in self._blueprint.vehicle_records:
            kind = VehicleKind(record.kind_code)
            vehicle = Vehicle(record.vehicle_id, kind,
                              make_attributes(kind, record.params))
            station = stations[record.station_name]
            station.attach(vehicle)
            vehicle.add_history(
                f'Connected to train pool at station {station.name}', Duration())
            vehicles[vehicle.vehicle_id] = vehicle
        return vehicles

    def create_trains(self, stations: Dict[str, Station]) -> List[Train]:
        trains: List[Train] = []
        for record in self._blueprint.train_records:
            required_kinds = [VehicleKind(code)
                              for code in record.required_kind_codes]
            train = Train(record.number, stations[record.origin], stations[record.destination],
                          record.departure, record.arrival, record.top_speed, required_kinds)
            trains.append(train)
        return trains
