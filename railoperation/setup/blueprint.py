import logging
from typing import Dict, List, Sequence

from .config_dataclass import DistanceRecord, TrainRecord, VehicleRecord
from .dataloader import DataLoader
from .errors import SetupError
from .network import Network

logger = logging.getLogger(__name__)


class Blueprint:
    ''' Provide the validated static description of a network and its timetable as a whole.

    The blueprint only holds records, the runtime stations, vehicles and trains are created from it by the
    `Builder`, so every simulation built from the same blueprint starts from the same state.
    All cross references are checked here, a blueprint that exists can always be built.

    Attributes:
        network: station graph with the distance table
        station_names: station names in file order
        vehicle_records: every vehicle and the station it starts at
        train_records: the train roster

    Raises:
        SetupError: if a vehicle id is used twice, a station name cannot be resolved,
            or a train runs between two stations without a distance entry

    '''

    def __init__(self, station_names: Sequence[str],
                 vehicle_records: Sequence[VehicleRecord],
                 distance_records: Sequence[DistanceRecord],
                 train_records: Sequence[TrainRecord]) -> None:
        self.station_names: List[str] = list(station_names)
        self.vehicle_records: List[VehicleRecord] = list(vehicle_records)
        self.train_records: List[TrainRecord] = list(train_records)
        self.network: Network = Network(self.station_names)

        self._check_vehicles()
        for record in distance_records:
            for name in (record.station_0, record.station_1):
                self._check_station(name, 'map file')
            if record.distance <= 0:
                raise SetupError(f'distance between {record.station_0} and {record.station_1} '
                                 f'must be positive, got {record.distance}')
            self.network.add_distance(
                record.station_0, record.station_1, record.distance)
        self._check_trains()

        if self.station_names and not self.network.is_connected():
            logger.warning('the station network is not connected')

    @classmethod
    def from_data_loader(cls, data_loader: DataLoader) -> 'Blueprint':
        ''' Load all the data files through `data_loader` and validate them.

        '''
        station_names, vehicle_records = data_loader.load_stations()
        distance_records = data_loader.load_distances()
        train_records = data_loader.load_trains()
        return cls(station_names, vehicle_records, distance_records, train_records)

    @property
    def station_vehicle_count(self) -> Dict[str, int]:
        ''' Return the number of vehicles each station starts with.

        '''
        counts = {name: 0 for name in self.station_names}
        for record in self.vehicle_records:
            counts[record.station_name] += 1
        return counts

    def _check_station(self, name: str, source: str) -> None:
        if not self.network.has_station(name):
            raise SetupError(f'unknown station "{name}" in {source}')

    def _check_vehicles(self) -> None:
        seen = set()
        for record in self.vehicle_records:
            if record.vehicle_id in seen:
                raise SetupError(
                    f'vehicle id {record.vehicle_id} is used more than once')
            seen.add(record.vehicle_id)
            self._check_station(record.station_name, 'station file')

    def _check_trains(self) -> None:
        seen = set()
        for record in self.train_records:
            if record.number in seen:
                raise SetupError(
                    f'train number {record.number} is used more than once')
            seen.add(record.number)
            self._check_station(record.origin, f'train {record.number}')
            self._check_station(record.destination, f'train {record.number}')
            if record.arrival <= record.departure:
                raise SetupError(f'train {record.number} does not arrive after its departure')
            if not self.network.has_route(record.origin, record.destination):
                raise SetupError(f'train {record.number} has no route: no distance between '
                                 f'{record.origin} and {record.destination}')
