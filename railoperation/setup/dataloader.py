import logging
import re
from pathlib import Path
from typing import List, Tuple, Union

import pandas as pd

from railoperation.simulator.duration import Duration
from railoperation.simulator.vehicle import PARAM_COUNT, VehicleKind

from .config_dataclass import DistanceRecord, TrainRecord, VehicleRecord
from .errors import SetupError

logger = logging.getLogger(__name__)

_VEHICLE_GROUP = re.compile(r'\(([^()]*)\)')


class DataLoader:
    ''' Read the station, map and train files of a network into plain records.

    File formats, one item per line, fields separated by whitespace:
        stations file: `Name (id type param [param]) (id type param [param]) ...`
        map file: `StationA StationB distance`
        trains file: `number origin destination HH:MM HH:MM top_speed type [type ...]`

    Vehicle types are the codes 0..5 of `VehicleKind`. Any unreadable or corrupt input raises `SetupError`;
    cross references between the files are resolved later by the `Blueprint`.

    Methods:
        load_stations(self) -> Tuple[List[str], List[VehicleRecord]]
        load_distances(self) -> List[DistanceRecord]
        load_trains(self) -> List[TrainRecord]

    '''

    def __init__(self, data_dir: Union[str, Path],
                 stations_file: str = 'TrainStations.txt',
                 map_file: str = 'TrainMap.txt',
                 trains_file: str = 'Trains.txt') -> None:
        self._data_dir = Path(data_dir)
        self._stations_path = self._data_dir / stations_file
        self._map_path = self._data_dir / map_file
        self._trains_path = self._data_dir / trains_file

    def load_stations(self) -> Tuple[List[str], List[VehicleRecord]]:
        ''' Read the station names and the vehicles idle at each station at the start of the day.

        Returns:
            station_names: station names in file order
            vehicle_records: one record per vehicle, in file order

        '''
        station_names: List[str] = []
        vehicle_records: List[VehicleRecord] = []
        for line_no, line in self._read_lines(self._stations_path, 'station file'):
            parts = line.split(None, 1)
            name = parts[0]
            rest = parts[1] if len(parts) > 1 else ''
            if name in station_names:
                raise SetupError(
                    f'{self._stations_path}:{line_no}: station {name} is defined twice')
            station_names.append(name)

            leftover = _VEHICLE_GROUP.sub('', rest).strip()
            if leftover:
                raise SetupError(
                    f'{self._stations_path}:{line_no}: cannot parse "{leftover}"')

            for group in _VEHICLE_GROUP.findall(rest):
                fields = self._to_ints(group.split(), self._stations_path, line_no)
                if len(fields) < 2:
                    raise SetupError(
                        f'{self._stations_path}:{line_no}: vehicle "({group})" needs an id and a type')
                vehicle_id, kind_code, params = fields[0], fields[1], tuple(fields[2:])
                kind = self._to_kind(kind_code, self._stations_path, line_no)
                if len(params) != PARAM_COUNT[kind]:
                    raise SetupError(f'{self._stations_path}:{line_no}: {kind.label} {vehicle_id} takes '
                                     f'{PARAM_COUNT[kind]} parameters, got {len(params)}')
                vehicle_records.append(VehicleRecord(
                    vehicle_id, kind_code, params, name))

        logger.info('loaded %d stations and %d vehicles from %s',
                    len(station_names), len(vehicle_records), self._stations_path)
        return station_names, vehicle_records

    def load_distances(self) -> List[DistanceRecord]:
        ''' Read the distance table, one undirected connection per line.

        '''
        if not self._map_path.is_file():
            raise SetupError(f'map file {self._map_path} failed to open')
        try:
            df = pd.read_csv(self._map_path, sep=r'\s+', header=None,
                             dtype={0: str, 1: str})
        except pd.errors.EmptyDataError:
            return []
        except pd.errors.ParserError as error:
            raise SetupError(f'map file {self._map_path} is corrupted: {error}') from error

        if df.shape[1] != 3:
            raise SetupError(
                f'map file {self._map_path} is corrupted: expected 3 columns, got {df.shape[1]}')
        df.columns = ['station_0', 'station_1', 'distance']
        df['distance'] = pd.to_numeric(df['distance'], errors='coerce')
        corrupted = df[df.isna().any(axis=1)]
        if len(corrupted) > 0:
            row = corrupted.index[0]
            raise SetupError(
                f'map file {self._map_path} is corrupted: row {row + 1} needs two stations and a distance')
        if (df['distance'] <= 0).any():
            raise SetupError(f'map file {self._map_path} contains a distance that is not positive')

        distance_records = [DistanceRecord(row.station_0, row.station_1, float(row.distance))
                            for row in df.itertuples(index=False)]
        logger.info('loaded %d connections from %s',
                    len(distance_records), self._map_path)
        return distance_records

    def load_trains(self) -> List[TrainRecord]:
        ''' Read the train roster.

        '''
        train_records: List[TrainRecord] = []
        numbers = set()
        for line_no, line in self._read_lines(self._trains_path, 'train file'):
            fields = line.split()
            if len(fields) < 6:
                raise SetupError(
                    f'{self._trains_path}:{line_no}: expected number, origin, destination, '
                    f'departure, arrival and top speed')
            number = self._to_ints(fields[:1], self._trains_path, line_no)[0]
            if number in numbers:
                raise SetupError(
                    f'{self._trains_path}:{line_no}: train {number} is defined twice')
            numbers.add(number)

            try:
                departure = Duration.parse(fields[3])
                arrival = Duration.parse(fields[4])
                top_speed = float(fields[5])
            except ValueError as error:
                raise SetupError(
                    f'{self._trains_path}:{line_no}: {error}') from error
            if top_speed <= 0:
                raise SetupError(
                    f'{self._trains_path}:{line_no}: top speed must be positive')
            if arrival <= departure:
                raise SetupError(
                    f'{self._trains_path}:{line_no}: arrival {arrival} is not after departure {departure}')

            kind_codes = self._to_ints(fields[6:], self._trains_path, line_no)
            for kind_code in kind_codes:
                self._to_kind(kind_code, self._trains_path, line_no)

            train_records.append(TrainRecord(number, fields[1], fields[2], departure,
                                             arrival, top_speed, tuple(kind_codes)))

        logger.info('loaded %d trains from %s',
                    len(train_records), self._trains_path)
        return train_records

    @staticmethod
    def _read_lines(path: Path, description: str) -> List[Tuple[int, str]]:
        if not path.is_file():
            raise SetupError(f'{description} {path} failed to open')
        with open(path, 'r', encoding='utf-8') as file:
            lines = [(line_no, line.strip())
                     for line_no, line in enumerate(file, start=1)]
        return [(line_no, line) for line_no, line in lines if line]

    @staticmethod
    def _to_ints(fields: List[str], path: Path, line_no: int) -> List[int]:
        try:
            return [int(field) for field in fields]
        except ValueError as error:
            raise SetupError(f'{path}:{line_no}: {error}') from error

    @staticmethod
    def _to_kind(kind_code: int, path: Path, line_no: int) -> VehicleKind:
        try:
            return VehicleKind(kind_code)
        except ValueError:
            raise SetupError(
                f'{path}:{line_no}: datafile corrupted, vehicle type {kind_code} is not one of 0..5') from None
