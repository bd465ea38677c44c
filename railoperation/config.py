from pathlib import Path
from typing import Dict, Tuple, Union

import yaml

from railoperation.setup.blueprint import Blueprint
from railoperation.setup.config_dataclass import RunConfig
from railoperation.setup.dataloader import DataLoader
from railoperation.setup.errors import SetupError
from railoperation.simulator.duration import Duration
from railoperation.simulator.log import LogLevel

REQUIRED_KEYS = ('data_dir', 'start_time', 'end_time', 'log_level')


def build_simulation_elements(config_path: Union[str, Path] = 'config.yaml') -> Tuple[Blueprint, RunConfig]:
    ''' Build simulation elements as per the config.yaml file

    Relative paths in the file (`data_dir`, `log_file`) are resolved against the directory of the file.

    Returns:
        blueprint: a Blueprint object that provides the network and the train roster as a whole
        run_config: start and end time, step interval and log settings

    Raises:
        SetupError: if the file cannot be read, a setting is missing or invalid, or the data files are corrupt

    '''
    config_path = Path(config_path)
    if not config_path.is_file():
        raise SetupError(f'config file {config_path} failed to open')
    with open(config_path, 'r', encoding='utf-8') as file:
        try:
            config = yaml.safe_load(file)
        except yaml.YAMLError as error:
            raise SetupError(f'config file {config_path} is corrupted: {error}') from error
    sanity_check(config)

    base_dir = config_path.parent
    run_config = make_run_config(config, base_dir)

    # build blueprint for the network
    data_loader = DataLoader(base_dir / config['data_dir'],
                             stations_file=config.get('stations_file', 'TrainStations.txt'),
                             map_file=config.get('map_file', 'TrainMap.txt'),
                             trains_file=config.get('trains_file', 'Trains.txt'))
    blueprint = Blueprint.from_data_loader(data_loader)

    return blueprint, run_config


def make_run_config(config: Dict, base_dir: Path = Path('.')) -> RunConfig:
    ''' Convert the run settings of a checked config dict into a RunConfig.

    '''
    try:
        start_time = _to_duration(config['start_time'])
        end_time = _to_duration(config['end_time'])
        interval = _to_duration(config.get('interval', '00:10'))
        # an unquoted `off` is read as False
        log_level = LogLevel.OFF if config['log_level'] is False else LogLevel.parse(config['log_level'])
    except ValueError as error:
        raise SetupError(f'invalid setting in the config file: {error}') from error

    if start_time > end_time:
        raise SetupError(f'start_time {start_time} must not be later than end_time {end_time}')
    if interval.total_minutes <= 0:
        raise SetupError(f'interval {interval} must be positive')

    log_file = config.get('log_file')
    return RunConfig(start_time=start_time,
                     end_time=end_time,
                     interval=interval,
                     log_level=log_level,
                     log_file=base_dir / log_file if log_file else None,
                     echo=bool(config.get('echo', False)))


def sanity_check(config: Dict) -> None:
    ''' Check if neccessary parameters are specified in the `config.yaml` file

    '''
    if not isinstance(config, dict):
        raise SetupError('the config file must contain a mapping of settings')
    for key in REQUIRED_KEYS:
        if key not in config:
            raise SetupError(f'{key} must be specified in the config.yaml file')


def _to_duration(value: Union[str, int]) -> Duration:
    # YAML 1.1 reads an unquoted 12:30 as the base 60 integer 750, i.e., minutes
    if isinstance(value, int) and not isinstance(value, bool):
        return Duration.from_minutes(value)
    return Duration.parse(str(value))
