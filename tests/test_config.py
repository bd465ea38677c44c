import pytest

from railoperation.config import build_simulation_elements, make_run_config, sanity_check
from railoperation.setup.errors import SetupError
from railoperation.simulator.duration import Duration
from railoperation.simulator.log import LogLevel

from conftest import SAMPLE_DISTANCES, SAMPLE_STATIONS, SAMPLE_TRAINS

CONFIG = '''data_dir: .
start_time: '06:00'
end_time: '22:00'
interval: '00:30'
log_level: high
log_file: out/train.log
echo: false
'''


def test_build_simulation_elements(write_data):
    data_dir = write_data(SAMPLE_STATIONS, SAMPLE_DISTANCES, SAMPLE_TRAINS)
    config_path = data_dir / 'config.yaml'
    config_path.write_text(CONFIG, encoding='utf-8')

    blueprint, run_config = build_simulation_elements(config_path)

    assert blueprint.station_names == ['A', 'B', 'C']
    assert run_config.start_time == Duration(6, 0)
    assert run_config.end_time == Duration(22, 0)
    assert run_config.interval == Duration(0, 30)
    assert run_config.log_level is LogLevel.HIGH
    assert run_config.log_file == data_dir / 'out' / 'train.log'


def test_missing_config_file_fails(tmp_path):
    with pytest.raises(SetupError, match='failed to open'):
        build_simulation_elements(tmp_path / 'config.yaml')


def test_sanity_check_reports_missing_keys():
    with pytest.raises(SetupError, match='end_time'):
        sanity_check({'data_dir': 'data', 'start_time': '06:00', 'log_level': 'low'})
    with pytest.raises(SetupError):
        sanity_check(None)


def test_start_time_after_end_time_fails():
    with pytest.raises(SetupError, match='must not be later'):
        make_run_config({'start_time': '12:00', 'end_time': '11:00', 'log_level': 'low'})


def test_unquoted_yaml_values_are_understood():
    # YAML 1.1 reads 12:30 as 750 and off as False
    run_config = make_run_config({'start_time': '06:00', 'end_time': 750, 'log_level': False})
    assert run_config.end_time == Duration(12, 30)
    assert run_config.log_level is LogLevel.OFF
    assert run_config.log_file is None


def test_invalid_setting_fails():
    with pytest.raises(SetupError, match='invalid setting'):
        make_run_config({'start_time': 'noon', 'end_time': '11:00', 'log_level': 'low'})
