from typing import List

import pytest

from railoperation.interface import UserInterface
from railoperation.setup.config_dataclass import RunConfig
from railoperation.simulator.duration import Duration
from railoperation.simulator.log import LogLevel
from railoperation.simulator.train import TrainStatus


class Script:
    ''' Feed the shell a fixed list of answers and collect what it prints.

    '''

    def __init__(self, answers: List[str]) -> None:
        self._answers = iter(answers)
        self.lines: List[str] = []

    def input(self) -> str:
        return next(self._answers)

    def output(self, text: str) -> None:
        self.lines.append(text)

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)


@pytest.fixture
def run_shell(blueprint):
    def _run(answers: List[str]):
        script = Script(answers)
        ui = UserInterface(blueprint, RunConfig(), script.input, script.output)
        ui.run_start_menu()
        return ui, script
    return _run


def test_complete_and_print_statistics(run_shell):
    ui, script = run_shell(['3', '4', '2', '0'])

    assert ui.simulator.is_done
    assert 'Statistics menu' in script.text
    assert 'Number of trains that arrived on time' in script.text


def test_change_start_time(run_shell):
    ui, script = run_shell(['1', '10', '0', '3', '0'])

    assert 'Start Menu\n1. Change start time [10:00]' in script.text
    assert ui.simulator.time == Duration(10, 0)
    assert ui.simulator.find_train(1).ignore


def test_end_time_before_start_time_is_refused(run_shell):
    ui, script = run_shell(['1', '10', '0', '2', '9', '0', '11', '0', '0'])

    assert 'Start time can not be after end time, try again.' in script.lines
    assert '2. Change end time [11:00]' in script.text
    assert ui.simulator is None


def test_invalid_options_are_asked_again(run_shell):
    _, script = run_shell(['7', 'x', '0'])

    assert script.lines.count('\nError, please enter a valid option (0-3):') == 2


def test_next_event_and_interval(run_shell):
    ui, _ = run_shell(['3', '3', '1', '11', '0', '2', '0'])

    # the first event is the assembly of train 1 at 05:30, the interval runs on from there
    assert ui.simulator.time == Duration(16, 30)
    assert ui.simulator.find_train(2).status == TrainStatus.FINISHED


def test_change_log_level(run_shell):
    ui, _ = run_shell(['3', '5', '2', '0'])

    assert ui.simulator.log_level is LogLevel.HIGH


def test_train_lookup(run_shell):
    _, script = run_shell(['3', '6', '1', '2', '1', '42', '2', '1', '0', '0'])

    assert 'Train found:\nTrain 2 (NOT ASSEMBLED) from A 12:00 (12:00)' in script.text
    assert 'Train not found, check train number.' in script.lines
    assert 'Vehicle is not connected to a train.' in script.lines


def test_station_lookup(run_shell):
    _, script = run_shell(['3', '7', '1', '2', 'A', '2', 'X', '3', '0', '0'])

    assert '\nStation Names:\nA\nB' in script.lines
    assert 'Station not found, check name.' in script.lines
    station_output = next(line for line in script.lines if line.startswith('A\nConnected vehicles:'))
    assert '[Coach] id: 1, seats: 60, internet: yes' in station_output
    distance_table = [line for line in script.lines
                      if '100' in line and 'Connected' not in line]
    assert len(distance_table) == 1


def test_vehicle_lookup(run_shell):
    _, script = run_shell(['3', '8', '1', '2', '1', '99', '0', '0'])

    assert '\n[Electric Locomotive] id: 2, top speed: 200 km/h, power: 5000 kw\n' \
           'Last connected to station: A' in script.lines
    assert 'Vehicle not found, check id.' in script.lines


def test_vehicle_table(run_shell):
    _, script = run_shell(['3', '8', '2', '0', '0'])

    table = next(line for line in script.lines if line.lstrip().startswith('id'))
    assert 'Electric Locomotive' in table
    assert 'station A' in table
