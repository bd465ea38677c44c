from railoperation.setup.blueprint import Blueprint
from railoperation.setup.config_dataclass import DistanceRecord, RunConfig, TrainRecord, VehicleRecord
from railoperation.simulator.duration import Duration
from railoperation.simulator.event import EventKind
from railoperation.simulator.log import LogLevel
from railoperation.simulator.simulator import Simulator
from railoperation.simulator.train import TrainStatus


def make_simulator(blueprint, **settings) -> Simulator:
    settings.setdefault('start_time', Duration(10, 0))
    return Simulator(blueprint, RunConfig(**settings))


def test_events_before_the_start_time_are_run_silently(blueprint):
    simulator = make_simulator(blueprint)

    early, late = simulator.trains
    assert early.status == TrainStatus.FINISHED
    assert early.ignore
    assert not late.ignore
    assert simulator.time == Duration(10, 0)
    assert simulator.next_event_time == Duration(11, 30)
    assert simulator.log_level == LogLevel.LOW
    assert simulator.train_log.records == []


def test_complete_runs_every_train_to_the_end(blueprint):
    simulator = make_simulator(blueprint)
    simulator.complete()

    assert simulator.is_done
    assert simulator.is_finished
    assert [record.train_number for record in simulator.train_log.records] == [2] * 5
    statistics = simulator.get_statistics()
    assert [train.number for train in statistics.on_time] == [2]
    assert statistics.delayed == [] and statistics.never_departed == []
    # train 1 took vehicles 2 and 1, train 2 took vehicle 3
    assert [vehicle.vehicle_id for vehicle in simulator.find_station('B').vehicles] == [2, 1, 3]


def test_run_interval_stops_before_the_stop_time(blueprint):
    simulator = make_simulator(blueprint, interval=Duration(1, 0))

    assert simulator.run_interval() == []
    assert simulator.time == Duration(11, 0)

    processed = simulator.run_interval()
    assert [event.kind for event in processed] == [EventKind.ASSEMBLY, EventKind.READY]
    assert simulator.time == Duration(12, 0)
    assert simulator.find_train(2).status == TrainStatus.READY


def test_run_interval_finishes_running_trains_at_the_end_time(blueprint):
    simulator = make_simulator(blueprint, end_time=Duration(12, 30))

    simulator.run_interval(Duration(5, 0))

    assert simulator.find_train(2).status == TrainStatus.FINISHED
    assert simulator.time == Duration(13, 20)
    assert simulator.is_finished and simulator.is_done


def test_step_processes_one_event(blueprint):
    simulator = make_simulator(blueprint)

    event = simulator.step()

    assert event.kind == EventKind.ASSEMBLY
    assert event.train.number == 2
    assert simulator.time == Duration(11, 30)
    assert simulator.find_train(2).status == TrainStatus.ASSEMBLED


def test_trains_after_the_end_time_are_not_counted(blueprint):
    simulator = make_simulator(blueprint, end_time=Duration(11, 0))
    simulator.complete()

    assert simulator.find_train(2).status == TrainStatus.NOT_ASSEMBLED
    assert simulator.get_statistics().counted == 0
    assert simulator.step() is None


def test_log_level_can_be_changed_between_steps(blueprint):
    simulator = make_simulator(blueprint)
    simulator.log_level = LogLevel.OFF
    simulator.step()
    simulator.log_level = LogLevel.HIGH
    simulator.step()

    records = simulator.train_log.records
    assert [record.stage for record in records] == ['ready']
    assert records[0].details[0] == 'Connected vehicles:'


def test_each_simulator_starts_from_the_blueprint(blueprint):
    first = make_simulator(blueprint)
    first.complete()
    second = make_simulator(blueprint)

    assert [vehicle.vehicle_id for vehicle in second.find_station('A').vehicles] == [3]
    assert second.find_vehicle(3).station_name == 'A'
    assert first.find_vehicle(3).station_name == 'B'


def test_trains_departing_right_after_the_start_are_fully_logged():
    blueprint = Blueprint(['A', 'B'], [VehicleRecord(1, 4, (200, 5000), 'A')],
                          [DistanceRecord('A', 'B', 100.0)],
                          [TrainRecord(1, 'A', 'B', Duration(0, 10), Duration(1, 10), 150, (4,))])
    simulator = Simulator(blueprint, RunConfig(start_time=Duration()))
    simulator.complete()

    stages = [(record.stage, str(record.time)) for record in simulator.train_log.records]
    assert stages == [('assembled', '00:00'), ('ready', '00:00'), ('departure', '00:10'),
                      ('arrival', '01:10'), ('disassembled', '01:30')]
