import pytest

from railoperation.simulator.duration import Duration
from railoperation.simulator.station import Station
from railoperation.simulator.train import Train, TrainStatus
from railoperation.simulator.vehicle import VehicleKind

from conftest import make_vehicle


@pytest.fixture
def train() -> Train:
    return Train(5, Station('A'), Station('B'), Duration(8, 0), Duration(9, 0), 150,
                 [VehicleKind.ELECTRIC_LOCOMOTIVE, VehicleKind.COACH, VehicleKind.COACH])


def test_status_never_goes_back(train):
    train.set_status(TrainStatus.INCOMPLETE)
    train.set_status(TrainStatus.INCOMPLETE)
    train.set_status(TrainStatus.ASSEMBLED)
    with pytest.raises(AssertionError):
        train.set_status(TrainStatus.INCOMPLETE)


def test_attach_strikes_one_kind_off_the_manifest(train):
    coach = make_vehicle(1, VehicleKind.COACH)
    train.attach_vehicle(coach)
    assert coach.train_number == 5
    assert train.required_kinds == [VehicleKind.ELECTRIC_LOCOMOTIVE, VehicleKind.COACH]

    with pytest.raises(AssertionError):
        train.attach_vehicle(make_vehicle(2, VehicleKind.SLEEPER))


def test_detach_in_attachment_order(train):
    loco = make_vehicle(1, VehicleKind.ELECTRIC_LOCOMOTIVE)
    coach = make_vehicle(2, VehicleKind.COACH)
    train.attach_vehicle(loco)
    train.attach_vehicle(coach)

    assert train.detach_vehicle() is loco
    assert loco.train_number is None
    assert train.detach_vehicle() is coach
    assert train.detach_vehicle() is None


def test_add_delay_moves_the_whole_timetable(train):
    train.add_delay(Duration(0, 10))
    train.add_delay(Duration(0, 10))
    assert train.current_departure == Duration(8, 20)
    assert train.current_arrival == Duration(9, 20)
    assert train.delay == Duration(0, 20)
    assert train.departure_delay == Duration(0, 20)
    assert train.original_departure == Duration(8, 0)


def test_top_speed_is_only_lowered(train):
    train.cap_top_speed(200)
    assert train.top_speed == 150
    train.cap_top_speed(120)
    assert train.top_speed == 120


def test_str(train):
    assert str(train) == ('Train 5 (NOT ASSEMBLED) from A 08:00 (08:00) to B 09:00 (09:00) '
                          'delay (00:00) speed = 0 km/h')
