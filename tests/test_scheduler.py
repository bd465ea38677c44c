import pytest

from railoperation.simulator.duration import Duration
from railoperation.simulator.event import Event, EventKind
from railoperation.simulator.scheduler import Scheduler
from railoperation.simulator.station import Station
from railoperation.simulator.train import Train


class RecordingHandler:
    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self.calls = []

    def _record(self, stage, train):
        self.calls.append((stage, train.number, self.scheduler.time))

    def attempt_assembly(self, train):
        self._record('assembly', train)
        return True

    def ready_up(self, train):
        self._record('ready', train)

    def depart(self, train):
        self._record('departure', train)
        self.scheduler.schedule(Event(self.scheduler.time + Duration(1, 0), EventKind.ARRIVAL, train))

    def arrive(self, train):
        self._record('arrival', train)
        self.scheduler.schedule(Event(self.scheduler.time + Duration(0, 20), EventKind.DISASSEMBLY, train))

    def disassemble(self, train):
        self._record('disassembly', train)


def make_train(number):
    return Train(number, Station('A'), Station('B'), Duration(8, 0), Duration(9, 0), 100, [])


@pytest.fixture
def scheduler():
    scheduler = Scheduler()
    scheduler.bind(RecordingHandler(scheduler))
    return scheduler


def test_events_come_out_in_time_order(scheduler):
    t1, t2 = make_train(1), make_train(2)
    scheduler.schedule(Event(Duration(9, 0), EventKind.READY, t1))
    scheduler.schedule(Event(Duration(7, 0), EventKind.ASSEMBLY, t2))
    assert scheduler.next_event_time == Duration(7, 0)
    assert scheduler.pending == 2

    event = scheduler.advance()
    assert event.train is t2
    assert scheduler.time == Duration(7, 0)
    assert scheduler.advance().train is t1
    assert scheduler.is_empty()
    assert scheduler.next_event_time is None


def test_equal_times_are_first_in_first_out(scheduler):
    trains = [make_train(number) for number in (3, 1, 2)]
    for train in trains:
        scheduler.schedule(Event(Duration(8, 0), EventKind.ASSEMBLY, train))
    assert [scheduler.advance().train.number for _ in range(3)] == [3, 1, 2]


def test_advance_on_empty_queue_raises(scheduler):
    with pytest.raises(IndexError):
        scheduler.advance()


def test_past_events_come_out_first(scheduler):
    scheduler.set_time(Duration(10, 0))
    scheduler.schedule(Event(Duration(11, 0), EventKind.READY, make_train(1)))
    scheduler.schedule(Event(Duration(9, 0), EventKind.READY, make_train(2)))
    assert scheduler.advance().train.number == 2


def test_drain_finishes_departed_trains_and_drops_the_rest():
    scheduler = Scheduler()
    handler = RecordingHandler(scheduler)
    scheduler.bind(handler)
    running, waiting = make_train(1), make_train(2)
    scheduler.schedule(Event(Duration(23, 50), EventKind.DEPARTURE, running))
    scheduler.schedule(Event(Duration(23, 55), EventKind.ASSEMBLY, waiting))

    processed = scheduler.drain_departed()

    assert [event.kind for event in processed] == [EventKind.DEPARTURE, EventKind.ARRIVAL,
                                                    EventKind.DISASSEMBLY]
    assert scheduler.is_empty()
    assert scheduler.time == Duration(1, 10, days=1)
    assert [stage for stage, _, _ in handler.calls] == ['departure', 'arrival', 'disassembly']
    assert all(number == 1 for _, number, _ in handler.calls)
