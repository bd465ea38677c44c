import heapq
from typing import List, Optional, Protocol, Tuple

from .duration import Duration
from .event import Event, EventKind
from .train import Train


class StageHandler(Protocol):
    ''' Protocol for the component that carries out the stages of a train.

    Each method may schedule the next stage of the train with the scheduler.

    '''

    def attempt_assembly(self, train: Train) -> bool:
        ...

    def ready_up(self, train: Train) -> None:
        ...

    def depart(self, train: Train) -> None:
        ...

    def arrive(self, train: Train) -> None:
        ...

    def disassemble(self, train: Train) -> None:
        ...


class Scheduler:
    ''' A time-ordered queue of pending events and the simulation clock.

    Events are ordered by time; events with equal time are processed in the order they were scheduled (FIFO).
    The scheduler only touches its queue and its clock, the domain state is changed by the bound `StageHandler`.

    Properties:
        time: current simulation time
        next_event_time: time of the earliest pending event, None if the queue is empty
        pending: number of pending events

    Methods:
        bind(self, handler: StageHandler) -> None
        schedule(self, event: Event) -> None
        advance(self) -> Event
        drain_departed(self) -> List[Event]
        is_empty(self) -> bool
        set_time(self, t: Duration) -> None

    '''

    def __init__(self, start_time: Optional[Duration] = None) -> None:
        self._time: Duration = start_time if start_time is not None else Duration()
        # heap of (total minutes, insertion sequence, event)
        self._queue: List[Tuple[int, int, Event]] = []
        self._event_counter: int = 0
        self._handler: Optional[StageHandler] = None

    @property
    def time(self) -> Duration:
        return self._time

    @property
    def next_event_time(self) -> Optional[Duration]:
        if not self._queue:
            return None
        return self._queue[0][2].time

    @property
    def pending(self) -> int:
        return len(self._queue)

    def set_time(self, t: Duration) -> None:
        self._time = t

    def is_empty(self) -> bool:
        return not self._queue

    def bind(self, handler: StageHandler) -> None:
        self._handler = handler

    def schedule(self, event: Event) -> None:
        ''' Insert an event. Events dated before the current time are legal and come out first.

        '''
        self._event_counter += 1
        heapq.heappush(self._queue, (event.time.total_minutes, self._event_counter, event))

    def advance(self) -> Event:
        ''' Process the earliest pending event.

        The clock is set to the event time before the event is dispatched.

        Returns:
            the processed event

        Raises:
            IndexError: if there is no pending event

        '''
        if not self._queue:
            raise IndexError('advance() called with no pending events')
        _, _, event = heapq.heappop(self._queue)
        self._time = event.time
        self._dispatch(event)
        return event

    def drain_departed(self) -> List[Event]:
        ''' Empty the queue, processing only the events of trains that have departed.

        Departure, arrival and disassembly events are processed in time order regardless of their time,
        including the follow-up events they schedule, so every departed train ends up finished.
        Assembly and ready events are discarded.

        Returns:
            the processed events

        '''
        processed = []
        while self._queue:
            _, _, event = heapq.heappop(self._queue)
            if not event.is_departed_stage:
                continue
            self._time = event.time
            self._dispatch(event)
            processed.append(event)
        return processed

    def _dispatch(self, event: Event) -> None:
        assert self._handler is not None, 'no stage handler is bound to the scheduler'
        train = event.train
        if event.kind == EventKind.ASSEMBLY:
            self._handler.attempt_assembly(train)
        elif event.kind == EventKind.READY:
            self._handler.ready_up(train)
        elif event.kind == EventKind.DEPARTURE:
            self._handler.depart(train)
        elif event.kind == EventKind.ARRIVAL:
            self._handler.arrive(train)
        elif event.kind == EventKind.DISASSEMBLY:
            self._handler.disassemble(train)
