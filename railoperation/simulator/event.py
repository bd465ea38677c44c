from dataclasses import dataclass
from enum import IntEnum

from .duration import Duration
from .train import Train


class EventKind(IntEnum):
    ''' The five lifecycle stages of a train, in the order they happen.

    '''
    ASSEMBLY = 0
    READY = 1
    DEPARTURE = 2
    ARRIVAL = 3
    DISASSEMBLY = 4


@dataclass(frozen=True, eq=False)
class Event:
    ''' A pending stage of a train at a certain time.

    Attributes:
        time: the simulation time at which the stage happens
        kind: which stage
        train: the train the stage applies to

    '''
    time: Duration
    kind: EventKind
    train: Train

    @property
    def is_departed_stage(self) -> bool:
        ''' Whether the event belongs to a train that has already left (or is leaving) its origin.

        '''
        return self.kind >= EventKind.DEPARTURE
