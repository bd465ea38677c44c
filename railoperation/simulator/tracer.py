from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np
from tabulate import tabulate

from .duration import Duration
from .train import Train, TrainStatus


@dataclass
class Statistics:
    ''' Summary of the trains that fell within the simulated window.

    Attributes:
        on_time: finished trains that arrived without delay
        delayed: finished trains that arrived with a delay
        never_departed: trains that did not finish (never assembled, or still under way)
        total_departure_delay: departure delay summed over the delayed trains
        total_arrival_delay: arrival delay summed over the delayed trains
        metrics: counts and mean delays in minutes

    '''
    on_time: List[Train] = field(default_factory=list)
    delayed: List[Train] = field(default_factory=list)
    never_departed: List[Train] = field(default_factory=list)
    total_departure_delay: Duration = field(default_factory=Duration)
    total_arrival_delay: Duration = field(default_factory=Duration)
    metrics: Dict[str, float] = field(default_factory=dict)

    @property
    def counted(self) -> int:
        return len(self.on_time) + len(self.delayed) + len(self.never_departed)


class Tracer:
    ''' Compute the end-of-run statistics of a simulation.

    Methods:
        get_statistics(self, trains: Sequence[Train], end_time: Duration) -> Statistics
        format_statistics(self, statistics: Statistics) -> str

    '''

    def get_statistics(self, trains: Sequence[Train], end_time: Duration) -> Statistics:
        ''' Sort the trains into on time, delayed and never departed.

        Trains that departed before the simulation start (ignored) and trains timetabled to
        depart after `end_time` are not counted.

        Args:
            trains: all trains of the run
            end_time: the end of the simulated window

        Returns:
            statistics: the buckets, the delay totals and the metrics

        '''
        statistics = Statistics()
        for train in trains:
            if train.ignore or train.original_departure > end_time:
                continue
            if train.status == TrainStatus.FINISHED:
                if train.delay == Duration():
                    statistics.on_time.append(train)
                else:
                    statistics.delayed.append(train)
                    statistics.total_departure_delay = statistics.total_departure_delay + train.departure_delay
                    statistics.total_arrival_delay = statistics.total_arrival_delay + train.delay
            else:
                statistics.never_departed.append(train)

        departure_delays = [train.departure_delay.total_minutes for train in statistics.delayed]
        arrival_delays = [train.delay.total_minutes for train in statistics.delayed]
        statistics.metrics = {
            'on_time': len(statistics.on_time),
            'delayed': len(statistics.delayed),
            'never_departed': len(statistics.never_departed),
            'mean_departure_delay': float(np.mean(departure_delays)) if departure_delays else 0.0,
            'mean_arrival_delay': float(np.mean(arrival_delays)) if arrival_delays else 0.0,
            'max_arrival_delay': float(np.max(arrival_delays)) if arrival_delays else 0.0,
        }
        return statistics

    def format_statistics(self, statistics: Statistics) -> str:
        summary = [
            ['Number of trains that arrived on time', len(statistics.on_time)],
            ['Number of trains that arrived delayed', len(statistics.delayed)],
            ['Number of trains that never departed', len(statistics.never_departed)],
            ['Total departure delay', str(statistics.total_departure_delay)],
            ['Total arrival delay', str(statistics.total_arrival_delay)],
            ['Mean departure delay of delayed trains (min)',
             f'{statistics.metrics.get("mean_departure_delay", 0.0):.1f}'],
            ['Mean arrival delay of delayed trains (min)',
             f'{statistics.metrics.get("mean_arrival_delay", 0.0):.1f}'],
        ]
        text = tabulate(summary, tablefmt='simple')

        if statistics.delayed:
            rows = [[train.number, train.origin.name, train.destination.name,
                     str(train.departure_delay), str(train.delay)]
                    for train in statistics.delayed]
            text += '\n\nDelayed trains:\n' + tabulate(
                rows, headers=['train', 'from', 'to', 'departure delay', 'arrival delay'], tablefmt='simple')
        if statistics.never_departed:
            rows = [[train.number, train.status.label, train.origin.name, train.destination.name]
                    for train in statistics.never_departed]
            text += '\n\nTrains that never departed:\n' + tabulate(
                rows, headers=['train', 'status', 'from', 'to'], tablefmt='simple')
        return text
