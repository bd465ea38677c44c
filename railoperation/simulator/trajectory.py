from typing import Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure

from .train import Train, TrainStatus


def plot_time_space_diagram(trains: Sequence[Train], show: bool = True) -> Figure:
    ''' Plot the run of every departed train as a line from its origin (0 km) to its destination.

    Trains that never left their origin are not plotted. Delayed trains are drawn in red.

    Args:
        trains: the trains of a run
        show: whether to show the figure

    Returns:
        the figure

    '''
    fig, ax = plt.subplots()
    ax.set_xlabel('Time (min)', fontsize=12)
    ax.set_ylabel('Distance from origin (km)', fontsize=12)

    for train in trains:
        if train.status < TrainStatus.RUNNING:
            continue
        distance = train.origin.distance_to(train.destination.name)
        x = [train.current_departure.total_minutes, train.current_arrival.total_minutes]
        y = [0.0, distance]
        color = 'k' if train.delay.total_minutes == 0 else 'red'
        ax.plot(x, y, color=color)
        ax.annotate(str(train.number), (x[1], y[1]), fontsize=8)

    if show:
        plt.show()
    return fig
