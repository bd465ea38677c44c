from typing import Dict, List, Sequence

from tabulate import tabulate

from railoperation.simulator.train import Train
from railoperation.simulator.vehicle import Vehicle


def format_distance_table(distances: Dict[str, Dict[str, float]], station_names: List[str]) -> str:
    """
    Formats a dictionary of distance tables as a matrix-like table, following the sequence of station names.

    Args:
        distances (Dict[str, Dict[str, float]]): {station name -> {neighbour name -> distance}}.
                                                 Stations without a direct connection are left blank.
        station_names (List[str]): The sequence of rows and columns in the matrix.

    Returns:
        str: The rendered table.
    """
    rows = []
    for name in station_names:
        if name in distances:
            row = [name] + [distances[name].get(col_name, '')
                            for col_name in station_names]
            rows.append(row)

    return tabulate(rows, headers=[""] + station_names,
                    floatfmt=".0f", tablefmt="simple")


def format_train_table(trains: Sequence[Train]) -> str:
    """
    Formats the timetable and the running state of trains, one row per train.
    """
    headers = ['train', 'status', 'from', 'departure', 'current',
               'to', 'arrival', 'current', 'delay', 'speed']
    rows = [[train.number, train.status.label,
             train.origin.name, str(train.original_departure), str(train.current_departure),
             train.destination.name, str(train.original_arrival), str(train.current_arrival),
             str(train.delay), train.speed]
            for train in trains]
    return tabulate(rows, headers=headers, floatfmt=".1f", tablefmt="simple")


def format_vehicle_table(vehicles: Sequence[Vehicle]) -> str:
    rows = []
    for vehicle in vehicles:
        if vehicle.train_number is not None:
            location = f'train {vehicle.train_number}'
        elif vehicle.station_name is not None:
            location = f'station {vehicle.station_name}'
        else:
            location = '-'
        rows.append([vehicle.vehicle_id, vehicle.kind.label, location])
    return tabulate(rows, headers=['id', 'kind', 'location'], tablefmt="simple")
