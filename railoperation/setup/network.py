from typing import Dict, Iterable, List

import networkx as nx


class Network:
    ''' The stations and the distances between them, with the help of `networkx`.

    The graph is undirected, so a distance entered for A-B is also the distance for B-A.
    Only directly connected stations have a distance, a train can only run between two stations
    that share an edge.

    Methods:
        add_station(self, name: str) -> None
        add_distance(self, station_0: str, station_1: str, distance: float) -> None
        has_route(self, origin: str, destination: str) -> bool
        distance(self, origin: str, destination: str) -> float
        distances_from(self, name: str) -> Dict[str, float]

    '''

    def __init__(self, station_names: Iterable[str] = ()) -> None:
        self._G: nx.Graph = nx.Graph()
        for name in station_names:
            self.add_station(name)

    @property
    def station_names(self) -> List[str]:
        return list(self._G.nodes)

    def add_station(self, name: str) -> None:
        self._G.add_node(name)

    def add_distance(self, station_0: str, station_1: str, distance: float) -> None:
        self._G.add_edge(station_0, station_1, distance=distance)

    def has_station(self, name: str) -> bool:
        return self._G.has_node(name)

    def has_route(self, origin: str, destination: str) -> bool:
        return self._G.has_edge(origin, destination)

    def distance(self, origin: str, destination: str) -> float:
        ''' Get the distance between two directly connected stations.

        Raises:
            KeyError: if the two stations are not connected

        '''
        if not self._G.has_edge(origin, destination):
            raise KeyError(f'no distance between {origin} and {destination}')
        return self._G.edges[origin, destination]['distance']

    def distances_from(self, name: str) -> Dict[str, float]:
        ''' Get the distance table of a station, i.e., {neighbour name -> distance}.

        '''
        return {neighbour: data['distance'] for neighbour, data in self._G[name].items()}

    def is_connected(self) -> bool:
        return self._G.number_of_nodes() > 0 and nx.is_connected(self._G)
