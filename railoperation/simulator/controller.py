from typing import Dict, List, Optional

from typing_extensions import override

from .duration import Duration
from .event import Event, EventKind
from .log import TrainLog
from .scheduler import Scheduler, StageHandler
from .station import Station
from .train import Train, TrainStatus
from .vehicle import Vehicle

# assembly starts this long before the scheduled departure
ASSEMBLY_LEAD_TIME = Duration(0, 30)
# an assembled train reaches the platform this long before departure
PLATFORM_LEAD_TIME = Duration(0, 10)
# delay added to a train each time its assembly comes up short
SHORTAGE_DELAY = Duration(0, 10)
RETRY_INTERVAL = Duration(0, 10)
# dwell at the destination platform before disassembly
DISASSEMBLY_DWELL = Duration(0, 20)
# assembly retries are never carried into the next day
END_OF_OPERATING_DAY = Duration(24, 0)


class Controller(StageHandler):
    ''' Carry out the lifecycle stages of trains and keep trains, stations and vehicles consistent.

    The controller is the only component that moves vehicles between station pools and trains.
    Every stage schedules the next stage of the same train (if any) and writes a record to the train log.

    Properties:
        stations: {station name -> Station}
        vehicles: {vehicle id -> Vehicle}
        trains: all trains in roster order
        train_log: the TrainLog the stages write to

    Methods:
        schedule_assembly_events(self) -> None
        attempt_assembly(self, train: Train) -> bool
        ready_up(self, train: Train) -> None
        depart(self, train: Train) -> None
        arrive(self, train: Train) -> None
        disassemble(self, train: Train) -> None
        ignore_departed_trains(self, t: Duration) -> None
        find_station(self, name: str) -> Optional[Station]
        find_train(self, number: int) -> Optional[Train]
        find_vehicle(self, vehicle_id: int) -> Optional[Vehicle]
        find_train_by_vehicle(self, vehicle_id: int) -> Optional[Train]

    '''

    def __init__(self, scheduler: Scheduler, train_log: TrainLog,
                 stations: Dict[str, Station], vehicles: Dict[int, Vehicle], trains: List[Train]) -> None:
        self._scheduler: Scheduler = scheduler
        self._train_log: TrainLog = train_log
        self._stations: Dict[str, Station] = stations
        self._vehicles: Dict[int, Vehicle] = vehicles
        self._trains: List[Train] = trains

        self._scheduler.bind(self)

    @property
    def stations(self) -> Dict[str, Station]:
        return self._stations

    @property
    def vehicles(self) -> Dict[int, Vehicle]:
        return self._vehicles

    @property
    def trains(self) -> List[Train]:
        return self._trains

    @property
    def train_log(self) -> TrainLog:
        return self._train_log

    @property
    def station_names(self) -> List[str]:
        return list(self._stations)

    def schedule_assembly_events(self) -> None:
        ''' Schedule the first assembly attempt of every train, half an hour before its departure
        but never before the start of the day.

        '''
        for train in self._trains:
            assembly_time = max(train.current_departure - ASSEMBLY_LEAD_TIME, Duration())
            self._scheduler.schedule(Event(assembly_time, EventKind.ASSEMBLY, train))

    @override
    def attempt_assembly(self, train: Train) -> bool:
        ''' Try to take every still required vehicle out of the pool of the origin station.

        Vehicles that are available are attached even if others are missing, so a later attempt
        only has to find the rest. On success the train is assembled, its top speed is capped by
        its slowest locomotive and it is sent to the platform ten minutes before departure.
        On a shortage the train is delayed by ten minutes and a new attempt is scheduled ten minutes
        later, as long as that attempt still falls within the first day.

        Args:
            train: the train to assemble

        Returns:
            whether all vehicles required at the time of the call were attached

        '''
        t = self._scheduler.time
        station = train.origin

        is_complete = True
        for kind in train.required_kinds:
            vehicle = station.detach(kind)
            if vehicle is None:
                is_complete = False
                continue
            vehicle.add_history(
                f'Disconnected from train pool at station {station.name}', t)
            train.attach_vehicle(vehicle)
            vehicle.add_history(f'Connected to train {train.number}', t)

        if is_complete:
            for vehicle in train.vehicles:
                if vehicle.top_speed is not None:
                    train.cap_top_speed(vehicle.top_speed)
            train.set_status(TrainStatus.ASSEMBLED)

            ready_time = max(train.current_departure - PLATFORM_LEAD_TIME, t)
            self._train_log.record_when_assembled(t, train, ready_time)
            self._scheduler.schedule(Event(ready_time, EventKind.READY, train))
        else:
            train.set_status(TrainStatus.INCOMPLETE)
            train.add_delay(SHORTAGE_DELAY)

            next_try: Optional[Duration] = t + RETRY_INTERVAL
            if next_try >= END_OF_OPERATING_DAY:
                next_try = None
            self._train_log.record_when_incomplete(t, train, next_try)
            if next_try is not None:
                self._scheduler.schedule(
                    Event(next_try, EventKind.ASSEMBLY, train))

        return is_complete

    @override
    def ready_up(self, train: Train) -> None:
        train.set_status(TrainStatus.READY)
        self._train_log.record_when_ready(self._scheduler.time, train)
        self._scheduler.schedule(
            Event(train.current_departure, EventKind.DEPARTURE, train))

    @override
    def depart(self, train: Train) -> None:
        ''' Send the train off and choose its speed to recover as much delay as possible.

        The speed required to arrive at the original arrival time is used if the train can reach it.
        Otherwise (the original arrival has already passed, or the required speed is above the top speed)
        the train runs at top speed and arrives as early as it can.

        '''
        t = self._scheduler.time
        train.set_status(TrainStatus.RUNNING)

        distance = train.origin.distance_to(train.destination.name)
        travel_time = train.original_arrival - train.current_departure
        travel_hours = travel_time.as_hours()
        required_speed = distance / travel_hours if travel_hours > 0 else 0.0

        if 0 < required_speed <= train.top_speed:
            train.speed = required_speed
        else:
            train.speed = train.top_speed
            travel_time = Duration.from_hours(distance / train.top_speed)

        train.current_arrival = train.current_departure + travel_time
        train.delay = train.current_arrival - train.original_arrival

        self._train_log.record_when_departure(t, train)
        self._scheduler.schedule(
            Event(train.current_arrival, EventKind.ARRIVAL, train))

    @override
    def arrive(self, train: Train) -> None:
        t = self._scheduler.time
        train.set_status(TrainStatus.ARRIVED)

        disassembly_time = t + DISASSEMBLY_DWELL
        self._train_log.record_when_arrival(t, train, disassembly_time)
        self._scheduler.schedule(
            Event(disassembly_time, EventKind.DISASSEMBLY, train))

    @override
    def disassemble(self, train: Train) -> None:
        ''' Return every vehicle of the train, in attachment order, to the pool of the destination station.

        This is the last stage, nothing is scheduled afterwards.

        '''
        t = self._scheduler.time
        train.set_status(TrainStatus.FINISHED)
        station = train.destination

        vehicles: List[Vehicle] = []
        vehicle = train.detach_vehicle()
        while vehicle is not None:
            vehicle.add_history(f'Disconnected from train {train.number}', t)
            station.attach(vehicle)
            vehicle.add_history(
                f'Connected to train pool at station {station.name}', t)
            vehicles.append(vehicle)
            vehicle = train.detach_vehicle()

        self._train_log.record_when_disassembled(t, train, vehicles)

    def ignore_departed_trains(self, t: Duration) -> None:
        ''' Flag the trains that departed before `t` so that their remaining stages are not logged.

        '''
        for train in self._trains:
            if train.current_departure < t:
                train.ignore = True

    def find_station(self, name: str) -> Optional[Station]:
        return self._stations.get(name)

    def find_train(self, number: int) -> Optional[Train]:
        for train in self._trains:
            if train.number == number:
                return train
        return None

    def find_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        return self._vehicles.get(vehicle_id)

    def find_train_by_vehicle(self, vehicle_id: int) -> Optional[Train]:
        ''' Find the train a vehicle is attached to, None if the vehicle is unknown or idle at a station.

        '''
        vehicle = self.find_vehicle(vehicle_id)
        if vehicle is None or vehicle.train_number is None:
            return None
        return self.find_train(vehicle.train_number)
