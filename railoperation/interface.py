import dataclasses
from typing import Callable, List, Optional

from railoperation.setup.blueprint import Blueprint
from railoperation.setup.config_dataclass import RunConfig
from railoperation.setup.utils import format_distance_table, format_vehicle_table
from railoperation.simulator.duration import Duration
from railoperation.simulator.log import LogLevel
from railoperation.simulator.simulator import Simulator
from railoperation.simulator.train import Train
from railoperation.simulator.vehicle import Vehicle


class UserInterface:
    ''' A menu-driven shell over a simulation.

    The start menu sets the start and end time, the simulation menu steps the simulation forward and
    the statistics menu is shown once the simulation is complete. Trains, stations and vehicles can be
    looked up from both of the latter. Input and output go through `input_fn` and `output_fn` so that
    the shell can be scripted.

    Methods:
        run_start_menu(self) -> None
        run_simulation_menu(self) -> None
        run_statistics_menu(self) -> None

    '''

    def __init__(self, blueprint: Blueprint, run_config: RunConfig,
                 input_fn: Callable[[], str] = input,
                 output_fn: Callable[[str], None] = print) -> None:
        self._blueprint: Blueprint = blueprint
        self._run_config: RunConfig = run_config
        self._input: Callable[[], str] = input_fn
        self._output: Callable[[str], None] = output_fn

        self._start_time: Duration = run_config.start_time
        self._end_time: Duration = run_config.end_time
        self._interval: Duration = run_config.interval
        self._simulator: Optional[Simulator] = None

    @property
    def simulator(self) -> Optional[Simulator]:
        return self._simulator

    def get_menu_option(self, number_of_options: int) -> int:
        ''' Read an integer in 0..`number_of_options`, asking again until one is given.

        '''
        while True:
            text = self._input().strip()
            if text.isdecimal() and int(text) <= number_of_options:
                return int(text)
            self._output(f'\nError, please enter a valid option (0-{number_of_options}):')

    def get_number(self) -> int:
        while True:
            text = self._input().strip()
            if text.isdecimal():
                return int(text)
            self._output('\nError, please enter a non-negative number:')

    def run_start_menu(self) -> None:
        self._output('=== Rail Operation Simulator ===')
        while True:
            self._output('\nStart Menu\n'
                         f'1. Change start time [{self._start_time}]\n'
                         f'2. Change end time [{self._end_time}]\n'
                         '3. Start simulation\n'
                         '0. Exit')
            option = self.get_menu_option(3)
            if option == 1:
                self._output('Changing start time')
                self._start_time = self.change_time_setting()
                while self._start_time > self._end_time:
                    self._output('Start time can not be after end time, try again.')
                    self._start_time = self.change_time_setting()
            elif option == 2:
                self._output('Changing end time')
                self._end_time = self.change_time_setting()
                while self._start_time > self._end_time:
                    self._output('Start time can not be after end time, try again.')
                    self._end_time = self.change_time_setting()
            elif option == 3:
                self.run_simulation_menu()
                return
            else:
                return

    def run_simulation_menu(self) -> None:
        run_config = dataclasses.replace(self._run_config, start_time=self._start_time,
                                         end_time=self._end_time, interval=self._interval)
        self._simulator = Simulator(self._blueprint, run_config)
        simulator = self._simulator

        while True:
            # go to statistics once the simulation is complete
            if simulator.time > self._end_time or (simulator.is_finished and simulator.is_done):
                self.run_statistics_menu()
                return

            self._output(f'\nSimulation menu. Current time: [{simulator.time}]\n'
                         f'1. Change interval [{self._interval}]\n'
                         '2. Run next interval\n'
                         '3. Next event\n'
                         '4. Complete simulation\n'
                         f'5. Change log level [{simulator.log_level.label}]\n'
                         '6. Train menu\n'
                         '7. Station menu\n'
                         '8. Vehicle menu\n'
                         '0. Exit')
            option = self.get_menu_option(8)
            if option == 1:
                self._output('Changing interval')
                self._interval = self.change_time_setting()
            elif option == 2:
                simulator.run_interval(self._interval)
            elif option == 3:
                if simulator.step() is None:
                    self._output('No more events.')
            elif option == 4:
                simulator.complete()
                self.run_statistics_menu()
                return
            elif option == 5:
                self.change_log_level()
            elif option == 6:
                self.run_train_menu()
            elif option == 7:
                self.run_station_menu()
            elif option == 8:
                self.run_vehicle_menu()
            else:
                return

    def run_statistics_menu(self) -> None:
        while True:
            self._output(f'\nStatistics menu. Current time: [{self._simulator.time}]\n'
                         f'1. Change log level [{self._simulator.log_level.label}]\n'
                         '2. Print statistics\n'
                         '3. Train menu\n'
                         '4. Station menu\n'
                         '5. Vehicle menu\n'
                         '0. Exit')
            option = self.get_menu_option(5)
            if option == 1:
                self.change_log_level()
            elif option == 2:
                self._output(self._simulator.format_statistics())
            elif option == 3:
                self.run_train_menu()
            elif option == 4:
                self.run_station_menu()
            elif option == 5:
                self.run_vehicle_menu()
            else:
                return

    def run_train_menu(self) -> None:
        while True:
            self._output('\nTrain menu\n'
                         '1. Search train by number\n'
                         '2. Search train by vehicle id\n'
                         f'3. Change log level [{self._simulator.log_level.label}]\n'
                         '0. Return')
            option = self.get_menu_option(3)
            if option == 1:
                self.find_train_by_number()
            elif option == 2:
                self.find_train_by_vehicle_id()
            elif option == 3:
                self.change_log_level()
            else:
                return

    def run_station_menu(self) -> None:
        while True:
            self._output('\nStation menu\n'
                         '1. Show station names\n'
                         '2. Find station by name\n'
                         '3. Show distance table\n'
                         f'4. Change log level [{self._simulator.log_level.label}]\n'
                         '0. Return')
            option = self.get_menu_option(4)
            if option == 1:
                self._output('\nStation Names:\n' + '\n'.join(self._simulator.controller.station_names))
            elif option == 2:
                self.find_station_by_name()
            elif option == 3:
                names = self._simulator.controller.station_names
                distances = {name: station.distances for name, station in self._simulator.stations.items()}
                self._output(format_distance_table(distances, names))
            elif option == 4:
                self.change_log_level()
            else:
                return

    def run_vehicle_menu(self) -> None:
        while True:
            self._output('\nVehicle menu\n'
                         '1. Find vehicle by id\n'
                         '2. Show all vehicles\n'
                         f'3. Change log level [{self._simulator.log_level.label}]\n'
                         '0. Return')
            option = self.get_menu_option(3)
            if option == 1:
                self.find_vehicle_by_id()
            elif option == 2:
                vehicles = sorted(self._simulator.vehicles.values(), key=lambda vehicle: vehicle.vehicle_id)
                self._output(format_vehicle_table(vehicles))
            elif option == 3:
                self.change_log_level()
            else:
                return

    def change_time_setting(self) -> Duration:
        self._output('Enter new hour:')
        hour = self.get_menu_option(23)
        self._output('\nEnter new minute:')
        minute = self.get_menu_option(59)
        return Duration(hour, minute)

    def change_log_level(self) -> None:
        self._output(f'Change log level [{self._simulator.log_level.label}]\n'
                     '1. Low\n'
                     '2. High\n'
                     '3. Off\n'
                     '0. Return')
        option = self.get_menu_option(3)
        if option == 1:
            self._simulator.log_level = LogLevel.LOW
        elif option == 2:
            self._simulator.log_level = LogLevel.HIGH
        elif option == 3:
            self._simulator.log_level = LogLevel.OFF

    def find_train_by_number(self) -> None:
        self._output('Enter train number:')
        train = self._simulator.find_train(self.get_number())
        if train is None:
            self._output('Train not found, check train number.')
            return
        self._output('Train found:\n' + str(train))
        self._output_roster(train)

    def find_train_by_vehicle_id(self) -> None:
        self._output('Enter vehicle id:')
        vehicle_id = self.get_number()
        if self._simulator.find_vehicle(vehicle_id) is None:
            self._output('Vehicle not found, check id.')
            return
        train = self._simulator.find_train_by_vehicle(vehicle_id)
        if train is None:
            self._output('Vehicle is not connected to a train.')
            return
        self._output('Vehicle is attached to:\n' + str(train))
        self._output_roster(train)

    def find_station_by_name(self) -> None:
        self._output('Enter station name:')
        station = self._simulator.find_station(self._input().strip())
        if station is None:
            self._output('Station not found, check name.')
            return
        lines = [station.name, 'Connected vehicles:']
        for vehicle in station.vehicles:
            lines.append(vehicle.info)
            if self._simulator.log_level == LogLevel.HIGH:
                lines.extend(vehicle.history_lines)
        self._output('\n'.join(lines))

    def find_vehicle_by_id(self) -> None:
        self._output('Enter vehicle id:')
        vehicle = self._simulator.find_vehicle(self.get_number())
        if vehicle is None:
            self._output('Vehicle not found, check id.')
            return
        lines = ['', vehicle.info]
        if vehicle.train_number is not None:
            lines.append(f'Last connected to train: {vehicle.train_number}')
        elif vehicle.station_name is not None:
            lines.append(f'Last connected to station: {vehicle.station_name}')
        if self._simulator.log_level == LogLevel.HIGH:
            lines.append('Full history:')
            lines.extend(vehicle.history_lines)
        self._output('\n'.join(lines))

    def _output_roster(self, train: Train) -> None:
        # the roster is only shown at the high log level
        if self._simulator.log_level != LogLevel.HIGH:
            return
        vehicles: List[Vehicle] = train.vehicles
        lines = [f'Connected vehicles: {len(vehicles)}']
        for vehicle in vehicles:
            lines.append(vehicle.info)
            lines.extend(vehicle.history_lines)
        self._output('\n'.join(lines))
