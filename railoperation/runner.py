from railoperation.setup.blueprint import Blueprint
from railoperation.setup.config_dataclass import RunConfig
from railoperation.setup.utils import format_train_table
from railoperation.simulator.simulator import Simulator
from railoperation.simulator.tracer import Statistics
from railoperation.simulator.trajectory import plot_time_space_diagram


def run(blueprint: Blueprint, run_config: RunConfig, is_plot: bool = False) -> Statistics:
    ''' Run the simulation to the end and return the statistics

    Given a `blueprint`, run the simulation from the start time to the end time of `run_config`,
    finish the trains that are still under way and print the train table and the statistics.

    Args:
        blueprint: blueprint that provides the network and the train roster as a whole
        run_config: configuration for running the simulation
        is_plot: whether to show the time-space diagram of the trains at the end

    Returns:
        statistics: the on time, delayed and never departed trains and the delay totals

    '''
    simulator = Simulator(blueprint, run_config)
    simulator.complete()

    statistics = simulator.get_statistics()
    print(f'---------- simulation finished at {simulator.time} ------------')
    print(format_train_table(simulator.trains))
    print()
    print(simulator.format_statistics())
    if run_config.log_file is not None:
        print(f'log written to {run_config.log_file}')

    if is_plot:
        plot_time_space_diagram(simulator.trains)
    return statistics
