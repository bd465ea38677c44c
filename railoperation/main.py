import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from railoperation.config import build_simulation_elements
from railoperation.interface import UserInterface
from railoperation.runner import run
from railoperation.setup.errors import SetupError
from railoperation.simulator.log import LogLevel


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Simulate one day of a rail network')
    parser.add_argument('--config', type=Path, default=Path('config.yaml'),
                        help='path to the run configuration')
    parser.add_argument('--interactive', action='store_true',
                        help='step through the simulation with the menu shell')
    parser.add_argument('--plot', action='store_true',
                        help='show the time-space diagram after a batch run')
    parser.add_argument('--log-level', choices=['off', 'low', 'high'],
                        help='override the log level of the configuration')
    parser.add_argument('--verbose', action='store_true',
                        help='print setup diagnostics')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        blueprint, run_config = build_simulation_elements(args.config)
    except SetupError as error:
        print(f'Error: {error}')
        return 1

    if args.log_level is not None:
        run_config = dataclasses.replace(run_config, log_level=LogLevel.parse(args.log_level))

    if args.interactive:
        try:
            UserInterface(blueprint, run_config).run_start_menu()
        except (EOFError, KeyboardInterrupt):
            print()
    else:
        run(blueprint, run_config, is_plot=args.plot)
    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
