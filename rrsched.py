"""
rrsched.py


Clock-driven simulation of a round-robin scheduler running small
instruction programs that contend for three binary semaphores
(userInput, file, userOutput).


Each program is loaded into its own process; processes arrive at a
given clock cycle, execute one instruction per cycle and rotate through
the ready queue at the end of every time quantum. semWait on a held
resource blocks the process until a matching semSignal wakes every
waiter of that resource.


Usage:
python rrsched.py [-c sysconfig.txt] [-v] [--trace] <arrival> <program> [<arrival> <program> ...]


The last line printed is ``measurements <clock> <executed> <idle>``.
"""


import argparse
import logging
import sys

from rrcore.config import SystemConfig
from rrcore.errors import ConfigError, SimulationError
from rrcore.system import System
from rrio.devices import HostDevices
from rrio.parser import load_program, parse_arrivals, parse_sysconfig
from rrio.trace import QueueTracer


EXIT_OK = 0
EXIT_STARTUP = 1
EXIT_DEADLOCK = 3


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stdout, format='%(message)s')


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='rrsched (round-robin semaphore scheduler simulator)')
    parser.add_argument('programs', nargs='+', metavar='ARRIVAL PROGRAM',
                        help='Arrival clock cycle followed by a program file, repeated')
    parser.add_argument('-c', '--sysconfig', help='Path to sysconfig file')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log scheduling events (-vv for queue movements)')
    parser.add_argument('--trace', action='store_true', help='Print queue tables around every turn')
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    devices = HostDevices()
    try:
        config = parse_sysconfig(args.sysconfig) if args.sysconfig else SystemConfig()
        pairs = parse_arrivals(args.programs)
        if len(pairs) > config.max_processes:
            raise ConfigError(f"at most {config.max_processes} programs can be loaded, got {len(pairs)}")
        programs = [(arrival, load_program(path)) for arrival, path in pairs]
    except SimulationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_STARTUP

    print(f"found {len(programs)} programs")
    print(f"time quantum is {config.time_quantum}")
    observers = [QueueTracer(devices.emit)] if args.trace else []
    s = System(programs, devices, config=config, observers=observers)
    result = s.start()

    for pid, message in sorted(result.faulted.items()):
        print(f"process {pid} faulted: {message}")
    for kind, count in sorted(result.overflows.items()):
        print(f"overflow {kind} {count}")
    if result.deadlocked:
        print(f"deadlock blocked {' '.join(str(pid) for pid in result.blocked)}")
    print(f"measurements {result.clock} {result.executed} {result.idle_ticks}")
    return EXIT_DEADLOCK if result.deadlocked else EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
