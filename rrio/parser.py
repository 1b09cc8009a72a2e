# Sysconfig, command-line pair and program file parsing
import re
from typing import List, Sequence, Tuple

from rrcore.config import SystemConfig
from rrcore.errors import ConfigError, ProgramLoadError


DIRECTIVES = {
    'timequantum': 'time_quantum',
    'memorysize': 'memory_size',
    'maxvariables': 'max_variables',
    'maxprocesses': 'max_processes',
    'idlelimit': 'max_idle_ticks',
}


def parse_sysconfig(path: str) -> SystemConfig:
    values = {}
    try:
        with open(path, 'r') as fh:
            lines = fh.readlines()
    except OSError as exc:
        raise ConfigError(f"cannot read sysconfig {path}: {exc}") from exc
    for lineno, line in enumerate(lines, 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        parts = re.split(r'\s+', line)
        if parts[0] not in DIRECTIVES or len(parts) < 2:
            raise ConfigError(f"{path}:{lineno}: unrecognised line {line!r}")
        # value may carry a unit suffix, e.g. "timequantum 2cycles"
        m = re.match(r'^(-?\d+)', parts[1])
        if not m:
            raise ConfigError(f"{path}:{lineno}: {parts[0]} needs an integer value")
        values[DIRECTIVES[parts[0]]] = int(m.group(1))
    return SystemConfig(**values)


def parse_arrivals(args: Sequence[str]) -> List[Tuple[int, str]]:
    """Turn ``[t1, file1, t2, file2, ...]`` into ``[(t1, file1), ...]``."""
    if not args:
        raise ConfigError("no programs given")
    if len(args) % 2:
        raise ConfigError(f"Missing program file for arrival time {args[-1]}")
    pairs = []
    for i in range(0, len(args), 2):
        raw_time, path = args[i], args[i + 1]
        try:
            arrival = int(raw_time)
        except ValueError:
            raise ConfigError(f"arrival time must be an integer, got {raw_time!r}") from None
        if arrival < 0:
            raise ConfigError(f"arrival time must not be negative, got {arrival}")
        pairs.append((arrival, path))
    return pairs


def load_program(path: str) -> List[str]:
    """Read instruction lines from ``path``; blank lines are skipped."""
    try:
        with open(path, 'r') as fh:
            return [ln.strip() for ln in fh if ln.strip()]
    except OSError as exc:
        raise ProgramLoadError(path, exc.strerror or str(exc)) from exc
