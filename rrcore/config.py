from dataclasses import dataclass, fields

from rrcore.errors import ConfigError


# Defaults of the modelled machine
TIME_QUANTUM = 1
MEMORY_SIZE = 60
MAX_VARIABLES_PER_PROCESS = 3
MAX_PROCESSES = 10
MAX_IDLE_TICKS = 100


@dataclass(frozen=True)
class SystemConfig:
    time_quantum: int = TIME_QUANTUM
    memory_size: int = MEMORY_SIZE
    max_variables: int = MAX_VARIABLES_PER_PROCESS
    max_processes: int = MAX_PROCESSES
    max_idle_ticks: int = MAX_IDLE_TICKS

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigError(f"{f.name} must be a positive integer, got {value!r}")
