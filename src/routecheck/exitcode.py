from enum import Enum, unique

__all__ = ["ExitCode"]


@unique
class ExitCode(Enum):
    SUCCESS = 0
    USAGE = 1
    NO_DESTINATION = 2
    PROBE_RESOURCE = 3
    UNREACHABLE = 4
