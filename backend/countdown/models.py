from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Start:
    name = 'Start'


@dataclass(frozen=True)
class Stop:
    name = 'Stop'


@dataclass(frozen=True)
class Reset:
    name = 'Reset'


@dataclass(frozen=True)
class SetTime:
    minutes: int
    seconds: int

    name = 'SetTime'

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60 + self.seconds


Command = Union[Start, Stop, Reset, SetTime]


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time projection of the shared timer, taken under its lock."""
    running: bool
    time_left: float
    finished: bool = False
