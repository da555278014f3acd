"""Type hints used in Game Score."""

from dataclasses import dataclass
from typing import Callable, Generic, Literal, Optional, TypeVar

# Side of a match (team1 / team2)
SIDE_ONE = 1
SIDE_TWO = 2
Side = Literal[1, 2]

MatchStatus = Literal["pending", "in-progress", "completed"]
Phase = Literal["group", "knockout"]
WinnerMode = Literal["table-topper", "knockouts"]
KnockoutRound = Literal["semi-1", "semi-2", "final", "third-place"]
Engine = Literal["sets", "goals"]
GoalsMode = Literal["free", "points", "timed"]
SetFormatType = Literal["best-of", "single"]

# Team id, "draw", "tie" or None
Winner = Optional[str]

# Wall clock in milliseconds, injectable for tests
Clock = Callable[[], float]
# scheduler(delay_seconds, callback)
Scheduler = Callable[[float, Callable[[], None]], None]

T = TypeVar("T")


@dataclass(frozen=True)
class Changed(Generic[T]):
    """A value together with whether producing it changed anything.

    ``value`` is the untouched input whenever ``changed`` is False.
    """

    value: T
    changed: bool

    def __bool__(self) -> bool:
        return self.changed
