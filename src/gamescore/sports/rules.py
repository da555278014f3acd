"""Scoring rule variants.

Every sport belongs to exactly one scoring family. The family is chosen once,
when the sport is registered, and decides which standings calculator and
which live scorer a tournament uses.
"""

# Game Score
# Copyright (C) 2025  Game Score developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple, Union

from gamescore.constants import (
    DEFAULT_DRAW_POINTS,
    DEFAULT_LOSS_POINTS,
    DEFAULT_WIN_POINTS,
    ENGINE_GOALS,
    ENGINE_SETS,
)
from gamescore.models.tournament import MatchFormat, SetScore


@dataclass(frozen=True)
class QuickButton:
    """A preset score increment offered by the live scorer (e.g. "Try (5)")."""

    label: str
    value: int


@dataclass(frozen=True)
class SetsRules:
    """Rules for sports played in sets or games.

    Attributes
    ----------
    points_per_set : int
        Points needed to take a regular set.
    decider_points : int
        Points needed in the deciding set of a best-of match.
    win_by : int
        Required margin at the target.
    max_points : int or None
        Hard cap; reaching it with a lead ends the set regardless of margin.
    """

    engine: ClassVar[str] = ENGINE_SETS
    draw_allowed: ClassVar[bool] = False

    points_per_set: int
    decider_points: int
    win_by: int = 2
    max_points: Optional[int] = None
    scoring_label: str = "points"

    def set_target(self, match_format: MatchFormat, set_index: int) -> int:
        """Points needed to win the set at ``set_index`` under ``match_format``."""
        if match_format.is_single_set:
            return match_format.points or self.points_per_set
        total = match_format.sets or 1
        if total > 1 and set_index == total - 1 and self.decider_points:
            return self.decider_points
        return match_format.points or self.points_per_set

    def is_set_complete(self, score: SetScore, match_format: MatchFormat, set_index: int) -> bool:
        high = max(score.score1, score.score2)
        low = min(score.score1, score.score2)
        if self.max_points and high >= self.max_points and high > low:
            return True
        if high < self.set_target(match_format, set_index):
            return False
        return high - low >= self.win_by


@dataclass(frozen=True)
class GoalsRules:
    """Rules for sports scored as a running tally (goals, points, tries).

    ``win_points``/``draw_points``/``loss_points`` are standings points, not
    in-match score.
    """

    engine: ClassVar[str] = ENGINE_GOALS

    win_points: int = DEFAULT_WIN_POINTS
    draw_points: int = DEFAULT_DRAW_POINTS
    loss_points: int = DEFAULT_LOSS_POINTS
    draw_allowed: bool = False
    scoring_unit: str = "goal"
    point_increment: int = 1
    quick_buttons: Tuple[QuickButton, ...] = ()


SportRules = Union[SetsRules, GoalsRules]
