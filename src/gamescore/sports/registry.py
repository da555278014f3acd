"""Registry of supported sports and their scoring rules."""

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

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from gamescore.constants import ENGINE_GOALS, ENGINE_SETS, STORAGE_KEY_PREFIX
from gamescore.exceptions import SportNotFoundException
from gamescore.sports.rules import GoalsRules, QuickButton, SetsRules, SportRules


@dataclass(frozen=True)
class Sport:
    """A registered sport.

    Attributes
    ----------
    id : str
        Registry key, also used in the store key.
    name : str
        Display name, used in user-facing messages.
    rules : SetsRules or GoalsRules
        Scoring family and its parameters.
    standings_columns : tuple of str
        Column headings for the standings table.
    """

    id: str
    name: str
    icon: str
    desc: str
    rules: SportRules
    standings_columns: Tuple[str, ...] = ()
    features: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def engine(self) -> str:
        return self.rules.engine

    @property
    def storage_key(self) -> str:
        return f"{STORAGE_KEY_PREFIX}{self.id}"

    @property
    def draw_allowed(self) -> bool:
        return self.rules.draw_allowed


_SETS_COLUMNS = ("P", "W", "L", "GW", "GL", "PF", "PA", "+/-", "Pts")
_GOALS_COLUMNS = ("P", "W", "D", "L", "GF", "GA", "GD", "Pts")

SPORT_REGISTRY: Dict[str, Sport] = {
    # Sets family
    "volleyball": Sport(
        id="volleyball",
        name="Volleyball",
        icon="🏐",
        desc="Sets, rally scoring, deuce",
        rules=SetsRules(points_per_set=25, decider_points=15, win_by=2),
        standings_columns=("P", "W", "L", "SW", "SL", "PF", "PA", "+/-", "Pts"),
        features=("Rally point scoring", "First to 25 (15 in decider)", "Win by 2 at deuce"),
    ),
    "badminton": Sport(
        id="badminton",
        name="Badminton",
        icon="🏸",
        desc="Rally points, best of 3",
        rules=SetsRules(points_per_set=21, decider_points=21, win_by=2, max_points=30),
        standings_columns=_SETS_COLUMNS,
        features=("Best of 3 games to 21", "Win by 2 (cap at 30)"),
    ),
    "tabletennis": Sport(
        id="tabletennis",
        name="Table Tennis",
        icon="🏓",
        desc="Best of 5/7, 11 points",
        rules=SetsRules(points_per_set=11, decider_points=11, win_by=2),
        standings_columns=_SETS_COLUMNS,
        features=("Best of 5 or 7 games", "11 points per game"),
    ),
    "tennis": Sport(
        id="tennis",
        name="Tennis",
        icon="🎾",
        desc="Sets, games, tiebreaks",
        rules=SetsRules(points_per_set=6, decider_points=6, win_by=2, scoring_label="games"),
        standings_columns=("P", "W", "L", "SW", "SL", "GW", "GL", "+/-", "Pts"),
        features=("Best of 3 or 5 sets", "Games to 6 per set"),
    ),
    "pickleball": Sport(
        id="pickleball",
        name="Pickleball",
        icon="🏓",
        desc="Rally scoring, fastest growing",
        rules=SetsRules(points_per_set=11, decider_points=11, win_by=2),
        standings_columns=_SETS_COLUMNS,
        features=("Rally point scoring", "Best of 3 games to 11"),
    ),
    "squash": Sport(
        id="squash",
        name="Squash",
        icon="🎾",
        desc="PAR scoring, best of 3/5",
        rules=SetsRules(points_per_set=11, decider_points=11, win_by=2),
        standings_columns=_SETS_COLUMNS,
        features=("Point-a-rally scoring", "Best of 3 or 5 games"),
    ),
    # Goals family
    "football": Sport(
        id="football",
        name="Football",
        icon="⚽",
        desc="Goals, draws, goal difference",
        rules=GoalsRules(win_points=3, draw_points=1, loss_points=0, draw_allowed=True),
        standings_columns=_GOALS_COLUMNS,
        features=("3 points for a win", "Draws allowed", "Goal difference ranking"),
    ),
    "basketball": Sport(
        id="basketball",
        name="Basketball",
        icon="🏀",
        desc="Points, no draws",
        rules=GoalsRules(
            win_points=2,
            loss_points=0,
            draw_allowed=False,
            scoring_unit="point",
            quick_buttons=(
                QuickButton("+1", 1),
                QuickButton("+2", 2),
                QuickButton("+3", 3),
            ),
        ),
        standings_columns=("P", "W", "D", "L", "PF", "PA", "+/-", "Pts"),
        features=("1/2/3 point scoring", "No draws (OT)"),
    ),
    "hockey": Sport(
        id="hockey",
        name="Hockey",
        icon="🏑",
        desc="Goals, GD standings",
        rules=GoalsRules(win_points=3, draw_points=1, loss_points=0, draw_allowed=True),
        standings_columns=_GOALS_COLUMNS,
        features=("3 points for a win", "Draws allowed"),
    ),
    "handball": Sport(
        id="handball",
        name="Handball",
        icon="🤾",
        desc="Fast-paced goals",
        rules=GoalsRules(win_points=2, draw_points=1, loss_points=0, draw_allowed=True),
        standings_columns=_GOALS_COLUMNS,
        features=("High-scoring matches", "Draws allowed"),
    ),
    "futsal": Sport(
        id="futsal",
        name="Futsal",
        icon="⚽",
        desc="Indoor football, 5v5",
        rules=GoalsRules(win_points=3, draw_points=1, loss_points=0, draw_allowed=True),
        standings_columns=_GOALS_COLUMNS,
        features=("Indoor 5v5", "3 points for a win"),
    ),
    "kabaddi": Sport(
        id="kabaddi",
        name="Kabaddi",
        icon="🤼",
        desc="Raids, tackles, all-out",
        rules=GoalsRules(
            win_points=2,
            loss_points=0,
            draw_allowed=True,
            scoring_unit="point",
            quick_buttons=(
                QuickButton("+1", 1),
                QuickButton("Super Tackle (+2)", 2),
                QuickButton("All Out (+2)", 2),
            ),
        ),
        standings_columns=("P", "W", "D", "L", "SF", "SA", "SD", "Pts"),
        features=("Raid & tackle points", "Super tackle bonus"),
    ),
    "rugby": Sport(
        id="rugby",
        name="Rugby",
        icon="🏉",
        desc="Try, conversion, penalty, drop",
        rules=GoalsRules(
            win_points=4,
            draw_points=2,
            loss_points=0,
            draw_allowed=True,
            scoring_unit="point",
            quick_buttons=(
                QuickButton("Penalty (3)", 3),
                QuickButton("Try (5)", 5),
                QuickButton("Try+Conv (7)", 7),
                QuickButton("Drop (3)", 3),
            ),
        ),
        standings_columns=("P", "W", "D", "L", "PF", "PA", "+/-", "Pts"),
        features=("Try (5) + Conversion (2)", "Penalty goal (3)"),
    ),
}


def get_sport(sport_id: str) -> Sport:
    """Look up a sport by id.

    Raises:
        SportNotFoundException: If the id is not registered
    """
    try:
        return SPORT_REGISTRY[sport_id]
    except KeyError:
        raise SportNotFoundException(f"Unknown sport: {sport_id}") from None


def find_sport(sport_id: Optional[str]) -> Optional[Sport]:
    """Like :func:`get_sport` but returns None for unknown ids."""
    if not sport_id:
        return None
    return SPORT_REGISTRY.get(sport_id)


def get_sports_list() -> List[Sport]:
    return list(SPORT_REGISTRY.values())


def get_sets_sports() -> List[Sport]:
    return [s for s in SPORT_REGISTRY.values() if s.engine == ENGINE_SETS]


def get_goals_sports() -> List[Sport]:
    return [s for s in SPORT_REGISTRY.values() if s.engine == ENGINE_GOALS]
