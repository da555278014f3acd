"""Standings tables for sets-based and goals-based sports.

Both calculators are pure: they read teams and matches and return freshly
built rows. Sorting relies on Python's stable sort, so teams that are level
on every criterion keep their roster order and the same input always gives
the same table.
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
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from gamescore.constants import SETS_MATCH_WIN_POINTS
from gamescore.models.team import Team
from gamescore.models.tournament import Match
from gamescore.sports.rules import GoalsRules, SetsRules, SportRules


@dataclass
class SetsStandingsRow:
    """One team's line in a sets-based table."""

    team_id: str
    team_name: str
    played: int = 0
    won: int = 0
    lost: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    points_for: int = 0
    points_against: int = 0
    match_points: int = 0

    @property
    def set_diff(self) -> int:
        return self.sets_won - self.sets_lost

    @property
    def diff(self) -> int:
        return self.points_for - self.points_against

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "played": self.played,
            "won": self.won,
            "lost": self.lost,
            "setsWon": self.sets_won,
            "setsLost": self.sets_lost,
            "pointsFor": self.points_for,
            "pointsAgainst": self.points_against,
            "diff": self.diff,
            "matchPoints": self.match_points,
        }


@dataclass
class GoalsStandingsRow:
    """One team's line in a goals-based table."""

    team_id: str
    team_name: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_diff(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "goalsFor": self.goals_for,
            "goalsAgainst": self.goals_against,
            "goalDiff": self.goal_diff,
            "points": self.points,
        }


StandingsRow = Union[SetsStandingsRow, GoalsStandingsRow]
Standings = List[StandingsRow]


def calculate_sets_standings(
    teams: Sequence[Team],
    matches: Iterable[Match],
    config: Optional[SetsRules] = None,
) -> List[SetsStandingsRow]:
    """Build the table for a sets-based sport.

    A match counts once it is completed with at least one recorded set.
    The side that took more sets wins the match and earns 2 match points;
    level set counts award nothing.

    Args:
        teams: Tournament roster, in registration order
        matches: Group-stage matches
        config: Sport rules; accepted for symmetry with the goals calculator

    Returns:
        Rows sorted by match points, set difference, then point difference
    """
    rows = {team.id: SetsStandingsRow(team.id, team.name) for team in teams}

    for match in matches:
        if not match.sets or not match.is_completed:
            continue
        t1 = rows.get(match.team1_id)
        t2 = rows.get(match.team2_id)
        if t1 is None or t2 is None:
            continue

        t1.played += 1
        t2.played += 1

        t1_sets, t2_sets = match.sets_won()
        for set_score in match.sets:
            t1.points_for += set_score.score1
            t1.points_against += set_score.score2
            t2.points_for += set_score.score2
            t2.points_against += set_score.score1

        t1.sets_won += t1_sets
        t1.sets_lost += t2_sets
        t2.sets_won += t2_sets
        t2.sets_lost += t1_sets

        if t1_sets > t2_sets:
            t1.won += 1
            t2.lost += 1
            t1.match_points += SETS_MATCH_WIN_POINTS
        elif t2_sets > t1_sets:
            t2.won += 1
            t1.lost += 1
            t2.match_points += SETS_MATCH_WIN_POINTS

    return sorted(
        rows.values(),
        key=lambda r: (-r.match_points, -r.set_diff, -r.diff),
    )


def calculate_goals_standings(
    teams: Sequence[Team],
    matches: Iterable[Match],
    config: Optional[GoalsRules] = None,
) -> List[GoalsStandingsRow]:
    """Build the table for a goals-based sport.

    A match counts once both scores are present and it is not pending.
    Equal scores only earn draw points when the rules allow draws.

    Args:
        teams: Tournament roster, in registration order
        matches: Group-stage matches
        config: Sport rules; defaults to win 2, draw 1, loss 0, no draws

    Returns:
        Rows sorted by points, goal difference, then goals for
    """
    rules = config or GoalsRules()
    rows = {team.id: GoalsStandingsRow(team.id, team.name) for team in teams}

    for match in matches:
        if not match.has_scores or match.is_pending:
            continue
        t1 = rows.get(match.team1_id)
        t2 = rows.get(match.team2_id)
        if t1 is None or t2 is None:
            continue

        s1, s2 = match.score1, match.score2
        t1.played += 1
        t2.played += 1
        t1.goals_for += s1
        t1.goals_against += s2
        t2.goals_for += s2
        t2.goals_against += s1

        if s1 > s2:
            t1.won += 1
            t2.lost += 1
            t1.points += rules.win_points
            t2.points += rules.loss_points
        elif s2 > s1:
            t2.won += 1
            t1.lost += 1
            t2.points += rules.win_points
            t1.points += rules.loss_points
        elif rules.draw_allowed:
            t1.drawn += 1
            t2.drawn += 1
            t1.points += rules.draw_points
            t2.points += rules.draw_points

    return sorted(
        rows.values(),
        key=lambda r: (-r.points, -r.goal_diff, -r.goals_for),
    )


StandingsCalculator = Callable[[Sequence[Team], Iterable[Match], Any], Standings]

_CALCULATORS: Dict[type, StandingsCalculator] = {
    SetsRules: calculate_sets_standings,
    GoalsRules: calculate_goals_standings,
}


def calculator_for(rules: SportRules) -> StandingsCalculator:
    """Select the calculator for a scoring family."""
    return _CALCULATORS[type(rules)]


def standings_for(tournament, sport) -> Standings:
    """Group-stage standings of ``tournament`` under ``sport``'s rules."""
    return calculator_for(sport.rules)(tournament.teams, tournament.matches, sport.rules)


def ranked_team_ids(standings: Standings) -> List[str]:
    return [row.team_id for row in standings]
