"""Fixture generation for the group stage and the knockout bracket."""

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

from typing import Iterable, List, Sequence

from gamescore.constants import (
    ROUND_FINAL,
    ROUND_LABELS,
    ROUND_SEMI_1,
    ROUND_SEMI_2,
    ROUND_THIRD_PLACE,
)
from gamescore.models.team import Team
from gamescore.models.tournament import KnockoutConfig, KnockoutMatch, Match
from gamescore.utils import generate_id, setup_logger

logger = setup_logger(__name__)


def generate_round_robin_matches(teams: Sequence[Team]) -> List[Match]:
    """Create one pending match for every pair of teams.

    Teams meet in roster order: team ``i`` is always side 1 against every
    later team ``j``.
    """
    batch = generate_id()
    matches = [
        Match(id=f"{batch}-{i}-{j}", team1_id=teams[i].id, team2_id=teams[j].id)
        for i in range(len(teams))
        for j in range(i + 1, len(teams))
    ]
    logger.debug(f"Generated {len(matches)} round-robin matches for {len(teams)} teams")
    return matches


def _knockout_match(batch: str, round_name: str, team1_id=None, team2_id=None) -> KnockoutMatch:
    return KnockoutMatch(
        id=f"ko-{round_name}-{batch}",
        team1_id=team1_id,
        team2_id=team2_id,
        round=round_name,
        label=ROUND_LABELS[round_name],
    )


def generate_knockout_matches(
    ranked_team_ids: Sequence[str], config: KnockoutConfig
) -> List[KnockoutMatch]:
    """Seed a bracket from a ranked list of team ids.

    With four teams advancing, seeds meet 1v4 and 2v3 in the semi-finals and
    the final (plus third-place match when configured) starts with empty
    slots. With two advancing, the top two go straight into the final.

    Args:
        ranked_team_ids: Team ids, best first
        config: Knockout settings

    Returns:
        The bracket, or an empty list when too few teams are ranked
    """
    seeds = list(ranked_team_ids[: config.teams_advancing])
    if len(seeds) < config.teams_advancing:
        logger.warning(
            f"Cannot seed knockout: {config.teams_advancing} teams needed, "
            f"{len(seeds)} ranked"
        )
        return []

    batch = generate_id()
    if config.teams_advancing == 2:
        return [_knockout_match(batch, ROUND_FINAL, seeds[0], seeds[1])]

    bracket = [
        _knockout_match(batch, ROUND_SEMI_1, seeds[0], seeds[3]),
        _knockout_match(batch, ROUND_SEMI_2, seeds[1], seeds[2]),
        _knockout_match(batch, ROUND_FINAL),
    ]
    if config.third_place_match:
        bracket.append(_knockout_match(batch, ROUND_THIRD_PLACE))
    return bracket


def get_total_match_count(team_count: int) -> int:
    return team_count * (team_count - 1) // 2


def get_completed_match_count(matches: Iterable[Match]) -> int:
    return sum(1 for m in matches if m.is_completed)
