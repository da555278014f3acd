"""Phase transitions and bracket seeding for the knockout stage.

The manager is called opportunistically after every result change, so every
operation is safe to repeat: missing configuration, an already seeded
bracket or missing teams all leave the input untouched. Operations that may
produce a new value return a :class:`~gamescore.type_hints.Changed` whose
``value`` is the identical input object when nothing changed.
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

from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple

from gamescore.constants import (
    ROUND_FINAL,
    ROUND_SEMI_1,
    ROUND_SEMI_2,
    ROUND_THIRD_PLACE,
    WINNER_MODE_KNOCKOUTS,
    WINNER_MODE_TABLE_TOPPER,
)
from gamescore.controllers.tournament.round_robin import generate_knockout_matches
from gamescore.models.team import Team, find_team
from gamescore.models.tournament import KnockoutMatch, Match, Tournament
from gamescore.standings import Standings, ranked_team_ids
from gamescore.type_hints import Changed
from gamescore.utils import setup_logger

logger = setup_logger(__name__)

_SEEDED_ROUNDS = (ROUND_FINAL, ROUND_THIRD_PLACE)


def _find_round(matches: Sequence[KnockoutMatch], round_name: str) -> Optional[KnockoutMatch]:
    return next((m for m in matches if m.round == round_name), None)


def _same_id(left, right) -> bool:
    return left == right or str(left) == str(right)


class KnockoutManager:
    """Decides when the knockout stage starts and keeps the bracket seeded.

    State machine::

        group --(all group matches done, knockout configured, not seeded)--> knockout

    Inside the knockout stage, completing both semi-finals seeds the final
    and third-place match; clearing a semi-final result rolls that seeding
    back.
    """

    # ========== Phase transition ==========

    @staticmethod
    def is_group_stage_complete(matches: Sequence[Match]) -> bool:
        """True iff there is at least one match and every match is completed."""
        return len(matches) > 0 and all(m.is_completed for m in matches)

    def initialize_knockout_stage(
        self, tournament: Tournament, standings: Standings
    ) -> Changed[Tournament]:
        """Seed the bracket from final group standings and enter the knockout phase.

        This is one-shot: once knockout matches exist the tournament is
        returned as is, even if the standings have since moved.

        Args:
            tournament: Tournament at the end of its group stage
            standings: Ranked standings rows, best first

        Returns:
            Changed tournament; ``changed`` is False for every no-op path
        """
        if tournament.knockout_config is None:
            return Changed(tournament, False)
        if tournament.knockout_matches:
            return Changed(tournament, False)

        bracket = generate_knockout_matches(
            ranked_team_ids(standings), tournament.knockout_config
        )
        if not bracket:
            return Changed(tournament, False)

        return Changed(tournament.enter_knockout_phase(bracket), True)

    # ========== Reseeding ==========

    def update_knockout_bracket(
        self, knockout_matches: List[KnockoutMatch]
    ) -> Changed[List[KnockoutMatch]]:
        """Propagate semi-final results into the final and third-place match.

        Slots are only filled on pending matches with an empty slot, so a
        second pass over its own output is a no-op. If a semi-final is no
        longer complete but a pending final or third-place match still holds
        teams, those slots are cleared.

        Args:
            knockout_matches: Current bracket

        Returns:
            Changed list; the identical list object when nothing changed
        """
        semi1 = _find_round(knockout_matches, ROUND_SEMI_1)
        semi2 = _find_round(knockout_matches, ROUND_SEMI_2)
        if semi1 is None or semi2 is None:
            return Changed(knockout_matches, False)

        if not (semi1.is_completed and semi2.is_completed):
            return self._roll_back_seeding(knockout_matches)

        if semi1.loser() is None or semi2.loser() is None:
            logger.warning("Semi-final completed without a decided winner; bracket not seeded")
            return Changed(knockout_matches, False)

        seeds = {
            ROUND_FINAL: (semi1.winner, semi2.winner),
            ROUND_THIRD_PLACE: (semi1.loser(), semi2.loser()),
        }
        changed = False
        updated = []
        for match in knockout_matches:
            if (
                match.round in seeds
                and match.is_pending
                and not (match.team1_id and match.team2_id)
            ):
                team1_id, team2_id = seeds[match.round]
                match = replace(match, team1_id=team1_id, team2_id=team2_id)
                changed = True
                logger.info(f"Seeded {match.label}: {team1_id} vs {team2_id}")
            updated.append(match)

        if not changed:
            return Changed(knockout_matches, False)
        return Changed(updated, True)

    def _roll_back_seeding(
        self, knockout_matches: List[KnockoutMatch]
    ) -> Changed[List[KnockoutMatch]]:
        stale = [
            m
            for m in knockout_matches
            if m.round in _SEEDED_ROUNDS and m.is_pending and (m.team1_id or m.team2_id)
        ]
        if not stale:
            return Changed(knockout_matches, False)

        logger.info(f"Semi-final result cleared; resetting {len(stale)} seeded matches")
        updated = [
            replace(m, team1_id=None, team2_id=None)
            if m.round in _SEEDED_ROUNDS and m.is_pending
            else m
            for m in knockout_matches
        ]
        return Changed(updated, True)

    # ========== Completion ==========

    @staticmethod
    def is_tournament_complete(tournament: Tournament) -> bool:
        """Whether the tournament has produced its final result.

        Table-topper tournaments finish with the last group match. Knockout
        tournaments finish with the final, and with the third-place match
        when one is configured.
        """
        mode = tournament.winner_mode or WINNER_MODE_TABLE_TOPPER
        if mode == WINNER_MODE_TABLE_TOPPER:
            return all(m.is_completed for m in tournament.matches)

        if mode == WINNER_MODE_KNOCKOUTS:
            final = _find_round(tournament.knockout_matches, ROUND_FINAL)
            if final is None or not final.is_completed:
                return False
            config = tournament.knockout_config
            if config is not None and config.third_place_match:
                third = _find_round(tournament.knockout_matches, ROUND_THIRD_PLACE)
                if third is None or not third.is_completed:
                    return False
            return True

        return False

    @staticmethod
    def get_tournament_winner(tournament: Tournament) -> Optional[Team]:
        """The final's winner for knockout tournaments.

        Returns None for table-topper tournaments; the caller takes the top
        standings row instead.
        """
        if tournament.winner_mode != WINNER_MODE_KNOCKOUTS:
            return None
        final = _find_round(tournament.knockout_matches, ROUND_FINAL)
        if final is None or not final.is_completed or not final.winner:
            return None
        return find_team(tournament.teams, final.winner)

    # ========== Match lookup ==========

    @staticmethod
    def find_match_in_tournament(
        tournament: Tournament, match_id
    ) -> Tuple[Optional[Match], bool]:
        """Find a match among group then knockout matches.

        Returns:
            (match, is_knockout); (None, False) when not found
        """
        for match in tournament.matches:
            if _same_id(match.id, match_id):
                return match, False
        for match in tournament.knockout_matches:
            if _same_id(match.id, match_id):
                return match, True
        return None, False

    @staticmethod
    def update_match_in_tournament(
        tournament: Tournament, match_id, updater: Callable[[Match], Match]
    ) -> Changed[Tournament]:
        """Apply ``updater`` to one match, copy-on-write.

        Returns:
            Changed tournament; unchanged when no match has ``match_id``
        """
        for index, match in enumerate(tournament.matches):
            if _same_id(match.id, match_id):
                matches = list(tournament.matches)
                matches[index] = updater(match)
                return Changed(tournament.with_matches(matches), True)

        for index, match in enumerate(tournament.knockout_matches):
            if _same_id(match.id, match_id):
                knockout = list(tournament.knockout_matches)
                knockout[index] = updater(match)
                return Changed(tournament.with_knockout_matches(knockout), True)

        return Changed(tournament, False)
