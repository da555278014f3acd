"""Result recording and validation for tournaments.

This module handles recording match results with proper validation and error
checking, clearing results, and repairing results stored by older versions.
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
from typing import List, Optional, Sequence, Tuple

from gamescore.constants import ROUND_FINAL, ROUND_THIRD_PLACE, STATUS_COMPLETED
from gamescore.controllers.tournament.knockout_manager import KnockoutManager
from gamescore.exceptions import (
    DrawNotAllowedException,
    MatchCompletedException,
    MatchNotFoundException,
    ScoringException,
)
from gamescore.models.tournament import Match, SetScore, Tournament
from gamescore.sports.registry import Sport
from gamescore.sports.rules import SetsRules
from gamescore.type_hints import Changed
from gamescore.utils import setup_logger
from gamescore.utils.validation import validate_set_score

logger = setup_logger(__name__)

# Rounds seeded from semi-final results
_LATER_ROUNDS = (ROUND_FINAL, ROUND_THIRD_PLACE)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Recording goals and sets results entered by hand
    - Storing results produced by a live scoring session
    - Clearing results
    - Repairing single-set matches left pending by older versions
    """

    def __init__(self, sport: Sport, knockout_manager: Optional[KnockoutManager] = None):
        self.sport = sport
        self.knockout = knockout_manager or KnockoutManager()

    def _get_match(self, tournament: Tournament, match_id) -> Tuple[Match, bool]:
        match, is_knockout = self.knockout.find_match_in_tournament(tournament, match_id)
        if match is None:
            raise MatchNotFoundException(
                f"Match {match_id} not found in tournament {tournament.name!r}"
            )
        return match, is_knockout

    def _replace(self, tournament: Tournament, updated: Match) -> Tournament:
        return self.knockout.update_match_in_tournament(
            tournament, updated.id, lambda _: updated
        ).value

    # ========== Recording ==========

    def record_goals_result(
        self, tournament: Tournament, match_id, score1: int, score2: int
    ) -> Tournament:
        """Record a final score for a goals-based match.

        Args:
            tournament: Tournament holding the match
            match_id: Group or knockout match id
            score1: Side 1 score
            score2: Side 2 score

        Returns:
            New tournament with the completed match

        Raises:
            MatchNotFoundException: If the match does not exist
            ScoringException: If a score is negative or the match has no teams yet
            DrawNotAllowedException: If tied where the sport or a knockout forbids it
        """
        match, is_knockout = self._get_match(tournament, match_id)
        if not match.has_teams:
            raise ScoringException(f"Match {match_id} has no teams assigned yet")
        if score1 < 0 or score2 < 0:
            raise ScoringException("Scores must be positive")
        if score1 == score2 and (is_knockout or not self.sport.draw_allowed):
            raise DrawNotAllowedException(self.sport.name)

        logger.info(f"Recording result {score1}-{score2} for match {match.id}")
        return self._replace(tournament, match.with_goals_result(score1, score2))

    def record_sets_result(
        self, tournament: Tournament, match_id, sets: Sequence[Tuple[int, int]]
    ) -> Tournament:
        """Record every set of a sets-based match at once.

        Each set is validated against the sport's target, margin and cap.

        Raises:
            MatchNotFoundException: If the match does not exist
            ScoringException: If any set is invalid or too many sets are given
        """
        match, _ = self._get_match(tournament, match_id)
        rules = self.sport.rules
        if not isinstance(rules, SetsRules):
            raise ScoringException(f"{self.sport.name} is not played in sets")
        if not match.has_teams:
            raise ScoringException(f"Match {match_id} has no teams assigned yet")
        if not sets:
            raise ScoringException("Fill all set scores")

        total_sets = tournament.format.total_sets
        if len(sets) > total_sets:
            raise ScoringException(f"Max {total_sets} sets")

        recorded: List[SetScore] = []
        for index, (score1, score2) in enumerate(sets):
            result = validate_set_score(
                score1, score2, index, rules, tournament.format, len(sets)
            )
            if not result:
                raise ScoringException(f"Set {index + 1}: {result.error_message}")
            s1, s2 = result.sanitized_value
            recorded.append(SetScore(s1, s2, completed=True))

        t1 = sum(1 for s in recorded if s.winner_side == 1)
        t2 = sum(1 for s in recorded if s.winner_side == 2)
        if t1 == t2:
            raise ScoringException("Sets are level; enter the deciding set")

        logger.info(f"Recording {len(recorded)} sets ({t1}-{t2}) for match {match.id}")
        return self._replace(tournament, match.with_sets_result(recorded))

    def record_match(self, tournament: Tournament, finished: Match) -> Tournament:
        """Store a match produced by a live scoring session.

        Raises:
            MatchNotFoundException: If the match does not exist
        """
        self._get_match(tournament, finished.id)
        logger.info(f"Storing match {finished.id} with status {finished.status}")
        return self._replace(tournament, finished)

    def clear_result(self, tournament: Tournament, match_id) -> Tournament:
        """Reset a match to pending with no result.

        Knockout matches that already hold a result of their own cannot be
        cleared while a later round depending on them is completed.

        Raises:
            MatchNotFoundException: If the match does not exist
            MatchCompletedException: If a later knockout round is already played
        """
        match, is_knockout = self._get_match(tournament, match_id)
        if is_knockout and match.round not in _LATER_ROUNDS:
            blocked = [
                m
                for m in tournament.knockout_matches
                if m.round in _LATER_ROUNDS and m.is_completed
            ]
            if blocked:
                raise MatchCompletedException(
                    f"Cannot clear {match.label}: {blocked[0].label} is already played"
                )

        logger.info(f"Clearing result of match {match.id}")
        return self._replace(tournament, match.cleared())

    # ========== Repair ==========

    @staticmethod
    def repair_single_set_matches(tournament: Tournament) -> Changed[Tournament]:
        """Complete single-set matches whose set was saved but status left pending.

        Older versions could store a decided single set without marking the
        match completed. Status and winner are recomputed from the set, for
        group and knockout matches alike. Knockout reseeding is left to the
        normal recompute pass.
        """
        match_format = tournament.format
        if not (match_format.is_single_set or match_format.sets == 1):
            return Changed(tournament, False)

        matches, group_repaired = _repair_stale_sets(tournament.matches)
        knockout_matches, knockout_repaired = _repair_stale_sets(tournament.knockout_matches)
        repaired = group_repaired + knockout_repaired
        if not repaired:
            return Changed(tournament, False)

        logger.warning(
            f"Repaired {repaired} single-set matches left pending in {tournament.name!r}"
        )
        return Changed(
            replace(tournament, matches=matches, knockout_matches=knockout_matches), True
        )


def _repair_stale_sets(matches: List[Match]) -> Tuple[List[Match], int]:
    repaired = 0
    result = []
    for match in matches:
        if (
            match.is_pending
            and match.draft_state is None
            and match.has_teams
            and match.sets
            and match.sets[0].winner_side is not None
        ):
            winner_side = match.sets[0].winner_side
            match = replace(
                match,
                status=STATUS_COMPLETED,
                winner=match.team1_id if winner_side == 1 else match.team2_id,
            )
            repaired += 1
        result.append(match)
    return result, repaired
