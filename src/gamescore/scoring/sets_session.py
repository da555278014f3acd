"""Point-by-point live scoring for sets-based sports."""

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
from typing import List, Tuple

from gamescore.constants import STATUS_IN_PROGRESS
from gamescore.exceptions import MatchCompletedException, ScoringException
from gamescore.models.tournament import DraftState, HistoryEntry, Match, MatchFormat, SetScore
from gamescore.scoring.live_session import ScoringSession, check_side
from gamescore.sports.registry import Sport
from gamescore.sports.rules import SetsRules
from gamescore.type_hints import SIDE_ONE
from gamescore.utils import setup_logger

logger = setup_logger(__name__)


def _copy_sets(sets: List[SetScore]) -> List[SetScore]:
    return [replace(s) for s in sets]


class SetsLiveScoreSession(ScoringSession):
    """Scores a sets-based match one rally at a time.

    A set closes when the leader reaches the set target with the required
    margin, or hits the sport's point cap. The next set opens automatically
    until one side has won the majority of the match's sets.

    A session opened on recorded sets continues in a fresh set; a match
    that is already decided cannot be reopened and must be cleared first.
    """

    def __init__(self, match: Match, sport: Sport, match_format: MatchFormat, **kwargs):
        super().__init__(match, sport, match_format, **kwargs)
        if not isinstance(sport.rules, SetsRules):
            raise ScoringException(f"{sport.name} is not played in sets")
        self.rules: SetsRules = sport.rules
        self.sets: List[SetScore] = [SetScore()]
        self.current_set = 0

        draft = match.draft_state
        if draft is not None and draft.sets:
            self.sets = _copy_sets(draft.sets)
            self.current_set = draft.current_set or 0
            self.history = list(draft.history)
        elif match.sets:
            self.sets = _copy_sets(match.sets)
            self.current_set = len(self.sets) - 1
            if self.is_decided:
                raise MatchCompletedException(
                    f"Match {match.id} is already decided; clear it to score again"
                )
            if self.sets[-1].completed and len(self.sets) < self.format.total_sets:
                self.sets.append(SetScore())
                self.current_set += 1

    # ========== State ==========

    @property
    def sets_won(self) -> Tuple[int, int]:
        """Completed sets won by each side."""
        done = [s for s in self.sets if s.completed]
        return (
            sum(1 for s in done if s.score1 > s.score2),
            sum(1 for s in done if s.score2 > s.score1),
        )

    @property
    def is_decided(self) -> bool:
        if self.format.is_single_set:
            return any(s.completed for s in self.sets)
        t1, t2 = self.sets_won
        return max(t1, t2) >= self.format.sets_to_win

    def _snapshot(self, timestamp: float) -> HistoryEntry:
        return HistoryEntry(
            timestamp=timestamp, sets=_copy_sets(self.sets), current_set=self.current_set
        )

    def _restore(self, entry: HistoryEntry) -> None:
        self.sets = _copy_sets(entry.sets or [SetScore()])
        self.current_set = entry.current_set or 0

    def _draft(self) -> DraftState:
        return DraftState(
            sets=_copy_sets(self.sets),
            current_set=self.current_set,
            history=list(self.history),
        )

    # ========== Scoring ==========

    def add_point(self, side: int) -> bool:
        """Award one point in the current set.

        Returns:
            False when the action was rejected (finished match or set, or
            inside the debounce window)

        Raises:
            InvalidSideException: If ``side`` is not 1 or 2
        """
        check_side(side)
        if self.completed:
            return False
        current = self.sets[self.current_set]
        if current.completed:
            logger.debug(f"Set {self.current_set + 1} already finished; point ignored")
            return False
        if self._debounced():
            return False

        self._push_history()
        self.sets = _copy_sets(self.sets)
        current = self.sets[self.current_set]
        if side == SIDE_ONE:
            current.score1 += 1
        else:
            current.score2 += 1

        if not self.rules.is_set_complete(current, self.format, self.current_set):
            return True

        current.completed = True
        logger.info(
            f"Set {self.current_set + 1} of match {self.match.id} won "
            f"{current.score1}-{current.score2}"
        )

        if self.is_decided:
            self._complete(self._finished_match(), delayed=True)
        elif self.current_set < self.format.total_sets - 1:
            self.sets.append(SetScore())
            self.current_set += 1
        return True

    def finish(self) -> Match:
        """Save the match as it stands.

        Every set with any score is kept. The match is completed only when
        decided; otherwise it stays in progress with a fresh draft so scoring
        can resume.
        """
        if self.completed:
            return self.result
        if self.is_decided:
            return self._complete(self._finished_match(), delayed=False)

        scored = [s for s in self.sets if s.score1 > 0 or s.score2 > 0]
        match = replace(
            self.match,
            sets=_copy_sets(scored),
            status=STATUS_IN_PROGRESS,
            winner=None,
            draft_state=self._stored_draft(),
        )
        self._commit(match)
        return match

    def _finished_match(self) -> Match:
        scored = [s for s in self.sets if s.score1 > 0 or s.score2 > 0]
        return self.match.with_sets_result(scored)
