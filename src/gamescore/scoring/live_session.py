"""Live result entry for a single tournament match.

A session lives for as long as one match is being scored. It keeps a bounded
undo history, drops accidental double taps, can be parked as a draft on the
match, and completes the match on its own when the format's points target or
time limit is reached.

Time is injected: ``clock`` returns wall time in milliseconds and
``scheduler(delay, callback)`` runs the delayed commit that follows an
automatic completion. The default scheduler runs the callback at once.
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

import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from gamescore.constants import (
    COMPLETION_DELAY,
    DEBOUNCE_MS,
    DRAFT_HISTORY_LIMIT,
    HISTORY_LIMIT,
    STATUS_IN_PROGRESS,
)
from gamescore.exceptions import DrawNotAllowedException, InvalidSideException
from gamescore.models.tournament import DraftState, HistoryEntry, Match, MatchFormat
from gamescore.scoring.timer import MatchTimer
from gamescore.sports.registry import Sport
from gamescore.type_hints import SIDE_ONE, SIDE_TWO, Clock, Scheduler
from gamescore.utils import setup_logger

logger = setup_logger(__name__)


def wall_clock_ms() -> float:
    return time.time() * 1000


def run_immediately(delay: float, callback: Callable[[], None]) -> None:
    callback()


def check_side(side: int) -> None:
    if side not in (SIDE_ONE, SIDE_TWO):
        raise InvalidSideException(f"Side must be 1 or 2, got {side!r}")


class ScoringSession:
    """Debounce, undo history, drafts and commits shared by both scorers.

    Subclasses provide the score state through :meth:`_snapshot`,
    :meth:`_restore` and :meth:`_draft`.
    """

    def __init__(
        self,
        match: Match,
        sport: Sport,
        match_format: MatchFormat,
        *,
        is_knockout: bool = False,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        on_commit: Optional[Callable[[Match], None]] = None,
        completion_delay: float = COMPLETION_DELAY,
    ):
        self.match = match
        self.sport = sport
        self.format = match_format
        self.is_knockout = is_knockout
        self.clock = clock or wall_clock_ms
        self.scheduler = scheduler or run_immediately
        self.on_commit = on_commit
        self.completion_delay = completion_delay
        self.history: List[HistoryEntry] = []
        self.result: Optional[Match] = None
        self._last_action: Optional[float] = None

    @property
    def completed(self) -> bool:
        return self.result is not None

    @property
    def draws_allowed(self) -> bool:
        return self.sport.draw_allowed and not self.is_knockout

    # ========== Helpers for subclasses ==========

    def _debounced(self) -> bool:
        """Record a scoring action; True if it came too soon after the last one."""
        now = self.clock()
        if self._last_action is not None and now - self._last_action < DEBOUNCE_MS:
            logger.debug(f"Dropped scoring action {now - self._last_action:.0f} ms after previous")
            return True
        self._last_action = now
        return False

    def _push_history(self) -> None:
        self.history.append(self._snapshot(self._last_action or self.clock()))
        del self.history[:-HISTORY_LIMIT]

    def _commit(self, match: Match) -> None:
        self.match = match
        if self.on_commit is not None:
            self.on_commit(match)

    def _complete(self, finished: Match, delayed: bool) -> Match:
        self.result = finished
        if delayed:
            self.scheduler(self.completion_delay, lambda: self._commit(finished))
        else:
            self._commit(finished)
        return finished

    def _snapshot(self, timestamp: float) -> HistoryEntry:
        raise NotImplementedError

    def _restore(self, entry: HistoryEntry) -> None:
        raise NotImplementedError

    def _draft(self) -> DraftState:
        raise NotImplementedError

    # ========== Public operations ==========

    def undo(self) -> bool:
        """Restore the scores from before the most recent scoring action.

        Returns:
            False when there is nothing to undo or the match is finished
        """
        if self.completed or not self.history:
            return False
        self._restore(self.history.pop())
        return True

    def _stored_draft(self) -> DraftState:
        draft = self._draft()
        draft.history = draft.history[-DRAFT_HISTORY_LIMIT:]
        draft.saved_at = datetime.now(timezone.utc)
        return draft

    def save_draft(self) -> Match:
        """Park the session on the match as an in-progress draft and commit it."""
        draft = self._stored_draft()
        match = replace(self.match, status=STATUS_IN_PROGRESS, draft_state=draft)
        logger.info(f"Saved draft for match {match.id} with {len(draft.history)} history entries")
        self._commit(match)
        return match


class LiveScoreSession(ScoringSession):
    """Running tally scorer for goals-based sports.

    Totals are not clamped: a negative delta is a correction and may take a
    side below its previous value.
    """

    def __init__(self, match: Match, sport: Sport, match_format: MatchFormat, **kwargs):
        super().__init__(match, sport, match_format, **kwargs)
        self.timer = MatchTimer(match_format.timed_limit)
        self.score1 = 0
        self.score2 = 0

        draft = match.draft_state
        if draft is not None:
            self.score1 = draft.score1 or 0
            self.score2 = draft.score2 or 0
            self.history = list(draft.history)
            self.timer.elapsed = draft.elapsed
            if draft.elapsed or draft.history:
                self.timer.start()
        elif match.has_scores:
            self.score1 = match.score1
            self.score2 = match.score2

    def _snapshot(self, timestamp: float) -> HistoryEntry:
        return HistoryEntry(timestamp=timestamp, score1=self.score1, score2=self.score2)

    def _restore(self, entry: HistoryEntry) -> None:
        self.score1 = entry.score1 or 0
        self.score2 = entry.score2 or 0

    def _draft(self) -> DraftState:
        return DraftState(
            score1=self.score1,
            score2=self.score2,
            history=list(self.history),
            elapsed=self.timer.elapsed,
        )

    def add_score(self, side: int, delta: int = 1) -> bool:
        """Add ``delta`` to one side's total.

        Args:
            side: 1 or 2
            delta: Amount to add; negative values correct a mistake

        Returns:
            False when the action was rejected (finished match, time up, or
            inside the debounce window)

        Raises:
            InvalidSideException: If ``side`` is not 1 or 2
        """
        check_side(side)
        if self.completed:
            logger.debug(f"Match {self.match.id} is finished; score ignored")
            return False
        if self.timer.expired:
            logger.debug(f"Time limit reached for match {self.match.id}; score ignored")
            return False
        if self._debounced():
            return False

        self._push_history()
        if side == SIDE_ONE:
            self.score1 += delta
        else:
            self.score2 += delta

        if self.format.timed_limit is not None:
            self.timer.start()

        target = self.format.points_target
        if target is not None and max(self.score1, self.score2) >= target:
            logger.info(f"Match {self.match.id} reached target {target}")
            self._complete(self._finished_match(), delayed=True)
        return True

    def tick(self) -> bool:
        """One second of match time.

        Returns:
            True if this tick ended the match
        """
        if self.completed:
            return False
        if self.timer.tick() and self.format.timed_limit is not None:
            self.timer.pause()
            logger.info(f"Time limit reached for match {self.match.id}")
            self._complete(self._finished_match(), delayed=True)
            return True
        return False

    def finish(self) -> Match:
        """Save and finish the match with the current scores.

        Raises:
            DrawNotAllowedException: If the scores are level and draws are not
                allowed; nothing is committed
        """
        if self.completed:
            return self.result
        if self.score1 == self.score2 and not self.draws_allowed:
            raise DrawNotAllowedException(self.sport.name)
        self.timer.pause()
        return self._complete(self._finished_match(), delayed=False)

    def _finished_match(self) -> Match:
        return self.match.with_goals_result(self.score1, self.score2)
