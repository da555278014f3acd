"""Match data classes: group matches, knockout matches and their draft state.

Field names in the serialized form are the persisted camelCase keys, kept
stable so existing stores load unchanged.
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

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from dateutil.parser import isoparse

from gamescore.constants import (
    ROUND_FINAL,
    ROUND_LABELS,
    STATUS_COMPLETED,
    STATUS_PENDING,
    WINNER_DRAW,
    WINNER_TIE,
)

_MATCH_KEYS = (
    "id",
    "team1Id",
    "team2Id",
    "status",
    "winner",
    "score1",
    "score2",
    "sets",
    "draftState",
)
_KNOCKOUT_KEYS = _MATCH_KEYS + ("round", "label")


@dataclass
class SetScore:
    """Score of one set (or game) inside a sets-based match."""

    score1: int = 0
    score2: int = 0
    completed: bool = False

    @property
    def winner_side(self) -> Optional[int]:
        """1 or 2 for the side that took the set, None if level."""
        if self.score1 > self.score2:
            return 1
        if self.score2 > self.score1:
            return 2
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize set score to dictionary."""
        return {"score1": self.score1, "score2": self.score2, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SetScore":
        """Deserialize set score from dictionary; blank scores read as 0."""
        return cls(
            score1=int(data.get("score1") or 0),
            score2=int(data.get("score2") or 0),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class HistoryEntry:
    """Snapshot of the scores taken just before a scoring action.

    Goals sessions fill ``score1``/``score2``; sets sessions fill ``sets`` and
    ``current_set``.
    """

    timestamp: float
    score1: Optional[int] = None
    score2: Optional[int] = None
    sets: Optional[List[SetScore]] = None
    current_set: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize history entry to dictionary."""
        data: Dict[str, Any] = {"timestamp": self.timestamp}
        if self.sets is not None:
            data["sets"] = [s.to_dict() for s in self.sets]
            data["currentSet"] = self.current_set
        else:
            data["score1"] = self.score1
            data["score2"] = self.score2
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        """Deserialize history entry from dictionary."""
        sets = data.get("sets")
        return cls(
            timestamp=data.get("timestamp", 0),
            score1=data.get("score1"),
            score2=data.get("score2"),
            sets=[SetScore.from_dict(s) for s in sets] if sets is not None else None,
            current_set=data.get("currentSet"),
        )


@dataclass
class DraftState:
    """Resumable snapshot of an interrupted live-scoring session.

    Attributes
    ----------
    score1, score2 : int or None
        Running totals (goals family).
    sets : list of SetScore or None
        Sets so far, including the one being played (sets family).
    current_set : int or None
        Index into ``sets`` of the set being played.
    history : list of HistoryEntry
        Undo history, already capped when the draft was saved.
    elapsed : int
        Seconds on the match clock (timed formats).
    saved_at : datetime or None
        When the draft was written.
    """

    score1: Optional[int] = None
    score2: Optional[int] = None
    sets: Optional[List[SetScore]] = None
    current_set: Optional[int] = None
    history: List[HistoryEntry] = field(default_factory=list)
    elapsed: int = 0
    saved_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize draft to dictionary."""
        data: Dict[str, Any] = {
            "history": [h.to_dict() for h in self.history],
            "elapsed": self.elapsed,
            "savedAt": self.saved_at.isoformat() if self.saved_at else None,
        }
        if self.sets is not None:
            data["sets"] = [s.to_dict() for s in self.sets]
            data["currentSet"] = self.current_set
        else:
            data["score1"] = self.score1
            data["score2"] = self.score2
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DraftState":
        """Deserialize draft from dictionary."""
        sets = data.get("sets")
        saved_at = data.get("savedAt")
        return cls(
            score1=data.get("score1"),
            score2=data.get("score2"),
            sets=[SetScore.from_dict(s) for s in sets] if sets is not None else None,
            current_set=data.get("currentSet"),
            history=[HistoryEntry.from_dict(h) for h in data.get("history") or []],
            elapsed=int(data.get("elapsed") or 0),
            saved_at=isoparse(saved_at) if saved_at else None,
        )


@dataclass
class Match:
    """A group-stage match between two teams.

    Result fields depend on the scoring family: ``score1``/``score2`` for
    goals sports, ``sets`` for sets sports. ``winner`` holds a team id,
    ``"draw"``, ``"tie"`` or None.
    """

    id: str
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    status: str = STATUS_PENDING
    winner: Optional[str] = None
    score1: Optional[int] = None
    score2: Optional[int] = None
    sets: List[SetScore] = field(default_factory=list)
    draft_state: Optional[DraftState] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # ========== Queries ==========

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    @property
    def has_scores(self) -> bool:
        """True when both goals-family scores are recorded."""
        return self.score1 is not None and self.score2 is not None

    @property
    def has_teams(self) -> bool:
        return bool(self.team1_id) and bool(self.team2_id)

    def sets_won(self) -> Tuple[int, int]:
        """Count sets won by each side over all recorded sets."""
        t1 = sum(1 for s in self.sets if s.winner_side == 1)
        t2 = sum(1 for s in self.sets if s.winner_side == 2)
        return t1, t2

    def loser(self) -> Optional[str]:
        """Team id of the loser of a decided match, None otherwise."""
        if self.winner in (None, WINNER_DRAW, WINNER_TIE):
            return None
        return self.team2_id if self.winner == self.team1_id else self.team1_id

    # ========== Copy-on-write updates ==========

    def with_goals_result(self, score1: int, score2: int, draw_value: str = WINNER_DRAW) -> "Match":
        """Return a completed copy carrying the given score line."""
        if score1 > score2:
            winner = self.team1_id
        elif score2 > score1:
            winner = self.team2_id
        else:
            winner = draw_value
        return replace(
            self,
            score1=score1,
            score2=score2,
            status=STATUS_COMPLETED,
            winner=winner,
            draft_state=None,
        )

    def with_sets_result(self, sets: List[SetScore]) -> "Match":
        """Return a completed copy carrying the given sets; majority of sets wins."""
        copy = replace(self, sets=[replace(s) for s in sets], draft_state=None)
        t1, t2 = copy.sets_won()
        copy.status = STATUS_COMPLETED
        copy.winner = self.team1_id if t1 > t2 else self.team2_id
        return copy

    def cleared(self) -> "Match":
        """Return a pending copy with every result field reset."""
        return replace(
            self,
            status=STATUS_PENDING,
            winner=None,
            score1=None,
            score2=None,
            sets=[],
            draft_state=None,
        )

    # ========== Serialization ==========

    def _base_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "team1Id": self.team1_id,
                "team2Id": self.team2_id,
                "status": self.status,
                "winner": self.winner,
            }
        )
        if self.score1 is not None or self.score2 is not None:
            data["score1"] = self.score1
            data["score2"] = self.score2
        if self.sets:
            data["sets"] = [s.to_dict() for s in self.sets]
        if self.draft_state is not None:
            data["draftState"] = self.draft_state.to_dict()
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return self._base_dict()

    @staticmethod
    def _base_kwargs(data: Dict[str, Any], known: Tuple[str, ...]) -> Dict[str, Any]:
        draft = data.get("draftState")
        return {
            "id": data["id"],
            "team1_id": data.get("team1Id"),
            "team2_id": data.get("team2Id"),
            "status": data.get("status", STATUS_PENDING),
            "winner": data.get("winner"),
            "score1": data.get("score1"),
            "score2": data.get("score2"),
            "sets": [SetScore.from_dict(s) for s in data.get("sets") or []],
            "draft_state": DraftState.from_dict(draft) if draft else None,
            "extra": {k: v for k, v in data.items() if k not in known},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(**cls._base_kwargs(data, _MATCH_KEYS))


@dataclass
class KnockoutMatch(Match):
    """A bracket match. Team slots stay None ("TBD") until seeded."""

    round: str = ROUND_FINAL
    label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize knockout match to dictionary."""
        data = self._base_dict()
        data["round"] = self.round
        data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnockoutMatch":
        """Deserialize knockout match from dictionary."""
        round_name = data.get("round", ROUND_FINAL)
        return cls(
            **cls._base_kwargs(data, _KNOCKOUT_KEYS),
            round=round_name,
            label=data.get("label") or ROUND_LABELS.get(round_name, round_name),
        )
