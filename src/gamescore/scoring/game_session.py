"""Quick games: free-form scoring outside any tournament."""

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

import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil.parser import isoparse

from gamescore.constants import SESSION_ACTIVE, SESSION_COMPLETED, SESSION_PAUSED
from gamescore.exceptions import MatchCompletedException, ScoringException
from gamescore.utils import generate_id, setup_logger

logger = setup_logger(__name__)

PARTICIPANT_COLORS = (
    "#ef4444",
    "#3b82f6",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#f97316",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Participant:
    """A player or team in a quick game."""

    id: str
    name: str
    members: List[str] = field(default_factory=list)
    color: str = PARTICIPANT_COLORS[0]
    avatar: str = ""

    @classmethod
    def create(cls, name: str, members: Optional[List[str]] = None) -> "Participant":
        name = name.strip()
        return cls(
            id=generate_id(),
            name=name,
            members=list(members or []),
            color=random.choice(PARTICIPANT_COLORS),
            avatar=name[:1].upper(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "members": list(self.members),
            "color": self.color,
            "avatar": self.avatar,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            members=list(data.get("members", [])),
            color=data.get("color") or PARTICIPANT_COLORS[0],
            avatar=data.get("avatar", ""),
        )


@dataclass
class ScoreEvent:
    """One change to a participant's total."""

    value: int
    timestamp: str
    new_total: int

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "timestamp": self.timestamp, "newTotal": self.new_total}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreEvent":
        return cls(
            value=data.get("value", 0),
            timestamp=data.get("timestamp", ""),
            new_total=data.get("newTotal", 0),
        )


@dataclass
class ParticipantScore:
    total: int = 0
    history: List[ScoreEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "sets": [], "history": [e.to_dict() for e in self.history]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParticipantScore":
        return cls(
            total=data.get("total", 0),
            history=[ScoreEvent.from_dict(e) for e in data.get("history", [])],
        )


@dataclass
class HistoryRecord:
    """Summary of a finished quick game, kept in the game history."""

    id: str
    session_id: str
    game_name: str
    participants: List[str]
    participant_colors: List[str]
    winner: Optional[str]
    final_scores: Dict[str, int]
    completed_at: str
    duration: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sessionId": self.session_id,
            "gameName": self.game_name,
            "participants": list(self.participants),
            "participantColors": list(self.participant_colors),
            "winner": self.winner,
            "finalScores": dict(self.final_scores),
            "completedAt": self.completed_at,
            "duration": self.duration,
        }


@dataclass
class GameSession:
    """A quick game between any number of participants.

    Totals never go below zero. Undo is per participant and walks that
    participant's own history back one entry at a time.
    """

    id: str
    name: str
    participants: List[Participant]
    scores: Dict[str, ParticipantScore]
    status: str = SESSION_ACTIVE
    winner: Optional[str] = None
    started_at: str = field(default_factory=lambda: _utc_now().isoformat())
    completed_at: Optional[str] = None
    notes: str = ""

    @classmethod
    def start(cls, name: Optional[str], participant_names: List[str]) -> "GameSession":
        """Create an active session with every total at zero."""
        participants = [Participant.create(n) for n in participant_names if n.strip()]
        if len(participants) < 2:
            raise ScoringException("A game needs at least 2 participants")
        session = cls(
            id=generate_id(),
            name=name or f"Game {_utc_now().date().isoformat()}",
            participants=participants,
            scores={p.id: ParticipantScore() for p in participants},
        )
        logger.info(f"Started game {session.name!r} with {len(participants)} participants")
        return session

    # ========== Queries ==========

    def participant(self, participant_id: str) -> Participant:
        for p in self.participants:
            if p.id == participant_id:
                return p
        raise ScoringException(f"No participant {participant_id} in game {self.name!r}")

    def total(self, participant_id: str) -> int:
        return self.scores[participant_id].total

    def leader(self) -> Optional[Participant]:
        """Participant with the highest total; None if nobody leads outright."""
        ranked = sorted(self.participants, key=lambda p: -self.total(p.id))
        if len(ranked) > 1 and self.total(ranked[0].id) == self.total(ranked[1].id):
            return None
        return ranked[0] if ranked else None

    # ========== Scoring ==========

    def update_score(self, participant_id: str, delta: int) -> int:
        """Change a participant's total by ``delta``, clamped at zero.

        Returns:
            The new total

        Raises:
            MatchCompletedException: If the game is over
        """
        if self.status == SESSION_COMPLETED:
            raise MatchCompletedException(f"Game {self.name!r} is already completed")
        self.participant(participant_id)
        score = self.scores[participant_id]
        score.total = max(0, score.total + delta)
        score.history.append(
            ScoreEvent(value=delta, timestamp=_utc_now().isoformat(), new_total=score.total)
        )
        return score.total

    def undo_last_score(self, participant_id: str) -> bool:
        """Revert the participant's most recent score change."""
        score = self.scores.get(participant_id)
        if score is None or not score.history:
            return False
        score.history.pop()
        score.total = score.history[-1].new_total if score.history else 0
        return True

    # ========== Lifecycle ==========

    def pause(self) -> None:
        if self.status == SESSION_ACTIVE:
            self.status = SESSION_PAUSED

    def resume(self) -> None:
        if self.status == SESSION_PAUSED:
            self.status = SESSION_ACTIVE

    def reset(self) -> None:
        """Zero every total and reopen the game."""
        self.scores = {p.id: ParticipantScore() for p in self.participants}
        self.status = SESSION_ACTIVE
        self.winner = None
        self.completed_at = None

    def complete(self, winner_id: Optional[str] = None) -> HistoryRecord:
        """Finish the game and summarise it for the game history.

        Args:
            winner_id: Winning participant, or None for no declared winner
        """
        winner = self.participant(winner_id) if winner_id else None
        now = _utc_now()
        self.status = SESSION_COMPLETED
        self.winner = winner_id
        self.completed_at = now.isoformat()

        duration = int((now - isoparse(self.started_at)).total_seconds()) if self.started_at else 0
        logger.info(f"Game {self.name!r} completed, winner {winner.name if winner else 'none'}")
        return HistoryRecord(
            id=generate_id(),
            session_id=self.id,
            game_name=self.name,
            participants=[p.name for p in self.participants],
            participant_colors=[p.color for p in self.participants],
            winner=winner.name if winner else None,
            final_scores={p.name: self.total(p.id) for p in self.participants},
            completed_at=self.completed_at,
            duration=max(0, duration),
        )

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "participants": [p.to_dict() for p in self.participants],
            "scores": {pid: s.to_dict() for pid, s in self.scores.items()},
            "status": self.status,
            "winner": self.winner,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSession":
        participants = [Participant.from_dict(p) for p in data.get("participants", [])]
        stored = data.get("scores", {})
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            participants=participants,
            scores={
                p.id: ParticipantScore.from_dict(stored.get(p.id, {})) for p in participants
            },
            status=data.get("status", SESSION_ACTIVE),
            winner=data.get("winner"),
            started_at=data.get("startedAt") or _utc_now().isoformat(),
            completed_at=data.get("completedAt"),
            notes=data.get("notes", ""),
        )
