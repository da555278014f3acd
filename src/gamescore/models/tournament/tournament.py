"""Tournament aggregate: roster, group matches, bracket and phase.

The tournament is the sole owner of its match lists. Updates go through
copy-on-write helpers that return a new Tournament; matches that did not
change are shared between the old and the new value.
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
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from gamescore.constants import (
    PHASE_GROUP,
    PHASE_KNOCKOUT,
    WINNER_MODE_KNOCKOUTS,
    WINNER_MODE_TABLE_TOPPER,
)
from gamescore.models.team import Team
from gamescore.utils import setup_logger

from .match import KnockoutMatch, Match
from .tournament_config import KnockoutConfig, MatchFormat

logger = setup_logger(__name__)

_TOURNAMENT_KEYS = {
    "id",
    "name",
    "sport",
    "teams",
    "matches",
    "format",
    "knockoutConfig",
    "knockoutMatches",
    "phase",
    "winnerMode",
    "createdAt",
}


@dataclass
class Tournament:
    """A round-robin tournament with an optional knockout stage.

    Attributes
    ----------
    id : str
        Tournament id, unique within its sport's store key.
    name : str
        Display name.
    sport : str
        Sport id from the registry; selects the scoring family.
    teams : list of Team
        Roster, fixed once play starts.
    matches : list of Match
        Group-stage fixtures.
    format : MatchFormat
        How each match is played.
    knockout_config : KnockoutConfig or None
        None when the tournament has no knockout stage.
    knockout_matches : list of KnockoutMatch
        Empty until the phase becomes ``knockout``.
    phase : str
        ``group`` or ``knockout``; only ever moves forward.
    winner_mode : str
        ``table-topper`` or ``knockouts``.
    """

    id: str
    name: str
    sport: str = ""
    teams: List[Team] = field(default_factory=list)
    matches: List[Match] = field(default_factory=list)
    format: MatchFormat = field(default_factory=MatchFormat)
    knockout_config: Optional[KnockoutConfig] = None
    knockout_matches: List[KnockoutMatch] = field(default_factory=list)
    phase: str = PHASE_GROUP
    winner_mode: str = WINNER_MODE_TABLE_TOPPER
    created_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = datetime.now(timezone.utc).isoformat()

    # ========== Queries ==========

    @property
    def is_knockout_phase(self) -> bool:
        return self.phase == PHASE_KNOCKOUT

    @property
    def uses_knockouts(self) -> bool:
        return self.winner_mode == WINNER_MODE_KNOCKOUTS

    def all_matches(self) -> List[Match]:
        """Group matches followed by knockout matches."""
        return [*self.matches, *self.knockout_matches]

    # ========== Copy-on-write updates ==========

    def with_matches(self, matches: List[Match]) -> "Tournament":
        return replace(self, matches=matches)

    def with_knockout_matches(self, knockout_matches: List[KnockoutMatch]) -> "Tournament":
        return replace(self, knockout_matches=knockout_matches)

    def enter_knockout_phase(self, knockout_matches: List[KnockoutMatch]) -> "Tournament":
        """Return a copy in the knockout phase carrying the seeded bracket."""
        logger.info(
            f"Tournament {self.name!r} entering knockout phase "
            f"with {len(knockout_matches)} matches"
        )
        return replace(self, phase=PHASE_KNOCKOUT, knockout_matches=knockout_matches)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary.

        Returns:
            Dictionary containing all tournament data
        """
        data = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "name": self.name,
                "sport": self.sport,
                "teams": [t.to_dict() for t in self.teams],
                "matches": [m.to_dict() for m in self.matches],
                "format": self.format.to_dict(),
                "knockoutConfig": (
                    self.knockout_config.to_dict() if self.knockout_config else None
                ),
                "knockoutMatches": [m.to_dict() for m in self.knockout_matches],
                "phase": self.phase,
                "winnerMode": self.winner_mode,
                "createdAt": self.created_at,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary.

        Args:
            data: Dictionary containing tournament data

        Returns:
            Reconstructed Tournament object
        """
        knockout_config = data.get("knockoutConfig")
        return cls(
            id=data["id"],
            name=data.get("name", "Untitled Tournament"),
            sport=data.get("sport", ""),
            teams=[Team.from_dict(t) for t in data.get("teams", [])],
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            format=MatchFormat.from_dict(data.get("format")),
            knockout_config=(
                KnockoutConfig.from_dict(knockout_config) if knockout_config else None
            ),
            knockout_matches=[
                KnockoutMatch.from_dict(m) for m in data.get("knockoutMatches") or []
            ],
            phase=data.get("phase", PHASE_GROUP),
            winner_mode=data.get("winnerMode") or WINNER_MODE_TABLE_TOPPER,
            created_at=data.get("createdAt"),
            extra={k: v for k, v in data.items() if k not in _TOURNAMENT_KEYS},
        )
