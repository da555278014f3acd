"""KnockoutConfig and MatchFormat data classes."""

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

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from gamescore.constants import (
    FORMAT_MODE_STANDARD,
    KNOCKOUT_TEAM_COUNTS,
    MODE_FREE,
    MODE_POINTS,
    MODE_TIMED,
    SET_FORMAT_SINGLE,
)
from gamescore.exceptions import ConfigurationException


@dataclass(frozen=True)
class KnockoutConfig:
    """Knockout stage settings, fixed for the life of a tournament.

    Attributes
    ----------
    teams_advancing : int
        2 (straight to a final) or 4 (semi-finals first).
    third_place_match : bool
        Whether semi-final losers play off for third.
    """

    teams_advancing: int = 4
    third_place_match: bool = False

    def __post_init__(self) -> None:
        if self.teams_advancing not in KNOCKOUT_TEAM_COUNTS:
            raise ConfigurationException(
                f"teamsAdvancing must be one of {KNOCKOUT_TEAM_COUNTS}, "
                f"got {self.teams_advancing}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "teamsAdvancing": self.teams_advancing,
            "thirdPlaceMatch": self.third_place_match,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnockoutConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            teams_advancing=int(data.get("teamsAdvancing", 4)),
            third_place_match=bool(data.get("thirdPlaceMatch", False)),
        )


@dataclass
class MatchFormat:
    """How a single match is played and when it ends.

    Goals sports use ``mode`` (free / points / timed) with ``target`` or
    ``time_limit``. Sets sports use ``type`` (best-of / single) with ``sets``
    and ``points``. Unused fields stay None.
    """

    format_mode: str = FORMAT_MODE_STANDARD
    mode: Optional[str] = None
    target: Optional[int] = None
    time_limit: Optional[int] = None
    type: Optional[str] = None
    sets: Optional[int] = None
    points: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    # ========== Goals family ==========

    @property
    def points_target(self) -> Optional[int]:
        """Score that ends the match, when the format is points-limited."""
        if self.mode == MODE_POINTS and self.target:
            return self.target
        return None

    @property
    def timed_limit(self) -> Optional[int]:
        """Seconds after which the match ends, when the format is timed."""
        if self.mode == MODE_TIMED and self.time_limit:
            return self.time_limit
        return None

    @property
    def is_free(self) -> bool:
        return self.mode in (None, MODE_FREE)

    # ========== Sets family ==========

    @property
    def is_single_set(self) -> bool:
        return self.type == SET_FORMAT_SINGLE

    @property
    def total_sets(self) -> int:
        if self.is_single_set:
            return 1
        return self.sets or 1

    @property
    def sets_to_win(self) -> int:
        return math.ceil(self.total_sets / 2)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize format to dictionary, omitting unused fields."""
        data: Dict[str, Any] = dict(self.extra)
        data["formatMode"] = self.format_mode
        for key, value in (
            ("mode", self.mode),
            ("target", self.target),
            ("timeLimit", self.time_limit),
            ("type", self.type),
            ("sets", self.sets),
            ("points", self.points),
        ):
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "MatchFormat":
        """Deserialize format from dictionary."""
        data = data or {}
        known = {"formatMode", "mode", "target", "timeLimit", "type", "sets", "points"}
        return cls(
            format_mode=data.get("formatMode", FORMAT_MODE_STANDARD),
            mode=data.get("mode"),
            target=data.get("target"),
            time_limit=data.get("timeLimit"),
            type=data.get("type"),
            sets=data.get("sets"),
            points=data.get("points"),
            extra={k: v for k, v in data.items() if k not in known},
        )
