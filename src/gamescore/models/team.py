"""Team data class."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from gamescore.constants import UNKNOWN_TEAM_NAME
from gamescore.utils import generate_id


@dataclass
class Team:
    """A team (or single player) entered in a tournament.

    Attributes
    ----------
    id : str
        Unique team id.
    name : str
        Display name.
    members : list of str
        Roster names, display only.
    extra : dict
        Unrecognised persisted fields, written back untouched.
    """

    id: str
    name: str
    members: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, name: str, members: Optional[List[str]] = None) -> "Team":
        """Create a team with a fresh id."""
        return cls(id=generate_id(), name=name.strip(), members=list(members or []))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize team to dictionary."""
        return {
            **self.extra,
            "id": self.id,
            "name": self.name,
            "members": list(self.members),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Deserialize team from dictionary."""
        extra = {k: v for k, v in data.items() if k not in ("id", "name", "members")}
        return cls(
            id=data["id"],
            name=data.get("name", UNKNOWN_TEAM_NAME),
            members=list(data.get("members", [])),
            extra=extra,
        )


def find_team(teams: Sequence[Team], team_id: Optional[str]) -> Optional[Team]:
    """Look a team up by id, returning None when it is not in the roster."""
    if team_id is None:
        return None
    for team in teams:
        if team.id == team_id:
            return team
    return None


def team_name(teams: Sequence[Team], team_id: Optional[str]) -> str:
    """Display name for a team id, ``"Unknown"`` when it is not in the roster."""
    team = find_team(teams, team_id)
    return team.name if team else UNKNOWN_TEAM_NAME
