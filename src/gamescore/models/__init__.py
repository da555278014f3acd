from gamescore.models.team import Team, find_team, team_name
from gamescore.models.tournament import (
    DraftState,
    HistoryEntry,
    KnockoutConfig,
    KnockoutMatch,
    Match,
    MatchFormat,
    SetScore,
    Tournament,
)

__all__ = [
    "DraftState",
    "HistoryEntry",
    "KnockoutConfig",
    "KnockoutMatch",
    "Match",
    "MatchFormat",
    "SetScore",
    "Team",
    "Tournament",
    "find_team",
    "team_name",
]
