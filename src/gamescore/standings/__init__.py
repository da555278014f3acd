from gamescore.standings.standings_calculator import (
    GoalsStandingsRow,
    SetsStandingsRow,
    Standings,
    StandingsRow,
    calculate_goals_standings,
    calculate_sets_standings,
    calculator_for,
    ranked_team_ids,
    standings_for,
)

__all__ = [
    "GoalsStandingsRow",
    "SetsStandingsRow",
    "Standings",
    "StandingsRow",
    "calculate_goals_standings",
    "calculate_sets_standings",
    "calculator_for",
    "ranked_team_ids",
    "standings_for",
]
