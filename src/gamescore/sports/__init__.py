from gamescore.sports.defaults import (
    SPORT_DEFAULTS,
    apply_standard_defaults,
    get_sport_defaults,
    is_standard_format,
)
from gamescore.sports.registry import (
    SPORT_REGISTRY,
    Sport,
    find_sport,
    get_goals_sports,
    get_sets_sports,
    get_sport,
    get_sports_list,
)
from gamescore.sports.rules import GoalsRules, QuickButton, SetsRules, SportRules

__all__ = [
    "GoalsRules",
    "QuickButton",
    "SPORT_DEFAULTS",
    "SPORT_REGISTRY",
    "SetsRules",
    "Sport",
    "SportRules",
    "apply_standard_defaults",
    "find_sport",
    "get_goals_sports",
    "get_sets_sports",
    "get_sport",
    "get_sport_defaults",
    "get_sports_list",
    "is_standard_format",
]
