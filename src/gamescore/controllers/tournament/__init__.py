"""Tournament controllers.

The engine is imported from :mod:`gamescore.controllers.tournament.engine`
directly; it depends on the storage layer, which itself uses the controllers
below.
"""

from gamescore.controllers.tournament.knockout_manager import KnockoutManager
from gamescore.controllers.tournament.result_recorder import ResultRecorder
from gamescore.controllers.tournament.round_robin import (
    generate_knockout_matches,
    generate_round_robin_matches,
    get_completed_match_count,
    get_total_match_count,
)

__all__ = [
    "KnockoutManager",
    "ResultRecorder",
    "generate_knockout_matches",
    "generate_round_robin_matches",
    "get_completed_match_count",
    "get_total_match_count",
]
