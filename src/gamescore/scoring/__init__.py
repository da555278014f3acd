from gamescore.scoring.game_session import GameSession, HistoryRecord, Participant
from gamescore.scoring.live_session import LiveScoreSession, ScoringSession
from gamescore.scoring.sets_session import SetsLiveScoreSession
from gamescore.scoring.timer import MatchTimer, format_time

__all__ = [
    "GameSession",
    "HistoryRecord",
    "LiveScoreSession",
    "MatchTimer",
    "Participant",
    "ScoringSession",
    "SetsLiveScoreSession",
    "format_time",
]
