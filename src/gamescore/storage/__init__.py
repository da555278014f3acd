from gamescore.storage.migration import (
    migrate_tournament_format,
    migrate_tournaments,
    needs_migration,
)
from gamescore.storage.store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    SessionRepository,
    TournamentRepository,
)

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "SessionRepository",
    "TournamentRepository",
    "migrate_tournament_format",
    "migrate_tournaments",
    "needs_migration",
]
