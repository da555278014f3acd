"""Key-value stores and the repositories built on them.

A store holds whole JSON-compatible values under string keys. Each value is
read in full and replaced in full; nothing is patched in place. Reads of a
missing key return the caller's default.
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

import copy
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from gamescore.constants import (
    KEY_HISTORY,
    KEY_PREFERENCES,
    KEY_SESSIONS,
    STORE_FILE_EXTENSION,
)
from gamescore.controllers.tournament.result_recorder import ResultRecorder
from gamescore.exceptions import (
    StoreReadException,
    StoreWriteException,
    TournamentNotFoundException,
)
from gamescore.models.tournament import Tournament
from gamescore.sports.registry import Sport
from gamescore.storage.migration import migrate_tournament_format, needs_migration
from gamescore.utils import setup_logger

logger = setup_logger(__name__)


class KeyValueStore:
    """Interface of a whole-value key-value store."""

    def load(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store; values are deep-copied in and out."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """Store that keeps each key in ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash mid-write never leaves a truncated file.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}{STORE_FILE_EXTENSION}"

    def load(self, key: str, default: Any = None) -> Any:
        """Read a value.

        Args:
            key: Store key
            default: Returned when the key is absent or its file is corrupt

        Returns:
            The decoded value, or ``default``

        Raises:
            StoreReadException: If the file exists but cannot be read
        """
        path = self._path(key)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt data in {path}, using default: {e}")
            return default
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StoreReadException(f"Cannot read {key}: {e}") from e

    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``.

        Raises:
            StoreWriteException: If the value cannot be encoded or written
        """
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(value, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StoreWriteException(f"Cannot write {key}: {e}") from e
        logger.debug(f"Saved {key} to {path}")

    def delete(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreWriteException(f"Cannot delete {key}: {e}") from e


class TournamentRepository:
    """Tournaments of one sport, stored as a list under the sport's key.

    Loading upgrades legacy formats and repairs single-set matches left
    pending; when either changes anything the list is written back.
    """

    def __init__(self, store: KeyValueStore, sport: Sport):
        self.store = store
        self.sport = sport

    @property
    def key(self) -> str:
        return self.sport.storage_key

    def _load_raw(self) -> List[Dict[str, Any]]:
        data = self.store.load(self.key, [])
        if not isinstance(data, list):
            logger.error(f"Expected a list under {self.key}, found {type(data).__name__}")
            return []
        return data

    def load_all(self) -> List[Tournament]:
        """Load every tournament of the sport, migrating and repairing as needed."""
        raw = self._load_raw()
        tournaments = []
        dirty = False
        for record in raw:
            if needs_migration(record):
                record = migrate_tournament_format(record)
                dirty = True
            tournament = Tournament.from_dict(record)
            repaired = ResultRecorder.repair_single_set_matches(tournament)
            dirty = dirty or repaired.changed
            tournaments.append(repaired.value)

        if dirty:
            logger.info(f"Writing back upgraded tournaments under {self.key}")
            self._save_all(tournaments)
        return tournaments

    def _save_all(self, tournaments: List[Tournament]) -> None:
        self.store.save(self.key, [t.to_dict() for t in tournaments])

    def get(self, tournament_id) -> Tournament:
        """Load one tournament.

        Raises:
            TournamentNotFoundException: If no tournament has ``tournament_id``
        """
        for tournament in self.load_all():
            if str(tournament.id) == str(tournament_id):
                return tournament
        raise TournamentNotFoundException(
            f"No {self.sport.name} tournament with id {tournament_id}"
        )

    def save(self, tournament: Tournament) -> None:
        """Insert or replace a tournament by id."""
        tournaments = self.load_all()
        for index, existing in enumerate(tournaments):
            if str(existing.id) == str(tournament.id):
                tournaments[index] = tournament
                break
        else:
            tournaments.append(tournament)
        self._save_all(tournaments)

    def delete(self, tournament_id) -> bool:
        tournaments = self.load_all()
        kept = [t for t in tournaments if str(t.id) != str(tournament_id)]
        if len(kept) == len(tournaments):
            return False
        self._save_all(kept)
        logger.info(f"Deleted tournament {tournament_id} from {self.key}")
        return True


class SessionRepository:
    """Quick-game sessions, their finished-game history and user preferences."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    # ========== Sessions ==========

    def load_sessions(self) -> List[Dict[str, Any]]:
        return self.store.load(KEY_SESSIONS, [])

    def save_session(self, session: Dict[str, Any]) -> None:
        sessions = [s for s in self.load_sessions() if s.get("id") != session["id"]]
        sessions.append(session)
        self.store.save(KEY_SESSIONS, sessions)

    def delete_session(self, session_id: str) -> None:
        sessions = [s for s in self.load_sessions() if s.get("id") != session_id]
        self.store.save(KEY_SESSIONS, sessions)

    # ========== History ==========

    def load_history(self) -> List[Dict[str, Any]]:
        """Finished games, newest first."""
        return self.store.load(KEY_HISTORY, [])

    def add_history_record(self, record: Dict[str, Any]) -> None:
        self.store.save(KEY_HISTORY, [record, *self.load_history()])

    def clear_history(self) -> None:
        self.store.save(KEY_HISTORY, [])

    # ========== Preferences ==========

    def load_preferences(self) -> Dict[str, Any]:
        return self.store.load(KEY_PREFERENCES, {})

    def save_preferences(self, preferences: Dict[str, Any]) -> None:
        self.store.save(KEY_PREFERENCES, preferences)
