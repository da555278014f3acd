"""Upgrade tournament data written before match formats carried ``formatMode``.

Migration works on the raw stored dictionaries, before they are turned into
model objects, so missing keys can be told apart from default values.
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

from typing import Any, Dict, List

from gamescore.constants import (
    FORMAT_MODE_CUSTOM,
    MODE_FREE,
    SET_FORMAT_BEST_OF,
    SET_FORMAT_SINGLE,
)

Record = Dict[str, Any]


def needs_migration(tournament: Record) -> bool:
    fmt = tournament.get("format") if tournament else None
    return bool(fmt) and "formatMode" not in fmt


def migrate_tournament_format(tournament: Record) -> Record:
    """Return ``tournament`` with its format upgraded, or unchanged.

    Old formats become ``custom`` so the user's original choices are kept,
    and fields the scorer now needs get safe defaults.
    """
    if not needs_migration(tournament):
        return tournament

    old = tournament["format"]
    fmt = dict(old, formatMode=FORMAT_MODE_CUSTOM)

    if "mode" in old and not old["mode"]:
        fmt["mode"] = MODE_FREE

    if old.get("type") == SET_FORMAT_BEST_OF:
        fmt.setdefault("sets", 3)
        fmt.setdefault("points", 25)
    elif old.get("type") == SET_FORMAT_SINGLE:
        fmt.setdefault("points", 15)
        fmt.setdefault("target", 15)

    return dict(tournament, format=fmt)


def migrate_tournaments(tournaments: List[Record]) -> List[Record]:
    return [migrate_tournament_format(t) for t in tournaments]
