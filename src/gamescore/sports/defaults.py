"""Standard match formats per sport, used when a tournament picks "standard"."""

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

from dataclasses import replace
from typing import Dict, Optional

from gamescore.constants import FORMAT_MODE_STANDARD, MODE_TIMED, SET_FORMAT_BEST_OF
from gamescore.models.tournament import MatchFormat


def _best_of(sets: int, points: int) -> MatchFormat:
    return MatchFormat(type=SET_FORMAT_BEST_OF, sets=sets, points=points)


def _timed(seconds: int) -> MatchFormat:
    return MatchFormat(mode=MODE_TIMED, time_limit=seconds)


SPORT_DEFAULTS: Dict[str, MatchFormat] = {
    "volleyball": _best_of(3, 25),
    "badminton": _best_of(3, 21),
    "tabletennis": _best_of(5, 11),
    "tennis": _best_of(3, 6),
    "pickleball": _best_of(3, 11),
    "squash": _best_of(3, 11),
    "football": _timed(5400),  # 2 x 45 min
    "basketball": _timed(2880),  # 4 x 12 min
    "hockey": _timed(3600),
    "handball": _timed(3600),
    "futsal": _timed(2400),
    "rugby": _timed(4800),
    "kabaddi": _timed(2400),
}


def get_sport_defaults(sport_id: str) -> MatchFormat:
    """Standard format for a sport; an empty free format for unknown ids."""
    return replace(SPORT_DEFAULTS.get(sport_id, MatchFormat()))


def apply_standard_defaults(
    sport_id: str, existing: Optional[MatchFormat] = None
) -> MatchFormat:
    """Fill the unset fields of ``existing`` from the sport's standard format.

    Fields already set on ``existing`` win. The result is always marked
    standard.
    """
    result = get_sport_defaults(sport_id)
    if existing is not None:
        overrides = {
            name: getattr(existing, name)
            for name in ("mode", "target", "time_limit", "type", "sets", "points")
            if getattr(existing, name) is not None
        }
        result = replace(result, extra=dict(existing.extra), **overrides)
    return replace(result, format_mode=FORMAT_MODE_STANDARD)


def is_standard_format(sport_id: str, match_format: MatchFormat) -> bool:
    """True if every field the sport's standard format sets matches."""
    defaults = SPORT_DEFAULTS.get(sport_id)
    if defaults is None:
        return True
    for name in ("type", "sets", "points", "mode", "time_limit"):
        expected = getattr(defaults, name)
        if expected is not None and getattr(match_format, name) != expected:
            return False
    return True
