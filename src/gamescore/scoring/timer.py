"""Match clock for timed formats."""

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

from typing import Optional

from gamescore.constants import TIMER_RESOLUTION_SECONDS


def format_time(seconds: int) -> str:
    """Render seconds as ``m:ss``, or ``h:mm:ss`` from one hour up."""
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


class MatchTimer:
    """Counts whole seconds while running.

    The timer never schedules itself; its owner calls :meth:`tick` once per
    second. Ticks while paused are ignored.
    """

    def __init__(self, time_limit: Optional[int] = None, elapsed: int = 0):
        self.time_limit = time_limit
        self.elapsed = elapsed
        self.running = False

    def start(self) -> None:
        self.running = True

    def pause(self) -> None:
        self.running = False

    def toggle(self) -> None:
        self.running = not self.running

    def reset(self) -> None:
        self.running = False
        self.elapsed = 0

    def tick(self) -> bool:
        """Advance one second if running.

        Returns:
            True when the time limit has been reached
        """
        if self.running:
            self.elapsed += TIMER_RESOLUTION_SECONDS
        return self.expired

    @property
    def expired(self) -> bool:
        return self.time_limit is not None and self.elapsed >= self.time_limit

    @property
    def remaining(self) -> Optional[int]:
        if self.time_limit is None:
            return None
        return max(0, self.time_limit - self.elapsed)

    @property
    def formatted(self) -> str:
        return format_time(self.elapsed)
