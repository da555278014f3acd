"""Exceptions for use in Game Score"""

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


# ========== Base Application Exception ==========


class GameScoreException(Exception):
    """Base exception for all Game Score errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Scoring Exceptions ==========


class ScoringException(GameScoreException):
    """Base exception for live scoring errors."""

    pass


class DrawNotAllowedException(ScoringException):
    """Raised when a tied result is submitted for a sport without draws."""

    def __init__(self, sport_name: str = "this sport"):
        super().__init__(f"Draws not allowed in {sport_name}")
        self.sport_name = sport_name


class MatchCompletedException(ScoringException):
    """Raised when editing a match whose result is already final."""

    pass


class InvalidSideException(ScoringException):
    """Raised when a side other than 1 or 2 is given."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(GameScoreException):
    """Base exception for tournament-related errors."""

    pass


class TournamentNotFoundException(TournamentException):
    """Raised when a requested tournament does not exist in the store."""

    pass


class MatchNotFoundException(TournamentException):
    """Raised when a requested match does not exist in a tournament."""

    pass


class TeamValidationException(TournamentException):
    """Raised when a team roster cannot start a tournament."""

    pass


# ========== Sport Exceptions ==========


class SportNotFoundException(GameScoreException):
    """Raised when a sport id is not in the registry."""

    pass


# ========== Storage Exceptions ==========


class StorageException(GameScoreException):
    """Base exception for store errors."""

    pass


class StoreReadException(StorageException):
    """Raised when a stored value cannot be read."""

    pass


class StoreWriteException(StorageException):
    """Raised when a value cannot be written to the store."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(GameScoreException):
    """Raised when configuration data is invalid."""

    pass
