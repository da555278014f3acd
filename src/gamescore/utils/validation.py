"""Validation utilities for Game Score.

This module provides reusable validation functions with consistent error handling.
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

from typing import Any, Optional, Sequence

from gamescore.exceptions import TeamValidationException
from gamescore.models.tournament import KnockoutConfig, MatchFormat
from gamescore.sports.rules import SetsRules

MIN_TEAMS = 2
MAX_TEAM_NAME_LENGTH = 40


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


# ========== Team Validation ==========


def validate_team_name(name: Optional[str]) -> ValidationResult:
    """Validate a team name.

    Args:
        name: Name as typed by the user

    Returns:
        ValidationResult carrying the stripped name
    """
    if not name or not name.strip():
        return _invalid("Team name is required")

    name = name.strip()
    if len(name) > MAX_TEAM_NAME_LENGTH:
        return _invalid(f"Team name must be at most {MAX_TEAM_NAME_LENGTH} characters: {name}")

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_team_roster(
    names: Sequence[str], knockout_config: Optional[KnockoutConfig] = None
) -> ValidationResult:
    """Validate the team names for a new tournament.

    Names must be valid, unique ignoring case, and numerous enough for the
    knockout stage when one is configured.

    Returns:
        ValidationResult carrying the list of stripped names
    """
    cleaned = []
    seen = set()
    for raw in names:
        result = validate_team_name(raw)
        if not result:
            return result
        key = result.sanitized_value.casefold()
        if key in seen:
            return _invalid(f"Duplicate team name: {result.sanitized_value}")
        seen.add(key)
        cleaned.append(result.sanitized_value)

    if len(cleaned) < MIN_TEAMS:
        return _invalid(f"At least {MIN_TEAMS} teams are required")

    if knockout_config is not None and len(cleaned) < knockout_config.teams_advancing:
        return _invalid(
            f"Knockout stage needs {knockout_config.teams_advancing} teams, "
            f"only {len(cleaned)} entered"
        )

    return ValidationResult(is_valid=True, sanitized_value=cleaned)


def validate_team_roster_strict(
    names: Sequence[str], knockout_config: Optional[KnockoutConfig] = None
) -> list:
    """Validate a roster and return the cleaned names or raise.

    Raises:
        TeamValidationException: If the roster is invalid
    """
    result = validate_team_roster(names, knockout_config)
    if not result.is_valid:
        raise TeamValidationException(result.error_message)
    return result.sanitized_value


# ========== Set Score Validation ==========


def validate_set_score(
    score1: Any,
    score2: Any,
    set_index: int,
    rules: SetsRules,
    match_format: MatchFormat,
    set_count: int,
) -> ValidationResult:
    """Validate a finished set entered by hand.

    The deciding set of a best-of match uses the sport's decider target, but
    only when every set of the match has been entered.

    Args:
        score1: Side 1 score (int or numeric string)
        score2: Side 2 score
        set_index: Zero-based position of the set
        rules: Sport rules
        match_format: Tournament match format
        set_count: Number of sets being entered

    Returns:
        ValidationResult carrying the ``(score1, score2)`` tuple as ints
    """
    try:
        s1 = int(score1)
        s2 = int(score2)
    except (ValueError, TypeError):
        return _invalid("Invalid score")

    if s1 < 0 or s2 < 0:
        return _invalid("Scores must be positive")

    total_sets = match_format.total_sets
    is_decider = total_sets > 1 and set_index == total_sets - 1 and set_count == total_sets
    if is_decider:
        target = rules.decider_points
    else:
        target = match_format.points or rules.points_per_set

    winner = max(s1, s2)
    loser = min(s1, s2)

    if winner < target:
        return _invalid(f"First to {target}")
    if rules.max_points and winner > rules.max_points:
        return _invalid(f"Max {rules.max_points}")
    capped = bool(rules.max_points) and winner == rules.max_points
    if winner - loser < rules.win_by and not (capped and winner > loser):
        return _invalid(f"Win by {rules.win_by}")
    if s1 == s2:
        return _invalid("No ties")

    return ValidationResult(is_valid=True, sanitized_value=(s1, s2))
