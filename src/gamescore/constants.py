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

# --- Match status ---
STATUS_PENDING = "pending"
STATUS_IN_PROGRESS = "in-progress"
STATUS_COMPLETED = "completed"

# Non-team winner values
WINNER_DRAW = "draw"
WINNER_TIE = "tie"

# --- Tournament phase ---
PHASE_GROUP = "group"
PHASE_KNOCKOUT = "knockout"

# --- Winner modes ---
WINNER_MODE_TABLE_TOPPER = "table-topper"
WINNER_MODE_KNOCKOUTS = "knockouts"

# --- Knockout rounds ---
ROUND_SEMI_1 = "semi-1"
ROUND_SEMI_2 = "semi-2"
ROUND_FINAL = "final"
ROUND_THIRD_PLACE = "third-place"

ROUND_LABELS = {
    ROUND_SEMI_1: "Semi-final 1",
    ROUND_SEMI_2: "Semi-final 2",
    ROUND_FINAL: "Final",
    ROUND_THIRD_PLACE: "3rd Place",
}

# Allowed values for KnockoutConfig.teamsAdvancing
KNOCKOUT_TEAM_COUNTS = (2, 4)

# --- Scoring families ---
ENGINE_SETS = "sets"
ENGINE_GOALS = "goals"

# --- Standings points ---
SETS_MATCH_WIN_POINTS = 2
DEFAULT_WIN_POINTS = 2
DEFAULT_DRAW_POINTS = 1
DEFAULT_LOSS_POINTS = 0

# --- Goals match formats ---
MODE_FREE = "free"
MODE_POINTS = "points"
MODE_TIMED = "timed"

# --- Sets match formats ---
SET_FORMAT_BEST_OF = "best-of"
SET_FORMAT_SINGLE = "single"

FORMAT_MODE_STANDARD = "standard"
FORMAT_MODE_CUSTOM = "custom"

# --- Live scoring ---
DEBOUNCE_MS = 150
HISTORY_LIMIT = 100
DRAFT_HISTORY_LIMIT = 50
# Seconds between auto-completion and persistence (room for a celebration)
COMPLETION_DELAY = 0.6
TIMER_RESOLUTION_SECONDS = 1

# --- Quick game sessions ---
SESSION_ACTIVE = "active"
SESSION_PAUSED = "paused"
SESSION_COMPLETED = "completed"

# --- Storage keys ---
STORAGE_KEY_PREFIX = "gamescore_"
KEY_SESSIONS = "gs_sessions"
KEY_HISTORY = "gs_history"
KEY_PREFERENCES = "gs_preferences"
STORE_FILE_EXTENSION = ".json"

# Sentinel name for team ids missing from a roster
UNKNOWN_TEAM_NAME = "Unknown"
