"""Application configuration loaded from the environment.

Recognised variables:
    GAMESCORE_DATA_DIR          directory holding the JSON store (default ~/.gamescore)
    GAMESCORE_LOG_LEVEL         logging level name (default INFO)
    GAMESCORE_COMPLETION_DELAY  seconds between auto-completion and save (default 0.6)
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

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from gamescore.constants import COMPLETION_DELAY
from gamescore.exceptions import ConfigurationException
from gamescore.utils import setup_logger

logger = setup_logger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".gamescore"


@dataclass
class AppConfig:
    """Runtime settings for the store, logging and live scoring."""

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "INFO"
    completion_delay: float = COMPLETION_DELAY

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build a config from environment variables.

        Raises:
            ConfigurationException: If a value cannot be parsed
        """
        env = os.environ if environ is None else environ

        data_dir = Path(env.get("GAMESCORE_DATA_DIR", str(DEFAULT_DATA_DIR))).expanduser()

        log_level = env.get("GAMESCORE_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationException(f"Unknown log level: {log_level}")

        raw_delay = env.get("GAMESCORE_COMPLETION_DELAY")
        completion_delay = COMPLETION_DELAY
        if raw_delay is not None:
            try:
                completion_delay = float(raw_delay)
            except ValueError as e:
                raise ConfigurationException(
                    f"GAMESCORE_COMPLETION_DELAY must be a number, got {raw_delay!r}"
                ) from e
            if completion_delay < 0:
                raise ConfigurationException("GAMESCORE_COMPLETION_DELAY cannot be negative")

        config = cls(
            data_dir=data_dir, log_level=log_level, completion_delay=completion_delay
        )
        logger.debug(f"Loaded configuration: {config}")
        return config
