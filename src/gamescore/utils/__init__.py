"""Shared helpers for Game Score: logging setup and id generation."""

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
import secrets
import string
import time
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ID_ALPHABET = string.digits + string.ascii_lowercase


def setup_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Return a module logger with the project's stream handler attached.

    The handler is attached to the ``gamescore`` root logger once; module
    loggers propagate to it.

    Args:
        name: Logger name, normally ``__name__``
        level: Optional level name; defaults to ``GAMESCORE_LOG_LEVEL`` or INFO

    Returns:
        The configured logger
    """
    root = logging.getLogger("gamescore")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(
            (level or os.environ.get("GAMESCORE_LOG_LEVEL", "INFO")).upper()
        )

    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level.upper())
    return logger


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ID_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id(prefix: Optional[str] = None) -> str:
    """Generate a short unique id: base36 millisecond time plus random suffix.

    Args:
        prefix: Optional prefix joined with ``-``

    Returns:
        The new id string
    """
    stamp = _to_base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    ident = f"{stamp}{suffix}"
    return f"{prefix}-{ident}" if prefix else ident
