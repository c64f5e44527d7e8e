"""Shared helpers: logging setup and identifier generation."""

# Matchday
# Copyright (C) 2025  Matchday developers
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
import uuid
from typing import Optional

from matchday.constants import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "matchday"

_configured = False


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the package root logger.

    Args:
        level: Log level name. Falls back to ``MATCHDAY_LOG_LEVEL`` and then
            to ``WARNING``.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)

    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        level = level or os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL
        _configured = True

    if level:
        root.setLevel(getattr(logging, level.upper(), logging.WARNING))


def setup_logger(name: str) -> logging.Logger:
    """Return a logger that lives under the package root logger."""
    configure_logging()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def generate_id(prefix: Optional[str] = None) -> str:
    """Generate a unique identifier, optionally prefixed (e.g. ``match-3f2a...``)."""
    value = uuid.uuid4().hex
    if prefix:
        return f"{prefix.lower()}-{value}"
    return value
