"""AppConfig data class."""

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

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from matchday.constants import (
    DEFAULT_DATA_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_QUALIFIERS_PER_GROUP,
    ENV_DATA_FILE,
    ENV_LOG_LEVEL,
    ENV_QUALIFIERS_PER_GROUP,
)
from matchday.exceptions import InvalidConfigurationException


def parse_qualifiers(value: Any) -> int:
    """Read a qualifiers-per-group setting given as an int or a string."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationException(
            f"qualifiers_per_group must be a whole number: {value!r}"
        ) from None


@dataclass
class AppConfig:
    """Application settings.

    Attributes
    ----------
    data_file : Path
        JSON file holding every tournament.
    log_level : str
        Log level name for the ``matchday`` logger.
    qualifiers_per_group : int
        Finishers per group who reach the knockout stage.
    """

    data_file: Path = Path(DEFAULT_DATA_FILE).expanduser()
    log_level: str = DEFAULT_LOG_LEVEL
    qualifiers_per_group: int = DEFAULT_QUALIFIERS_PER_GROUP

    def __post_init__(self) -> None:
        self.data_file = Path(self.data_file).expanduser()
        self.log_level = self.log_level.upper()
        if self.qualifiers_per_group < 1:
            raise InvalidConfigurationException(
                f"qualifiers_per_group must be at least 1: {self.qualifiers_per_group}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """Build the configuration from environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            data_file=Path(environ.get(ENV_DATA_FILE, DEFAULT_DATA_FILE)),
            log_level=environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
            qualifiers_per_group=parse_qualifiers(
                environ.get(ENV_QUALIFIERS_PER_GROUP, DEFAULT_QUALIFIERS_PER_GROUP)
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "data_file": str(self.data_file),
            "log_level": self.log_level,
            "qualifiers_per_group": self.qualifiers_per_group,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            data_file=Path(data.get("data_file", DEFAULT_DATA_FILE)),
            log_level=data.get("log_level", DEFAULT_LOG_LEVEL),
            qualifiers_per_group=data.get(
                "qualifiers_per_group", DEFAULT_QUALIFIERS_PER_GROUP
            ),
        )
