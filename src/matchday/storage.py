"""Tournament persistence.

Tournaments are stored as one JSON document holding every tournament. Saves
are optimistic: a tournament carries the revision it was loaded at, and a
save is refused if the stored copy has moved on since.
"""

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

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from matchday.constants import SAVE_FILE_VERSION
from matchday.exceptions import (
    FileLoadException,
    FileSaveException,
    StaleTournamentException,
)
from matchday.models import Tournament
from matchday.utils import setup_logger

logger = setup_logger(__name__)


class TournamentStore(ABC):
    """Key-value store of tournaments keyed by tournament id."""

    @abstractmethod
    def _read_records(self) -> List[Dict[str, Any]]:
        """Return every stored tournament as a dictionary."""

    @abstractmethod
    def _write_records(self, records: List[Dict[str, Any]]) -> None:
        """Replace the stored tournaments."""

    def load_all(self) -> List[Tournament]:
        """Load every stored tournament, in storage order."""
        return [Tournament.from_dict(r) for r in self._read_records()]

    def load(self, tournament_id: str) -> Optional[Tournament]:
        """Load one tournament, or ``None`` if it is not stored."""
        for record in self._read_records():
            if record.get("id") == tournament_id:
                return Tournament.from_dict(record)
        return None

    def save(self, tournament: Tournament) -> Tournament:
        """Insert or update a tournament.

        Args:
            tournament: Snapshot to store. Its ``revision`` must match the
                stored revision (0 for a new tournament).

        Returns:
            The stored snapshot with its revision bumped

        Raises:
            StaleTournamentException: If another save happened in between
            FileSaveException: If the data cannot be written
        """
        records = self._read_records()
        index = next(
            (i for i, r in enumerate(records) if r.get("id") == tournament.id), None
        )

        stored_revision = records[index].get("revision", 0) if index is not None else 0
        if tournament.revision != stored_revision:
            logger.warning(
                "Refusing stale save of %s (revision %d, stored %d)",
                tournament.id,
                tournament.revision,
                stored_revision,
            )
            raise StaleTournamentException(
                f"Tournament '{tournament.name}' was modified elsewhere; reload and retry"
            )

        saved = tournament.copy()
        saved.revision = stored_revision + 1
        if index is None:
            records.append(saved.to_dict())
        else:
            records[index] = saved.to_dict()

        self._write_records(records)
        logger.debug("Saved %s at revision %d", saved.id, saved.revision)
        return saved

    def delete(self, tournament_id: str) -> bool:
        """Remove a tournament.

        Returns:
            True if removed, False if not found
        """
        records = self._read_records()
        remaining = [r for r in records if r.get("id") != tournament_id]
        if len(remaining) == len(records):
            return False
        self._write_records(remaining)
        logger.info("Deleted tournament %s", tournament_id)
        return True


class InMemoryTournamentStore(TournamentStore):
    """Store that keeps serialized tournaments in memory."""

    def __init__(self) -> None:
        self._records: List[Dict[str, Any]] = []

    def _read_records(self) -> List[Dict[str, Any]]:
        return json.loads(json.dumps(self._records))

    def _write_records(self, records: List[Dict[str, Any]]) -> None:
        self._records = json.loads(json.dumps(records))


class JsonTournamentStore(TournamentStore):
    """Store backed by a single JSON file.

    The file looks like ``{"version": 1, "tournaments": [...]}``. A missing
    file is an empty store. Writes go through a temporary file that replaces
    the existing file, so a failed write never leaves a half-written document.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    def _read_records(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            message = f"Could not load tournaments from {self.path}: {e}"
            logger.error(message)
            raise FileLoadException(message) from e

        if isinstance(data, list):
            # Bare list written by early versions
            return data
        if not isinstance(data, dict):
            raise FileLoadException(f"{self.path} is not a Matchday save file")
        if data.get("version", SAVE_FILE_VERSION) > SAVE_FILE_VERSION:
            raise FileLoadException(
                f"{self.path} was written by a newer version of Matchday"
            )
        return data.get("tournaments", [])

    def _write_records(self, records: List[Dict[str, Any]]) -> None:
        payload = {"version": SAVE_FILE_VERSION, "tournaments": records}
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=".tournaments-", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=4)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.exception("Error saving tournaments:")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FileSaveException(f"Could not save tournaments to {self.path}: {e}") from e
