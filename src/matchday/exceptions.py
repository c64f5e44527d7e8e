"""Exceptions for use in Matchday"""

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


# ========== Base Application Exception ==========


class MatchdayException(Exception):
    """Base exception for all Matchday errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(MatchdayException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class TournamentNotFoundException(TournamentException):
    """Raised when a requested tournament does not exist."""

    pass


# ========== Match Exceptions ==========


class MatchException(MatchdayException):
    """Base exception for match-related errors."""

    pass


class MatchNotFoundException(MatchException):
    """Raised when a requested match cannot be found in a tournament."""

    pass


# ========== Result Exceptions ==========


class ResultException(MatchdayException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., negative score)."""

    pass


class DrawnTieException(ResultException):
    """Raised when a result would leave a knockout tie level on aggregate."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(MatchdayException):
    """Base exception for validation errors."""

    pass


class ParticipantValidationException(ValidationException):
    """Raised when the participant list is too short or contains blank names."""

    pass


class TournamentNameValidationException(ValidationException):
    """Raised when a tournament name is blank."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(MatchdayException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


class StaleTournamentException(ResourceException):
    """Raised when saving a tournament that was changed by another writer."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(MatchdayException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
