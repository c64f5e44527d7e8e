"""Validation utilities for Matchday.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Any, List, Optional, Sequence

from matchday.constants import MIN_PARTICIPANTS, TOURNAMENT_TYPES, TYPE_KNOCKOUT
from matchday.exceptions import (
    InvalidConfigurationException,
    InvalidResultException,
    ParticipantValidationException,
    TournamentNameValidationException,
)


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


# ========== Tournament Validation ==========


def validate_tournament_name(name: Optional[str]) -> ValidationResult:
    """Validate a tournament name.

    Args:
        name: Name as typed by the user

    Returns:
        ValidationResult with the stripped name
    """
    if not name or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Tournament name cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_participant_names(names: Sequence[str]) -> ValidationResult:
    """Validate the participant name list for a new tournament.

    Names are stripped. Order is preserved. A blank entry or a list with
    fewer than two names is rejected.

    Args:
        names: Participant names in entry order

    Returns:
        ValidationResult whose sanitized value is the list of stripped names

    Example:
        >>> validate_participant_names([" Ann ", "Bob"]).sanitized_value
        ['Ann', 'Bob']
    """
    cleaned: List[str] = []
    for position, name in enumerate(names, start=1):
        if name is None or not str(name).strip():
            return ValidationResult(
                is_valid=False,
                error_message=f"Participant #{position} has a blank name",
            )
        cleaned.append(str(name).strip())

    if len(cleaned) < MIN_PARTICIPANTS:
        return ValidationResult(
            is_valid=False,
            error_message=f"Please enter at least {MIN_PARTICIPANTS} participants",
        )

    return ValidationResult(is_valid=True, sanitized_value=cleaned)


def validate_tournament_type(
    tournament_type: Optional[str], has_two_legs: bool = False
) -> ValidationResult:
    """Validate a tournament type and its format options."""
    normalized = (tournament_type or "").strip().upper()
    if normalized not in TOURNAMENT_TYPES:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Unknown tournament type '{tournament_type}'. "
                f"Expected one of: {', '.join(TOURNAMENT_TYPES)}"
            ),
        )
    if has_two_legs and normalized != TYPE_KNOCKOUT:
        return ValidationResult(
            is_valid=False,
            error_message="Two-legged ties are only available for KNOCKOUT tournaments",
        )
    return ValidationResult(is_valid=True, sanitized_value=normalized)


# ========== Result Validation ==========


def validate_goal_count(value: Any, field_name: str = "Score") -> ValidationResult:
    """Validate a goal count (non-negative integer).

    Booleans and floats with a fractional part are rejected.
    """
    if value is None or isinstance(value, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number",
        )

    if isinstance(value, float) and not value.is_integer():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a whole number: {value}",
        )

    try:
        goals = int(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number: {value}",
        )

    if goals < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be negative: {goals}",
        )

    return ValidationResult(is_valid=True, sanitized_value=goals)


# ========== Strict variants ==========


def validate_tournament_name_strict(name: Optional[str]) -> str:
    """Validate a tournament name and return it stripped, or raise.

    Raises:
        TournamentNameValidationException: If the name is blank
    """
    result = validate_tournament_name(name)
    if not result.is_valid:
        raise TournamentNameValidationException(result.error_message)
    return result.sanitized_value


def validate_participant_names_strict(names: Sequence[str]) -> List[str]:
    """Validate participant names and return them stripped, or raise.

    Raises:
        ParticipantValidationException: If the list is invalid
    """
    result = validate_participant_names(names)
    if not result.is_valid:
        raise ParticipantValidationException(result.error_message)
    return result.sanitized_value


def validate_tournament_type_strict(
    tournament_type: Optional[str], has_two_legs: bool = False
) -> str:
    """Validate a tournament type and return it normalized, or raise.

    Raises:
        InvalidConfigurationException: If the type or its options are invalid
    """
    result = validate_tournament_type(tournament_type, has_two_legs)
    if not result.is_valid:
        raise InvalidConfigurationException(result.error_message)
    return result.sanitized_value


def validate_goal_count_strict(value: Any, field_name: str = "Score") -> int:
    """Validate a goal count and return it as ``int``, or raise.

    Raises:
        InvalidResultException: If the value is not a non-negative integer
    """
    result = validate_goal_count(value, field_name)
    if not result.is_valid:
        raise InvalidResultException(result.error_message)
    return result.sanitized_value
