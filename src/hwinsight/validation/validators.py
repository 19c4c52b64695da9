"""
Validation functions for configuration values and user supplied input.

Each validator returns the normalised value or raises ValidationError with
the offending field name, so callers can report precise messages.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a float within the given bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        Validated choice, in the spelling used by ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(lower_value)]


def validate_timezone(name: Any, field_name: str = "timezone") -> Optional[ZoneInfo]:
    """
    Resolve an IANA timezone name.

    ``"local"`` (any case) resolves to None, meaning the host's local zone.
    """
    str_name = str(name).strip()
    if str_name.lower() == "local":
        return None
    try:
        return ZoneInfo(str_name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(
            f"{field_name} is not a known timezone: {name}",
            field_name=field_name,
            value=name
        )


def validate_timestamp(value: Any, field_name: str = "timestamp") -> int:
    """
    Parse an ISO-8601 string or a datetime into epoch milliseconds.

    Naive values are interpreted as UTC.

    Raises:
        ValidationError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError:
            raise ValidationError(
                f"{field_name} must be an ISO-8601 timestamp, got {value}",
                field_name=field_name,
                value=value
            )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


def validate_usage_range(
    value: Any, field_name: str = "range"
) -> Tuple[float, float]:
    """
    Validate a ``(low, high)`` pair with ``low <= high``.

    Accepts a two element sequence or a ``"low:high"`` string.
    """
    if isinstance(value, str):
        parts = value.split(":")
    else:
        parts = list(value) if value is not None else []
    if len(parts) != 2:
        raise ValidationError(
            f"{field_name} must have exactly two bounds, got {value}",
            field_name=field_name,
            value=value
        )
    low = validate_positive_float(parts[0], field_name=f"{field_name}.low")
    high = validate_positive_float(parts[1], field_name=f"{field_name}.high")
    if low > high:
        raise ValidationError(
            f"{field_name} lower bound {low} exceeds upper bound {high}",
            field_name=field_name,
            value=value
        )
    return low, high
