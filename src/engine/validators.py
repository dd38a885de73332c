"""
Mexico - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
The state machine turns those errors into rejected intents.
"""

from src.engine.base import MAX_FACE, MIN_FACE, DiePosition

MAX_NAME_LENGTH = 30


def validate_die_value(value: int) -> int:
    """
    Validate a single die face.

    Args:
        value: Face value produced by a die source

    Returns:
        Validated value

    Raises:
        ValueError: If the value is not an integer from 1 to 6
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Die value must be an integer, got {type(value).__name__}.")
    if not (MIN_FACE <= value <= MAX_FACE):
        raise ValueError(f"Die value is {value}, must be between {MIN_FACE} and {MAX_FACE}.")
    return value


def validate_player_name(name: str) -> str:
    """
    Validate and normalize a player's display name.

    Args:
        name: Raw name as typed by the user

    Returns:
        The name with surrounding whitespace removed

    Raises:
        ValueError: If the name is blank or too long
    """
    if not isinstance(name, str):
        raise ValueError(f"Player name must be a string, got {type(name).__name__}.")

    trimmed = name.strip()
    if not trimmed:
        raise ValueError("Player name cannot be blank.")
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValueError(f"Player name can be at most {MAX_NAME_LENGTH} characters, got {len(trimmed)}.")

    return trimmed


def validate_roster_size(count: int, min_count: int = 0, max_count: int | None = None) -> int:
    """
    Validate number of players.

    Args:
        count: Number of players
        min_count: Minimum number of players required
        max_count: Maximum number of players allowed (None = no limit)

    Returns:
        Validated count

    Raises:
        ValueError: If count is outside the allowed range
    """
    if not isinstance(count, int):
        raise ValueError(f"Player count must be an integer, got {type(count).__name__}.")

    if count < min_count:
        raise ValueError(f"At least {min_count} players required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} players allowed, got {count}.")

    return count


def validate_die_position(position: DiePosition | int) -> DiePosition:
    """
    Validate and normalize a die slot.

    Args:
        position: A DiePosition or its integer value (1 = first, 2 = second)

    Returns:
        The matching DiePosition

    Raises:
        ValueError: If the position does not name a slot
    """
    if isinstance(position, DiePosition):
        return position
    try:
        return DiePosition(position)
    except ValueError:
        raise ValueError(f"Die position must be 1 or 2, got {position!r}.") from None
