"""
Name validation - Syntactic rules applied before any state mutation.

Names are 3 to 12 characters drawn from lowercase ASCII letters, digits
and underscore. Both bounds are configurable; the character set is not.
"""

import re

from .exceptions import InvalidNameCharacters, InvalidNameLength

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 12

_NAME_PATTERN = re.compile(r"[a-z0-9_]+")


def validate_name(
    name: str,
    min_length: int = MIN_NAME_LENGTH,
    max_length: int = MAX_NAME_LENGTH,
) -> None:
    """
    Check a submitted name against the length and character rules.

    Length is checked first, so an over-long name with bad characters
    reports InvalidNameLength.

    Args:
        name: Candidate name as submitted by the caller
        min_length: Smallest permitted length (inclusive)
        max_length: Largest permitted length (inclusive)

    Raises:
        InvalidNameLength: If the name is outside the length bounds
        InvalidNameCharacters: If the name has characters outside [a-z0-9_]
    """
    if not min_length <= len(name) <= max_length:
        raise InvalidNameLength(
            f"Name must be between {min_length} and {max_length} characters"
        )
    if _NAME_PATTERN.fullmatch(name) is None:
        raise InvalidNameCharacters(
            "Name can only contain lowercase letters, numbers, and underscores"
        )
