"""
Password strength validation.

Configurable password validation. The defaults match the account policy
used by signup and password reset: at least 8 characters, no character
class requirements.

Example:
    from fraudlr.utils import validate_password

    # Basic validation
    is_valid, errors = validate_password("short")
    if not is_valid:
        print("Password errors:", errors)

    # Stricter requirements
    is_valid, errors = validate_password(
        "MyP@ss123",
        min_length=10,
        require_special=True,
    )
"""

import re
from typing import List, Tuple


def validate_password(
    password: str,
    min_length: int = 8,
    max_length: int = 128,
    require_uppercase: bool = False,
    require_lowercase: bool = False,
    require_digit: bool = False,
    require_special: bool = False,
    special_chars: str = r"!@#$%^&*(),.?\":{}|<>",
) -> Tuple[bool, List[str]]:
    """
    Validate password strength.

    Args:
        password: The password to validate
        min_length: Minimum password length
        max_length: Maximum password length
        require_uppercase: Require at least one uppercase letter
        require_lowercase: Require at least one lowercase letter
        require_digit: Require at least one digit
        require_special: Require at least one special character
        special_chars: String of allowed special characters

    Returns:
        Tuple of (is_valid: bool, errors: List[str])

    Examples:
        >>> is_valid, errors = validate_password("weak")
        >>> print(is_valid)
        False
        >>> print(errors)
        ['Password must be at least 8 characters long']
    """
    errors: List[str] = []

    if len(password) < min_length:
        errors.append(f"Password must be at least {min_length} characters long")

    if len(password) > max_length:
        errors.append(f"Password must be no more than {max_length} characters")

    if require_uppercase and not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")

    if require_lowercase and not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")

    if require_digit and not re.search(r"\d", password):
        errors.append("Password must contain at least one digit")

    if require_special:
        escaped_chars = re.escape(special_chars)
        if not re.search(f"[{escaped_chars}]", password):
            errors.append("Password must contain at least one special character")

    return len(errors) == 0, errors
