"""Account security helpers."""

from learnbloom.security.password import (
    LEVEL_LABELS,
    PasswordStrength,
    calculate_password_strength,
)

__all__ = ["LEVEL_LABELS", "PasswordStrength", "calculate_password_strength"]
