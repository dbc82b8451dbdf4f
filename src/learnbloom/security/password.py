"""Password strength scoring.

Scores a candidate password from 0 to 100 based on length, character
classes, and a small list of very common passwords, and produces Chinese
suggestions for each requirement the password misses.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class StrengthLevel(str, Enum):
    WEAK = "weak"
    FAIR = "fair"
    GOOD = "good"
    STRONG = "strong"


COMMON_PASSWORDS = frozenset(
    {
        "password",
        "123456",
        "123456789",
        "qwerty",
        "abc123",
        "password123",
        "111111",
        "123123",
        "admin",
        "root",
        "user",
        "test",
        "guest",
        "000000",
        "666666",
        "888888",
        "999999",
        "12345678",
        "qwerty123",
    }
)

MIN_LENGTH = 8
LONG_PASSWORD_LENGTH = 12

_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")
_SPECIAL = re.compile(r"[!@#$%^&*(),.?\":{}|<>\[\]\\;'`~\-_+=]")

LEVEL_LABELS: dict[StrengthLevel, tuple[str, str]] = {
    StrengthLevel.WEAK: ("弱", "密码强度较弱，容易被破解"),
    StrengthLevel.FAIR: ("一般", "密码强度一般，建议进一步加强"),
    StrengthLevel.GOOD: ("良好", "密码强度良好"),
    StrengthLevel.STRONG: ("很强", "密码强度很强，安全性高"),
}
"""Display label and description for each level."""


@dataclass(frozen=True)
class PasswordChecks:
    length: bool
    lowercase: bool
    uppercase: bool
    number: bool
    special: bool
    no_common: bool

    @property
    def passed(self) -> int:
        return sum(asdict(self).values())


@dataclass(frozen=True)
class PasswordStrength:
    """Result of scoring one password."""

    score: int
    level: StrengthLevel
    checks: PasswordChecks
    suggestions: list[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return LEVEL_LABELS[self.level][0]

    @property
    def description(self) -> str:
        return LEVEL_LABELS[self.level][1]

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "label": self.label,
            "description": self.description,
            "checks": asdict(self.checks),
            "suggestions": list(self.suggestions),
        }


def _level_for(score: int) -> StrengthLevel:
    if score < 40:
        return StrengthLevel.WEAK
    if score < 70:
        return StrengthLevel.FAIR
    if score < 90:
        return StrengthLevel.GOOD
    return StrengthLevel.STRONG


def calculate_password_strength(password: str) -> PasswordStrength:
    """Score a password.

    Points: 20 for at least eight characters, 15 for each of lowercase,
    uppercase, digit and special character, 10 for twelve or more
    characters, and 10 when the password is not a common one.

    Args:
        password: Candidate password. Never logged.

    Returns:
        PasswordStrength with the score, level, individual checks, and one
        suggestion per failed check in check order.
    """
    checks = PasswordChecks(
        length=len(password) >= MIN_LENGTH,
        lowercase=bool(_LOWERCASE.search(password)),
        uppercase=bool(_UPPERCASE.search(password)),
        number=bool(_DIGIT.search(password)),
        special=bool(_SPECIAL.search(password)),
        no_common=password.lower() not in COMMON_PASSWORDS,
    )

    score = 0
    suggestions: list[str] = []

    if checks.length:
        score += 20
    else:
        suggestions.append("密码至少需要8个字符")

    for passed, hint in (
        (checks.lowercase, "添加小写字母"),
        (checks.uppercase, "添加大写字母"),
        (checks.number, "添加数字"),
        (checks.special, "添加特殊字符 (!@#$%^&* 等)"),
    ):
        if passed:
            score += 15
        else:
            suggestions.append(hint)

    if len(password) >= LONG_PASSWORD_LENGTH:
        score += 10
    if checks.no_common:
        score += 10
    else:
        suggestions.append("避免使用常见密码")

    # Level uses the uncapped score.
    level = _level_for(score)
    return PasswordStrength(
        score=min(score, 100),
        level=level,
        checks=checks,
        suggestions=suggestions,
    )


__all__ = [
    "COMMON_PASSWORDS",
    "LEVEL_LABELS",
    "PasswordChecks",
    "PasswordStrength",
    "StrengthLevel",
    "calculate_password_strength",
]
