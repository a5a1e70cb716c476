"""Input validators shared by request schemas."""

from typing import Final

from zxcvbn import zxcvbn

# Minimum zxcvbn score (0-4 scale): 3 = "safely unguessable"
MIN_PASSWORD_SCORE: Final[int] = 3


def validate_password_strength(password: str) -> str:
    """Reject passwords that zxcvbn scores below MIN_PASSWORD_SCORE."""
    result = zxcvbn(password)
    if result["score"] >= MIN_PASSWORD_SCORE:
        return password

    feedback = result.get("feedback", {})
    warning = feedback.get("warning", "")
    suggestions = feedback.get("suggestions", [])
    if warning:
        raise ValueError(f"Weak password: {warning}")
    if suggestions:
        raise ValueError(f"Weak password: {suggestions[0]}")
    raise ValueError("Password is too weak. Use a longer password with a mix of characters.")
