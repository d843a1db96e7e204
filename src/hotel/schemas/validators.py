"""Shared field validators for request schemas."""

from zxcvbn import zxcvbn

# Minimum zxcvbn score (0-4 scale): 3 = "safely unguessable"
MIN_PASSWORD_SCORE = 3


def check_password_strength(password: str) -> str:
    """Reject guessable passwords using zxcvbn entropy estimation."""
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


def normalize_username(username: str) -> str:
    return username.strip().lower()
