"""Client-side input validation."""


class ValidationError(ValueError):
    """Input rejected before any request is sent."""

    pass


def require_name(value: str, label: str) -> str:
    """Ensure a required name field is not blank.

    Args:
        value: Raw user input
        label: What the name is for, used in the error message

    Returns:
        The value unchanged
    """
    if not value or not value.strip():
        raise ValidationError(f"Please enter a {label} name")
    return value
