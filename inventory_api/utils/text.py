# inventory_api/utils/text.py

from typing import Any


def clean_str(value: Any) -> str | None:
    """Trim a scalar to text; empty or missing values become None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def coerce_text(value: Any) -> Any:
    # Numbers sent where text is expected are kept as their text form
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def reject_bool(value: Any) -> Any:
    # JSON true/false would otherwise pass as 1/0
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    return value
