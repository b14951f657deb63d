# inventory_api/constants/inventory_movement_type.py

from enum import Enum


class MovementType(str, Enum):
    IN = "IN"
    OUT = "OUT"

    @classmethod
    def parse(cls, value) -> "MovementType | None":
        """Case-insensitive lookup; None for anything that is not IN or OUT."""
        if value is None:
            return None
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None
