# iatf/errors.py
from typing import Any, Optional


class InvalidAnchor(ValueError):
    """A protocol record whose anchor fields cannot be parsed."""

    def __init__(self, protocol_id: Optional[str], field: str, value: Any):
        self.protocol_id = protocol_id
        self.field = field
        self.value = value
        kind = "flag" if field == "notifications" else "date"
        super().__init__(
            f"protocol {protocol_id!r}: {field} is not a valid {kind}: {value!r}"
        )
