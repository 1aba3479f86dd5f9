# engagement_harness/payload/codec.py
import json
from typing import Any


class PayloadDecodeError(ValueError):
    """Raised when the free-text event payload is not valid JSON."""

    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Malformed event payload: {reason}")


def parse_payload(raw: str) -> Any:
    """
    Parse the event payload field.

    An empty field means "no payload" and parses to None. Anything else,
    whitespace included, must be strict JSON (no trailing commas, no unquoted
    keys).
    """
    if raw == "":
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise PayloadDecodeError(raw, str(e)) from e


def stringify(value: Any) -> str:
    """Serialize a payload value to its canonical pretty-printed form."""
    return json.dumps(value, indent=2)


def canonicalize(raw: str) -> str:
    """Parse then re-serialize the payload field. Empty input stays empty."""
    if raw == "":
        return ""
    return stringify(parse_payload(raw))
