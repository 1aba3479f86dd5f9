# engagement_harness/payload/__init__.py
from .codec import PayloadDecodeError, canonicalize, parse_payload, stringify

__all__ = ["PayloadDecodeError", "canonicalize", "parse_payload", "stringify"]
