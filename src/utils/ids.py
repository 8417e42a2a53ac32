"""Generated entity identifiers."""

import secrets
import time


def generate_id(prefix: str) -> str:
    """Return a ``<prefix>_<epoch-millis>_<random>`` token, e.g. ``team_1718000000000_k3j9x2m1q``."""
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


def isoformat(value) -> str | None:
    """Serialize a datetime for the wire, passing None through."""
    return value.isoformat() if value is not None else None
