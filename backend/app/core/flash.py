"""Flash Notices: one-time notification attached to a mutating response.

Invariants:
    - Shape is always {"level": <FlashLevel value>, "message": str}
    - Notices are returned inline with the response that produced them, never stored
"""

from app.core.domain_types import FlashLevel


def flash(level: FlashLevel, message: str) -> dict:
    return {"level": level.value, "message": message}


def with_flash(payload: dict, level: FlashLevel, message: str) -> dict:
    """Return a copy of payload with a "flash" key added."""
    return {**payload, "flash": flash(level, message)}
