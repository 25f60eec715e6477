from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Generate a new UUID4 as a string."""
    return str(uuid.uuid4())


def unique_suffix() -> str:
    """Collision-resistant token for directory names."""
    return uuid.uuid4().hex
