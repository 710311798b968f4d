from __future__ import annotations

from bson import ObjectId

ID_KEY = "_id"


def generate_id() -> str:
    """Return a fresh identifier in its 24-character hex form."""
    return str(ObjectId())
