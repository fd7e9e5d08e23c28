"""
Small helpers shared by the routers for ObjectId handling and
turning MongoDB documents into JSON-friendly dicts.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi import HTTPException


def parse_object_id(value: str, label: str = "ID") -> ObjectId:
    """Validate an id coming from the client; 400 when malformed."""
    if not value or not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail=f"Invalid {label} format")
    return ObjectId(value)


def new_id() -> str:
    """Id for entries embedded in a parent document (saved courses, goals, applications)."""
    return str(ObjectId())


def utcnow() -> datetime:
    return datetime.utcnow()


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # MongoDB hands datetimes back naive (UTC); keep everything we store comparable
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def serialize_doc(doc: Optional[Dict[str, Any]], exclude: tuple = ()) -> Optional[Dict[str, Any]]:
    """Copy a document, exposing `_id` as a string `id`."""
    if doc is None:
        return None
    data = {k: v for k, v in doc.items() if k != "_id" and k not in exclude}
    if "_id" in doc:
        data["id"] = str(doc["_id"])
    return data


def months_between(start: Optional[datetime], end: datetime) -> int:
    if not start:
        return 0
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(0, months)


def find_embedded(items: list, item_id: str) -> Optional[Dict[str, Any]]:
    """Find an entry of an embedded array by its string `id`."""
    for item in items or []:
        if item.get("id") == item_id:
            return item
    return None
