"""
Common custom field types shared by every content table
"""
from typing import Any, Dict, List, Union
from datetime import datetime
from sqlmodel import SQLModel, Field
import json


class SoftDeleteFields(SQLModel):
    """
    Columns carried by every table the recycle bin manages.

    updated_at doubles as the deletion timestamp: a soft delete is an update
    of is_deleted, so onupdate stamps the moment the row went to the bin.
    """
    is_deleted: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now, sa_column_kwargs={"onupdate": datetime.now})


def handle_postgresql_json(value: Any) -> Union[Dict, List, None]:
    """
    Handle PostgreSQL JSONB fields correctly.

    asyncpg returns JSONB columns as Python dicts/lists, other drivers (and
    rows written by older clients) may hand back a JSON string.

    Args:
        value: The value from database (could be dict, list, str, or None)

    Returns:
        Parsed JSON value (dict, list) or the value untouched when it can't be parsed
    """
    if value is None:
        return value

    if isinstance(value, (dict, list)):
        return value

    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


def parse_content_record(value: Any) -> Dict[str, Any]:
    """Normalize a stored section content column to a record; anything but an object becomes {}."""
    parsed = handle_postgresql_json(value)
    if isinstance(parsed, dict):
        return parsed
    return {}


def parse_string_list(value: Any) -> List[str]:
    """Normalize a JSON list column (tags, file urls) to a list of strings."""
    parsed = handle_postgresql_json(value)
    if not isinstance(parsed, list):
        return []
    return [str(item) for item in parsed if item is not None]
