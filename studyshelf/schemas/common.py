"""
Common schemas and helpers used across the application.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow_ms() -> datetime:
    """Current UTC time truncated to the millisecond precision MongoDB stores."""
    now = datetime.utcnow()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
