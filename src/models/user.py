"""
User-related Pydantic models
"""

from typing import Any, Mapping
from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, field_validator

ZERO_VALUES = {"id": 0, "name": "", "email": ""}


class User(BaseModel):
    """
    Wire and in-memory representation of a user

    Decoding is lenient: unknown fields are ignored, and missing or null
    fields fall back to zero values. Field types are not coerced, so a
    number where a string is expected is rejected as malformed input.
    """
    model_config = ConfigDict(extra="ignore")

    id: StrictInt = 0
    name: StrictStr = ""
    email: StrictStr = ""

    @field_validator("id", "name", "email", mode="before")
    @classmethod
    def null_as_zero_value(cls, value: Any, info) -> Any:
        return ZERO_VALUES[info.field_name] if value is None else value

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "User":
        """Build a User from a database row"""
        return cls(id=record["id"], name=record["name"], email=record["email"])
