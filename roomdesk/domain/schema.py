"""Validation schema for stored room documents."""

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field

NAME_MAX_LENGTH = 100
LOCATION_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class RoomDocument(BaseModel):
    """Full set of user-editable room fields."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    capacity: int = Field(ge=1)
    location: str | None = Field(default=None, max_length=LOCATION_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    is_available: bool = True


class RoomPatch(BaseModel):
    """Partial update; only the fields the caller sent are merged."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    capacity: int | None = Field(default=None, ge=1)
    location: str | None = Field(default=None, max_length=LOCATION_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    is_available: bool | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def describe_validation_error(errors: Iterable[dict[str, Any]]) -> str:
    """Render pydantic error dicts as ``Room validation failed: field: reason``.

    A leading ``body`` location segment, as added by FastAPI for request
    bodies, is dropped so request and store errors read the same.
    """
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] == "body":
            loc = loc[1:]
        msg = error.get("msg", "invalid value")
        parts.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    if not parts:
        return "Room validation failed"
    return "Room validation failed: " + ", ".join(parts)
