from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Room:
    room_id: str
    name: str
    capacity: int
    location: str | None = None
    description: str | None = None
    is_available: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
