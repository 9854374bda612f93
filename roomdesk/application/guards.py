import re
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar, cast

from roomdesk.application.errors import InvalidRoomIdError

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

ROOM_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


def is_valid_room_id(room_id: object) -> bool:
    return isinstance(room_id, str) and ROOM_ID_PATTERN.match(room_id) is not None


def valid_room_id(func: F) -> F:
    """Reject malformed identifiers before the wrapped store method runs."""

    @wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        room_id = kwargs.get("room_id")
        if room_id is None:
            if not args:
                raise ValueError("room_id is required")
            room_id = args[0]
        if not is_valid_room_id(room_id):
            raise InvalidRoomIdError(room_id)
        return await func(self, *args, **kwargs)

    return cast(F, wrapper)
