import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from roomdesk.api.deps import RoomStoreDep
from roomdesk.application.errors import (
    InvalidRoomIdError,
    RoomStoreUnavailableError,
    RoomValidationError,
)
from roomdesk.domain.models import Room
from roomdesk.domain.schema import RoomDocument, RoomPatch

logger = logging.getLogger(__name__)

rooms_router = APIRouter(prefix="/rooms")

ROOM_NOT_FOUND = "Room not found"
INVALID_ROOM_ID = "Invalid room ID"
ROOM_DELETED = "Room deleted successfully"


class RoomOut(BaseModel):
    room_id: str
    name: str
    capacity: int
    location: str | None = None
    description: str | None = None
    is_available: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_room(cls, room: Room) -> "RoomOut":
        return cls(**room.as_dict())


class MessageOut(BaseModel):
    message: str


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ROOM_NOT_FOUND)


def _store_failure(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail
    )


@rooms_router.post("/", response_model=RoomOut, status_code=status.HTTP_201_CREATED)
async def create_room(room_in: RoomDocument, room_store: RoomStoreDep):
    try:
        room = await room_store.create(room_in.model_dump())
    except RoomValidationError as exc:
        logger.warning("rejected new room: %s", exc.message)
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except RoomStoreUnavailableError as exc:
        logger.exception("failed to create room")
        raise _store_failure("Failed to create room") from exc

    logger.info("created room %s", room.room_id)
    return RoomOut.from_room(room)


@rooms_router.get("/", response_model=list[RoomOut])
async def list_rooms(room_store: RoomStoreDep):
    try:
        rooms = await room_store.find_all()
    except RoomStoreUnavailableError as exc:
        logger.exception("failed to fetch rooms")
        raise _store_failure("Failed to fetch rooms") from exc
    return [RoomOut.from_room(room) for room in rooms]


@rooms_router.get("/{room_id}", response_model=RoomOut)
async def get_room(room_id: str, room_store: RoomStoreDep):
    try:
        room = await room_store.find_by_id(room_id)
    except InvalidRoomIdError as exc:
        raise HTTPException(status_code=400, detail=INVALID_ROOM_ID) from exc
    except RoomStoreUnavailableError as exc:
        logger.exception("failed to fetch room %s", room_id)
        raise _store_failure("Failed to fetch room") from exc

    if room is None:
        raise _not_found()
    return RoomOut.from_room(room)


@rooms_router.api_route("/{room_id}", methods=["PATCH", "PUT"], response_model=RoomOut)
async def update_room(room_id: str, patch: RoomPatch, room_store: RoomStoreDep):
    try:
        room = await room_store.find_by_id_and_update(
            room_id,
            patch.changes(),
            return_updated=True,
            run_validators=True,
        )
    except InvalidRoomIdError as exc:
        raise HTTPException(status_code=400, detail=INVALID_ROOM_ID) from exc
    except RoomValidationError as exc:
        logger.warning("rejected update of room %s: %s", room_id, exc.message)
        raise HTTPException(status_code=400, detail=exc.message) from exc
    except RoomStoreUnavailableError as exc:
        logger.exception("failed to update room %s", room_id)
        raise _store_failure("Failed to update room") from exc

    if room is None:
        raise _not_found()
    logger.info("updated room %s", room_id)
    return RoomOut.from_room(room)


@rooms_router.delete("/{room_id}", response_model=MessageOut)
async def delete_room(room_id: str, room_store: RoomStoreDep):
    try:
        room = await room_store.find_by_id_and_delete(room_id)
    except InvalidRoomIdError as exc:
        raise HTTPException(status_code=400, detail=INVALID_ROOM_ID) from exc
    except RoomStoreUnavailableError as exc:
        logger.exception("failed to delete room %s", room_id)
        raise _store_failure("Failed to delete room") from exc

    if room is None:
        raise _not_found()
    logger.info("deleted room %s", room_id)
    return MessageOut(message=ROOM_DELETED)
