from typing import Annotated

from fastapi import Depends
from fastapi.requests import HTTPConnection

from roomdesk.application.ports import RoomStore


def get_room_store(conn: HTTPConnection) -> RoomStore:
    return conn.app.state.room_store


RoomStoreDep = Annotated[RoomStore, Depends(get_room_store)]
