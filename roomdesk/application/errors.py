class RoomError(Exception):
    """Base class for errors raised by room stores."""


class InvalidRoomIdError(RoomError):
    def __init__(self, room_id: object):
        super().__init__(f"invalid room id: {room_id!r}")
        self.room_id = room_id


class RoomValidationError(RoomError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RoomStoreUnavailableError(RoomError):
    pass
