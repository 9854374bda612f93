import inspect
import json
import logging
import secrets
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Awaitable, Iterator, Mapping, TypeVar, cast

from pydantic import ValidationError
from redis.asyncio.client import Redis
from redis.exceptions import RedisError

from roomdesk.application.errors import RoomStoreUnavailableError, RoomValidationError
from roomdesk.application.guards import valid_room_id
from roomdesk.domain.models import Room
from roomdesk.domain.schema import RoomDocument, RoomPatch, describe_validation_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def _await(x: T | Awaitable[T]) -> T:
    if inspect.isawaitable(x):
        return await cast(Awaitable[T], x)
    return x


@contextmanager
def _redis_errors() -> Iterator[None]:
    try:
        yield
    except RedisError as exc:
        raise RoomStoreUnavailableError(str(exc)) from exc


def _now() -> datetime:
    return datetime.now(timezone.utc)


class RedisRoomStore:
    """Rooms kept as JSON documents, ordered by a creation-sequence index."""

    def __init__(self, r: Redis, key_prefix: str = "room"):
        self._r = r
        self._prefix = key_prefix

    def _room_key(self, room_id: str) -> str:
        return f"{self._prefix}:{room_id}"

    def _index_key(self) -> str:
        return f"{self._prefix}:index"

    def _seq_key(self) -> str:
        return f"{self._prefix}:seq"

    def _make_room_id(self) -> str:
        return secrets.token_hex(12)

    def _validate(self, data: Mapping[str, Any]) -> RoomDocument:
        try:
            return RoomDocument.model_validate(dict(data))
        except ValidationError as exc:
            raise RoomValidationError(describe_validation_error(exc.errors())) from exc

    def _changes(self, patch: Mapping[str, Any], run_validators: bool) -> dict[str, Any]:
        if not run_validators:
            return {k: v for k, v in patch.items() if k in RoomDocument.model_fields}
        try:
            return RoomPatch.model_validate(dict(patch)).changes()
        except ValidationError as exc:
            raise RoomValidationError(describe_validation_error(exc.errors())) from exc

    def _dump(self, doc: RoomDocument, created_at: datetime, updated_at: datetime) -> str:
        data = doc.model_dump()
        data["created_at"] = created_at.isoformat()
        data["updated_at"] = updated_at.isoformat()
        return json.dumps(data)

    def _load(self, room_id: str, raw: str) -> Room:
        try:
            data = json.loads(raw)
            return Room(
                room_id=room_id,
                name=data["name"],
                capacity=data["capacity"],
                location=data.get("location"),
                description=data.get("description"),
                is_available=data.get("is_available", True),
                created_at=datetime.fromisoformat(data["created_at"]),
                updated_at=datetime.fromisoformat(data["updated_at"]),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise RoomStoreUnavailableError(
                f"stored document for room {room_id} is corrupt"
            ) from exc

    def _to_room(
        self, room_id: str, doc: RoomDocument, created_at: datetime, updated_at: datetime
    ) -> Room:
        return Room(
            room_id=room_id,
            created_at=created_at,
            updated_at=updated_at,
            **doc.model_dump(),
        )

    async def create(self, data: Mapping[str, Any]) -> Room:
        doc = self._validate(data)
        room_id = self._make_room_id()
        now = _now()
        with _redis_errors():
            seq = await _await(self._r.incr(self._seq_key()))
            async with self._r.pipeline(transaction=True) as pipe:
                pipe.set(self._room_key(room_id), self._dump(doc, now, now))
                pipe.zadd(self._index_key(), {room_id: seq})
                await pipe.execute()
        logger.debug("stored room %s", room_id)
        return self._to_room(room_id, doc, now, now)

    async def find_all(self) -> list[Room]:
        with _redis_errors():
            room_ids = await _await(self._r.zrange(self._index_key(), 0, -1))
            if not room_ids:
                return []
            raws = await _await(self._r.mget([self._room_key(rid) for rid in room_ids]))
        return [
            self._load(room_id, raw)
            for room_id, raw in zip(room_ids, raws)
            if raw is not None
        ]

    @valid_room_id
    async def find_by_id(self, room_id: str) -> Room | None:
        with _redis_errors():
            raw = await _await(self._r.get(self._room_key(room_id)))
        if raw is None:
            return None
        return self._load(room_id, raw)

    @valid_room_id
    async def find_by_id_and_update(
        self,
        room_id: str,
        patch: Mapping[str, Any],
        *,
        return_updated: bool = True,
        run_validators: bool = True,
    ) -> Room | None:
        key = self._room_key(room_id)
        with _redis_errors():
            raw = await _await(self._r.get(key))
        if raw is None:
            return None
        current = self._load(room_id, raw)

        merged = {name: getattr(current, name) for name in RoomDocument.model_fields}
        merged.update(self._changes(patch, run_validators))
        if run_validators:
            doc = self._validate(merged)
        else:
            doc = RoomDocument.model_construct(**merged)

        now = _now()
        created_at = current.created_at or now
        with _redis_errors():
            written = await _await(
                self._r.set(key, self._dump(doc, created_at, now), xx=True)
            )
        if not written:
            return None
        if not return_updated:
            return current
        return self._to_room(room_id, doc, created_at, now)

    @valid_room_id
    async def find_by_id_and_delete(self, room_id: str) -> Room | None:
        key = self._room_key(room_id)
        with _redis_errors():
            raw = await _await(self._r.get(key))
        if raw is None:
            return None
        # Parse first so a corrupt document is reported without being removed.
        room = self._load(room_id, raw)
        with _redis_errors():
            async with self._r.pipeline(transaction=True) as pipe:
                pipe.delete(key)
                pipe.zrem(self._index_key(), room_id)
                removed, _ = await pipe.execute()
        if not removed:
            return None
        logger.debug("removed room %s", room_id)
        return room
