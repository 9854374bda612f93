from typing import Any, Mapping, Protocol

from roomdesk.domain.models import Room


class RoomStore(Protocol):
    async def create(self, data: Mapping[str, Any]) -> Room: ...

    async def find_all(self) -> list[Room]: ...

    async def find_by_id(self, room_id: str) -> Room | None: ...

    async def find_by_id_and_update(
        self,
        room_id: str,
        patch: Mapping[str, Any],
        *,
        return_updated: bool = True,
        run_validators: bool = True,
    ) -> Room | None: ...

    async def find_by_id_and_delete(self, room_id: str) -> Room | None: ...
