import logging
import os
from contextlib import asynccontextmanager

import redis.asyncio as redis
from fastapi import FastAPI

from roomdesk.api.errors import install_error_handlers
from roomdesk.api.routes.rooms import rooms_router
from roomdesk.config import Config
from roomdesk.env import load_env_file
from roomdesk.infrastructure.redis_room_store import RedisRoomStore
from roomdesk.logs import configure_logging

logger = logging.getLogger(__name__)


def app_factory(redis_url: str, config: Config | None = None) -> FastAPI:
    config = config or Config.load()
    configure_logging(config.log_level)
    store_config = config.redis_room_store

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.redis = redis.from_url(
            redis_url,
            decode_responses=True,
            health_check_interval=store_config.health_check_interval,
        )
        app.state.room_store = RedisRoomStore(
            app.state.redis, key_prefix=store_config.key_prefix
        )
        logger.info("room store ready (key prefix %r)", store_config.key_prefix)
        try:
            yield
        finally:
            await app.state.redis.aclose()

    app = FastAPI(title="roomdesk", lifespan=lifespan)
    install_error_handlers(app)
    app.include_router(rooms_router)

    return app


load_env_file()
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")

app = app_factory(REDIS_URL)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("roomdesk.main:app", host="0.0.0.0", port=8000)
