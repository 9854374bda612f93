from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _default_config_path() -> Path:
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _require_int(value: Any, default: int, name: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer") from exc


def _require_str(value: Any, default: str, name: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string")
    return value.strip()


@dataclass(frozen=True)
class RedisRoomStoreConfig:
    key_prefix: str = "room"
    health_check_interval: int = 30


@dataclass(frozen=True)
class Config:
    log_level: str = "INFO"
    redis_room_store: RedisRoomStoreConfig = field(default_factory=RedisRoomStoreConfig)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        config_path = Path(path) if path else _default_config_path()
        if not config_path.exists():
            return cls()
        raw = yaml.safe_load(config_path.read_text()) or {}
        if not isinstance(raw, dict):
            raise ValueError("config.yaml must contain a mapping")
        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        defaults = cls()
        log_level = _require_str(
            data.get("log_level"), defaults.log_level, "log_level"
        ).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

        store_data = data.get("redis_room_store")
        if store_data is None:
            store_data = {}
        if not isinstance(store_data, dict):
            raise ValueError("redis_room_store must be a mapping")
        store_defaults = defaults.redis_room_store
        health_check_interval = _require_int(
            store_data.get("health_check_interval"),
            store_defaults.health_check_interval,
            "redis_room_store.health_check_interval",
        )
        if health_check_interval < 0:
            raise ValueError("redis_room_store.health_check_interval must not be negative")
        store = RedisRoomStoreConfig(
            key_prefix=_require_str(
                store_data.get("key_prefix"),
                store_defaults.key_prefix,
                "redis_room_store.key_prefix",
            ),
            health_check_interval=health_check_interval,
        )
        return cls(log_level=log_level, redis_room_store=store)
