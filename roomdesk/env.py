from __future__ import annotations

import os
from pathlib import Path

_QUOTES = ('"', "'")


def _parse_line(line: str) -> tuple[str, str] | None:
    line = line.strip()
    if line.startswith("export "):
        line = line[len("export "):]
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key or key.startswith("#"):
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        value = value[1:-1]
    return key, value


def load_env_file(path: str | os.PathLike[str] = ".env") -> list[str]:
    """Copy ``KEY=value`` pairs from a dotenv file into os.environ.

    Variables already present in the environment win. Returns the names that
    were set.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return []

    pairs = filter(None, map(_parse_line, env_path.read_text().splitlines()))
    loaded = []
    for key, value in pairs:
        if key not in os.environ:
            os.environ[key] = value
            loaded.append(key)
    return loaded
