"""Read per-environment defaults from ``env/.env.<ENV>``.

The file uses plain ``KEY=value`` lines; blank lines and ``#`` comments are
ignored and surrounding quotes are stripped. Values here are defaults only:
a variable already present in the process environment always wins.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict

REPO_ROOT = Path(__file__).resolve().parents[1]


def parse_env_lines(text: str) -> Dict[str, str]:
    defaults: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        defaults[key.strip()] = value
    return defaults


@lru_cache(maxsize=None)
def load_env_defaults(env_name: str) -> Dict[str, str]:
    env_file = REPO_ROOT / "env" / f".env.{env_name}"
    if not env_file.exists():
        return {}
    return parse_env_lines(env_file.read_text(encoding="utf-8"))


def get_env_default(env_name: str, key: str) -> str | None:
    return load_env_defaults(env_name).get(key)
