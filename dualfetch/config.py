from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Callable


DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_USER_AGENT = "dualfetch/0.1"
DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _positive_number(
    name: str, raw: str | None, default: float | int, cast: Callable[[str], float | int]
) -> float | int:
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class FetchSettings:
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_bytes: int = DEFAULT_MAX_BYTES

    @classmethod
    def from_env(cls) -> "FetchSettings":
        """
        Build settings from environment variables.

        Optional:
        - DUALFETCH_TIMEOUT_SECONDS
        - DUALFETCH_USER_AGENT
        - DUALFETCH_CHUNK_SIZE
        - DUALFETCH_MAX_BYTES
        """
        return cls(
            timeout_seconds=_positive_number(
                "DUALFETCH_TIMEOUT_SECONDS",
                _get_env("DUALFETCH_TIMEOUT_SECONDS"),
                DEFAULT_TIMEOUT_SECONDS,
                float,
            ),
            user_agent=_get_env("DUALFETCH_USER_AGENT", DEFAULT_USER_AGENT) or DEFAULT_USER_AGENT,
            chunk_size=_positive_number("DUALFETCH_CHUNK_SIZE", _get_env("DUALFETCH_CHUNK_SIZE"), DEFAULT_CHUNK_SIZE, int),
            max_bytes=_positive_number("DUALFETCH_MAX_BYTES", _get_env("DUALFETCH_MAX_BYTES"), DEFAULT_MAX_BYTES, int),
        )

    def with_timeout(self, timeout_seconds: float | None) -> "FetchSettings":
        if timeout_seconds is None:
            return self
        return replace(self, timeout_seconds=float(timeout_seconds))
