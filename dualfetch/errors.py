from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class FetchError(Exception):
    source_id: str
    message: str

    kind: ClassVar[str] = "fetch_error"

    def __str__(self) -> str:
        return f"[{self.source_id}] {self.message}"

    def to_dict(self, debug: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind,
            "source": self.source_id,
            "message": self.message,
        }
        cause = getattr(self, "cause", None)
        if cause is not None:
            payload["cause"] = {"type": type(cause).__name__, "message": str(cause)}
            if debug:
                payload["cause"]["traceback"] = "".join(traceback.format_exception(cause))
        return payload


@dataclass(frozen=True)
class InvalidSourceError(FetchError):
    """The locator is not a usable URL. Raised before any network activity."""

    locator: object = None

    kind: ClassVar[str] = "invalid_source"

    def to_dict(self, debug: bool = False) -> dict[str, Any]:
        payload = super().to_dict(debug=debug)
        payload["locator"] = repr(self.locator) if not isinstance(self.locator, str) else self.locator
        return payload


@dataclass(frozen=True)
class RetrievalFailedError(FetchError):
    cause: BaseException | None = None
    http_status: int | None = None

    kind: ClassVar[str] = "retrieval_failed"

    def to_dict(self, debug: bool = False) -> dict[str, Any]:
        payload = super().to_dict(debug=debug)
        if self.http_status is not None:
            payload["http_status"] = self.http_status
        return payload


@dataclass(frozen=True)
class DecodeFailedError(RetrievalFailedError):
    """Payload arrived but does not match the record schema."""

    index: int | None = None

    kind: ClassVar[str] = "decode_failed"

    def to_dict(self, debug: bool = False) -> dict[str, Any]:
        payload = super().to_dict(debug=debug)
        if self.index is not None:
            payload["index"] = self.index
        return payload


@dataclass(frozen=True)
class FetchCancelledError(FetchError):
    kind: ClassVar[str] = "cancelled"
