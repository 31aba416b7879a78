from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    """
    One decoded item. On the wire the fields are named ``id``, ``user`` and
    ``text``; ``user`` becomes ``author`` and ``text`` becomes ``body``.
    """

    model_config = ConfigDict(frozen=True, strict=True, validate_by_name=True, extra="ignore")

    id: int
    author: str = Field(alias="user")
    body: str = Field(alias="text")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class FetchResult:
    primary: list[Record]
    secondary: list[Record]
    elapsed_ms: int = field(default=0, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": [r.to_wire() for r in self.primary],
            "secondary": [r.to_wire() for r in self.secondary],
            "elapsed_ms": self.elapsed_ms,
        }
