from __future__ import annotations

import threading
from typing import Protocol


class Transport(Protocol):
    def get(
        self,
        url: str,
        *,
        source_id: str,
        cancel_event: threading.Event | None = None,
    ) -> bytes: ...
