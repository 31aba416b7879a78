from __future__ import annotations

import logging
import threading

import requests

from ..config import FetchSettings
from ..errors import FetchCancelledError, RetrievalFailedError

logger = logging.getLogger(__name__)


def make_session(settings: FetchSettings) -> requests.Session:
    s = requests.Session()
    s.headers.update(
        {
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        }
    )
    return s


class HttpTransport:
    """Single-attempt GET that streams the body so cancellation is noticed between chunks."""

    def __init__(self, session: requests.Session | None = None, settings: FetchSettings | None = None) -> None:
        self.settings = settings or FetchSettings()
        self._session = session or make_session(self.settings)
        self._live: set[requests.Response] = set()
        self._lock = threading.Lock()

    def close(self) -> None:
        self._session.close()

    def abort(self) -> None:
        """Close every response still being read; their branches fail and are discarded."""
        with self._lock:
            live = list(self._live)
        for resp in live:
            resp.close()

    def get(
        self,
        url: str,
        *,
        source_id: str,
        cancel_event: threading.Event | None = None,
    ) -> bytes:
        logger.debug("%s: GET %s", source_id, url)
        try:
            resp = self._session.get(url, timeout=self.settings.timeout_seconds, stream=True)
        except requests.RequestException as exc:
            raise RetrievalFailedError(source_id=source_id, message=f"Request to {url} failed: {exc}", cause=exc) from exc

        with self._lock:
            self._live.add(resp)
        try:
            try:
                resp.raise_for_status()
            except requests.HTTPError as exc:
                raise RetrievalFailedError(
                    source_id=source_id,
                    message=f"HTTP {resp.status_code} from {url}",
                    cause=exc,
                    http_status=resp.status_code,
                ) from exc

            buf = bytearray()
            try:
                for chunk in resp.iter_content(chunk_size=self.settings.chunk_size):
                    if cancel_event is not None and cancel_event.is_set():
                        raise FetchCancelledError(
                            source_id=source_id,
                            message=f"Cancelled after receiving {len(buf)} bytes",
                        )
                    buf.extend(chunk)
                    if len(buf) > self.settings.max_bytes:
                        raise RetrievalFailedError(
                            source_id=source_id,
                            message=f"Response from {url} exceeds {self.settings.max_bytes} bytes",
                            http_status=resp.status_code,
                        )
            except requests.RequestException as exc:
                raise RetrievalFailedError(
                    source_id=source_id,
                    message=f"Reading response from {url} failed: {exc}",
                    cause=exc,
                    http_status=resp.status_code,
                ) from exc
            except (FetchCancelledError, RetrievalFailedError):
                buf.clear()
                raise

            logger.debug("%s: received %d bytes", source_id, len(buf))
            return bytes(buf)
        finally:
            with self._lock:
                self._live.discard(resp)
            resp.close()
