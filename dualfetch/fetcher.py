from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, wait

from .codec import decode_records
from .config import FetchSettings
from .errors import FetchCancelledError, FetchError, RetrievalFailedError
from .models import FetchResult, Record
from .sources.base import Transport
from .sources.http import HttpTransport
from .sources.locator import validate_locator
from .utils import Timer

logger = logging.getLogger(__name__)

PRIMARY = "primary"
SECONDARY = "secondary"
PAIR = "pair"
CANCEL_POLL_SECONDS = 0.05


class ConcurrentFetcher:
    """
    Fetch two JSON record lists at the same time and return both, or fail.

    Both branches are started before either is awaited. The join waits for
    both; when both fail the primary error is reported. Setting the cancel
    event ends the join right away and closes any response still streaming.
    """

    def __init__(self, transport: Transport | None = None, *, settings: FetchSettings | None = None) -> None:
        self.settings = settings or FetchSettings()
        self.transport: Transport = transport or HttpTransport(settings=self.settings)

    def fetch_pair(
        self,
        primary_url: str,
        secondary_url: str,
        *,
        cancel_event: threading.Event | None = None,
    ) -> FetchResult:
        locators = {
            PRIMARY: validate_locator(PRIMARY, primary_url),
            SECONDARY: validate_locator(SECONDARY, secondary_url),
        }
        cancel = cancel_event if cancel_event is not None else threading.Event()
        if cancel.is_set():
            raise FetchCancelledError(source_id=PAIR, message="Cancelled before start")

        t = Timer.start_new()
        futures: dict[str, Future[list[Record]]] = {
            source_id: self._start_branch(source_id, url, cancel) for source_id, url in locators.items()
        }
        pending = set(futures.values())
        try:
            while pending:
                if cancel.is_set():
                    raise FetchCancelledError(source_id=PAIR, message="Cancelled before both sources completed")
                _, pending = wait(pending, timeout=CANCEL_POLL_SECONDS)
        except BaseException:
            # Branches still blocked in I/O are not joined; their results are discarded.
            cancel.set()
            self._abort_transport()
            raise

        error = self._first_error(futures, cancel)
        if error is not None:
            raise error

        result = FetchResult(
            primary=futures[PRIMARY].result(),
            secondary=futures[SECONDARY].result(),
            elapsed_ms=t.elapsed_ms(),
        )
        logger.debug(
            "fetched %d primary and %d secondary records in %d ms",
            len(result.primary),
            len(result.secondary),
            result.elapsed_ms,
        )
        return result

    def _start_branch(self, source_id: str, url: str, cancel: threading.Event) -> Future[list[Record]]:
        future: Future[list[Record]] = Future()
        future.set_running_or_notify_cancel()

        def run() -> None:
            try:
                future.set_result(self._fetch_branch(source_id, url, cancel))
            except BaseException as exc:
                future.set_exception(exc)

        # Daemon threads: a branch stuck in connect must not hold up interpreter exit after a cancel.
        threading.Thread(target=run, name=f"dualfetch-{source_id}", daemon=True).start()
        return future

    def _abort_transport(self) -> None:
        abort = getattr(self.transport, "abort", None)
        if abort is not None:
            abort()

    @staticmethod
    def _first_error(futures: dict[str, Future[list[Record]]], cancel: threading.Event) -> FetchError | None:
        errors = [futures[sid].exception() for sid in (PRIMARY, SECONDARY)]
        if cancel.is_set() and any(isinstance(e, FetchCancelledError) for e in errors):
            return FetchCancelledError(source_id=PAIR, message="Cancelled before both sources completed")
        for err in errors:
            if err is not None:
                return err
        return None

    def _fetch_branch(self, source_id: str, url: str, cancel: threading.Event) -> list[Record]:
        logger.debug("%s: starting", source_id)
        try:
            payload = self.transport.get(url, source_id=source_id, cancel_event=cancel)
        except FetchError as exc:
            logger.debug("%s: %s", source_id, exc)
            raise
        except Exception as exc:
            logger.debug("%s: transport error %r", source_id, exc)
            raise RetrievalFailedError(
                source_id=source_id,
                message=f"Retrieval from {url} failed: {exc}",
                cause=exc,
            ) from exc

        if cancel.is_set():
            raise FetchCancelledError(source_id=source_id, message="Cancelled after retrieval")
        return decode_records(payload, source_id=source_id, cancel_event=cancel)


def fetch_pair(
    primary_url: str,
    secondary_url: str,
    *,
    transport: Transport | None = None,
    cancel_event: threading.Event | None = None,
) -> FetchResult:
    """One-shot helper; builds (and closes) an HTTP transport when none is given."""
    if transport is not None:
        return ConcurrentFetcher(transport).fetch_pair(primary_url, secondary_url, cancel_event=cancel_event)

    settings = FetchSettings.from_env()
    http = HttpTransport(settings=settings)
    try:
        return ConcurrentFetcher(http, settings=settings).fetch_pair(
            primary_url, secondary_url, cancel_event=cancel_event
        )
    finally:
        http.close()
