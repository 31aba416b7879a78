"""ConcurrentFetcher against a local HTTP server."""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from dualfetch.config import FetchSettings
from dualfetch.errors import FetchCancelledError
from dualfetch.fetcher import ConcurrentFetcher
from dualfetch.models import Record
from dualfetch.sources.http import HttpTransport, make_session

PAYLOADS = {
    "/inbox.json": b'[{"id":1,"user":"Ted","text":"hi"}]',
    "/sent.json": b'[{"id":2,"user":"Roy","text":"bye"}]',
}


class _Server(ThreadingHTTPServer):
    daemon_threads = True
    block_on_close = False


@pytest.fixture
def server():
    release = threading.Event()

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            if self.path.startswith("/slow"):
                # Hold the response back until the test releases it.
                release.wait(timeout=5)
            body = PAYLOADS.get(self.path.replace("/slow", ""), b"[]")
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            pass

    httpd = _Server(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    release.set()
    httpd.shutdown()
    httpd.server_close()


@pytest.fixture
def transport():
    settings = FetchSettings(timeout_seconds=10)
    session = make_session(settings)
    session.trust_env = False
    http = HttpTransport(session=session, settings=settings)
    yield http
    http.close()


class TestFetchPairOverHttp:
    def test_fetches_both_lists(self, server, transport):
        result = ConcurrentFetcher(transport).fetch_pair(f"{server}/inbox.json", f"{server}/sent.json")

        assert result.primary == [Record(id=1, author="Ted", body="hi")]
        assert result.secondary == [Record(id=2, author="Roy", body="bye")]

    def test_cancel_returns_while_server_withholds_headers(self, server, transport):
        cancel = threading.Event()
        timer = threading.Timer(0.2, cancel.set)
        timer.start()
        started = time.monotonic()

        try:
            with pytest.raises(FetchCancelledError) as exc_info:
                ConcurrentFetcher(transport).fetch_pair(
                    f"{server}/slow/inbox.json", f"{server}/slow/sent.json", cancel_event=cancel
                )
        finally:
            timer.cancel()

        assert time.monotonic() - started < 1.5
        assert exc_info.value.source_id == "pair"
