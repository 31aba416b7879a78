from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path

from .config import FetchSettings
from .errors import FetchCancelledError, FetchError, InvalidSourceError
from .fetcher import ConcurrentFetcher
from .sources.http import HttpTransport
from .utils import json_dumps, write_json

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="dualfetch", add_help=True)
    sub = p.add_subparsers(dest="cmd", required=True)

    pair = sub.add_parser("pair", help="Fetch two JSON record lists concurrently and print both.")
    pair.add_argument("primary", help="URL of the primary JSON array.")
    pair.add_argument("secondary", help="URL of the secondary JSON array.")
    pair.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (overrides DUALFETCH_TIMEOUT_SECONDS).",
    )
    pair.add_argument("--out", default=None, help="Write the result JSON to this file instead of stdout.")
    pair.add_argument(
        "--debug",
        action="store_true",
        help="Verbose logging and tracebacks in error output.",
    )
    return p.parse_args(argv)


def _run_pair(args: argparse.Namespace) -> int:
    try:
        settings = FetchSettings.from_env().with_timeout(args.timeout)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    transport = HttpTransport(settings=settings)
    fetcher = ConcurrentFetcher(transport, settings=settings)
    cancel = threading.Event()
    try:
        result = fetcher.fetch_pair(args.primary, args.secondary, cancel_event=cancel)
    except KeyboardInterrupt:
        print("\n[info] Interrupted by user (Ctrl+C). Both fetches cancelled.", file=sys.stderr)
        return 130
    except InvalidSourceError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
    except FetchCancelledError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 130
    except FetchError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        print(json_dumps(exc.to_dict(debug=args.debug)), file=sys.stderr)
        return 1
    finally:
        transport.close()

    if args.out:
        out_path = Path(args.out).expanduser()
        write_json(out_path, result.to_dict())
        print(f"OK: {len(result.primary)} + {len(result.secondary)} records written to {out_path}")
    else:
        print(json_dumps(result.to_dict()))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format=LOG_FORMAT)

    if args.cmd == "pair":
        return _run_pair(args)

    raise RuntimeError(f"Unsupported command: {args.cmd}")
