#!/usr/bin/env python3
from __future__ import annotations

"""Main entrypoint: launch the Streamlit front-end for dualfetch."""

import subprocess
import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parent
APP_PATH = REPO_ROOT / "streamlit_app.py"


def streamlit_command(app_path: Path) -> list[str]:
    """Build the command that runs the Streamlit app with this interpreter."""
    return [sys.executable, "-m", "streamlit", "run", str(app_path)]


def main() -> int:
    if not APP_PATH.exists():
        print(f"ERROR: missing app at {APP_PATH}", file=sys.stderr)
        return 2

    try:
        return subprocess.call(streamlit_command(APP_PATH))
    except KeyboardInterrupt:
        print("\n[info] Interrupted by user (Ctrl+C). Exiting cleanly.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
