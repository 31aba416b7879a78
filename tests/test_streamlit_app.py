"""Tests for the presentation helpers and launcher."""

import sys
from pathlib import Path

import main
import streamlit_app
from dualfetch.models import Record


class TestRecordsFrame:
    def test_columns_and_order(self):
        df = streamlit_app.records_frame(
            [Record(id=2, author="Roy", body="bye"), Record(id=1, author="Ted", body="hi")]
        )

        assert list(df.columns) == ["id", "author", "body"]
        assert df["id"].tolist() == [2, 1]
        assert df["author"].tolist() == ["Roy", "Ted"]

    def test_empty(self):
        df = streamlit_app.records_frame([])

        assert df.empty
        assert list(df.columns) == ["id", "author", "body"]


class TestLauncher:
    def test_streamlit_command(self):
        cmd = main.streamlit_command(Path("/app/streamlit_app.py"))

        assert cmd == [sys.executable, "-m", "streamlit", "run", "/app/streamlit_app.py"]

    def test_missing_app(self, monkeypatch, tmp_path):
        monkeypatch.setattr(main, "APP_PATH", tmp_path / "nope.py")

        assert main.main() == 2
