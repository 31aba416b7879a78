#!/usr/bin/env python3
from __future__ import annotations

import pandas as pd
import streamlit as st

from dualfetch import FetchError, FetchResult, Record, fetch_pair
# The UI owns all state in st.session_state; the fetcher is only called
# when the user presses "Fetch", never implicitly on rerun.

DEFAULT_PRIMARY = "https://example.com/inbox.json"
DEFAULT_SECONDARY = "https://example.com/sent.json"


def records_frame(records: list[Record]) -> pd.DataFrame:
    if not records:
        return pd.DataFrame(columns=["id", "author", "body"])
    return pd.DataFrame([r.model_dump() for r in records], columns=["id", "author", "body"])


def _fetch(primary_url: str, secondary_url: str) -> None:
    try:
        with st.spinner("Fetching both sources..."):
            st.session_state["result"] = fetch_pair(primary_url, secondary_url)
        st.session_state["error"] = None
    except FetchError as exc:
        st.session_state["result"] = None
        st.session_state["error"] = exc


def _render_result(result: FetchResult) -> None:
    st.caption(f"Fetched in {result.elapsed_ms} ms")
    col_primary, col_secondary = st.columns(2)
    with col_primary:
        st.subheader(f"Primary ({len(result.primary)})")
        st.dataframe(records_frame(result.primary), use_container_width=True)
    with col_secondary:
        st.subheader(f"Secondary ({len(result.secondary)})")
        st.dataframe(records_frame(result.secondary), use_container_width=True)


def main() -> None:
    st.set_page_config(page_title="dualfetch", layout="wide")
    st.title("dualfetch: two sources, one fetch")
    st.caption("Both URLs are fetched concurrently. Either both lists load, or an error is shown.")

    st.session_state.setdefault("result", None)
    st.session_state.setdefault("error", None)

    with st.form("sources"):
        primary_url = st.text_input("Primary URL", value=DEFAULT_PRIMARY)
        secondary_url = st.text_input("Secondary URL", value=DEFAULT_SECONDARY)
        submitted = st.form_submit_button("Fetch")

    if submitted:
        _fetch(primary_url, secondary_url)

    if st.sidebar.button("Clear"):
        st.session_state["result"] = None
        st.session_state["error"] = None

    error: FetchError | None = st.session_state["error"]
    result: FetchResult | None = st.session_state["result"]
    if error is not None:
        st.error(str(error))
        st.json(error.to_dict())
    elif result is not None:
        _render_result(result)
    else:
        st.info("Enter two URLs and press Fetch.")


if __name__ == "__main__":
    main()
