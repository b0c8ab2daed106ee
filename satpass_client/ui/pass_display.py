"""
Streamlit rendering for satellites and pass predictions.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from satpass_client.infrastructure.api.request_executor import ResponseFormat

_EXPORT_EXTENSIONS = {ResponseFormat.CSV: "csv", ResponseFormat.ICAL: "ics"}
_EXPORT_MIME_TYPES = {ResponseFormat.CSV: "text/csv", ResponseFormat.ICAL: "text/calendar"}


def extract_items(payload: Any, key: str) -> list[dict[str, Any]]:
    """
    Pull a list of records out of an API payload.

    Accepts a bare list or an envelope such as {"satellites": [...]} / {"items": [...]}.
    Non-dict entries are dropped.
    """
    items: Any = payload
    if isinstance(payload, dict):
        items = payload.get(key)
        if items is None:
            items = payload.get("items")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def export_filename(norad_id: int, fmt: ResponseFormat | str) -> str:
    fmt = ResponseFormat.parse(fmt)
    if fmt not in _EXPORT_EXTENSIONS:
        raise ValueError(f"{fmt.value} is not an export format")
    return f"passes_{norad_id}.{_EXPORT_EXTENSIONS[fmt]}"


def export_mime_type(fmt: ResponseFormat | str) -> str:
    return _EXPORT_MIME_TYPES[ResponseFormat.parse(fmt)]


def satellite_label(sat: dict[str, Any]) -> str:
    name = sat.get("name") or sat.get("object_name") or "Unnamed"
    norad_id = sat.get("norad_id") or sat.get("id")
    return f"{name} ({norad_id})" if norad_id is not None else str(name)


def render_satellites(satellites: list[dict[str, Any]]) -> None:
    if not satellites:
        st.info("No satellites tracked yet. Add one by NORAD id.")
        return
    st.dataframe(satellites, hide_index=True)


def render_passes(payload: Any) -> None:
    passes = extract_items(payload, "passes")
    if not passes:
        st.info("No passes above the minimum elevation in this window.")
        return
    st.caption(f"{len(passes)} pass(es)")
    st.dataframe(passes, hide_index=True)
