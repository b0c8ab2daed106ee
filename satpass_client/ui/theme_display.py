"""
Streamlit adapters for the theme: feed the browser colour scheme into a
ColorSchemeQuery and render the document root's `dark` class as CSS.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import streamlit as st

from satpass_client.domains.theme.applier import ColorSchemeQuery, InMemoryDocument
from satpass_client.domains.theme.models import DARK_CLASS, ThemePreference

THEME_LABELS: dict[ThemePreference, str] = {
    ThemePreference.LIGHT: "Light",
    ThemePreference.DARK: "Dark",
    ThemePreference.AUTO: "Auto (follow system)",
}

_DARK_CSS = """
<style>
    :root {
        --satpass-text-color: #e5e7eb;
        --satpass-muted-text-color: #94a3b8;
        --satpass-app-bg: #0b1220;
        --satpass-panel-bg: #111827;
        --satpass-border-color: rgba(148, 163, 184, 0.35);
    }
    [data-testid="stAppViewContainer"] {
        background: var(--satpass-app-bg);
    }
    [data-testid="stHeader"] {
        background: rgba(11, 18, 32, 0.92);
    }
    [data-testid="stSidebar"] {
        background: #0f172a;
        border-right: 1px solid var(--satpass-border-color);
    }
    [data-testid="stSidebar"] *, [data-testid="stMainBlockContainer"] * {
        color: var(--satpass-text-color);
    }
    [data-testid="stCaptionContainer"] {
        color: var(--satpass-muted-text-color) !important;
    }
    [data-testid="stDataFrame"] {
        border: 1px solid var(--satpass-border-color);
        border-radius: 0.5rem;
    }
</style>
"""


class StreamlitDocument(InMemoryDocument):
    """Document root whose class list is re-rendered as CSS on each Streamlit run."""

    def render(self) -> None:
        if DARK_CLASS in self.classes:
            st.markdown(_DARK_CSS, unsafe_allow_html=True)


def browser_prefers_dark() -> bool | None:
    """Browser colour scheme via st.context.theme; None when Streamlit cannot tell."""
    theme = getattr(st.context, "theme", None)
    kind = getattr(theme, "type", None) if theme is not None else None
    if kind not in ("light", "dark"):
        return None
    return kind == "dark"


def sync_color_scheme(query: ColorSchemeQuery) -> None:
    """Push the current browser colour scheme into `query` (listeners fire on a flip)."""
    prefers_dark = browser_prefers_dark()
    if prefers_dark is not None:
        query.update(prefers_dark)


def page_origin() -> str | None:
    """scheme://host[:port] of the page serving the app, if Streamlit exposes it."""
    url = getattr(st.context, "url", None)
    if not url:
        return None
    parts = urlsplit(url)
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"
