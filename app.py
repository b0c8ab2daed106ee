"""
satpass: Streamlit UI entry point.
"""

import streamlit as st
from streamlit_autorefresh import st_autorefresh

# Load .env first so an edited runtime config (SATPASS_API_ENDPOINT, ...) is picked up
from satpass_client.utils.config import API_ENDPOINT_STORAGE_KEY, build_config, load_config, log_level
load_config()

from satpass_client.domains.theme.applier import ColorSchemeQuery, ThemeApplier
from satpass_client.domains.theme.models import THEME_STORAGE_KEY, ThemePreference
from satpass_client.domains.theme.store import ThemeStore
from satpass_client.infrastructure.api.errors import SatpassApiError
from satpass_client.services.api_client import SatpassApi
from satpass_client.ui.browser_storage import BrowserLocalStorage
from satpass_client.ui.pass_display import (
    export_filename,
    export_mime_type,
    extract_items,
    render_passes,
    render_satellites,
    satellite_label,
)
from satpass_client.ui.theme_display import (
    THEME_LABELS,
    StreamlitDocument,
    page_origin,
    sync_color_scheme,
)
from satpass_client.utils.logger import get_logger, setup_logger

STORAGE_BOOTSTRAP_MAX_RUNS = 6
STORAGE_BOOTSTRAP_RETRY_INTERVAL_MS = 250

setup_logger(level=log_level())
log = get_logger()

st.set_page_config(page_title="satpass", layout="wide")

# Browser localStorage, one per session; wait a few reruns for the component to answer
if "browser_storage" not in st.session_state:
    st.session_state.browser_storage = BrowserLocalStorage((API_ENDPOINT_STORAGE_KEY, THEME_STORAGE_KEY))
    st.session_state.storage_bootstrap_runs = 0
storage: BrowserLocalStorage = st.session_state.browser_storage
if not storage.loaded:
    runs = st.session_state.storage_bootstrap_runs + 1
    st.session_state.storage_bootstrap_runs = runs
    if storage.load() and runs < STORAGE_BOOTSTRAP_MAX_RUNS:
        st_autorefresh(
            interval=STORAGE_BOOTSTRAP_RETRY_INTERVAL_MS,
            limit=1,
            key=f"storage_bootstrap_wait_{runs}",
        )
        st.stop()
    storage.mark_loaded()

if "config" not in st.session_state:
    st.session_state.config = build_config(storage=storage, origin=page_origin())
config = st.session_state.config

# One theme store per browser session, initialised once
if "theme_store" not in st.session_state:
    document = StreamlitDocument()
    st.session_state.theme_store = ThemeStore(
        storage,
        applier=ThemeApplier(document),
        color_scheme=ColorSchemeQuery(),
    )
    st.session_state.theme_document = document
theme_store: ThemeStore = st.session_state.theme_store
sync_color_scheme(theme_store.color_scheme)
theme_store.initialize()

# Separate clients so each panel keeps its own loading/error state
if "satellites_api" not in st.session_state:
    st.session_state.satellites_api = SatpassApi(config=config)
    st.session_state.passes_api = SatpassApi(config=config)
    st.session_state.exports_api = SatpassApi(config=config)
satellites_api: SatpassApi = st.session_state.satellites_api
passes_api: SatpassApi = st.session_state.passes_api
exports_api: SatpassApi = st.session_state.exports_api




def _run(api: SatpassApi, label: str, fn, *args, **kwargs):
    """Call the API with a spinner; show the error and return None on failure."""
    try:
        with st.spinner(label):
            return fn(*args, **kwargs)
    except SatpassApiError as e:
        log.warning("%s failed: %s", label, e)
        st.error(api.error or str(e))
        return None


with st.sidebar:
    st.header("Settings")
    options = list(ThemePreference)
    choice = st.radio(
        "Theme",
        options,
        index=options.index(theme_store.preference),
        format_func=lambda p: THEME_LABELS[p],
    )
    theme_store.set_theme(choice)
    st.caption(f"API: `{config.api_base}`")

    with st.expander("Ground station"):
        server_config = _run(satellites_api, "Loading server config…", satellites_api.get_config) or {}
        qth = (server_config.get("qth") or {}) if isinstance(server_config, dict) else {}
        with st.form("qth_form"):
            lat = st.number_input("Latitude", value=float(qth.get("latitude", 0.0)), format="%.4f")
            lon = st.number_input("Longitude", value=float(qth.get("longitude", 0.0)), format="%.4f")
            alt = st.number_input("Altitude (m)", value=float(qth.get("altitude", 0.0)))
            if st.form_submit_button("Save"):
                saved = _run(
                    satellites_api, "Saving ground station…", satellites_api.update_ground_station,
                    {"latitude": lat, "longitude": lon, "altitude": alt},
                )
                if saved is not None:
                    st.success("Ground station updated")

st.session_state.theme_document.render()
st.title("satpass")

sat_tab, catalog_tab, stats_tab = st.tabs(["Satellites", "Catalog", "Stats"])

with sat_tab:
    bookmarked_only = st.toggle("Bookmarked only")
    fetch = satellites_api.get_bookmarked_satellites if bookmarked_only else satellites_api.get_satellites
    satellites = extract_items(_run(satellites_api, "Loading satellites…", fetch), "satellites")
    render_satellites(satellites)
    satellites = [s for s in satellites if s.get("norad_id") or s.get("id")]

    col_add, col_remove = st.columns(2)
    with col_add:
        new_id = st.number_input("Add satellite by NORAD id", min_value=1, step=1, value=25544)
        if st.button("Add"):
            if _run(satellites_api, "Adding…", satellites_api.add_satellite, int(new_id)) is not None:
                st.rerun()

    if satellites:
        selected = st.selectbox("Satellite", satellites, format_func=satellite_label)
        norad_id = int(selected.get("norad_id") or selected.get("id"))
        with col_remove:
            if st.button("Remove selected"):
                if _run(satellites_api, "Removing…", satellites_api.remove_satellite, norad_id) is not None:
                    st.rerun()
            if selected.get("bookmarked"):
                if st.button("Unbookmark"):
                    _run(satellites_api, "Updating…", satellites_api.unbookmark_satellite, norad_id)
                    st.rerun()
            elif st.button("Bookmark"):
                _run(satellites_api, "Updating…", satellites_api.bookmark_satellite, norad_id)
                st.rerun()

        st.subheader("Passes")
        c1, c2, c3 = st.columns(3)
        days = c1.slider("Days", 1, 14, 7)
        min_el = c2.slider("Min elevation (°)", 0, 90, 10)
        step = c3.select_slider("Step (s)", [10, 30, 60, 120, 300], value=60)
        render_passes(_run(passes_api, "Predicting passes…", passes_api.get_passes, norad_id, days, min_el, step))

        # Exports: fetched only on button press, through their own client
        export_cols = st.columns(2)
        for col, fmt in zip(export_cols, ("csv", "ical")):
            cache_key = f"export_{fmt}_{norad_id}_{days}_{min_el}_{step}"
            with col:
                if st.button(f"Prepare {fmt.upper()}", key=f"prepare_{fmt}"):
                    st.session_state[cache_key] = _run(
                        exports_api, "Preparing export…", exports_api.get_passes,
                        norad_id, days, min_el, step, fmt,
                    )
                text = st.session_state.get(cache_key)
                if text is not None:
                    st.download_button(
                        f"Download {fmt.upper()}",
                        data=text,
                        file_name=export_filename(norad_id, fmt),
                        mime=export_mime_type(fmt),
                        key=f"export_{fmt}",
                    )

with catalog_tab:
    query = st.text_input("Search the catalog")
    if query:
        results = _run(satellites_api, "Searching…", satellites_api.search_satellites, query, 50)
        render_satellites(extract_items(results, "satellites"))
    groups = extract_items(_run(satellites_api, "Loading groups…", satellites_api.get_catalog_groups), "groups")
    if groups:
        group = st.selectbox("Group", groups, format_func=lambda g: str(g.get("name", "?")))
        members = _run(satellites_api, "Loading group…", satellites_api.get_catalog_group, str(group.get("name", "")), 100)
        render_satellites(extract_items(members, "satellites"))

with stats_tab:
    col_sys, col_cat = st.columns(2)
    with col_sys:
        st.subheader("System")
        st.json(_run(satellites_api, "Loading stats…", satellites_api.get_system_stats) or {})
    with col_cat:
        st.subheader("Catalog")
        st.json(_run(satellites_api, "Loading stats…", satellites_api.get_catalog_stats) or {})
