"""
Per-session key/value store backed by the browser's localStorage.

streamlit_js_eval components only return values on a later rerun, so `load()`
reports whether another pass is needed before the stored items are known.
Values are cached on the instance; keep one instance per session in
`st.session_state`.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any, Iterable

from streamlit_js_eval import get_local_storage, set_local_storage, streamlit_js_eval

from satpass_client.utils.logger import get_logger

logger = get_logger("storage")


def _eval_js_hidden(js_expression: str, *, key: str, want_output: bool = True) -> Any:
    wrapped_expression = "(setFrameHeight(0), (" + str(js_expression) + "))"
    return streamlit_js_eval(js_expressions=wrapped_expression, key=key, want_output=want_output)


def _digest(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest()[:12]


class BrowserLocalStorage:
    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = tuple(keys)
        self._items: dict[str, str] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> bool:
        """
        Read the tracked keys from the browser. Returns True when the component
        has not answered yet and the caller should rerun before trusting the values.
        """
        retry_needed = False
        for key in self._keys:
            raw = get_local_storage(key, component_key=f"satpass_storage_read_{key}")
            exists = _eval_js_hidden(
                "Object.prototype.hasOwnProperty.call(window.localStorage, " + json.dumps(key) + ")",
                key=f"satpass_storage_exists_{key}",
            )
            if isinstance(raw, str):
                self._items[key] = raw
            elif raw is None and exists is None:
                retry_needed = True
            elif exists is True:
                # key is there but the value did not arrive on this pass
                retry_needed = True
        if not retry_needed:
            self._loaded = True
        return retry_needed

    def mark_loaded(self) -> None:
        """Stop waiting for the browser; keys not read so far count as absent."""
        if not self._loaded:
            logger.warning("Browser storage did not answer; using session-only values")
        self._loaded = True

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        value = str(value)
        self._items[key] = value
        set_local_storage(key, value, component_key=f"satpass_storage_write_{key}_{_digest(value)}")
        logger.debug("Stored %s in browser storage", key)

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is None:
            return
        _eval_js_hidden(
            "window.localStorage.removeItem(" + json.dumps(key) + ")",
            key=f"satpass_storage_remove_{key}",
            want_output=False,
        )
