"""Load runtime configuration and resolve the API base. Uses python-dotenv.

The runtime config lives in `.env` (or the process environment) so operators can
repoint the client after deployment without touching the code. Callers should use
the accessor functions below rather than reading `os.environ` directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from satpass_client.infrastructure.storage.local_storage import KeyValueStore

API_ENDPOINT_STORAGE_KEY = "satpass_api_endpoint"
DEFAULT_ORIGIN = "http://localhost:8501"
DEFAULT_API_TIMEOUT_MS = 30000

_resolved: Config | None = None


@dataclass(frozen=True)
class Config:
    """Active API settings. Resolved once per process (or per UI session)."""

    api_base: str
    api_timeout_ms: int = DEFAULT_API_TIMEOUT_MS

    @property
    def api_timeout_seconds(self) -> float:
        return self.api_timeout_ms / 1000


def _project_root() -> Path:
    """Resolve project root (the directory holding app.py)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Uses override=True so an edited .env wins over values already exported.
    """
    load_dotenv(_project_root() / ".env", override=True)


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def api_endpoint() -> str | None:
    """Optional: runtime API endpoint, e.g. http://api.example.com:8080 or https://example.com/satpass-api."""
    val = get_optional("SATPASS_API_ENDPOINT", "")
    return val or None


def api_timeout_ms() -> int:
    """Optional: API request timeout in milliseconds. Default 30000."""
    value = get_optional_int("SATPASS_API_TIMEOUT", DEFAULT_API_TIMEOUT_MS)
    return value if value > 0 else DEFAULT_API_TIMEOUT_MS


def storage_path() -> Path:
    """Optional: location of the local key/value store. Default data/local_storage.json."""
    val = get_optional("SATPASS_STORAGE_PATH", "")
    if val:
        return Path(val).expanduser()
    return _project_root() / "data" / "local_storage.json"


def log_level() -> str:
    """Optional: log level name. Default INFO."""
    return get_optional("SATPASS_LOG_LEVEL", "INFO").upper()


def project_root() -> Path:
    """Project root directory."""
    return _project_root()


# --- API base resolution ---

def build_config(
    storage: KeyValueStore | None = None,
    origin: str | None = None,
) -> Config:
    """
    Build a Config from the current sources. Not memoised; the Streamlit app
    calls this once per browser session because the storage override is per user.

    API base priority, first present wins:
        1. `satpass_api_endpoint` in local storage (per-user override)
        2. SATPASS_API_ENDPOINT from the runtime config
        3. the page origin (`origin`, else DEFAULT_ORIGIN)
    """
    base = None
    if storage is not None:
        base = (storage.get_item(API_ENDPOINT_STORAGE_KEY) or "").strip() or None
    if not base:
        base = api_endpoint()
    if not base:
        base = (origin or "").strip() or DEFAULT_ORIGIN

    return Config(api_base=base.rstrip("/"), api_timeout_ms=api_timeout_ms())


def resolve_config(
    storage: KeyValueStore | None = None,
    origin: str | None = None,
) -> Config:
    """Resolve the process-wide Config. The first call wins; later calls return the same object."""
    global _resolved
    if _resolved is None:
        _resolved = build_config(storage, origin)
    return _resolved


def reset_resolved_config() -> None:
    """Forget the memoised Config. Tests only."""
    global _resolved
    _resolved = None
