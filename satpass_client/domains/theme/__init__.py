"""Theme preference, OS colour scheme and document application."""

from satpass_client.domains.theme.applier import ColorSchemeQuery, InMemoryDocument, ThemeApplier
from satpass_client.domains.theme.models import InvalidThemeError, SystemTheme, ThemePreference
from satpass_client.domains.theme.store import ThemeStore

__all__ = [
    "ColorSchemeQuery",
    "InMemoryDocument",
    "InvalidThemeError",
    "SystemTheme",
    "ThemeApplier",
    "ThemePreference",
    "ThemeStore",
]
