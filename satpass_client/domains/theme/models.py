"""Theme values and the effective-theme rule."""

from __future__ import annotations

from enum import Enum

THEME_STORAGE_KEY = "satpass_theme"
DARK_CLASS = "dark"


class ThemePreference(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    AUTO = "auto"


class SystemTheme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_dark_match(cls, matches: bool) -> SystemTheme:
        return cls.DARK if matches else cls.LIGHT


class InvalidThemeError(ValueError):
    """Raised for a theme preference outside light/dark/auto."""


def parse_preference(value: ThemePreference | str) -> ThemePreference:
    if isinstance(value, ThemePreference):
        return value
    if isinstance(value, str):
        try:
            return ThemePreference(value.strip().lower())
        except ValueError:
            pass
    raise InvalidThemeError(
        f"Invalid theme {value!r}; expected one of: "
        + ", ".join(p.value for p in ThemePreference)
    )


def resolve_effective_theme(preference: ThemePreference, system: SystemTheme) -> SystemTheme:
    """AUTO follows the OS; an explicit preference wins otherwise."""
    if preference is ThemePreference.AUTO:
        return system
    return SystemTheme(preference.value)
