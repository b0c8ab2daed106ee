"""
Theme state: the user's preference and the OS colour scheme.

Construct one ThemeStore per app (or per UI session), call `initialize()` once
it is wired to a document, then hand the same instance to every component.
"""

from __future__ import annotations

from typing import Callable

from satpass_client.domains.theme.applier import ColorSchemeQuery, ThemeApplier
from satpass_client.domains.theme.models import (
    THEME_STORAGE_KEY,
    SystemTheme,
    ThemePreference,
    parse_preference,
    resolve_effective_theme,
)
from satpass_client.infrastructure.storage.local_storage import KeyValueStore
from satpass_client.utils.logger import get_logger

logger = get_logger("theme")

PreferenceWatcher = Callable[[ThemePreference], None]


class ThemeStore:
    def __init__(
        self,
        storage: KeyValueStore,
        applier: ThemeApplier | None = None,
        color_scheme: ColorSchemeQuery | None = None,
    ) -> None:
        self._storage = storage
        self.applier = applier or ThemeApplier()
        self.color_scheme = color_scheme or ColorSchemeQuery()
        self._preference = self._load_preference()
        self._system_theme = SystemTheme.LIGHT
        self._watchers: list[PreferenceWatcher] = []
        self._initialized = False

    def _load_preference(self) -> ThemePreference:
        raw = self._storage.get_item(THEME_STORAGE_KEY)
        if not raw:
            return ThemePreference.AUTO
        try:
            return parse_preference(raw)
        except ValueError:
            logger.warning("Ignoring unknown stored theme %r; using auto", raw)
            return ThemePreference.AUTO

    @property
    def preference(self) -> ThemePreference:
        return self._preference

    @property
    def system_theme(self) -> SystemTheme:
        return self._system_theme

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Read the OS colour scheme, apply the effective theme and install the
        OS listener and the persist-and-apply watcher. Runs once; later calls
        do nothing.
        """
        if self._initialized:
            return

        self._system_theme = SystemTheme.from_dark_match(self.color_scheme.matches)
        self.applier.apply(self.effective_theme())
        self.color_scheme.add_listener(self.on_system_theme_change)
        self.watch(self._persist_and_apply)

        self._initialized = True
        logger.info(
            "Theme initialised: preference=%s system=%s",
            self._preference.value, self._system_theme.value,
        )

    def watch(self, watcher: PreferenceWatcher) -> Callable[[], None]:
        """Call `watcher` after every preference change. Returns an unsubscribe function."""
        self._watchers.append(watcher)

        def unsubscribe() -> None:
            if watcher in self._watchers:
                self._watchers.remove(watcher)

        return unsubscribe

    def set_theme(self, preference: ThemePreference | str) -> None:
        """
        Set the user's preference. Watchers (persistence, document) run
        synchronously; setting the current value again changes nothing.

        Raises:
            InvalidThemeError: If `preference` is not light, dark or auto.
        """
        new = parse_preference(preference)
        if new is self._preference:
            return
        self._preference = new
        logger.info("Theme preference set to %s", new.value)
        for watcher in list(self._watchers):
            watcher(new)

    def effective_theme(self) -> SystemTheme:
        return resolve_effective_theme(self._preference, self._system_theme)

    def on_system_theme_change(self, matches: bool) -> None:
        """OS colour-scheme listener. The document follows only under AUTO."""
        self._system_theme = SystemTheme.from_dark_match(matches)
        logger.debug("System theme changed to %s", self._system_theme.value)
        if self._preference is ThemePreference.AUTO:
            self.applier.apply(self.effective_theme())

    def _persist_and_apply(self, preference: ThemePreference) -> None:
        # Apply first: the document must match the preference even if the write fails
        self.applier.apply(self.effective_theme())
        self._storage.set_item(THEME_STORAGE_KEY, preference.value)
