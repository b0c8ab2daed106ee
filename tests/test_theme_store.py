"""
Tests for the theme: effective-theme rule, persistence, OS colour-scheme changes,
document application and one-time initialisation.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from satpass_client.domains.theme.applier import ColorSchemeQuery, InMemoryDocument, ThemeApplier
from satpass_client.domains.theme.models import (
    DARK_CLASS,
    THEME_STORAGE_KEY,
    InvalidThemeError,
    SystemTheme,
    ThemePreference,
    resolve_effective_theme,
)
from satpass_client.domains.theme.store import ThemeStore
from satpass_client.infrastructure.storage.local_storage import FileStorage


@pytest.fixture
def storage(tmp_path: Path) -> FileStorage:
    return FileStorage(tmp_path / "storage.json")


@pytest.fixture
def document() -> InMemoryDocument:
    return InMemoryDocument()


@pytest.fixture
def color_scheme() -> ColorSchemeQuery:
    return ColorSchemeQuery(matches=False)


def _store(storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery) -> ThemeStore:
    store = ThemeStore(storage, applier=ThemeApplier(document), color_scheme=color_scheme)
    store.initialize()
    return store


@pytest.mark.parametrize("system", list(SystemTheme))
@pytest.mark.parametrize("preference", list(ThemePreference))
def test_effective_theme_matrix(preference: ThemePreference, system: SystemTheme) -> None:
    """Test the effective theme for every preference and OS theme."""
    expected = system if preference is ThemePreference.AUTO else SystemTheme(preference.value)
    assert resolve_effective_theme(preference, system) is expected


@pytest.mark.parametrize("system_dark", [False, True])
@pytest.mark.parametrize("preference", list(ThemePreference))
def test_store_effective_theme(
    storage: FileStorage, preference: ThemePreference, system_dark: bool
) -> None:
    """Test the store applies what it reports as effective."""
    store = _store(storage, InMemoryDocument(), ColorSchemeQuery(matches=system_dark))
    store.set_theme(preference)
    system = SystemTheme.DARK if system_dark else SystemTheme.LIGHT
    assert store.effective_theme() is resolve_effective_theme(preference, system)
    assert store.applier.applied_theme() is store.effective_theme()


def test_default_preference_is_auto(storage: FileStorage) -> None:
    """Test an empty store starts on auto."""
    assert ThemeStore(storage).preference is ThemePreference.AUTO


def test_preference_loaded_from_storage(storage: FileStorage) -> None:
    """Test the stored preference is loaded."""
    storage.set_item(THEME_STORAGE_KEY, "dark")
    assert ThemeStore(storage).preference is ThemePreference.DARK


def test_unknown_stored_preference_falls_back_to_auto(storage: FileStorage) -> None:
    """Test an unknown stored value falls back to auto."""
    storage.set_item(THEME_STORAGE_KEY, "sepia")
    assert ThemeStore(storage).preference is ThemePreference.AUTO


def test_initialize_applies_current_state(storage: FileStorage, document: InMemoryDocument) -> None:
    """Test initialize applies the effective theme to the document."""
    storage.set_item(THEME_STORAGE_KEY, "auto")
    _store(storage, document, ColorSchemeQuery(matches=True))
    assert document.has_class(DARK_CLASS)


def test_initialize_is_idempotent(
    storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery
) -> None:
    """Test repeated initialize installs one listener and one watcher."""
    store = _store(storage, document, color_scheme)
    store.initialize()
    store.initialize()
    assert store.initialized
    assert color_scheme.listener_count == 1

    writes = MagicMock(wraps=storage.set_item)
    storage.set_item = writes  # type: ignore[method-assign]
    store.set_theme("dark")
    assert writes.call_count == 1


def test_set_theme_persists_and_applies(
    storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery
) -> None:
    """Test set_theme writes storage and updates the document."""
    store = _store(storage, document, color_scheme)
    store.set_theme(ThemePreference.DARK)
    assert storage.get_item(THEME_STORAGE_KEY) == "dark"
    assert document.has_class(DARK_CLASS)

    store.set_theme("light")
    assert storage.get_item(THEME_STORAGE_KEY) == "light"
    assert not document.has_class(DARK_CLASS)


def test_set_same_theme_twice_writes_once(
    storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery
) -> None:
    """Test setting the current theme again changes nothing."""
    store = _store(storage, document, color_scheme)
    writes = MagicMock(wraps=storage.set_item)
    storage.set_item = writes  # type: ignore[method-assign]

    store.set_theme("dark")
    classes_after_first = set(document.classes)
    store.set_theme("dark")

    writes.assert_called_once_with(THEME_STORAGE_KEY, "dark")
    assert document.classes == classes_after_first == {DARK_CLASS}


@pytest.mark.parametrize("bad", ["sepia", "", None, 1, "DARK!"])
def test_invalid_theme_rejected(
    storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery, bad
) -> None:
    """Test invalid values raise and leave state untouched."""
    store = _store(storage, document, color_scheme)
    with pytest.raises(InvalidThemeError):
        store.set_theme(bad)
    assert store.preference is ThemePreference.AUTO
    assert storage.get_item(THEME_STORAGE_KEY) is None


def test_theme_strings_are_case_insensitive(storage: FileStorage) -> None:
    """Test theme strings are trimmed and case-insensitive."""
    store = ThemeStore(storage)
    store.set_theme(" DARK ")
    assert store.preference is ThemePreference.DARK


def test_auto_follows_os_flip(
    storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery
) -> None:
    """Test auto follows an OS colour-scheme change without persisting."""
    store = _store(storage, document, color_scheme)
    assert store.effective_theme() is SystemTheme.LIGHT
    assert not document.has_class(DARK_CLASS)

    color_scheme.update(True)

    assert store.system_theme is SystemTheme.DARK
    assert store.effective_theme() is SystemTheme.DARK
    assert document.has_class(DARK_CLASS)
    assert storage.get_item(THEME_STORAGE_KEY) is None


def test_explicit_light_ignores_os_flip(
    storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery
) -> None:
    """Test an explicit light preference ignores the OS."""
    store = _store(storage, document, color_scheme)
    store.set_theme("light")
    applier_spy = MagicMock(wraps=store.applier.apply)
    store.applier.apply = applier_spy  # type: ignore[method-assign]
    mutations_before = list(document.mutations)

    color_scheme.update(True)

    assert store.system_theme is SystemTheme.DARK
    assert store.effective_theme() is SystemTheme.LIGHT
    applier_spy.assert_not_called()
    assert document.mutations == mutations_before
    assert not document.has_class(DARK_CLASS)


def test_switching_back_to_auto_uses_latest_os_theme(
    storage: FileStorage, document: InMemoryDocument, color_scheme: ColorSchemeQuery
) -> None:
    """Test returning to auto picks up the current OS theme."""
    store = _store(storage, document, color_scheme)
    store.set_theme("light")
    color_scheme.update(True)
    store.set_theme("auto")
    assert document.has_class(DARK_CLASS)


def test_watch_and_unsubscribe(storage: FileStorage) -> None:
    """Test watchers stop after unsubscribing."""
    store = ThemeStore(storage)
    seen: list[ThemePreference] = []
    unsubscribe = store.watch(seen.append)
    store.set_theme("dark")
    unsubscribe()
    store.set_theme("light")
    assert seen == [ThemePreference.DARK]


def test_applier_is_idempotent() -> None:
    """Test applying the same theme twice mutates the document once."""
    document = InMemoryDocument()
    applier = ThemeApplier(document)
    applier.apply(SystemTheme.DARK)
    applier.apply(SystemTheme.DARK)
    assert document.mutations == [("add", DARK_CLASS)]
    applier.apply(SystemTheme.LIGHT)
    applier.apply(SystemTheme.LIGHT)
    assert document.mutations == [("add", DARK_CLASS), ("remove", DARK_CLASS)]


def test_color_scheme_notifies_only_on_change() -> None:
    """Test the colour-scheme query notifies only on change."""
    query = ColorSchemeQuery(matches=False)
    listener = MagicMock()
    query.add_listener(listener)
    query.update(False)
    query.update(True)
    query.update(True)
    query.remove_listener(listener)
    query.update(False)
    listener.assert_called_once_with(True)


def test_failed_write_still_applies_theme(document: InMemoryDocument, color_scheme: ColorSchemeQuery) -> None:
    """Test the document follows the preference when the storage write fails."""
    broken = MagicMock()
    broken.get_item.return_value = None
    broken.set_item.side_effect = OSError("disk full")
    store = _store(broken, document, color_scheme)

    with pytest.raises(OSError):
        store.set_theme("dark")

    assert store.preference is ThemePreference.DARK
    assert store.effective_theme() is SystemTheme.DARK
    assert document.has_class(DARK_CLASS)


def test_sessions_do_not_share_theme(tmp_path: Path) -> None:
    """Test two sessions with their own storage keep separate themes."""
    first_doc, second_doc = InMemoryDocument(), InMemoryDocument()
    first = _store(FileStorage(tmp_path / "first.json"), first_doc, ColorSchemeQuery())
    second = _store(FileStorage(tmp_path / "second.json"), second_doc, ColorSchemeQuery())

    first.set_theme("dark")

    assert second.preference is ThemePreference.AUTO
    assert not second_doc.has_class(DARK_CLASS)
    assert ThemeStore(FileStorage(tmp_path / "second.json")).preference is ThemePreference.AUTO
