"""
Presentation side of the theme: the document root that carries the `dark`
class, the OS colour-scheme query, and the applier that keeps them in line.
"""

from __future__ import annotations

from typing import Callable, Protocol

from satpass_client.domains.theme.models import DARK_CLASS, SystemTheme
from satpass_client.utils.logger import get_logger

logger = get_logger("theme")

ColorSchemeListener = Callable[[bool], None]


class DocumentRoot(Protocol):
    def has_class(self, name: str) -> bool: ...

    def add_class(self, name: str) -> None: ...

    def remove_class(self, name: str) -> None: ...


class InMemoryDocument:
    """Class list of a document root. `mutations` records actual changes only."""

    def __init__(self, classes: set[str] | None = None) -> None:
        self.classes: set[str] = set(classes or ())
        self.mutations: list[tuple[str, str]] = []

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def add_class(self, name: str) -> None:
        if name not in self.classes:
            self.classes.add(name)
            self.mutations.append(("add", name))

    def remove_class(self, name: str) -> None:
        if name in self.classes:
            self.classes.discard(name)
            self.mutations.append(("remove", name))


class ColorSchemeQuery:
    """
    The OS "prefers dark colour scheme" signal.

    `matches` is True when the OS prefers dark. Whatever feeds the signal calls
    `update`; listeners run only when the value actually flips.
    """

    def __init__(self, matches: bool = False) -> None:
        self.matches = matches
        self._listeners: list[ColorSchemeListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: ColorSchemeListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ColorSchemeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def update(self, matches: bool) -> None:
        matches = bool(matches)
        if matches == self.matches:
            return
        self.matches = matches
        for listener in list(self._listeners):
            listener(matches)


class ThemeApplier:
    """Sets or clears the single `dark` class on the document root."""

    def __init__(self, document: DocumentRoot | None = None) -> None:
        self.document = document if document is not None else InMemoryDocument()

    def apply(self, effective: SystemTheme) -> None:
        if effective is SystemTheme.DARK:
            self.document.add_class(DARK_CLASS)
        else:
            self.document.remove_class(DARK_CLASS)
        logger.debug("Applied %s theme to document root", effective.value)

    def applied_theme(self) -> SystemTheme:
        return SystemTheme.DARK if self.document.has_class(DARK_CLASS) else SystemTheme.LIGHT
