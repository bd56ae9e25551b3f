"""Collaborator protocols supplied by the hosting surface.

The pagination core never renders or observes content itself. Height
measurement, change notification, caret access and timers come from the host
through the protocols below, so the engine can run against a browser bridge,
a ReportLab measurer or plain in-memory fakes.
"""

from __future__ import annotations

from typing import Callable, List, Protocol

from bs4 import PageElement, Tag

from .models import Caret, PastePayload


class Measurer(Protocol):
    """Protocol for block height measurement."""

    def measure(self, block: Tag, width: float) -> float:
        """Return the rendered height of ``block`` at ``width`` pixels."""


class ChangeWatcher(Protocol):
    """Protocol for content mutation notifications."""

    def on_content_changed(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""


class CursorHost(Protocol):
    """Protocol for caret read/write and scrolling."""

    def get_caret(self) -> Caret | None:
        """Return the current caret, or None when nothing is selected."""

    def set_caret(self, node: PageElement, offset: int) -> None:
        """Place a collapsed caret at ``offset`` inside ``node``."""

    def scroll_into_view(
        self, node: PageElement, *, behavior: str = "auto", block: str = "nearest"
    ) -> None:
        """Scroll ``node`` into the visible area."""


class PasteSource(Protocol):
    """Protocol for paste interception."""

    def on_paste_intercept(self, callback: Callable[[PastePayload], str]) -> None:
        """Register ``callback``; its return value is the text to insert."""


class KeySource(Protocol):
    """Protocol for keydown interception."""

    def on_keydown(self, callback: Callable[[str], bool]) -> None:
        """Register ``callback``; a True return suppresses the default action."""


class TimerHandle(Protocol):
    """Protocol for a cancellable scheduled call."""

    def cancel(self) -> None:
        """Cancel the call if it has not run yet."""


class Scheduler(Protocol):
    """Protocol for deferring work to a later event-loop turn."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` after ``delay`` seconds."""


class ChangeHub:
    """In-memory watcher, paste and key source driven by the host.

    Example:
        >>> hub = ChangeHub()
        >>> seen = []
        >>> stop = hub.on_content_changed(lambda: seen.append(1))
        >>> hub.notify()
        >>> stop()
        >>> hub.notify()
        >>> seen
        [1]
    """

    def __init__(self) -> None:
        self._listeners: List[Callable[[], None]] = []
        self._paste_handlers: List[Callable[[PastePayload], str]] = []
        self._key_handlers: List[Callable[[str], bool]] = []

    def on_content_changed(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def on_paste_intercept(self, callback: Callable[[PastePayload], str]) -> None:
        self._paste_handlers.append(callback)

    def on_keydown(self, callback: Callable[[str], bool]) -> None:
        self._key_handlers.append(callback)

    def notify(self) -> None:
        """Deliver a change notification to every listener."""

        for listener in list(self._listeners):
            listener()

    def paste(self, payload: PastePayload) -> str:
        """Return the text to insert for ``payload`` after interception."""

        text = payload.text
        for handler in self._paste_handlers:
            text = handler(payload)
        return text

    def keydown(self, key: str) -> bool:
        """Dispatch ``key`` and return True when a handler suppressed it."""

        return any([handler(key) for handler in self._key_handlers])
