"""Editable pagination that reflows pages while the user types."""

from __future__ import annotations

import copy
import logging
from typing import Callable, List

from ..host import ChangeWatcher, KeySource, PasteSource, Scheduler
from ..models import Group, PastePayload
from ..parser import element_children, is_text_run, page_content_of
from ..text import plain_text_from_html
from ..flow.flow_engine import PageFlow
from .editor_cursor import CursorCodec, is_at_start_of_content
from .editor_detect import needs_reflow
from .editor_schedule import AsyncioScheduler, Debouncer

logger = logging.getLogger(__name__)

ReflowComplete = Callable[[int], None]

BACKSPACE = "Backspace"


class PageFlowEditor(PageFlow):
    """PageFlow whose pages stay paginated while their content is edited.

    After the initial pass the content regions become editable. Change
    notifications that leave a page overflowing, or leave room to pull content
    forward, schedule a debounced reflow: every page is flattened back into a
    section list, repacked from the configured start number, and the caret is
    restored by global text offset.

    Args:
        change_watcher: Source of content-changed notifications.
        scheduler: Timer source for the debounce; defaults to asyncio.
        paste_source: Optional paste interception hook.
        key_source: Optional keydown interception hook.
        on_reflow: Called with the new page count after each reflow.
        **kwargs: Passed to ``PageFlow``.
    """

    def __init__(
        self,
        *,
        change_watcher: ChangeWatcher | None = None,
        scheduler: Scheduler | None = None,
        paste_source: PasteSource | None = None,
        key_source: KeySource | None = None,
        on_reflow: ReflowComplete | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.editable = self.settings.editable
        self.change_watcher = change_watcher
        self.paste_source = paste_source
        self.key_source = key_source
        self.on_reflow = on_reflow
        self.reflowing = False
        self.editing = False
        self._unsubscribe: Callable[[], None] | None = None
        self._hooks_bound = False
        self._codec = CursorCodec(self.cursor_host) if self.cursor_host else None
        self.scheduler = scheduler or AsyncioScheduler()
        self._debouncer = Debouncer(
            scheduler=self.scheduler,
            delay=self.settings.reflow_delay,
            callback=self.reflow,
        )

    @property
    def reflow_pending(self) -> bool:
        """Return True while a debounced reflow is waiting to run."""

        return self._debouncer.pending

    def flow(self):
        """Run the static pass, then enable editing when configured."""

        result = super().flow()
        if result is not None and self.editable:
            self.enable_editing()
        return result

    def enable_editing(self) -> None:
        """Make content regions editable and start watching for changes."""

        if self.packer is None:
            return
        self.packer.editable = True
        for page in self.pages:
            page.content["contenteditable"] = "true"
        if self.change_watcher is not None and self._unsubscribe is None:
            self._unsubscribe = self.change_watcher.on_content_changed(
                self.handle_mutation
            )
        if not self._hooks_bound:
            if self.paste_source is not None:
                self.paste_source.on_paste_intercept(self.handle_paste)
            if self.key_source is not None:
                self.key_source.on_keydown(self.handle_keydown)
            self._hooks_bound = True
        self.editing = True

    def disable_editing(self) -> None:
        """Stop watching for changes and lock the content regions."""

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._debouncer.cancel()
        if self.packer is not None:
            self.packer.editable = False
        for page in self.pages:
            page.content["contenteditable"] = "false"
        self.editing = False

    def needs_reflow(self) -> bool:
        """Return True when the live pages overflow or could be tightened."""

        return needs_reflow(
            pages=self.pages, measurer=self.measurer, settings=self.settings
        )

    def handle_mutation(self) -> None:
        """React to a content change by scheduling a reflow when needed.

        Notifications that arrive during a reflow are dropped.
        """

        if self.reflowing or not self.editing:
            return
        if not self.needs_reflow():
            return
        self._debouncer.trigger()

    def handle_paste(self, payload: PastePayload) -> str:
        """Return the plain text to insert for a paste.

        Args:
            payload: Clipboard flavours offered by the host.
        Returns:
            The plain-text flavour, or the HTML flavour reduced to text.
        """

        if payload.text:
            return payload.text
        return plain_text_from_html(payload.html)

    def handle_keydown(self, key: str) -> bool:
        """Intercept Backspace at the very start of a page.

        Args:
            key: Key name reported by the host.
        Returns:
            True when the default deletion must be suppressed.
        """

        if key != BACKSPACE or not self.editing or self.cursor_host is None:
            return False
        caret = self.cursor_host.get_caret()
        if caret is None or not caret.collapsed:
            return False
        content = page_content_of(caret.node)
        if content is None or not is_at_start_of_content(content=content, caret=caret):
            return False
        index = next(
            (idx for idx, page in enumerate(self.pages) if page.content is content),
            None,
        )
        if not index:
            return False
        self.merge_with_previous_page(index)
        return True

    def merge_with_previous_page(self, index: int) -> None:
        """Move the caret to the end of the previous page and reflow.

        Args:
            index: Position of the page whose start the caret is at.
        Returns:
            None.
        """

        if index <= 0 or index >= len(self.pages):
            return
        previous = self.pages[index - 1].content
        if self.cursor_host is not None and previous.contents:
            last = previous.contents[-1]
            if is_text_run(last):
                self.cursor_host.set_caret(last, len(last))
            else:
                self.cursor_host.set_caret(previous, len(previous.contents))
        self.reflow()

    def collect_all_content(self) -> List:
        """Return clones of every page's direct content children, in order.

        Only element children are collected; bare text typed directly into a
        content region, outside any block, is dropped on reflow.
        """

        return [
            copy.copy(child)
            for page in self.pages
            for child in element_children(page.content)
        ]

    def reflow(self) -> int:
        """Rebuild every page from the current content.

        Returns:
            Number of pages after the rebuild.
        """

        if self.packer is None:
            return 0
        if self.reflowing:
            return len(self.pages)
        self._debouncer.cancel()
        self.reflowing = True
        try:
            snapshot = self._codec.save(self.pages) if self._codec else None
            nodes = self.collect_all_content()
            self.packer.reset()
            self.toc.reset()
            self.toc.reserve(nodes)
            width = self.settings.content_width
            for node in nodes:
                self.packer.place(Group.single(node, self.measurer.measure(node, width)))
            if not self.packer.pages:
                self.packer.open_page()
            if self._codec is not None:
                self._codec.restore(snapshot, self.pages)
        finally:
            self.reflowing = False
        self.render_toc()
        count = len(self.pages)
        logger.debug("pageflow: reflowed %d blocks onto %d pages", len(nodes), count)
        if self.on_reflow is not None:
            self.on_reflow(count)
        return count

    def get_content(self) -> List[str]:
        """Return the inner HTML of each page's content region."""

        return [page.content.decode_contents() for page in self.pages]

    def get_content_flat(self) -> str:
        """Return the outer HTML of every content block, newline-joined."""

        return "\n".join(str(node) for node in self.collect_all_content())
