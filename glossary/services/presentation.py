"""
Presentation

Turns terms and the history trail into JSON view models, and carries the
scroll/highlight side effect of a navigation.
"""

import asyncio
from typing import Callable, Iterable, Optional, Protocol

from glossary.core.config import settings
from glossary.core.logging import get_logger
from glossary.schemas.glossary import ALL_CATEGORIES, RelatedTermLink, Term, TermCard
from glossary.schemas.session import BreadcrumbItem
from glossary.services.term_store import TermStore
from glossary.ws.manager import ConnectionManager

logger = get_logger(__name__)


def render_related_links(term: Term, store: TermStore) -> list[RelatedTermLink]:
    """
    Resolve related term names to IDs.

    Names with no matching term stay in the list, marked unresolved. A
    renamed term breaks every link that still uses the old name.
    """
    links = []
    for name in term.related_terms:
        term_id = store.resolve_id_by_name(name)
        links.append(RelatedTermLink(name=name, term_id=term_id, resolved=term_id is not None))
    return links


def render_term_card(term: Term, store: TermStore) -> TermCard:
    return TermCard(
        id=term.id,
        term=term.term,
        full_form=term.full_form,
        definition=term.definition,
        category=term.category,
        examples=list(term.examples),
        related_links=render_related_links(term, store),
    )


def render_breadcrumb(terms: Iterable[Term]) -> list[BreadcrumbItem]:
    """Breadcrumb items; the last one is the current term"""
    terms = list(terms)
    return [
        BreadcrumbItem(term_id=t.id, term=t.term, is_current=i == len(terms) - 1)
        for i, t in enumerate(terms)
    ]


def term_count_label(filtered: int, total: int) -> str:
    noun = "term" if total == 1 else "terms"
    if filtered == total:
        return f"{total} {noun}"
    return f"{filtered} of {total} {noun}"


def category_options(store: TermStore) -> list[str]:
    return [ALL_CATEGORIES, *store.categories]


class Presenter(Protocol):
    """What the navigation controller needs from the presentation layer"""

    def scroll_to(self, term_id: str) -> None: ...

    @property
    def highlighted(self) -> list[str]: ...


class HighlightTracker:
    """
    Per-term highlight state: normal -> highlighted on arrival, back to
    normal after `duration` seconds.

    Highlighting a term that is already highlighted cancels its pending
    timer and starts a new one.
    """

    def __init__(
        self,
        duration: Optional[float] = None,
        on_cleared: Optional[Callable[[str], None]] = None,
    ):
        self.duration = duration if duration is not None else settings.highlight_duration_seconds
        self.on_cleared = on_cleared
        self._timers: dict[str, asyncio.TimerHandle] = {}

    @property
    def highlighted(self) -> list[str]:
        return list(self._timers)

    def is_highlighted(self, term_id: str) -> bool:
        return term_id in self._timers

    def highlight(self, term_id: str) -> None:
        loop = asyncio.get_running_loop()
        previous = self._timers.pop(term_id, None)
        if previous is not None:
            previous.cancel()
        self._timers[term_id] = loop.call_later(self.duration, self._expire, term_id)

    def _expire(self, term_id: str) -> None:
        self._timers.pop(term_id, None)
        if self.on_cleared is not None:
            self.on_cleared(term_id)

    def cancel_all(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()


class SessionPresenter:
    """
    Presenter for one browsing session.

    Highlight state is kept here so snapshots can report it; connected
    WebSocket clients get `scroll_to` after the render-settle delay and
    `highlight_cleared` when the highlight times out.
    """

    def __init__(
        self,
        session_id: str,
        manager: Optional[ConnectionManager] = None,
        scroll_delay: Optional[float] = None,
        highlight_duration: Optional[float] = None,
    ):
        self.session_id = session_id
        self.manager = manager
        self.scroll_delay = scroll_delay if scroll_delay is not None else settings.scroll_delay_seconds
        self.highlighter = HighlightTracker(highlight_duration, on_cleared=self._on_cleared)
        self._tasks: set[asyncio.Task] = set()

    @property
    def highlighted(self) -> list[str]:
        return self.highlighter.highlighted

    def scroll_to(self, term_id: str) -> None:
        self.highlighter.highlight(term_id)
        self._spawn(self._send_after_delay({
            "type": "scroll_to",
            "term_id": term_id,
            "highlight_ms": round(self.highlighter.duration * 1000),
        }))

    def _on_cleared(self, term_id: str) -> None:
        self._spawn(self._send({"type": "highlight_cleared", "term_id": term_id}))

    def _spawn(self, coro) -> None:
        if self.manager is None:
            coro.close()
            return
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _send_after_delay(self, message: dict) -> None:
        await asyncio.sleep(self.scroll_delay)
        await self._send(message)

    async def _send(self, message: dict) -> None:
        sent = await self.manager.broadcast(self.session_id, message)
        if not sent:
            logger.debug(f"No listeners for {message['type']} in session {self.session_id}")

    def close(self) -> None:
        self.highlighter.cancel_all()
        for task in list(self._tasks):
            task.cancel()
