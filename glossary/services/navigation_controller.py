"""
Navigation Controller

Orchestrates a browsing session: filter input, navigation between terms,
breadcrumb history and the scroll/highlight side effect.
"""

from dataclasses import dataclass, field

from glossary.core.errors import NavigationMiss
from glossary.core.logging import get_logger
from glossary.schemas.glossary import ALL_CATEGORIES, Term
from glossary.schemas.session import BreadcrumbItem, SessionView
from glossary.services import presentation
from glossary.services.filter_engine import filter_terms
from glossary.services.navigation_history import NavigationHistory
from glossary.services.presentation import Presenter
from glossary.services.term_store import TermStore

logger = get_logger(__name__)


@dataclass
class FilterState:
    category: str = ALL_CATEGORIES
    # Always lowercased
    search_query: str = ""

    def reset(self) -> None:
        self.category = ALL_CATEGORIES
        self.search_query = ""


@dataclass
class GlossarySession:
    """Everything one browsing session owns"""

    session_id: str
    store: TermStore
    history: NavigationHistory
    presenter: Presenter
    filters: FilterState = field(default_factory=FilterState)


class NavigationController:
    def __init__(self, session: GlossarySession):
        self.session = session
        self.filtered_terms: list[Term] = []
        self.breadcrumb: list[BreadcrumbItem] = []
        self.refresh()

    @property
    def store(self) -> TermStore:
        return self.session.store

    @property
    def history(self) -> NavigationHistory:
        return self.session.history

    @property
    def filters(self) -> FilterState:
        return self.session.filters

    def filter_terms(self) -> list[Term]:
        self.filtered_terms = filter_terms(
            self.store, self.filters.category, self.filters.search_query
        )
        return self.filtered_terms

    def refresh_breadcrumb(self) -> list[BreadcrumbItem]:
        self.breadcrumb = presentation.render_breadcrumb(self.history.to_display_list(self.store))
        return self.breadcrumb

    def refresh(self) -> None:
        self.filter_terms()
        self.refresh_breadcrumb()

    def set_search_query(self, text: str) -> list[Term]:
        self.filters.search_query = text.lower()
        return self.filter_terms()

    def select_category(self, category: str) -> list[Term]:
        self.filters.category = category
        return self.filter_terms()

    async def navigate_to(self, term_id: str, from_history: bool = False) -> bool:
        """
        Navigate to a term.

        Breadcrumb clicks (from_history) cut the trail back to the term;
        other navigations append to it. Filters are reset either way so the
        target is always in the rendered set. Unknown IDs are a logged no-op.
        """
        try:
            self.store.require(term_id)
        except NavigationMiss as e:
            logger.warning(f"{e.message} (session {self.session.session_id})")
            return False

        if from_history:
            await self.history.truncate_after(term_id)
        else:
            await self.history.append(term_id)

        self.filters.reset()
        self.refresh()
        self.session.presenter.scroll_to(term_id)
        return True

    async def clear_history(self) -> None:
        await self.history.clear()
        self.refresh_breadcrumb()

    def snapshot(self) -> SessionView:
        """Read-only view of the session for the presentation layer"""
        total = len(self.store)
        return SessionView(
            session_id=self.session.session_id,
            category=self.filters.category,
            search_query=self.filters.search_query,
            categories=presentation.category_options(self.store),
            terms=[presentation.render_term_card(t, self.store) for t in self.filtered_terms],
            breadcrumb=list(self.breadcrumb),
            history=list(self.history.trail),
            total_count=total,
            filtered_count=len(self.filtered_terms),
            term_count_label=presentation.term_count_label(len(self.filtered_terms), total),
            highlighted=self.session.presenter.highlighted,
        )

    def close(self) -> None:
        close = getattr(self.session.presenter, "close", None)
        if close is not None:
            close()
