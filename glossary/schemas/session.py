"""
Session Schemas

Browsing-session requests and the read-only view snapshot.
"""

from pydantic import Field

from glossary.schemas.glossary import ALL_CATEGORIES, CamelModel, TermCard


class SearchUpdate(CamelModel):
    query: str = ""


class CategorySelect(CamelModel):
    category: str = Field(default=ALL_CATEGORIES, min_length=1)


class NavigateRequest(CamelModel):
    term_id: str = Field(min_length=1)
    from_history: bool = False


class NavigateResponse(CamelModel):
    navigated: bool
    term_id: str


class BreadcrumbItem(CamelModel):
    term_id: str
    term: str
    is_current: bool = False


class SessionView(CamelModel):
    session_id: str
    category: str
    search_query: str
    categories: list[str]
    terms: list[TermCard]
    breadcrumb: list[BreadcrumbItem]
    history: list[str]
    total_count: int
    filtered_count: int
    term_count_label: str
    highlighted: list[str] = []
