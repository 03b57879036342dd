"""
Filter Engine

Computes the visible subset of terms for a category and search query.
"""

from typing import Iterable

from glossary.schemas.glossary import ALL_CATEGORIES, Term


def matches_query(term: Term, query: str) -> bool:
    """Substring match on name, definition or full form (case-insensitive)"""
    query = query.lower()
    return (
        query in term.term.lower()
        or query in term.definition.lower()
        or (term.full_form is not None and query in term.full_form.lower())
    )


def filter_terms(terms: Iterable[Term], category: str = ALL_CATEGORIES, query: str = "") -> list[Term]:
    """
    Filter terms by exact category and search query.

    Output keeps the input order. `terms` is usually a TermStore.
    """
    filtered = list(terms)

    if category != ALL_CATEGORIES:
        filtered = [t for t in filtered if t.category == category]

    if query:
        filtered = [t for t in filtered if matches_query(t, query)]

    return filtered
