"""
Term Store

Holds the immutable loaded dataset and resolves term lookups.
"""

import locale
import unicodedata
from typing import Callable, Iterator, Optional

from glossary.core.errors import DataFormatError, NavigationMiss
from glossary.core.logging import get_logger
from glossary.schemas.glossary import GlossaryDataset, Term

logger = get_logger(__name__)


def _fold(name: str) -> str:
    """Case-fold and strip accents, roughly a primary-strength collation"""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def display_sort_key(sort_locale: Optional[str] = None) -> Callable[[Term], tuple]:
    """
    Build the sort key used to order terms by display name.

    With a configured locale the platform collation (strxfrm) is used.
    Otherwise names compare accent- and case-insensitively first, with the
    raw name as tie-breaker so the order is total.
    """
    if sort_locale:
        try:
            locale.setlocale(locale.LC_COLLATE, sort_locale)
        except locale.Error as e:
            logger.warning(f"Unknown sort locale {sort_locale!r}, using default collation: {e}")
        else:
            return lambda t: (locale.strxfrm(t.term), t.term)
    return lambda t: (_fold(t.term), t.term)


def sort_dataset(dataset: GlossaryDataset, sort_locale: Optional[str] = None) -> GlossaryDataset:
    """Return a copy of the dataset with terms sorted by display name"""
    seen: set[str] = set()
    duplicates = []
    for term in dataset.terms:
        if term.id in seen:
            duplicates.append(term.id)
        seen.add(term.id)
    if duplicates:
        raise DataFormatError(
            "Invalid data format: duplicate term ids",
            details={"duplicate_ids": sorted(set(duplicates))},
        )

    terms = tuple(sorted(dataset.terms, key=display_sort_key(sort_locale)))
    return dataset.model_copy(update={"terms": terms})


class TermStore:
    """
    Read-only view over a sorted dataset.

    Name lookups go through a lowercased index built once here, since every
    rendered related-term link needs one.
    """

    def __init__(self, dataset: GlossaryDataset):
        self.dataset = dataset
        self._by_id: dict[str, Term] = {t.id: t for t in dataset.terms}
        self._id_by_name: dict[str, str] = {}
        for t in dataset.terms:
            # First term in display order wins on a name collision
            self._id_by_name.setdefault(t.term.lower(), t.id)

        unknown = {t.category for t in dataset.terms} - set(dataset.categories)
        if unknown:
            logger.warning(f"Terms use undeclared categories: {sorted(unknown)}")

    @property
    def terms(self) -> tuple[Term, ...]:
        return self.dataset.terms

    @property
    def categories(self) -> tuple[str, ...]:
        return self.dataset.categories

    def __len__(self) -> int:
        return len(self.dataset.terms)

    def __iter__(self) -> Iterator[Term]:
        return iter(self.dataset.terms)

    def __contains__(self, term_id: object) -> bool:
        return term_id in self._by_id

    def get_by_id(self, term_id: str) -> Optional[Term]:
        return self._by_id.get(term_id)

    def require(self, term_id: str) -> Term:
        term = self._by_id.get(term_id)
        if term is None:
            raise NavigationMiss(
                f'Term with ID "{term_id}" not found',
                details={"term_id": term_id},
            )
        return term

    def resolve_id_by_name(self, name: str) -> Optional[str]:
        """Case-insensitive exact match against term names"""
        return self._id_by_name.get(name.lower())
