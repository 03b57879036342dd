"""
Glossary Schemas

Terms and the loaded dataset. JSON uses camelCase field names.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ALL_CATEGORIES = "all"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Term(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    term: str
    full_form: Optional[str] = None
    definition: str
    category: str
    # Names of other terms, not IDs
    related_terms: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()


class GlossaryDataset(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    terms: tuple[Term, ...]
    categories: tuple[str, ...] = ()


class RelatedTermLink(CamelModel):
    name: str
    term_id: Optional[str] = None
    resolved: bool = False


class TermCard(CamelModel):
    id: str
    term: str
    full_form: Optional[str] = None
    definition: str
    category: str
    examples: list[str] = []
    related_links: list[RelatedTermLink] = []


class GlossaryStatus(CamelModel):
    status: Literal["loading", "ready", "failed"]
    source: str
    message: Optional[str] = None
    error_code: Optional[str] = None
    categories: list[str] = []
    total_count: int = 0
