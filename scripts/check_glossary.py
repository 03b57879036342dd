"""
Script to check a glossary dataset.

Loads the dataset the same way the service does and lists related-term
names that do not match any term (links that would render unresolved).
"""

import argparse
import asyncio
import sys

from glossary.core.config import settings
from glossary.core.errors import DataFormatError, DataLoadError
from glossary.core.logging import setup_logging
from glossary.services.glossary_loader import load_dataset
from glossary.services.term_store import TermStore


async def check(source: str) -> int:
    setup_logging()
    try:
        dataset = await load_dataset(source)
    except (DataLoadError, DataFormatError) as e:
        print(f"Error Loading Glossary: {e.message}")
        return 2

    store = TermStore(dataset)
    print(f"{len(store)} terms, {len(store.categories)} categories")

    unresolved = 0
    for term in store:
        for name in term.related_terms:
            if store.resolve_id_by_name(name) is None:
                unresolved += 1
                print(f"  {term.id}: related term {name!r} does not match any term")

    print(f"{unresolved} unresolved related-term reference(s)")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("source", nargs="?", default=settings.glossary_data_url)
    args = parser.parse_args()
    sys.exit(asyncio.run(check(args.source)))
