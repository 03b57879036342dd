"""
Filter Engine Tests
"""

import pytest

from glossary.services.filter_engine import filter_terms, matches_query


def ids(terms):
    return [t.id for t in terms]


def test_returns_all_terms_without_filters(store):
    result = filter_terms(store, "all", "")
    assert ids(result) == ["api", "ci-cd", "docker", "rest"]


def test_filters_by_category(store):
    result = filter_terms(store, "DevOps", "")
    assert ids(result) == ["ci-cd", "docker"]
    assert all(t.category == "DevOps" for t in result)


@pytest.mark.parametrize("category", ["Architecture", "DevOps", "Security"])
def test_category_filter_is_exact_subset_in_store_order(store, category):
    expected = [t.id for t in store.terms if t.category == category]
    assert ids(filter_terms(store, category, "")) == expected


def test_category_match_is_case_sensitive(store):
    assert filter_terms(store, "devops", "") == []


def test_unknown_category_yields_nothing(store):
    assert filter_terms(store, "Networking", "") == []


def test_search_matches_term_name(store):
    assert ids(filter_terms(store, "all", "docker")) == ["docker"]


def test_search_matches_full_form(store):
    result = filter_terms(store, "all", "continuous")
    assert ids(result) == ["ci-cd"]
    assert "continuous" in result[0].full_form.lower()


def test_search_is_case_insensitive(store):
    assert ids(filter_terms(store, "all", "CONTINUOUS")) == ["ci-cd"]


def test_search_matches_definition(store):
    assert ids(filter_terms(store, "all", "containers")) == ["docker"]


def test_combines_category_and_search(store):
    result = filter_terms(store, "Architecture", "api")
    assert ids(result) == ["api"]
    assert result[0].category == "Architecture"


@pytest.mark.parametrize("query", ["api", "a", "software", "transfer", "zzz", "/"])
def test_search_partitions_terms(store, query):
    result = filter_terms(store, "all", query)
    for term in store:
        assert (term in result) == matches_query(term, query)
    for term in result:
        haystacks = [term.term, term.definition, term.full_form or ""]
        assert any(query.lower() in h.lower() for h in haystacks)


def test_null_full_form_is_skipped(store):
    docker = store.get_by_id("docker")
    assert docker.full_form is None
    assert not matches_query(docker, "none")


def test_filtering_is_idempotent(store):
    first = filter_terms(store, "Architecture", "a")
    second = filter_terms(store, "Architecture", "a")
    assert first == second
    assert ids(filter_terms(store, "all", "")) == ids(store.terms)
