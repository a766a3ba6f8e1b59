"""Tests for reference aggregation."""

from link_catalog.models import Keyword, Link, LookupTable, Person
from link_catalog.processors.aggregator import (
    ReferenceAggregator,
    author_ids,
    keyword_ids,
    links_by_keyword,
    links_by_person,
)


def _scenario_links() -> list[Link]:
    return [
        Link(name="Foo", authorIds=["a1"], keywordIds=["k1"]),
        Link(name="Bar", authorIds=["a1", "a2"], keywordIds=[]),
    ]


def test_people_scenario_with_missing_author():
    people = LookupTable([Person(id="a1", name="Alice")])
    result = ReferenceAggregator(people, author_ids).aggregate(_scenario_links())

    assert [(wq.lookup.name, wq.quantity) for wq in result.resolved] == [("Alice", 2)]
    assert result.missing == ["a2"]


def test_keyword_scenario_resolves_or_goes_missing():
    resolving = LookupTable([Keyword(id="k1", name="Kay One")])
    result = ReferenceAggregator(resolving, keyword_ids).aggregate(_scenario_links())
    assert [(wq.lookup.id, wq.quantity) for wq in result.resolved] == [("k1", 1)]
    assert result.missing == []

    empty = LookupTable([])
    result = ReferenceAggregator(empty, keyword_ids).aggregate(_scenario_links())
    assert result.resolved == []
    assert result.missing == ["k1"]


def test_resolved_and_missing_partition_referenced_ids(sample_links, people_table):
    result = ReferenceAggregator(people_table, author_ids).aggregate(sample_links)

    referenced = {pid for link in sample_links for pid in link.authorIds}
    resolved = {wq.lookup.id for wq in result.resolved}
    missing = set(result.missing)

    assert resolved | missing == referenced
    assert resolved & missing == set()
    assert "unused" not in resolved


def test_quantity_counts_citing_links(sample_links, people_table):
    result = ReferenceAggregator(people_table, author_ids).aggregate(sample_links)

    for wq in result.resolved:
        citing = sum(1 for link in sample_links if wq.lookup.id in link.authorIds)
        assert wq.quantity == citing
        assert wq.quantity >= 1


def test_resolved_in_natural_name_order(sample_links, people_table):
    result = ReferenceAggregator(people_table, author_ids).aggregate(sample_links)
    assert [wq.lookup.name for wq in result.resolved] == [
        "Evan Czaplicki",
        "Luca Mugnaini",
        "Richard Feldman",
    ]


def test_input_order_does_not_change_result(sample_links, keywords_table):
    aggregator = ReferenceAggregator(keywords_table, keyword_ids)
    forward = aggregator.aggregate(sample_links)
    backward = aggregator.aggregate(list(reversed(sample_links)))
    assert forward == backward


def test_repeated_reference_in_one_link_counts_twice():
    people = LookupTable([Person(id="a1", name="Alice")])
    links = [Link(name="Pair programming", authorIds=["a1", "a1"])]
    result = ReferenceAggregator(people, author_ids).aggregate(links)
    assert result.resolved[0].quantity == 2


def test_missing_ids_in_natural_order():
    links = [Link(name="L", authorIds=["x10", "x2", "x1"])]
    result = ReferenceAggregator(LookupTable([]), author_ids).aggregate(links)
    assert result.missing == ["x1", "x2", "x10"]


def test_no_links_no_entities(people_table):
    result = ReferenceAggregator(people_table, author_ids).aggregate([])
    assert result.resolved == []
    assert result.missing == []


def test_links_by_person_and_keyword(sample_links):
    assert [link.name for link in links_by_person(sample_links, "evan")] == [
        "Elm in Production 10",
        "Decoding JSON",
    ]
    assert [link.name for link in links_by_keyword(sample_links, "talk")] == [
        "Elm in Production 10",
        "Elm in Production 2",
    ]
    assert links_by_person(sample_links, "nobody") == []
