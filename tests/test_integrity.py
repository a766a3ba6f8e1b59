"""Tests for cross-table integrity checks."""

from link_catalog.models import Keyword, Link, LookupTable, Person
from link_catalog.validators.integrity import IntegrityChecker


def test_unknown_references_reported(sample_links, people_table, keywords_table):
    checker = IntegrityChecker(people_table, keywords_table)
    errors = checker.check(sample_links, report=False)

    assert any(e.startswith("UNKNOWN_PERSON") and "'ghost'" in e for e in errors)
    assert any(e.startswith("UNKNOWN_KEYWORD") and "'animation'" in e for e in errors)
    assert len(errors) == 2


def test_clean_tables_pass(people_table, keywords_table):
    links = [Link(name="Decoding JSON", authorIds=["evan"], keywordIds=["json"])]
    checker = IntegrityChecker(people_table, keywords_table)
    assert checker.check(links, report=False) == []


def test_did_you_mean_hint(people_table, keywords_table):
    links = [Link(name="Typo", authorIds=["evn"])]
    errors = IntegrityChecker(people_table, keywords_table).check(links, report=False)
    assert errors == [
        "UNKNOWN_PERSON: link 'Typo' references unknown person id 'evn' "
        "(did you mean 'evan'?)"
    ]


def test_duplicate_ids_and_names():
    people = LookupTable(
        [
            Person(id="sam", name="Sam"),
            Person(id="sam", name="Samuel"),
            Person(id="sam2", name="Sam"),
        ]
    )
    keywords = LookupTable([Keyword(id="css", name="CSS")])
    links = [Link(name="Guide"), Link(name="Guide")]

    errors = IntegrityChecker(people, keywords).check(links, report=False)

    assert "DUPLICATE_ID: person id 'sam' appears more than once" in errors
    assert "DUPLICATE_NAME: person name 'Sam' appears 2 times" in errors
    assert "DUPLICATE_NAME: link name 'Guide' appears 2 times" in errors


def test_empty_fields():
    people = LookupTable([Person(id="p1", name=" ")])
    errors = IntegrityChecker(people, LookupTable([])).check([Link(name="")], report=False)
    assert "EMPTY_FIELD: link #0 has empty 'name'" in errors
    assert "EMPTY_FIELD: person 'p1' has empty 'name'" in errors


def test_report_prints_summary(sample_links, people_table, keywords_table, capsys):
    IntegrityChecker(people_table, keywords_table).check(sample_links)
    out = capsys.readouterr().out
    assert "Integrity Check Results" in out
    assert "FAILED" in out
