"""Tests for schema validation of the JSON tables."""

import json
from pathlib import Path

from link_catalog.models import Keyword, Link, Person
from link_catalog.validators.schema import SchemaValidator


def test_valid_record():
    assert SchemaValidator().validate_record({"id": "css", "name": "CSS"}, Keyword) == []


def test_invalid_record_names_the_field():
    errors = SchemaValidator().validate_record({"id": "evan"}, Person)
    assert len(errors) == 1
    assert errors[0].startswith("[evan] name:")


def test_validate_tables(tables_dir: Path):
    results = SchemaValidator().validate_tables(
        {
            "links": tables_dir / "links.json",
            "people": tables_dir / "people.json",
            "keywords": tables_dir / "keywords.json",
        }
    )
    assert results == {"links": [], "people": [], "keywords": []}


def test_file_with_bad_rows(tmp_path: Path):
    path = tmp_path / "links.json"
    path.write_text(
        json.dumps([{"name": "Ok"}, {"description": "no name"}, "not an object"]),
        encoding="utf-8",
    )
    errors = SchemaValidator().validate_file(path, Link)
    assert len(errors) == 2
    assert errors[0].startswith("links.json[1]:")
    assert errors[1] == "links.json[2]: Expected object, got str"


def test_single_object_file(tmp_path: Path):
    path = tmp_path / "keyword.json"
    path.write_text(json.dumps({"id": "css", "name": "CSS"}), encoding="utf-8")
    assert SchemaValidator().validate_file(path, Keyword) == []


def test_missing_and_malformed_files(tmp_path: Path):
    validator = SchemaValidator()
    assert validator.validate_file(tmp_path / "nope.json", Link) == [
        f"File not found: {tmp_path / 'nope.json'}"
    ]

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert validator.validate_file(bad, Link)[0].startswith("Invalid JSON in bad.json")

    txt = tmp_path / "links.txt"
    txt.write_text("[]", encoding="utf-8")
    assert validator.validate_file(txt, Link) == ["Expected a .json file, got: .txt"]
