"""Tests for the book-nav CLI and the JSON load/write helpers it uses."""

import json

import pytest
from typer.testing import CliRunner

from book_nav.api import build_meta_from_file
from book_nav.cli import app
from book_nav.config import CONFIG_ENV
from book_nav.core import META_VERSION, load_toc

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_config(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)


class TestBuild:

    def test_writes_meta_file(self, toc_json, tmp_path):
        out = tmp_path / "out" / "meta.json"
        result = runner.invoke(app, ["build", str(toc_json), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Pages:  4" in result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["meta_version"] == META_VERSION
        assert data["url_map"]["0.1"] == "toc-2"
        assert data["page_meta_map"]["toc-3"]["next"] == "toc-10"
        assert data["ref_range_tree"]["root"]["right"]["toc_id"] == "toc-10"

    def test_prints_to_stdout(self, toc_json):
        result = runner.invoke(app, ["build", str(toc_json)])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["breadcrumbs_map"]["toc-2"]["parent"] == "toc-1"

    def test_options_override_defaults(self, toc_json):
        result = runner.invoke(app, ["build", str(toc_json), "--max-words", "1", "--delimiter", "/"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["page_meta_map"]["toc-1"]["url"] == "0/link"

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["build", str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["build", str(bad)])
        assert result.exit_code == 1

    def test_structural_error(self, tmp_path):
        bad = tmp_path / "cycle.json"
        bad.write_text(json.dumps({
            "roots": ["a"],
            "nodes": [
                {"id": "a", "children": ["b"]},
                {"id": "b", "parentId": "a", "children": ["a"]},
            ],
        }), encoding="utf-8")
        result = runner.invoke(app, ["build", str(bad)])
        assert result.exit_code == 1


class TestLookup:

    def test_found(self, toc_json):
        result = runner.invoke(app, ["lookup", str(toc_json), "5"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "toc-3 [4-6]"

    def test_not_found(self, toc_json):
        result = runner.invoke(app, ["lookup", str(toc_json), "9"])
        assert result.exit_code == 1


class TestLink:

    def test_found(self, toc_json):
        result = runner.invoke(app, ["link", str(toc_json), "7"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "1+link-text-10?focus=ref-7"

    def test_not_found(self, toc_json):
        result = runner.invoke(app, ["link", str(toc_json), "0"])
        assert result.exit_code == 1


class TestSlug:

    def test_slug(self):
        result = runner.invoke(app, ["slug", "SECTION TWO I. THE CREEDS"])
        assert result.exit_code == 0
        assert result.output.strip() == "the-creeds"

    def test_slug_max_words(self):
        result = runner.invoke(app, ["slug", "THE DIGNITY OF THE HUMAN PERSON", "--max-words", "2"])
        assert result.output.strip() == "the-dignity"


class TestApi:

    def test_load_toc_reads_camel_case(self, toc_json):
        store = load_toc(toc_json)
        assert store.roots == ["toc-1", "toc-10", "toc-no-page-2"]
        assert store.nodes["toc-2"].has_page

    def test_build_meta_from_file(self, toc_json, tmp_path):
        out = tmp_path / "meta.json"
        meta = build_meta_from_file(toc_json, out_path=out)
        assert meta.url_map["0"] == "toc-1"
        assert out.is_file()
