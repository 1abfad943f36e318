"""Tests for anchor keys, focus resolution and reference short links."""

import pytest

from book_nav.anchors import (
    Page,
    PageElement,
    Paragraph,
    get_focused_element,
    get_footnote_ref_key,
    get_paragraph_ref_key,
    get_ref_key,
    make_ref_link,
    make_ref_to_paragraph_map,
    page_anchor_keys,
    resolve_focused_element_key,
)
from book_nav.meta import make_book_meta
from book_nav.models import RefRange, TocNode, TocStore


def _paragraph(*refs):
    elements = [PageElement(type="text", text="Lorem ipsum")]
    elements.extend(PageElement(type="ref", ref_number=r) for r in refs)
    return Paragraph(elements=elements)


class TestKeys:

    def test_paragraph_key_is_one_based(self):
        assert get_paragraph_ref_key(0) == "paragraph-1"

    def test_footnote_key(self):
        assert get_footnote_ref_key("12") == "footnote-12"

    def test_ref_key(self):
        assert get_ref_key(1234) == "ref-1234"

    def test_page_anchor_keys(self):
        page = Page(id="p", paragraphs=[_paragraph(), _paragraph()], footnotes={"3": "x", "4": "y"})
        assert page_anchor_keys(page) == ["paragraph-1", "paragraph-2", "footnote-3", "footnote-4"]

    def test_missing_page_has_no_keys(self):
        assert page_anchor_keys(None) == []


class TestRefToParagraph:

    def test_first_ref_of_each_paragraph(self):
        paragraphs = [_paragraph(10, 11), _paragraph(), _paragraph(12)]
        assert make_ref_to_paragraph_map(paragraphs) == {
            "ref-10": "paragraph-1",
            "ref-12": "paragraph-3",
        }

    def test_resolve_ref_key_to_paragraph(self):
        mapping = {"ref-10": "paragraph-1"}
        assert resolve_focused_element_key(mapping, "ref-10") == "paragraph-1"

    def test_resolve_other_key_unchanged(self):
        assert resolve_focused_element_key({}, "footnote-2") == "footnote-2"


class TestFocusedElement:

    @pytest.mark.parametrize("query,expected", [
        ("?focus=ref-12", "ref-12"),
        ("focus=paragraph-3&x=1", "paragraph-3"),
        ("?x=1", ""),
        ("", ""),
    ])
    def test_focus_param(self, query, expected):
        assert get_focused_element(query) == expected


class TestMakeRefLink:

    def test_link_to_owning_page(self, mock_store):
        meta = make_book_meta(mock_store)
        assert make_ref_link(meta, 5) == "0.2+link-text-3?focus=ref-5"

    def test_not_found(self, mock_store):
        meta = make_book_meta(mock_store)
        assert make_ref_link(meta, 99) is None

    def test_page_less_owner_links_to_enclosing_page(self):
        store = TocStore.from_nodes([
            TocNode(id="ch", title="Chapter 1 Faith", has_page=True, children=["art"]),
            TocNode(id="art", title="Article", parent_id="ch", ref_range=RefRange(min=1, max=9)),
        ])
        meta = make_book_meta(store)
        assert make_ref_link(meta, 3) == "0+faith?focus=ref-3"

    def test_no_enclosing_page(self):
        store = TocStore.from_nodes([
            TocNode(id="art", title="Article", ref_range=RefRange(min=1, max=9)),
        ])
        assert make_ref_link(make_book_meta(store), 3) is None
