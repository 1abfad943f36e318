"""
In-page anchors and reference short links.

A page is rendered as numbered paragraphs and footnotes, each with an anchor key
("paragraph-3", "footnote-12"). A link may ask to focus a reference number
("?focus=ref-42"); the page resolves that to the paragraph carrying the
reference. make_ref_link goes the other way: from a reference number to the
URL of the page that contains it.
"""

from typing import Mapping, Sequence
from urllib.parse import parse_qs

from pydantic import BaseModel, Field

from book_nav.models import BookMeta

REF_ELEMENT_TYPE = "ref"
FOCUS_PARAM = "focus"


class PageElement(BaseModel):
    """Inline element of a paragraph (text run, reference marker, ...)."""

    type: str = Field(default="text")
    text: str = Field(default="")
    ref_number: int | None = Field(default=None, description="Set on reference markers")


class Paragraph(BaseModel):
    elements: list[PageElement] = Field(default_factory=list)


class Page(BaseModel):
    """Content of one page: ordered paragraphs plus footnotes keyed by number."""

    id: str = ""
    paragraphs: list[Paragraph] = Field(default_factory=list)
    footnotes: dict[str, str] = Field(default_factory=dict)


def get_paragraph_ref_key(index: int) -> str:
    return f"paragraph-{index + 1}"


def get_footnote_ref_key(footnote_number: str) -> str:
    return f"footnote-{footnote_number}"


def get_ref_key(ref_number: int) -> str:
    return f"ref-{ref_number}"


def make_ref_to_paragraph_map(paragraphs: Sequence[Paragraph]) -> dict[str, str]:
    """Map the ref key of each paragraph's first reference marker to that paragraph's key."""
    mapping: dict[str, str] = {}
    for index, paragraph in enumerate(paragraphs):
        refs = [
            e for e in paragraph.elements
            if e.type == REF_ELEMENT_TYPE and e.ref_number is not None
        ]
        if refs:
            mapping[get_ref_key(refs[0].ref_number)] = get_paragraph_ref_key(index)
    return mapping


def page_anchor_keys(page: Page | None) -> list[str]:
    """All anchor keys of a page: paragraphs in order, then footnotes."""
    if page is None:
        return []
    keys = [get_paragraph_ref_key(i) for i in range(len(page.paragraphs))]
    keys.extend(get_footnote_ref_key(n) for n in page.footnotes)
    return keys


def resolve_focused_element_key(ref_to_paragraph: Mapping[str, str], key: str) -> str:
    """A ref key resolves to its paragraph; any other key is returned as is."""
    return ref_to_paragraph.get(key, key)


def get_focused_element(query: str) -> str:
    """Value of the focus parameter in a query string ("?focus=ref-12"), or ""."""
    params = parse_qs(query.lstrip("?"))
    values = params.get(FOCUS_PARAM)
    return values[0] if values else ""


def make_ref_link(meta: BookMeta, ref_number: int) -> str | None:
    """
    Short link to the page containing a reference number, focused on it.

    Returns None if no range contains the number, or if neither the owning node
    nor any of its ancestors has a page.
    """
    toc_id = meta.ref_range_tree.find_toc_id(ref_number)
    seen: set[str] = set()
    while toc_id and toc_id not in seen:
        page = meta.page_meta_map.get(toc_id)
        if page is not None:
            return f"{page.url}?{FOCUS_PARAM}={get_ref_key(ref_number)}"
        seen.add(toc_id)
        crumb = meta.breadcrumbs_map.get(toc_id)
        toc_id = crumb.parent if crumb is not None else ""
    return None
