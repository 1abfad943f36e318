"""
Short link text for page URLs.

    parse_to_short_link_text("SECTION TWO I. THE CREEDS")  -> "the-creeds"
    parse_to_short_link_text("Paragraph 2. THE FATHER")    -> "the-father"

A leading structural label ("Chapter", "Part", ...) and the ordinal tokens
that follow it carry nothing useful for a URL and are dropped; the rest is
lowercased, stripped of punctuation and cut to a few hyphenated words.
"""

import re

from book_nav.models import DEFAULT_LABEL_WORDS, DEFAULT_SLUG_MAX_WORDS

LABEL_WORDS = DEFAULT_LABEL_WORDS

NUMBER_WORDS = frozenset(
    "one two three four five six seven eight nine ten eleven twelve thirteen "
    "fourteen fifteen sixteen seventeen eighteen nineteen twenty".split()
)
ORDINAL_WORDS = frozenset(
    "first second third fourth fifth sixth seventh eighth ninth tenth".split()
)

# Punctuation allowed to trail a label or ordinal: "Part I:", "Article 5.", "2)"
TOKEN_PUNCT = ".:,;)("
NUMBER_RE = re.compile(r"^\d+(\.\d+)*$")
ROMAN_RE = re.compile(r"^M{0,3}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$", re.IGNORECASE)
# I, V and X only: "IV", "xii". Anything with L, C, D or M reads as a word (MIX, CIV)
# unless it directly follows the label or carries trailing punctuation.
SMALL_ROMAN_RE = re.compile(r"^(X{0,3})(IX|IV|V?I{0,3})$", re.IGNORECASE)
DASH_RE = re.compile(r"[-\u2010-\u2015]+")
NON_WORD_RE = re.compile(r"[^\w\s]+")


def _bare(token: str) -> str:
    return token.strip(TOKEN_PUNCT)


def _is_ordinal(token: str, after_label: bool = False) -> bool:
    """True for '2', '2.1', 'TWO', 'first', 'IV.' or a lone punctuation token."""
    bare = _bare(token)
    if not bare:
        return True
    lower = bare.lower()
    if NUMBER_RE.match(bare) or lower in NUMBER_WORDS or lower in ORDINAL_WORDS:
        return True
    if SMALL_ROMAN_RE.match(bare):
        return True
    return bool(ROMAN_RE.match(bare)) and (after_label or bare != token)


def _strip_label(words: list[str], label_words) -> list[str]:
    """Drop a leading label and its ordinals; return words unchanged if there is no label."""
    if not words or _bare(words[0]).lower() not in label_words:
        return words
    rest = words[1:]
    after_label = True
    while rest and _is_ordinal(rest[0], after_label):
        rest = rest[1:]
        after_label = False
    # "Chapter 1" alone: keep the label rather than produce nothing
    return rest or words


def parse_to_short_link_text(
    title: str,
    max_words: int | None = DEFAULT_SLUG_MAX_WORDS,
    label_words=LABEL_WORDS,
) -> str:
    """
    Convert a title into a lowercase, hyphen-separated slug of at most max_words words.

    Empty or whitespace-only titles give "". max_words=None keeps every word.
    """
    labels = {w.lower() for w in label_words}
    words = _strip_label(title.split(), labels)
    text = " ".join(words).lower()
    text = DASH_RE.sub(" ", text)
    text = NON_WORD_RE.sub("", text)
    parts = text.split()
    if max_words is not None:
        parts = parts[:max_words]
    return "-".join(parts)
