"""
HTML parsing helpers shared by the analyzers.

Matching rules are deliberately loose: attribute names and values compare
case-insensitively and the first matching element wins.
"""
from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup, Tag


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def attr_text(tag: Tag, name: str) -> str:
    """Attribute value as a string; multi-valued attributes (rel, class) are space-joined."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def rel_tokens(tag: Tag) -> list[str]:
    return [token.lower() for token in attr_text(tag, "rel").split()]


def find_meta(soup: BeautifulSoup, attr: str, value: str) -> Optional[Tag]:
    """First <meta> whose `attr` equals `value`, ignoring case."""
    value = value.lower()
    for meta in soup.find_all("meta"):
        if attr_text(meta, attr).strip().lower() == value:
            return meta
    return None


def meta_content(soup: BeautifulSoup, attr: str, value: str) -> Optional[str]:
    meta = find_meta(soup, attr, value)
    if meta is None or not meta.has_attr("content"):
        return None
    return attr_text(meta, "content").strip()


def find_link(soup: BeautifulSoup, rel: str) -> Optional[Tag]:
    """First <link> carrying `rel` among its rel tokens."""
    rel = rel.lower()
    for link in soup.find_all("link"):
        if rel in rel_tokens(link):
            return link
    return None


def html_lang(soup: BeautifulSoup) -> Optional[str]:
    root = soup.find("html")
    if root is None or not root.has_attr("lang"):
        return None
    return attr_text(root, "lang").strip()


def visible_text(soup: BeautifulSoup) -> str:
    """
    Document text with script/style blocks removed and whitespace collapsed.
    Decomposes those blocks in place, so run it last on a given soup.
    """
    for tag in soup(["script", "style"]):
        tag.decompose()
    return " ".join(soup.get_text(separator=" ").split())
