"""
Meta tag analyzer: title, description, Open Graph, Twitter and technical meta tags.
"""
from __future__ import annotations

import re
from typing import Optional

import requests
from bs4 import BeautifulSoup

from analyzers.base import BaseAnalyzer
from config import (
    DESCRIPTION_MAX_CHARS,
    DESCRIPTION_MIN_CHARS,
    TITLE_MAX_CHARS,
    TITLE_MIN_CHARS,
)
from crawler.parser import attr_text, find_link, find_meta, html_lang, make_soup, meta_content
from models import MetaTagsResult

_CONTENT_TYPE_CHARSET_RE = re.compile(r"charset=([^;\s\"']+)", re.IGNORECASE)


class MetaTagAnalyzer(BaseAnalyzer):
    name = "Meta tags analysis"

    def analyze(self, url: str, session: requests.Session) -> MetaTagsResult:
        page = self._fetch(url, session)
        return extract_meta_tags(page.html)

    def fallback(self, url: str) -> MetaTagsResult:
        return MetaTagsResult()


def extract_meta_tags(html: str) -> MetaTagsResult:
    """Only the first occurrence of each tag is used, even when duplicates exist."""
    soup = make_soup(html)

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else None
    description = meta_content(soup, "name", "description")

    og_title = meta_content(soup, "property", "og:title")
    og_description = meta_content(soup, "property", "og:description")

    canonical = None
    canonical_tag = find_link(soup, "canonical")
    if canonical_tag is not None and canonical_tag.has_attr("href"):
        canonical = attr_text(canonical_tag, "href").strip()

    title_length = len(title) if title else 0
    description_length = len(description) if description else 0

    return MetaTagsResult(
        title=title,
        description=description,
        keywords=meta_content(soup, "name", "keywords"),
        canonical=canonical,
        og_title=og_title,
        og_description=og_description,
        og_image=meta_content(soup, "property", "og:image"),
        og_url=meta_content(soup, "property", "og:url"),
        twitter_card=meta_content(soup, "name", "twitter:card"),
        twitter_site=meta_content(soup, "name", "twitter:site"),
        twitter_creator=meta_content(soup, "name", "twitter:creator"),
        viewport=meta_content(soup, "name", "viewport"),
        robots=meta_content(soup, "name", "robots"),
        language=html_lang(soup),
        charset=_charset(soup),
        title_length=title_length,
        description_length=description_length,
        title_optimal=TITLE_MIN_CHARS <= title_length <= TITLE_MAX_CHARS,
        description_optimal=DESCRIPTION_MIN_CHARS <= description_length <= DESCRIPTION_MAX_CHARS,
        has_all_required_tags=bool(title and description and (og_title is not None or og_description is not None)),
    )


def _charset(soup: BeautifulSoup) -> Optional[str]:
    for meta in soup.find_all("meta"):
        if meta.has_attr("charset"):
            return attr_text(meta, "charset").strip()

    http_equiv = find_meta(soup, "http-equiv", "content-type")
    if http_equiv is not None:
        match = _CONTENT_TYPE_CHARSET_RE.search(attr_text(http_equiv, "content"))
        if match:
            return match.group(1)
    return None
