"""
Content analyzer: word count, thin content, lang attribute and external link hygiene.
"""
from __future__ import annotations

from urllib.parse import urlparse

import requests

from analyzers.base import BaseAnalyzer
from config import THIN_CONTENT_WORD_COUNT
from crawler.parser import attr_text, html_lang, make_soup, visible_text
from models import ContentAnalysisResult


class ContentAnalyzer(BaseAnalyzer):
    name = "Content analysis"

    def analyze(self, url: str, session: requests.Session) -> ContentAnalysisResult:
        page = self._fetch(url, session)
        return analyze_content(page.html, url)

    def fallback(self, url: str) -> ContentAnalysisResult:
        return ContentAnalysisResult(recommendations=["Unable to analyze content"])


def analyze_content(html: str, page_url: str) -> ContentAnalysisResult:
    soup = make_soup(html)
    site_host = urlparse(page_url).hostname

    has_lang = html_lang(soup) is not None

    external = 0
    external_nofollow = 0
    for anchor in soup.find_all("a", href=True):
        href = attr_text(anchor, "href").strip()
        if not href.startswith("http") or urlparse(href).hostname == site_host:
            continue
        external += 1
        if _is_nofollow(anchor):
            external_nofollow += 1

    word_count = len(visible_text(soup).split())
    is_thin = word_count < THIN_CONTENT_WORD_COUNT

    recommendations: list[str] = []
    if is_thin:
        recommendations.append(
            f"Increase content length (currently {word_count} words, "
            f"recommended: {THIN_CONTENT_WORD_COUNT}+ words)"
        )
    if not has_lang:
        recommendations.append("Add lang attribute to <html> tag for better accessibility")
    if external > 0 and external_nofollow == 0:
        recommendations.append('Consider adding rel="nofollow" to external links to preserve link equity')

    return ContentAnalysisResult(
        word_count=word_count,
        is_thin_content=is_thin,
        has_lang_attribute=has_lang,
        external_links_count=external,
        external_links_with_nofollow=external_nofollow,
        recommendations=recommendations,
    )


def _is_nofollow(anchor) -> bool:
    # Literal rel="nofollow" only; combined values such as "noopener nofollow" do not count.
    return attr_text(anchor, "rel").strip().lower() == "nofollow"
