"""
Broken link checker: HEAD-checks the first hyperlinks of a page.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests

from analyzers.base import BaseAnalyzer
from analyzers.robots_sitemap import site_origin
from config import LINK_CHECK_TIMEOUT, MAX_LINKS_TO_CHECK
from crawler.fetcher import check_link
from crawler.parser import attr_text, make_soup
from models import BrokenLinksResult, LinkStatus


class BrokenLinkAnalyzer(BaseAnalyzer):
    name = "Broken links check"

    def __init__(self, link_timeout: float = LINK_CHECK_TIMEOUT, **kwargs):
        super().__init__(**kwargs)
        self.link_timeout = link_timeout

    def analyze(self, url: str, session: requests.Session) -> BrokenLinksResult:
        page = self._fetch(url, session)
        candidates = extract_links(page.html)[:MAX_LINKS_TO_CHECK]

        origin = site_origin(url)
        pairs: list[tuple[str, str]] = []
        for link in candidates:
            target = _link_target(link, origin)
            if target:
                pairs.append((link, target))

        broken: list[str] = []
        if pairs:
            # one worker per link so every check runs against its own deadline
            with ThreadPoolExecutor(max_workers=len(pairs)) as executor:
                statuses = list(executor.map(
                    lambda target: check_link(target, session, self.link_timeout),
                    [target for _, target in pairs],
                ))
            for (link, target), status in zip(pairs, statuses):
                if status == LinkStatus.BROKEN:
                    broken.append(target)
                elif status == LinkStatus.UNREACHABLE:
                    # a check that never got an answer reports the href as written
                    broken.append(link)

        # totalChecked counts every capped candidate, including skipped non-http links
        return BrokenLinksResult(broken_links=broken, total_checked=len(candidates))

    def fallback(self, url: str) -> BrokenLinksResult:
        return BrokenLinksResult()


def extract_links(html: str) -> list[str]:
    """Non-empty anchor hrefs in document order."""
    links: list[str] = []
    for anchor in make_soup(html).find_all("a", href=True):
        href = attr_text(anchor, "href").strip()
        if href:
            links.append(href)
    return links


def _link_target(link: str, origin: str) -> Optional[str]:
    if link.startswith("/"):
        return f"{origin}{link}"
    if link.startswith("http"):
        return link
    return None  # mailto:, tel:, fragments, relative paths
