"""
Robots/sitemap checker: requests /robots.txt and /sitemap.xml at the site origin.
"""
from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests

from analyzers.base import BaseAnalyzer
from errors import FetchError
from models import RobotsAndSitemapResult

logger = logging.getLogger(__name__)


class RobotsSitemapAnalyzer(BaseAnalyzer):
    name = "Robots/Sitemap check"

    def analyze(self, url: str, session: requests.Session) -> RobotsAndSitemapResult:
        origin = site_origin(url)

        robots_exists = False
        robots_text = ""
        try:
            robots = self._fetch(f"{origin}/robots.txt", session)
            robots_exists = robots.ok
            if robots_exists:
                robots_text = robots.html
        except FetchError as exc:
            logger.debug("robots.txt fetch failed: %s", exc)

        try:
            sitemap_exists = self._fetch(f"{origin}/sitemap.xml", session).ok
        except FetchError as exc:
            logger.debug("sitemap.xml fetch failed: %s", exc)
            # A Sitemap: directive in robots.txt still counts as discovery
            sitemap_exists = "sitemap:" in robots_text.lower()

        return RobotsAndSitemapResult(
            robots_exists=robots_exists,
            sitemap_exists=sitemap_exists,
            robots_content=robots_text or None,
        )

    def fallback(self, url: str) -> RobotsAndSitemapResult:
        return RobotsAndSitemapResult()


def site_origin(url: str) -> str:
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"
