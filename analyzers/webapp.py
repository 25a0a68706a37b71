"""
Web app feature analyzer: favicon, manifest, hreflang and HTTP → HTTPS redirect.
"""
from __future__ import annotations

import logging

import requests

from analyzers.base import BaseAnalyzer
from crawler.parser import attr_text, make_soup, rel_tokens
from errors import FetchError
from models import WebAppFeaturesResult

logger = logging.getLogger(__name__)


class WebAppFeatureAnalyzer(BaseAnalyzer):
    name = "Web app features analysis"

    def analyze(self, url: str, session: requests.Session) -> WebAppFeaturesResult:
        page = self._fetch(url, session)
        soup = make_soup(page.html)
        links = soup.find_all("link")

        has_favicon = any(
            "icon" in attr_text(link, "rel").lower() or "favicon" in attr_text(link, "href").lower()
            for link in links
        )
        has_manifest = any("manifest" in rel_tokens(link) for link in links)
        has_hreflang = any(link.has_attr("hreflang") for link in links)
        is_https = url.startswith("https://")
        https_redirect = self._redirects_to_https(url, session) if is_https else False

        recommendations: list[str] = []
        if not has_favicon:
            recommendations.append("Add a favicon to improve brand recognition and user experience")
        if not has_manifest:
            recommendations.append("Add a web app manifest for better mobile experience and PWA capabilities")
        if not has_hreflang and "lang=" in page.html:
            recommendations.append(
                "Consider adding hreflang tags for international SEO if serving multiple languages"
            )
        if is_https and not https_redirect:
            recommendations.append("Ensure automatic HTTP to HTTPS redirect is configured")

        return WebAppFeaturesResult(
            has_favicon=has_favicon,
            has_manifest=has_manifest,
            has_hreflang=has_hreflang,
            https_redirect=https_redirect,
            recommendations=recommendations,
        )

    def fallback(self, url: str) -> WebAppFeaturesResult:
        return WebAppFeaturesResult(recommendations=["Unable to analyze web app features"])

    def _redirects_to_https(self, url: str, session: requests.Session) -> bool:
        """Request the http:// mirror without following redirects; errors mean no redirect."""
        http_url = "http://" + url[len("https://"):]
        try:
            resp = self._fetch(http_url, session, allow_redirects=False)
        except FetchError as exc:
            logger.debug("HTTPS redirect check failed for %s: %s", http_url, exc.reason)
            return False
        return 300 <= resp.status_code < 400
