"""
Security analyzer: HTTPS scheme and HSTS header.
"""
from __future__ import annotations

import requests

from analyzers.base import BaseAnalyzer
from models import HttpsSecurityResult


class HttpsSecurityAnalyzer(BaseAnalyzer):
    name = "HTTPS security check"

    def analyze(self, url: str, session: requests.Session) -> HttpsSecurityResult:
        page = self._fetch(url, session)
        return HttpsSecurityResult(
            is_secure=_is_secure(url),
            has_hsts=page.header("strict-transport-security") is not None,
        )

    def fallback(self, url: str) -> HttpsSecurityResult:
        # The scheme check needs no network, so it survives a failed fetch
        return HttpsSecurityResult(is_secure=_is_secure(url))


def _is_secure(url: str) -> bool:
    return url.startswith("https://")
