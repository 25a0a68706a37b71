"""
Technical header analyzer: security, caching, compression and cookie headers.
"""
from __future__ import annotations

import requests

from analyzers.base import BaseAnalyzer
from models import FetchedPage, TechnicalHeadersResult


class TechnicalHeaderAnalyzer(BaseAnalyzer):
    name = "Technical headers analysis"

    def analyze(self, url: str, session: requests.Session) -> TechnicalHeadersResult:
        return extract_technical_headers(self._fetch(url, session))

    def fallback(self, url: str) -> TechnicalHeadersResult:
        return TechnicalHeadersResult()


def extract_technical_headers(page: FetchedPage) -> TechnicalHeadersResult:
    content_encoding = page.header("content-encoding")

    # requests folds repeated Set-Cookie headers into one comma-joined value;
    # flags are case-sensitive substring checks over that merged value.
    cookies = page.header("set-cookie") or ""

    return TechnicalHeadersResult(
        content_security_policy=page.header("content-security-policy"),
        x_frame_options=page.header("x-frame-options"),
        strict_transport_security=page.header("strict-transport-security"),
        cache_control=page.header("cache-control"),
        etag=page.header("etag"),
        expires=page.header("expires"),
        server_info=page.header("server"),
        content_encoding=content_encoding,
        is_compressed=bool(content_encoding and ("gzip" in content_encoding or "br" in content_encoding)),
        http_only_set="HttpOnly" in cookies,
        secure_set="Secure" in cookies,
        same_site_set="SameSite" in cookies,
    )
