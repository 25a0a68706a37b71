"""
Shared fixtures: an in-memory stand-in for requests.Session and PageSpeed payloads.
"""
from __future__ import annotations

from typing import Any, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from config import PAGESPEED_API_URL

SITE = "https://example.com"


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        text: str = "",
        headers: Optional[dict[str, str]] = None,
        json_body: Any = None,
        url: str = "",
    ):
        self.status_code = status_code
        self.text = text
        self.headers = CaseInsensitiveDict(headers or {})
        self._json = json_body
        self.url = url

    def json(self) -> Any:
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeSession:
    """
    Serves canned responses keyed by (METHOD, url). A registered exception is
    raised instead of returned; a callable is invoked per request. Unknown URLs
    raise ConnectionError.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict[str, Any]] = []
        self.headers: dict[str, str] = {}

    def add(self, url: str, response: Any = None, method: str = "GET", **kwargs) -> "FakeSession":
        if response is None:
            response = FakeResponse(**kwargs)
        if isinstance(response, FakeResponse) and not response.url:
            response.url = url
        self.routes[(method.upper(), url)] = response
        return self

    def add_html(self, url: str, html: str, **kwargs) -> "FakeSession":
        return self.add(url, FakeResponse(text=html, **kwargs))

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method.upper(), "url": url, **kwargs})
        route = self.routes.get((method.upper(), url))
        if route is None:
            raise requests.ConnectionError(f"No route for {method} {url}")
        if isinstance(route, BaseException):
            raise route
        if callable(route):
            return route()
        return route

    def get(self, url: str, **kwargs) -> FakeResponse:
        return self.request("GET", url, **kwargs)

    def head(self, url: str, **kwargs) -> FakeResponse:
        return self.request("HEAD", url, **kwargs)

    def urls_requested(self, method: Optional[str] = None) -> list[str]:
        return [c["url"] for c in self.calls if method is None or c["method"] == method]


def pagespeed_payload(
    performance: Optional[float] = 0.9,
    accessibility: Optional[float] = 0.8,
    best_practices: Optional[float] = 0.7,
    seo: Optional[float] = 1.0,
    audits: Optional[dict[str, Optional[float]]] = None,
    fcp: tuple[str, float] = ("1.2 s", 1200.5),
    lcp: tuple[str, float] = ("2.5 s", 2500.0),
) -> dict:
    audit_scores = {
        "unused-css-rules": 1,
        "unused-javascript": 1,
        "render-blocking-resources": 1,
        "meta-description": 1,
        "document-title": 1,
    }
    audit_scores.update(audits or {})
    audit_entries: dict[str, dict] = {key: {"score": value} for key, value in audit_scores.items()}
    audit_entries["first-contentful-paint"] = {"displayValue": fcp[0], "numericValue": fcp[1]}
    audit_entries["largest-contentful-paint"] = {"displayValue": lcp[0], "numericValue": lcp[1]}
    return {
        "lighthouseResult": {
            "categories": {
                "performance": {"score": performance},
                "accessibility": {"score": accessibility},
                "best-practices": {"score": best_practices},
                "seo": {"score": seo},
            },
            "audits": audit_entries,
        }
    }


class PageSpeedSession(FakeSession):
    """FakeSession that also answers PageSpeed calls per strategy."""

    def __init__(self, mobile: Any = None, desktop: Any = None):
        super().__init__()
        self.pagespeed = {
            "mobile": mobile if mobile is not None else FakeResponse(json_body=pagespeed_payload()),
            "desktop": desktop if desktop is not None else FakeResponse(json_body=pagespeed_payload()),
        }

    def get(self, url: str, **kwargs) -> FakeResponse:
        if url != PAGESPEED_API_URL:
            return super().get(url, **kwargs)
        params = dict(kwargs.get("params") or [])
        self.calls.append({"method": "GET", "url": url, **kwargs})
        route = self.pagespeed[params["strategy"]]
        if isinstance(route, BaseException):
            raise route
        return route


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
