"""
Structured data analyzer: JSON-LD blocks and microdata.
"""
from __future__ import annotations

import json

import requests

from analyzers.base import BaseAnalyzer
from crawler.parser import attr_text, make_soup
from models import StructuredDataResult

JSON_LD_TYPE = "application/ld+json"
INVALID_JSON_LD = "Invalid JSON-LD syntax found"


class StructuredDataAnalyzer(BaseAnalyzer):
    name = "Structured data check"

    def analyze(self, url: str, session: requests.Session) -> StructuredDataResult:
        page = self._fetch(url, session)
        return extract_structured_data(page.html)

    def fallback(self, url: str) -> StructuredDataResult:
        return StructuredDataResult(errors=["Could not analyze structured data"])


def extract_structured_data(html: str) -> StructuredDataResult:
    soup = make_soup(html)
    types: list[str] = []
    errors: list[str] = []

    for script in soup.find_all("script"):
        if attr_text(script, "type").strip().lower() != JSON_LD_TYPE:
            continue
        try:
            data = json.loads(script.string or "")
        except json.JSONDecodeError:
            errors.append(INVALID_JSON_LD)
            continue
        types.extend(_schema_types(data))

    has_microdata = soup.find(attrs={"itemtype": True}) is not None

    return StructuredDataResult(
        has_schema=bool(types) or has_microdata,
        types=types,
        errors=errors,
    )


def _schema_types(data) -> list[str]:
    items = data if isinstance(data, list) else [data]
    found: list[str] = []
    for item in items:
        if not isinstance(item, dict) or not item.get("@type"):
            continue
        schema_type = item["@type"]
        if isinstance(schema_type, list):
            found.extend(str(t) for t in schema_type)
        else:
            found.append(str(schema_type))
    return found
