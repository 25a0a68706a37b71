"""
Google PageSpeed Insights client.

The Lighthouse payload is validated on ingest: the four category entries are
required, everything else falls back to neutral defaults.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from config import (
    PAGESPEED_API_URL,
    PAGESPEED_CATEGORIES,
    PAGESPEED_STRATEGIES,
    PAGESPEED_TIMEOUT,
    RECOMMENDATION_AUDITS,
    get_pagespeed_api_key,
)
from errors import ConfigurationError, UpstreamAPIError, UpstreamSchemaError
from models import PageSpeedResult

logger = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    400: "Invalid URL or URL is not accessible",
    401: "Invalid API key",
    403: "API quota exceeded or access denied",
    429: "Rate limit exceeded. Please try again later",
}


def fetch_pagespeed(
    url: str,
    strategy: str,
    session: requests.Session,
    api_key: Optional[str] = None,
    timeout: float = PAGESPEED_TIMEOUT,
) -> PageSpeedResult:
    """Run one Lighthouse analysis of `url` for the `mobile` or `desktop` strategy."""
    if strategy not in PAGESPEED_STRATEGIES:
        raise ValueError(f"Unknown PageSpeed strategy: {strategy!r}")
    if api_key is None:
        api_key = get_pagespeed_api_key()
    if not api_key:
        raise ConfigurationError("Google PageSpeed API key is not configured")

    params = [("url", url), ("key", api_key), ("strategy", strategy)]
    params.extend(("category", category) for category in PAGESPEED_CATEGORIES)

    try:
        resp = session.get(PAGESPEED_API_URL, params=params, timeout=timeout)
    except requests.RequestException as exc:
        raise UpstreamAPIError(f"PageSpeed API request failed: {exc}") from exc

    if not 200 <= resp.status_code < 300:
        message = _STATUS_MESSAGES.get(resp.status_code, f"PageSpeed API error: {resp.status_code}")
        raise UpstreamAPIError(message, status_code=resp.status_code)

    try:
        payload = resp.json()
    except ValueError as exc:
        raise UpstreamSchemaError("PageSpeed API returned a non-JSON body", resp.status_code) from exc

    result = parse_pagespeed(payload, strategy)
    logger.debug(
        "PageSpeed %s for %s: perf=%.2f a11y=%.2f bp=%.2f seo=%.2f",
        strategy, url, result.performance, result.accessibility, result.best_practices, result.seo,
    )
    return result


# ── Lighthouse body schema ────────────────────────────────────────────────────

class _CategoryScore(BaseModel):
    # required key; Lighthouse reports null when a category could not be computed
    score: Optional[float]


class _Categories(BaseModel):
    performance: _CategoryScore
    accessibility: _CategoryScore
    best_practices: _CategoryScore = Field(alias="best-practices")
    seo: _CategoryScore


class _Audit(BaseModel):
    score: Optional[float] = None
    displayValue: Optional[str] = None
    numericValue: Optional[float] = None


class _LighthouseResult(BaseModel):
    categories: _Categories
    audits: Optional[dict[str, _Audit]] = None


class _PageSpeedBody(BaseModel):
    lighthouseResult: _LighthouseResult


def parse_pagespeed(payload: Any, strategy: str) -> PageSpeedResult:
    """Map a runPagespeed JSON body onto PageSpeedResult, raising UpstreamSchemaError on gaps."""
    try:
        body = _PageSpeedBody.model_validate(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "body"
        raise UpstreamSchemaError(
            f"PageSpeed response failed validation at {location}: {first['msg']}"
        ) from exc

    lighthouse = body.lighthouseResult
    categories = lighthouse.categories
    audits = lighthouse.audits or {}
    fcp = audits.get("first-contentful-paint") or _Audit()
    lcp = audits.get("largest-contentful-paint") or _Audit()

    return PageSpeedResult(
        strategy=strategy,
        performance=categories.performance.score or 0.0,
        accessibility=categories.accessibility.score or 0.0,
        best_practices=categories.best_practices.score or 0.0,
        seo=categories.seo.score or 0.0,
        fcp=fcp.displayValue or "N/A",
        lcp=lcp.displayValue or "N/A",
        fcp_numeric=fcp.numericValue or 0,
        lcp_numeric=lcp.numericValue or 0,
        audit_scores={
            audit_id: audits[audit_id].score if audit_id in audits else None
            for audit_id in RECOMMENDATION_AUDITS
        },
    )
