"""
Runs every analyzer plus both PageSpeed strategies concurrently and assembles
the AuditResponse.

Analyzer failures degrade to each analyzer's fallback. PageSpeed failures abort
the audit, since the overall score has no meaning without them.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Optional

import requests

from analyzers.base import BaseAnalyzer
from analyzers.content import ContentAnalyzer
from analyzers.headings import HeadingStructureAnalyzer
from analyzers.images import ImageOptimizationAnalyzer
from analyzers.links import BrokenLinkAnalyzer
from analyzers.meta import MetaTagAnalyzer
from analyzers.robots_sitemap import RobotsSitemapAnalyzer
from analyzers.security import HttpsSecurityAnalyzer
from analyzers.structured_data import StructuredDataAnalyzer
from analyzers.technical import TechnicalHeaderAnalyzer
from analyzers.webapp import WebAppFeatureAnalyzer
from config import DEFAULT_MAX_WORKERS, HEALTH_CHECK_URL, get_pagespeed_api_key, is_api_key_configured
from crawler.fetcher import make_session
from integrations.pagespeed import fetch_pagespeed
from models import AuditResponse, HealthReport
from scoring.recommendations import generate_recommendations, generate_technical_issues
from scoring.scorer import compute_overall_score, to_performance_score

logger = logging.getLogger(__name__)


def default_analyzers() -> dict[str, BaseAnalyzer]:
    """Report section → analyzer, in report order."""
    return {
        "meta_tags":          MetaTagAnalyzer(),
        "heading_structure":  HeadingStructureAnalyzer(),
        "technical_headers":  TechnicalHeaderAnalyzer(),
        "image_optimization": ImageOptimizationAnalyzer(),
        "content_analysis":   ContentAnalyzer(),
        "web_app_features":   WebAppFeatureAnalyzer(),
        "https_security":     HttpsSecurityAnalyzer(),
        "structured_data":    StructuredDataAnalyzer(),
        "robots_and_sitemap": RobotsSitemapAnalyzer(),
        "broken_links":       BrokenLinkAnalyzer(),
    }


def run_audit(
    url: str,
    session: Optional[requests.Session] = None,
    api_key: Optional[str] = None,
    analyzers: Optional[dict[str, BaseAnalyzer]] = None,
) -> AuditResponse:
    """
    Audit a single URL.

    Raises ConfigurationError before any request is made when no API key is
    available, and UpstreamAPIError when either PageSpeed call fails.
    """
    if api_key is None:
        api_key = get_pagespeed_api_key()
    session = session or make_session()
    analyzers = analyzers if analyzers is not None else default_analyzers()

    logger.info("Starting comprehensive audit for: %s", url)
    t0 = time.perf_counter()

    with ThreadPoolExecutor(max_workers=DEFAULT_MAX_WORKERS) as executor:
        mobile_future = executor.submit(fetch_pagespeed, url, "mobile", session, api_key)
        desktop_future = executor.submit(fetch_pagespeed, url, "desktop", session, api_key)
        section_futures: dict[str, Future] = {
            section: executor.submit(analyzer.run, url, session)
            for section, analyzer in analyzers.items()
        }

        try:
            mobile = mobile_future.result()
            desktop = desktop_future.result()
        except Exception as exc:
            logger.error("PageSpeed analysis failed for %s: %s", url, exc)
            for future in section_futures.values():
                future.cancel()
            raise

        sections = {section: future.result() for section, future in section_futures.items()}

    logger.info("All audits completed in %d ms", (time.perf_counter() - t0) * 1000)

    mobile_score = to_performance_score(mobile)
    desktop_score = to_performance_score(desktop)
    logger.info(
        "Mobile scores - Performance: %d, Accessibility: %d, Best Practices: %d, SEO: %d",
        mobile_score.performance, mobile_score.accessibility, mobile_score.best_practices, mobile_score.seo,
    )
    logger.info(
        "Desktop scores - Performance: %d, Accessibility: %d, Best Practices: %d, SEO: %d",
        desktop_score.performance, desktop_score.accessibility, desktop_score.best_practices, desktop_score.seo,
    )

    technical_issues = generate_technical_issues(
        https_security=sections["https_security"],
        meta_tags=sections["meta_tags"],
        structured_data=sections["structured_data"],
        robots_and_sitemap=sections["robots_and_sitemap"],
        broken_links=sections["broken_links"],
    )

    return AuditResponse(
        url=url,
        timestamp=_utc_timestamp(),
        overall_score=compute_overall_score(mobile_score, desktop_score),
        performance=mobile_score.performance,
        accessibility=mobile_score.accessibility,
        best_practices=mobile_score.best_practices,
        seo=mobile_score.seo,
        fcp=mobile.fcp,
        lcp=mobile.lcp,
        fcp_numeric=mobile.fcp_numeric,
        lcp_numeric=mobile.lcp_numeric,
        recommendations=generate_recommendations(mobile.audit_scores),
        mobile_score=mobile_score,
        desktop_score=desktop_score,
        technical_issues=technical_issues,
        **sections,
    )


# ── Health check ──────────────────────────────────────────────────────────────

_HEALTH_COMPONENTS = {
    "meta_tags":          "metaTagsAnalysis",
    "heading_structure":  "headingStructureAnalysis",
    "technical_headers":  "technicalHeadersAnalysis",
    "image_optimization": "imageOptimizationAnalysis",
    "content_analysis":   "contentAnalysis",
    "web_app_features":   "webAppFeaturesAnalysis",
    "https_security":     "httpsSecurityCheck",
    "structured_data":    "structuredDataCheck",
    "robots_and_sitemap": "robotsSitemapCheck",
    "broken_links":       "brokenLinksCheck",
}


def run_health_check(
    url: str = HEALTH_CHECK_URL,
    session: Optional[requests.Session] = None,
    api_key: Optional[str] = None,
    analyzers: Optional[dict[str, BaseAnalyzer]] = None,
) -> HealthReport:
    """
    Exercise every component against a reference URL.
    Analyzers are called without their fallback boundary so failures show up.
    """
    session = session or make_session()
    analyzers = analyzers if analyzers is not None else default_analyzers()
    tests: dict[str, bool] = {"pageSpeedAPI": False}

    try:
        fetch_pagespeed(url, "mobile", session, api_key)
        tests["pageSpeedAPI"] = True
    except Exception as exc:
        logger.warning("PageSpeed API test failed: %s", exc)

    for section, analyzer in analyzers.items():
        name = _HEALTH_COMPONENTS.get(section, section)
        try:
            analyzer.analyze(url, session)
            tests[name] = True
        except Exception as exc:
            logger.warning("%s test failed: %s", analyzer.name, exc)
            tests[name] = False

    return HealthReport(
        status="healthy",
        timestamp=_utc_timestamp(),
        api_key_configured=api_key is not None or is_api_key_configured(),
        component_tests=tests,
    )


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
