import re

import pytest

from analyzers.base import BaseAnalyzer
from analyzers.orchestrator import default_analyzers, run_audit, run_health_check
from config import PAGESPEED_API_KEY_ENV
from errors import ConfigurationError, UpstreamAPIError
from models import MetaTagsResult

from conftest import SITE, FakeResponse, PageSpeedSession, pagespeed_payload

HOME = """<html lang="en"><head>
  <title>Handmade Oak Furniture for Every Room of Your Home</title>
  <meta name="description" content="Solid oak tables, chairs and shelving made to order.">
  <link rel="icon" href="/favicon.ico">
  <script type="application/ld+json">{"@type": "Organization", "name": "Oak"}</script>
</head><body><h1>Oak furniture</h1><h2>Tables</h2><a href="/tables">Tables</a></body></html>"""


class ExplodingAnalyzer(BaseAnalyzer):
    name = "Exploding"

    def analyze(self, url, session):
        raise RuntimeError("boom")

    def fallback(self, url):
        return MetaTagsResult()


@pytest.fixture
def site_session():
    session = PageSpeedSession(
        mobile=FakeResponse(json_body=pagespeed_payload(
            performance=0.5, accessibility=0.6, best_practices=0.7, seo=0.8,
            audits={"unused-javascript": 0.3},
        )),
        desktop=FakeResponse(json_body=pagespeed_payload(
            performance=0.7, accessibility=0.8, best_practices=0.9, seo=1.0,
        )),
    )
    session.add(SITE, FakeResponse(text=HOME, headers={"Strict-Transport-Security": "max-age=600"}))
    session.add(f"{SITE}/robots.txt", FakeResponse(text="User-agent: *\n"))
    session.add(f"{SITE}/sitemap.xml", FakeResponse(text="<urlset/>"))
    session.add(f"{SITE}/tables", FakeResponse(), method="HEAD")
    return session


def test_full_audit(site_session):
    report = run_audit(SITE, site_session, api_key="k")

    assert report.url == SITE
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", report.timestamp)

    assert (report.performance, report.accessibility, report.best_practices, report.seo) == (50, 60, 70, 80)
    assert report.mobile_score.performance == 50
    assert report.desktop_score.seo == 100
    assert report.overall_score == 57
    assert report.fcp == "1.2 s"
    assert report.lcp_numeric == 2500.0

    assert [r.title for r in report.recommendations] == ["Optimize JavaScript"]
    assert report.technical_issues == []

    assert report.meta_tags.title == "Handmade Oak Furniture for Every Room of Your Home"
    assert report.heading_structure.proper_hierarchy is True
    assert report.https_security.has_hsts is True
    assert report.structured_data.types == ["Organization"]
    assert report.robots_and_sitemap.sitemap_exists is True
    assert report.broken_links.total_checked == 1
    assert report.web_app_features.has_favicon is True


def test_failing_analyzer_degrades_to_fallback(site_session):
    analyzers = default_analyzers()
    analyzers["meta_tags"] = ExplodingAnalyzer()

    report = run_audit(SITE, site_session, api_key="k", analyzers=analyzers)

    assert report.meta_tags == MetaTagsResult()
    assert [i.issue for i in report.technical_issues] == ["Missing Title Tag", "Missing Meta Description"]


def test_unreachable_site_still_reports(site_session):
    report = run_audit("https://unreachable.example", site_session, api_key="k")

    assert report.overall_score == 57
    assert report.image_optimization.recommendations == ["Unable to analyze images"]
    assert report.https_security.is_secure is True
    issues = [i.issue for i in report.technical_issues]
    assert "No HTTPS" not in issues
    assert "Missing robots.txt" in issues


def test_missing_api_key_raises_before_any_request(site_session, monkeypatch):
    monkeypatch.delenv(PAGESPEED_API_KEY_ENV, raising=False)

    with pytest.raises(ConfigurationError):
        run_audit(SITE, site_session)
    assert site_session.calls == []


def test_pagespeed_failure_aborts_audit(site_session):
    site_session.pagespeed["desktop"] = FakeResponse(status_code=429)

    with pytest.raises(UpstreamAPIError, match="Rate limit exceeded"):
        run_audit(SITE, site_session, api_key="k")


def test_health_check_reports_each_component(site_session):
    analyzers = default_analyzers()
    analyzers["meta_tags"] = ExplodingAnalyzer()

    report = run_health_check(SITE, site_session, api_key="k", analyzers=analyzers)

    assert report.status == "healthy"
    assert report.api_key_configured is True
    assert report.component_tests["pageSpeedAPI"] is True
    assert report.component_tests["metaTagsAnalysis"] is False
    assert report.component_tests["brokenLinksCheck"] is True
    assert len(report.component_tests) == 11
    assert report.all_tests_passed is False


def test_health_check_without_key(site_session, monkeypatch):
    monkeypatch.delenv(PAGESPEED_API_KEY_ENV, raising=False)

    report = run_health_check(SITE, site_session)

    assert report.api_key_configured is False
    assert report.component_tests["pageSpeedAPI"] is False
    assert report.component_tests["headingStructureAnalysis"] is True
