import pytest
import requests

from config import PAGESPEED_API_KEY_ENV, PAGESPEED_API_URL
from errors import ConfigurationError, UpstreamAPIError, UpstreamSchemaError
from integrations.pagespeed import fetch_pagespeed, parse_pagespeed

from conftest import SITE, FakeResponse, pagespeed_payload


def _session_answering(session, response):
    return session.add(PAGESPEED_API_URL, response)


def test_request_parameters(session):
    _session_answering(session, FakeResponse(json_body=pagespeed_payload()))

    fetch_pagespeed(SITE, "desktop", session, api_key="k-123")

    call = session.calls[0]
    assert call["url"] == PAGESPEED_API_URL
    assert call["params"] == [
        ("url", SITE),
        ("key", "k-123"),
        ("strategy", "desktop"),
        ("category", "performance"),
        ("category", "accessibility"),
        ("category", "best-practices"),
        ("category", "seo"),
    ]
    assert call["timeout"] == 90


def test_key_read_from_environment(session, monkeypatch):
    monkeypatch.setenv(PAGESPEED_API_KEY_ENV, " env-key ")
    _session_answering(session, FakeResponse(json_body=pagespeed_payload()))

    fetch_pagespeed(SITE, "mobile", session)

    assert ("key", "env-key") in session.calls[0]["params"]


def test_missing_key_fails_before_any_request(session, monkeypatch):
    monkeypatch.delenv(PAGESPEED_API_KEY_ENV, raising=False)

    with pytest.raises(ConfigurationError, match="Google PageSpeed API key is not configured"):
        fetch_pagespeed(SITE, "mobile", session)
    with pytest.raises(ConfigurationError):
        fetch_pagespeed(SITE, "mobile", session, api_key="")
    assert session.calls == []


def test_unknown_strategy(session):
    with pytest.raises(ValueError):
        fetch_pagespeed(SITE, "tablet", session, api_key="k")


@pytest.mark.parametrize("status, message", [
    (400, "Invalid URL or URL is not accessible"),
    (401, "Invalid API key"),
    (403, "API quota exceeded or access denied"),
    (429, "Rate limit exceeded. Please try again later"),
    (500, "PageSpeed API error: 500"),
    (503, "PageSpeed API error: 503"),
])
def test_status_messages(session, status, message):
    _session_answering(session, FakeResponse(status_code=status, text="nope"))

    with pytest.raises(UpstreamAPIError) as excinfo:
        fetch_pagespeed(SITE, "mobile", session, api_key="k")

    assert str(excinfo.value) == message
    assert excinfo.value.status_code == status


def test_transport_failure(session):
    _session_answering(session, requests.Timeout("read timed out"))

    with pytest.raises(UpstreamAPIError, match="PageSpeed API request failed"):
        fetch_pagespeed(SITE, "mobile", session, api_key="k")


def test_non_json_body(session):
    _session_answering(session, FakeResponse(text="<html>oops</html>"))

    with pytest.raises(UpstreamSchemaError):
        fetch_pagespeed(SITE, "mobile", session, api_key="k")


def test_parse_full_payload():
    payload = pagespeed_payload(audits={"unused-css-rules": 0.42, "document-title": None})

    result = parse_pagespeed(payload, "mobile")

    assert result.strategy == "mobile"
    assert result.performance == 0.9
    assert result.accessibility == 0.8
    assert result.best_practices == 0.7
    assert result.seo == 1.0
    assert result.fcp == "1.2 s"
    assert result.lcp == "2.5 s"
    assert result.fcp_numeric == 1200.5
    assert result.lcp_numeric == 2500.0
    assert result.audit_scores["unused-css-rules"] == 0.42
    assert result.audit_scores["document-title"] is None
    assert result.audit_scores["meta-description"] == 1.0


def test_null_category_score_counts_as_zero():
    result = parse_pagespeed(pagespeed_payload(performance=None), "mobile")

    assert result.performance == 0.0


def test_missing_metrics_default():
    payload = pagespeed_payload()
    del payload["lighthouseResult"]["audits"]

    result = parse_pagespeed(payload, "desktop")

    assert result.fcp == "N/A"
    assert result.lcp == "N/A"
    assert result.fcp_numeric == 0
    assert result.lcp_numeric == 0
    assert all(score is None for score in result.audit_scores.values())


@pytest.mark.parametrize("payload", [
    {},
    [],
    {"lighthouseResult": {}},
    {"lighthouseResult": {"categories": {"performance": {"score": 1}}}},
])
def test_schema_gaps_raise(payload):
    with pytest.raises(UpstreamSchemaError):
        parse_pagespeed(payload, "mobile")


def _with(path, value):
    payload = pagespeed_payload()
    node = payload["lighthouseResult"]
    for key in path[:-1]:
        node = node[key]
    node[path[-1]] = value
    return payload


@pytest.mark.parametrize("payload", [
    _with(("categories", "seo", "score"), "n/a"),
    _with(("categories", "performance"), 0.5),
    _with(("categories", "best-practices"), {"title": "no score key"}),
    _with(("audits",), ["first-contentful-paint"]),
    _with(("audits", "first-contentful-paint"), "1.2 s"),
    _with(("audits", "unused-css-rules", "score"), {"value": 1}),
])
def test_wrongly_typed_fields_raise_schema_error(payload):
    with pytest.raises(UpstreamSchemaError, match="PageSpeed response failed validation"):
        parse_pagespeed(payload, "mobile")


def test_wrongly_typed_body_is_a_schema_error_end_to_end(session):
    _session_answering(session, FakeResponse(json_body=_with(("categories", "seo", "score"), "n/a")))

    with pytest.raises(UpstreamSchemaError) as excinfo:
        fetch_pagespeed(SITE, "mobile", session, api_key="k")

    assert "categories.seo.score" in str(excinfo.value)
