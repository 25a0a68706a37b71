"""
Global configuration constants for the SEO Audit Service.
All tunable thresholds live here.
"""
import logging
import os
from typing import Optional

from errors import ConfigurationError

# ── Meta thresholds ───────────────────────────────────────────────────────────
TITLE_MIN_CHARS = 30
TITLE_MAX_CHARS = 60
DESCRIPTION_MIN_CHARS = 120
DESCRIPTION_MAX_CHARS = 160

# ── Content thresholds ────────────────────────────────────────────────────────
THIN_CONTENT_WORD_COUNT = 300

# ── Link checking ─────────────────────────────────────────────────────────────
MAX_LINKS_TO_CHECK = 10
LINK_CHECK_TIMEOUT = 3                  # seconds, per HEAD check

# ── HTTP client defaults ──────────────────────────────────────────────────────
DEFAULT_REQUEST_TIMEOUT = 15            # seconds
DEFAULT_USER_AGENT = (
    "SEOAuditBot/1.0 (+https://github.com/seo-audit-service)"
)
DEFAULT_MAX_WORKERS = 12                # 10 analyzers + 2 PageSpeed strategies

# ── PageSpeed Insights ────────────────────────────────────────────────────────
PAGESPEED_API_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"
PAGESPEED_API_KEY_ENV = "GOOGLE_PAGESPEED_API_KEY"
PAGESPEED_TIMEOUT = 90                  # Lighthouse runs are slow
PAGESPEED_STRATEGIES = ("mobile", "desktop")
PAGESPEED_CATEGORIES = ("performance", "accessibility", "best-practices", "seo")

# Lighthouse audit ids inspected by the recommendation synthesizer
RECOMMENDATION_AUDITS = (
    "unused-css-rules",
    "unused-javascript",
    "render-blocking-resources",
    "meta-description",
    "document-title",
)

# ── Scoring weights (applied to mobile + desktop sums, then halved) ───────────
SCORING_WEIGHTS: dict[str, float] = {
    "performance":    0.20,
    "accessibility":  0.15,
    "best_practices": 0.15,
    "seo":            0.25,
}

# ── Health check ──────────────────────────────────────────────────────────────
HEALTH_CHECK_URL = "https://example.com"

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_pagespeed_api_key() -> str:
    """Return the PageSpeed API key from the environment or raise ConfigurationError."""
    key = os.getenv(PAGESPEED_API_KEY_ENV, "").strip()
    if not key:
        raise ConfigurationError("Google PageSpeed API key is not configured")
    return key


def is_api_key_configured() -> bool:
    return bool(os.getenv(PAGESPEED_API_KEY_ENV, "").strip())


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
