"""
Base class for all page analyzers.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from config import DEFAULT_REQUEST_TIMEOUT
from crawler.fetcher import fetch_page
from models import FetchedPage

logger = logging.getLogger(__name__)


class BaseAnalyzer(ABC):
    """
    All analyzers inherit from this class.

    `analyze` may raise; `run` is the recover-to-default boundary the
    orchestrator calls, substituting `fallback` for any failure.
    """

    name: str = "analyzer"

    def __init__(self, timeout: float = DEFAULT_REQUEST_TIMEOUT):
        self.timeout = timeout

    @abstractmethod
    def analyze(self, url: str, session: requests.Session) -> Any:
        """Analyze a single URL and return this analyzer's result record."""
        ...

    @abstractmethod
    def fallback(self, url: str) -> Any:
        """Result reported when `analyze` fails."""
        ...

    def run(self, url: str, session: requests.Session) -> Any:
        try:
            return self.analyze(url, session)
        except Exception as exc:
            logger.warning("%s failed for %s: %s", self.name, url, exc)
            return self.fallback(url)

    # ── Convenience ───────────────────────────────────────────────────────────

    def _fetch(self, url: str, session: requests.Session, **kwargs) -> FetchedPage:
        kwargs.setdefault("timeout", self.timeout)
        return fetch_page(url, session, **kwargs)
