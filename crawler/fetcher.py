"""
Low-level HTTP fetcher. One request per call; analyzers never share responses.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from urllib.parse import urlparse

import requests

from config import DEFAULT_MAX_WORKERS, DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT, LINK_CHECK_TIMEOUT
from errors import FetchError, ValidationError
from models import FetchedPage, LinkStatus

logger = logging.getLogger(__name__)


def make_session(user_agent: str = DEFAULT_USER_AGENT) -> requests.Session:
    """
    Session shared by every analyzer of one audit.
    The pool is sized for the fan-out; failed requests are never retried.
    """
    session = requests.Session()
    adapter = requests.adapters.HTTPAdapter(
        pool_connections=DEFAULT_MAX_WORKERS,
        pool_maxsize=DEFAULT_MAX_WORKERS * 2,
        max_retries=0,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    })
    return session


def fetch_page(
    url: str,
    session: requests.Session,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    method: str = "GET",
    allow_redirects: bool = True,
) -> FetchedPage:
    """
    Perform a single request and return status, headers and body text.
    Raises FetchError on any transport failure; HTTP error statuses are returned as-is.
    """
    try:
        resp = session.request(
            method,
            url,
            timeout=timeout,
            allow_redirects=allow_redirects,
        )
    except requests.exceptions.SSLError as exc:
        raise FetchError(url, f"SSL Error: {exc}") from exc
    except requests.exceptions.Timeout as exc:
        raise FetchError(url, "Request timed out") from exc
    except requests.exceptions.TooManyRedirects as exc:
        raise FetchError(url, "Too many redirects") from exc
    except requests.RequestException as exc:
        raise FetchError(url, f"Connection Error: {exc}") from exc

    return FetchedPage(
        url=url,
        status_code=resp.status_code,
        final_url=resp.url or url,
        headers={k.lower(): v for k, v in resp.headers.items()},
        html=resp.text if method != "HEAD" else "",
    )


def check_link(
    url: str,
    session: requests.Session,
    timeout: float = LINK_CHECK_TIMEOUT,
) -> str:
    """
    Lightweight HEAD check, returning a LinkStatus.

    `timeout` is a wall-clock deadline for the whole check, not a per-read
    socket timeout. A check past its deadline is abandoned in its worker thread
    and reported as unreachable.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="link-check")
    future = executor.submit(fetch_page, url, session, timeout=timeout, method="HEAD")
    try:
        page = future.result(timeout=timeout)
    except FutureTimeout:
        logger.debug("Link check for %s exceeded %ss", url, timeout)
        return LinkStatus.UNREACHABLE
    except FetchError as exc:
        logger.debug("Link check failed for %s: %s", url, exc.reason)
        return LinkStatus.UNREACHABLE
    finally:
        executor.shutdown(wait=False)
    return LinkStatus.OK if page.ok else LinkStatus.BROKEN


def validate_url(value: str) -> str:
    """Return the stripped URL if it is an absolute http(s) URL, else raise ValidationError."""
    value = (value or "").strip()
    if not value:
        raise ValidationError("URL is required")
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("Please enter a valid URL")
    return value
