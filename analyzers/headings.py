"""
Heading structure analyzer: H1–H6 counts, H1 text and hierarchy validation.
"""
from __future__ import annotations

import requests

from analyzers.base import BaseAnalyzer
from crawler.parser import make_soup
from models import HeadingStructureResult

HEADING_LEVELS = 6
FALLBACK_MESSAGE = "Unable to analyze heading structure"


class HeadingStructureAnalyzer(BaseAnalyzer):
    name = "Heading structure analysis"

    def analyze(self, url: str, session: requests.Session) -> HeadingStructureResult:
        page = self._fetch(url, session)
        return extract_heading_structure(page.html)

    def fallback(self, url: str) -> HeadingStructureResult:
        return HeadingStructureResult(recommendations=[FALLBACK_MESSAGE])


def extract_heading_structure(html: str) -> HeadingStructureResult:
    soup = make_soup(html)

    counts = [len(soup.find_all(f"h{level}")) for level in range(1, HEADING_LEVELS + 1)]
    h1_text = [text for text in (h1.get_text().strip() for h1 in soup.find_all("h1")) if text]

    proper_hierarchy, missing_levels = validate_hierarchy(counts)
    has_h1 = counts[0] > 0
    multiple_h1 = counts[0] > 1

    return HeadingStructureResult(
        h1_count=counts[0],
        h2_count=counts[1],
        h3_count=counts[2],
        h4_count=counts[3],
        h5_count=counts[4],
        h6_count=counts[5],
        h1_text=h1_text,
        has_h1=has_h1,
        multiple_h1=multiple_h1,
        proper_hierarchy=proper_hierarchy,
        missing_levels=missing_levels,
        recommendations=_recommendations(counts, has_h1, multiple_h1, proper_hierarchy, missing_levels),
    )


def validate_hierarchy(counts: list[int]) -> tuple[bool, list[str]]:
    """
    Walk levels H1..H6 in order.

    Leading levels skipped before the first present heading are missing, as is
    any absent level that a later present level depends on. A page with no
    headings at all is considered well-formed.
    """
    proper = True
    missing: list[str] = []
    found_heading = False

    for idx, count in enumerate(counts):
        if count > 0:
            if not found_heading and idx > 0:
                proper = False
                missing.extend(f"H{level}" for level in range(1, idx + 1))
            found_heading = True
        elif found_heading and any(c > 0 for c in counts[idx + 1:]):
            proper = False
            missing.append(f"H{idx + 1}")

    return proper, missing


def _recommendations(
    counts: list[int],
    has_h1: bool,
    multiple_h1: bool,
    proper_hierarchy: bool,
    missing_levels: list[str],
) -> list[str]:
    out: list[str] = []
    if not has_h1:
        out.append("Add an H1 tag to clearly define the main topic of the page")
    if multiple_h1:
        out.append("Use only one H1 tag per page for better SEO structure")
    if not proper_hierarchy:
        out.append("Follow proper heading hierarchy (H1 → H2 → H3, etc.) without skipping levels")
    if missing_levels:
        out.append(f"Consider adding missing heading levels: {', '.join(missing_levels)}")
    if counts[1] == 0 and any(counts[2:]):
        out.append("Add H2 headings to create better content structure")
    return out
