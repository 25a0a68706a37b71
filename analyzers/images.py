"""
Image analyzer: missing alt text and legacy (non WebP/AVIF) formats.
"""
from __future__ import annotations

import re

import requests

from analyzers.base import BaseAnalyzer
from crawler.parser import attr_text, make_soup
from models import ImageOptimizationResult

_LEGACY_FORMAT_RE = re.compile(r"\.(jpe?g|png)$", re.IGNORECASE)


class ImageOptimizationAnalyzer(BaseAnalyzer):
    name = "Image optimization analysis"

    def analyze(self, url: str, session: requests.Session) -> ImageOptimizationResult:
        page = self._fetch(url, session)
        return scan_images(page.html)

    def fallback(self, url: str) -> ImageOptimizationResult:
        return ImageOptimizationResult(recommendations=["Unable to analyze images"])


def scan_images(html: str) -> ImageOptimizationResult:
    images = make_soup(html).find_all("img")

    without_alt = 0
    legacy = 0
    for img in images:
        # alt="" and a valueless alt both mark a decorative image; only a missing attribute counts
        if not img.has_attr("alt"):
            without_alt += 1
        if _LEGACY_FORMAT_RE.search(attr_text(img, "src").strip()):
            legacy += 1

    recommendations: list[str] = []
    if without_alt:
        recommendations.append(f"Add alt text to {without_alt} images for better accessibility and SEO")
    if legacy:
        recommendations.append(
            f"Consider converting {legacy} images to modern formats (WebP, AVIF) for better performance"
        )
    if not images:
        recommendations.append("Consider adding relevant images to improve user engagement")

    return ImageOptimizationResult(
        total_images=len(images),
        images_without_alt=without_alt,
        suboptimal_formats=legacy,
        recommendations=recommendations,
    )
