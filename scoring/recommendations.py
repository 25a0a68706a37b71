"""
Recommendation and technical issue synthesis.
Pure functions over PageSpeed audit scores and analyzer results.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from models import (
    BrokenLinksResult,
    HttpsSecurityResult,
    Impact,
    MetaTagsResult,
    Recommendation,
    RecommendationType,
    RobotsAndSitemapResult,
    Severity,
    StructuredDataResult,
    TechnicalIssue,
)

# (audit id, threshold, recommendation); a recommendation fires when score < threshold
_AUDIT_RULES: list[tuple[str, float, Recommendation]] = [
    ("unused-css-rules", 0.9, Recommendation(
        title="Optimize CSS",
        description="Remove unused CSS rules to reduce file size and improve loading performance.",
        impact=Impact.MEDIUM,
        type=RecommendationType.PERFORMANCE,
    )),
    ("unused-javascript", 0.9, Recommendation(
        title="Optimize JavaScript",
        description="Remove unused JavaScript code to reduce bundle size and improve performance.",
        impact=Impact.MEDIUM,
        type=RecommendationType.PERFORMANCE,
    )),
    # TODO: confirm with product whether render-blocking-resources should get its own
    # "Eliminate Render-Blocking Resources" text; the image wording is kept for report parity.
    ("render-blocking-resources", 0.9, Recommendation(
        title="Optimize Images",
        description="Large images are slowing down your Largest Contentful Paint. "
                    "Consider using WebP format and proper sizing.",
        impact=Impact.MEDIUM,
        type=RecommendationType.PERFORMANCE,
    )),
    ("meta-description", 1.0, Recommendation(
        title="Add Meta Description",
        description="Some pages are missing meta descriptions which help search engines understand your content.",
        impact=Impact.LOW,
        type=RecommendationType.SEO,
    )),
    ("document-title", 1.0, Recommendation(
        title="Optimize Page Titles",
        description="Ensure all pages have descriptive, unique titles for better SEO.",
        impact=Impact.MEDIUM,
        type=RecommendationType.SEO,
    )),
]

EXCELLENT_PERFORMANCE = Recommendation(
    title="Excellent Performance",
    description="Your website follows web performance best practices well. Keep up the good work!",
    impact=Impact.POSITIVE,
    type=RecommendationType.SUCCESS,
)


def generate_recommendations(audit_scores: dict[str, Optional[float]]) -> list[Recommendation]:
    """
    Recommendations from Lighthouse audit scores on the 0..1 scale.
    Missing or null scores never trigger a rule.
    """
    recommendations: list[Recommendation] = []
    for audit_id, threshold, recommendation in _AUDIT_RULES:
        score = audit_scores.get(audit_id)
        if score is not None and score < threshold:
            recommendations.append(replace(recommendation))

    if not recommendations:
        recommendations.append(replace(EXCELLENT_PERFORMANCE))
    return recommendations


def generate_technical_issues(
    https_security: HttpsSecurityResult,
    meta_tags: MetaTagsResult,
    structured_data: StructuredDataResult,
    robots_and_sitemap: RobotsAndSitemapResult,
    broken_links: BrokenLinksResult,
) -> list[TechnicalIssue]:
    """Issues in fixed rule order (not sorted by severity)."""
    issues: list[TechnicalIssue] = []

    if not https_security.is_secure:
        issues.append(TechnicalIssue(
            category="Security",
            issue="No HTTPS",
            severity=Severity.HIGH,
            description="Website is not using HTTPS, which affects SEO rankings and user trust.",
        ))

    if not meta_tags.title:
        issues.append(TechnicalIssue(
            category="SEO",
            issue="Missing Title Tag",
            severity=Severity.HIGH,
            description="Page is missing a title tag, which is crucial for SEO.",
        ))

    if not meta_tags.description:
        issues.append(TechnicalIssue(
            category="SEO",
            issue="Missing Meta Description",
            severity=Severity.MEDIUM,
            description="Page is missing a meta description, which helps search engines understand content.",
        ))

    if not structured_data.has_schema:
        issues.append(TechnicalIssue(
            category="SEO",
            issue="No Structured Data",
            severity=Severity.LOW,
            description="No structured data found. Adding Schema markup can improve search visibility.",
        ))

    if not robots_and_sitemap.robots_exists:
        issues.append(TechnicalIssue(
            category="SEO",
            issue="Missing robots.txt",
            severity=Severity.MEDIUM,
            description="robots.txt file not found. This file helps search engines understand how to crawl your site.",
        ))

    if not robots_and_sitemap.sitemap_exists:
        issues.append(TechnicalIssue(
            category="SEO",
            issue="Missing sitemap.xml",
            severity=Severity.MEDIUM,
            description="sitemap.xml file not found. This helps search engines discover and index your pages.",
        ))

    broken = len(broken_links.broken_links)
    if broken:
        issues.append(TechnicalIssue(
            category="SEO",
            issue=f"{broken} Broken Links Found",
            severity=Severity.HIGH,
            description=(
                f"Found {broken} broken links out of {broken_links.total_checked} checked. "
                "Broken links hurt user experience and SEO."
            ),
        ))

    return issues

