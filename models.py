"""
Result records for the SEO audit pipeline.
All modules import from here; nothing else is cross-imported at this level.

Field names are snake_case; `to_dict()` produces the camelCase JSON shape the
API returns.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Optional


# ── Enumerations ──────────────────────────────────────────────────────────────
class Impact:
    LOW      = "Low"
    MEDIUM   = "Medium"
    HIGH     = "High"
    POSITIVE = "Positive"


class Severity:
    LOW    = "Low"
    MEDIUM = "Medium"
    HIGH   = "High"

    ALL = [HIGH, MEDIUM, LOW]


class RecommendationType:
    PERFORMANCE = "performance"
    SEO         = "seo"
    SUCCESS     = "success"


class LinkStatus:
    OK          = "ok"
    BROKEN      = "broken"         # answered with a non-2xx status
    UNREACHABLE = "unreachable"    # transport failure or check deadline hit


# ── Fetch result ──────────────────────────────────────────────────────────────
@dataclass
class FetchedPage:
    url: str
    status_code: int
    final_url: str = ""
    headers: dict[str, str] = field(default_factory=dict)  # lower-cased names
    html: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


# ── Analyzer results ──────────────────────────────────────────────────────────
@dataclass
class MetaTagsResult:
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None
    canonical: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    og_url: Optional[str] = None
    twitter_card: Optional[str] = None
    twitter_site: Optional[str] = None
    twitter_creator: Optional[str] = None
    viewport: Optional[str] = None
    robots: Optional[str] = None
    language: Optional[str] = None
    charset: Optional[str] = None
    title_length: int = 0
    description_length: int = 0
    title_optimal: bool = False
    description_optimal: bool = False
    has_all_required_tags: bool = False


@dataclass
class HeadingStructureResult:
    h1_count: int = 0
    h2_count: int = 0
    h3_count: int = 0
    h4_count: int = 0
    h5_count: int = 0
    h6_count: int = 0
    h1_text: list[str] = field(default_factory=list)
    has_h1: bool = False
    multiple_h1: bool = False
    proper_hierarchy: bool = False
    missing_levels: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def counts(self) -> list[int]:
        return [self.h1_count, self.h2_count, self.h3_count,
                self.h4_count, self.h5_count, self.h6_count]


@dataclass
class TechnicalHeadersResult:
    content_security_policy: Optional[str] = None
    x_frame_options: Optional[str] = None
    strict_transport_security: Optional[str] = None
    cache_control: Optional[str] = None
    etag: Optional[str] = None
    expires: Optional[str] = None
    server_info: Optional[str] = None
    content_encoding: Optional[str] = None
    is_compressed: bool = False
    http_only_set: bool = False
    secure_set: bool = False
    same_site_set: bool = False


@dataclass
class ImageOptimizationResult:
    total_images: int = 0
    images_without_alt: int = 0
    large_size_images: int = 0   # file sizes are never fetched
    suboptimal_formats: int = 0
    recommendations: list[str] = field(default_factory=list)


@dataclass
class ContentAnalysisResult:
    word_count: int = 0
    is_thin_content: bool = True
    has_lang_attribute: bool = False
    external_links_count: int = 0
    external_links_with_nofollow: int = 0
    recommendations: list[str] = field(default_factory=list)


@dataclass
class WebAppFeaturesResult:
    has_favicon: bool = False
    has_manifest: bool = False
    has_hreflang: bool = False
    https_redirect: bool = False
    recommendations: list[str] = field(default_factory=list)


@dataclass
class HttpsSecurityResult:
    is_secure: bool = False
    has_hsts: bool = False
    mixed_content: bool = False  # embedded resources are not scanned


@dataclass
class StructuredDataResult:
    has_schema: bool = False
    types: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass
class RobotsAndSitemapResult:
    robots_exists: bool = False
    sitemap_exists: bool = False
    robots_content: Optional[str] = None


@dataclass
class BrokenLinksResult:
    broken_links: list[str] = field(default_factory=list)
    total_checked: int = 0


# ── PageSpeed Insights ────────────────────────────────────────────────────────
@dataclass
class PageSpeedResult:
    strategy: str
    performance: float = 0.0      # category scores on the 0..1 scale
    accessibility: float = 0.0
    best_practices: float = 0.0
    seo: float = 0.0
    fcp: str = "N/A"
    lcp: str = "N/A"
    fcp_numeric: float = 0
    lcp_numeric: float = 0
    audit_scores: dict[str, Optional[float]] = field(default_factory=dict)


@dataclass
class PerformanceScore:
    performance: int = 0
    accessibility: int = 0
    best_practices: int = 0
    seo: int = 0


# ── Synthesized output ────────────────────────────────────────────────────────
@dataclass
class Recommendation:
    title: str
    description: str
    impact: str       # Impact.*
    type: str         # RecommendationType.*


@dataclass
class TechnicalIssue:
    category: str
    issue: str
    severity: str     # Severity.*
    description: str


# ── Top-level audit report ────────────────────────────────────────────────────
@dataclass
class AuditResponse:
    url: str
    timestamp: str
    overall_score: int
    performance: int
    accessibility: int
    best_practices: int
    seo: int
    fcp: str
    lcp: str
    fcp_numeric: float
    lcp_numeric: float
    recommendations: list[Recommendation]
    mobile_score: PerformanceScore
    desktop_score: PerformanceScore
    technical_issues: list[TechnicalIssue]
    meta_tags: MetaTagsResult
    heading_structure: HeadingStructureResult
    technical_headers: TechnicalHeadersResult
    image_optimization: ImageOptimizationResult
    content_analysis: ContentAnalysisResult
    web_app_features: WebAppFeaturesResult
    https_security: HttpsSecurityResult
    structured_data: StructuredDataResult
    robots_and_sitemap: RobotsAndSitemapResult
    broken_links: BrokenLinksResult


@dataclass
class HealthReport:
    status: str
    timestamp: str
    api_key_configured: bool
    component_tests: dict[str, bool] = field(default_factory=dict)

    @property
    def all_tests_passed(self) -> bool:
        return all(self.component_tests.values())


# ── Serialization ─────────────────────────────────────────────────────────────
_CAMEL_OVERRIDES = {
    "has_hsts": "hasHSTS",
}


def camel_case(name: str) -> str:
    if name in _CAMEL_OVERRIDES:
        return _CAMEL_OVERRIDES[name]
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_dict(obj: Any) -> Any:
    """Recursively convert a result record into JSON-ready camelCase data."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        out = {camel_case(f.name): to_dict(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
        if isinstance(obj, HealthReport):
            out["allTestsPassed"] = obj.all_tests_passed
        return out
    if isinstance(obj, (list, tuple)):
        return [to_dict(item) for item in obj]
    if isinstance(obj, dict):
        # component/audit names are already in their wire form
        return {key: to_dict(value) for key, value in obj.items()}
    return obj
