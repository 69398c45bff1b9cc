"""Website scan: crawl a business site and infer missing features.

Pages are parsed with BeautifulSoup; feature elements are CSS selectors
matched against the parsed document.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from bounty_feed.models.business import AccessibilityCheck, MissingFeature, WebsiteAnalysis
from bounty_feed.tables import feature_patterns, opportunity_table

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; BountyBoard/1.0; +https://bountyboard.app)"
MAX_EXTRA_PAGES = 5
DETECTION_RATIO = 0.2
MIN_MISSING_CONFIDENCE = 0.6

_WHITESPACE = re.compile(r"\s+")
_SKIPPED_HREFS = ("#", "mailto:", "tel:", "javascript:")
# Unreachable or malformed URLs; httpx.InvalidURL is not an HTTPError
_FETCH_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError)


@dataclass
class PageContent:
    """Signals extracted from one fetched page."""

    url: str
    soup: BeautifulSoup = field(repr=False)
    title: str = ""
    text: str = ""
    scripts: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
    meta_tags: dict[str, str] = field(default_factory=dict)


@dataclass
class FeatureDetection:
    detected: bool
    confidence: float
    searched_for: list[str]


def normalize_url(url: str) -> str:
    """Add https:// when no scheme is given and drop one trailing slash."""
    normalized = url.strip()
    if not normalized.startswith(("http://", "https://")):
        normalized = "https://" + normalized
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def extract_text(html: str) -> str:
    """Visible text, lowercased, scripts and styles removed."""
    soup = _soup(html)
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return _WHITESPACE.sub(" ", soup.get_text(" ")).lower().strip()


def _scripts(soup: BeautifulSoup) -> list[str]:
    sources: list[str] = []
    bodies: list[str] = []
    for tag in soup.find_all("script"):
        if tag.get("src"):
            sources.append(tag["src"].lower())
        body = tag.string or ""
        if body.strip():
            bodies.append(body.lower())
    return sources + bodies


def extract_scripts(html: str) -> list[str]:
    """Script sources plus inline script bodies, lowercased."""
    return _scripts(_soup(html))


def _links(soup: BeautifulSoup, base_url: str) -> list[str]:
    host = urlparse(base_url).hostname
    links: list[str] = []
    seen: set[str] = set()
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.startswith(_SKIPPED_HREFS):
            continue
        try:
            full = urljoin(base_url + "/", href)
            parsed = urlparse(full)
            hostname = parsed.hostname
        except ValueError:
            logger.debug("Skipping malformed link %r on %s", href, base_url)
            continue
        if parsed.scheme not in ("http", "https") or hostname != host:
            continue
        full = full.split("#", 1)[0]
        if full not in seen:
            seen.add(full)
            links.append(full)
    return links


def extract_links(html: str, base_url: str) -> list[str]:
    """Absolute same-host links, deduplicated in document order. Malformed hrefs are skipped."""
    return _links(_soup(html), base_url)


def _meta_tags(soup: BeautifulSoup) -> dict[str, str]:
    tags: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        name = tag.get("name")
        content = tag.get("content")
        if name and content:
            tags[name.lower()] = content
    return tags


def parse_page(url: str, html: str) -> PageContent:
    soup = _soup(html)
    title = soup.title.get_text(strip=True) if soup.title else ""
    return PageContent(
        url=url,
        soup=soup,
        title=title,
        text=extract_text(html),
        scripts=_scripts(soup),
        links=_links(soup, url),
        meta_tags=_meta_tags(soup),
    )


def important_links(page: PageContent) -> list[str]:
    """Links whose URL mentions contact, about, pricing, booking, faq, blog, etc."""
    keywords: list[str] = opportunity_table()["important_link_keywords"]
    return [link for link in page.links if any(k in link.lower() for k in keywords)]


def detect_feature(
    feature: str,
    pages: list[PageContent],
    base_url: str,
    *,
    sitemap_found: bool = False,
) -> FeatureDetection:
    """
    Score one feature across pages: keywords 1 point, scripts 2 points, elements (CSS selectors) 1 point.
    Detected when signals / checks > 0.2; confidence in absence is 1 - ratio.
    """
    patterns: dict[str, Any] = feature_patterns()[feature]
    searched_for: list[str] = []
    signals = 0
    checks = 0

    keywords = patterns.get("keywords") or []
    scripts = patterns.get("scripts") or []
    elements = patterns.get("elements") or []

    if not patterns.get("special"):
        if keywords:
            searched_for.extend(keywords[:3])
            for page in pages:
                for keyword in keywords:
                    checks += 1
                    if keyword.lower() in page.text:
                        signals += 1
        if scripts:
            searched_for.extend(f"{s} script" for s in scripts[:3])
            for page in pages:
                for script in scripts:
                    checks += 1
                    if any(script.lower() in s for s in page.scripts):
                        signals += 2
        if elements:
            searched_for.extend(f"{e} element" for e in elements[:2])
            for page in pages:
                for element in elements:
                    checks += 1
                    if page.soup.select_one(element) is not None:
                        signals += 1
    else:
        searched_for.extend(patterns.get("searched_for") or [])
        checks = 1
        signals = 1 if _special_signal(feature, pages, base_url, scripts, sitemap_found) else 0

    ratio = signals / checks if checks else 0.0
    detected = ratio > DETECTION_RATIO
    confidence = 0.0 if detected else min(max(1.0 - ratio, 0.0), 1.0)
    return FeatureDetection(detected=detected, confidence=confidence, searched_for=searched_for)


def _special_signal(
    feature: str,
    pages: list[PageContent],
    base_url: str,
    scripts: list[str],
    sitemap_found: bool,
) -> bool:
    if feature == "ssl_certificate":
        return base_url.startswith("https://")
    if feature == "mobile_responsive":
        return any("width=device-width" in p.meta_tags.get("viewport", "") for p in pages)
    if feature == "schema_markup":
        return any(
            p.soup.find("script", type="application/ld+json") is not None
            or p.soup.find(attrs={"itemtype": True}) is not None
            for p in pages
        )
    if feature == "google_analytics":
        return any(any(marker in s for marker in scripts) for p in pages for s in p.scripts)
    if feature == "sitemap":
        return sitemap_found
    return False


def no_website_feature() -> MissingFeature:
    """The online-presence gap reported for businesses without a reachable website."""
    entry = opportunity_table()["no_website_feature"]
    return MissingFeature(
        feature=entry["feature"],
        confidence=1.0,
        searched_for=entry["searched_for"],
        recommendation=entry["recommendation"],
    )


class WebsiteScanner:
    """Fetches a site (main page + a few important pages) and reports missing features."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        accessibility_timeout: float = 5.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_extra_pages: int = MAX_EXTRA_PAGES,
    ):
        self._client = client
        self._timeout = timeout
        self._accessibility_timeout = accessibility_timeout
        self._headers = {"User-Agent": user_agent, "Accept": "text/html,application/xhtml+xml"}
        self._max_extra_pages = max_extra_pages

    async def _request(self, method: str, url: str, timeout: float) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(
                method, url, headers=self._headers, timeout=timeout, follow_redirects=True
            )
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            return await client.request(method, url, headers=self._headers)

    async def fetch_page(self, url: str) -> Optional[PageContent]:
        """Fetched and parsed page, or None on non-2xx, a malformed URL or any transport error."""
        try:
            response = await self._request("GET", url, self._timeout)
        except _FETCH_ERRORS as e:
            logger.debug("Fetch failed for %s: %s", url, e)
            return None
        if not response.is_success:
            return None
        return parse_page(url, response.text)

    async def has_sitemap(self, base_url: str) -> bool:
        try:
            response = await self._request("GET", f"{base_url}/sitemap.xml", self._timeout)
        except _FETCH_ERRORS:
            return False
        return response.is_success

    async def analyze_website(self, website_url: str) -> WebsiteAnalysis:
        """Scan a website; an unreachable main page yields accessible=False with an error."""
        base_url = normalize_url(website_url)
        result = WebsiteAnalysis(url=website_url, has_ssl=base_url.startswith("https://"))

        main_page = await self.fetch_page(base_url)
        if main_page is None:
            result.errors.append("Could not access main page")
            return result

        result.accessible = True
        result.pages_tested.append(base_url)

        pages = [main_page]
        for link in important_links(main_page)[: self._max_extra_pages]:
            page = await self.fetch_page(link)
            if page is not None:
                pages.append(page)
                result.pages_tested.append(link)

        sitemap_found = await self.has_sitemap(base_url)
        missing: list[MissingFeature] = []
        for feature, patterns in feature_patterns().items():
            detection = detect_feature(feature, pages, base_url, sitemap_found=sitemap_found)
            if detection.detected:
                result.detected_features.append(feature)
            elif detection.confidence > MIN_MISSING_CONFIDENCE:
                missing.append(
                    MissingFeature(
                        feature=feature,
                        confidence=round(detection.confidence, 3),
                        searched_for=detection.searched_for,
                        recommendation=patterns.get("recommendation", ""),
                    )
                )
        result.missing_features = missing
        logger.debug(
            "Scanned %s: %d pages, %d detected, %d missing",
            base_url,
            len(pages),
            len(result.detected_features),
            len(missing),
        )
        return result

    async def check_accessibility(self, url: str) -> AccessibilityCheck:
        """HEAD request with a short timeout."""
        normalized = normalize_url(url)
        started = time.monotonic()
        try:
            response = await self._request("HEAD", normalized, self._accessibility_timeout)
        except _FETCH_ERRORS as e:
            return AccessibilityCheck(accessible=False, has_ssl=False, error=str(e) or type(e).__name__)
        return AccessibilityCheck(
            accessible=response.is_success,
            has_ssl=normalized.startswith("https://"),
            load_time_ms=int((time.monotonic() - started) * 1000),
        )

    async def missing_features_for(self, website: Optional[str]) -> list[MissingFeature]:
        """Missing features for a business; no or unreachable website counts as fully missing."""
        if not website:
            return [no_website_feature()]
        analysis = await self.analyze_website(website)
        if not analysis.accessible:
            return [no_website_feature()]
        return analysis.missing_features
