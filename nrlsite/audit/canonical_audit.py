"""Canonical audit of a deployed site, driven by its sitemaps"""
import gzip
import logging
import xml.etree.ElementTree as ET
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from ..core.canonical import normalize_path
from ..exceptions import AuditError

logger = logging.getLogger(__name__)

USER_AGENT = 'NeuralCommand-CanonicalAudit/1.0'


def _issue(url, issue, details, issue_type='error'):
    return {
        'url': url,
        'type': issue_type,
        'category': 'Canonical',
        'issue': issue,
        'details': details
    }


class CanonicalAuditor:
    """
    Walks a site's sitemaps and checks that every listed URL is served at
    its canonical address.

    For each <loc> it checks that:
    - the location is already in canonical form
    - a GET (redirects not followed) returns 200
    - the page's <link rel="canonical"> points back at the location
    """

    def __init__(self, session=None, timeout=10, max_depth=10):
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', USER_AGENT)
        self.timeout = timeout
        self.max_depth = max_depth

    def discover_sitemaps(self, base_url):
        """Sitemap URLs from robots.txt, or /sitemap.xml when none are declared."""
        parsed_base = urlparse(base_url)
        base_domain = f"{parsed_base.scheme}://{parsed_base.netloc}"

        sitemaps = self._get_sitemaps_from_robots(base_domain)
        if not sitemaps:
            sitemaps = [f"{base_domain}/sitemap.xml"]
        return sitemaps

    def _get_sitemaps_from_robots(self, base_domain):
        """Extract sitemap URLs from robots.txt"""
        sitemaps = []
        try:
            response = self.session.get(f"{base_domain}/robots.txt", timeout=self.timeout)
            if response.status_code == 200:
                for line in response.text.split('\n'):
                    line = line.strip()
                    if line.lower().startswith('sitemap:'):
                        sitemaps.append(line.split(':', 1)[1].strip())
        except requests.RequestException as e:
            logger.warning(f"Could not fetch robots.txt: {e}")

        return sitemaps

    def collect_locations(self, sitemap_url, depth=1):
        """
        Parse a sitemap (or sitemap index, recursively) into its <loc> URLs.

        Returns None when the sitemap itself could not be fetched or parsed.
        """
        if depth > self.max_depth:
            return []

        try:
            response = self.session.get(sitemap_url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Failed to fetch sitemap {sitemap_url}: {e}")
            return None

        if response.status_code != 200:
            logger.warning(f"Sitemap {sitemap_url} returned status {response.status_code} - skipping")
            return None

        content = response.content
        if sitemap_url.endswith('.gz') or response.headers.get('content-encoding') == 'gzip':
            try:
                content = gzip.decompress(content)
            except OSError:
                # Already decoded by the transport
                pass

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.warning(f"XML parse error for {sitemap_url}: {e}")
            return None

        # Remove namespace prefixes for easier parsing
        for elem in root.iter():
            if '}' in elem.tag:
                elem.tag = elem.tag.split('}')[1]

        locations = []

        for sitemap in root.findall('.//sitemap'):
            loc_elem = sitemap.find('loc')
            if loc_elem is not None and loc_elem.text:
                nested = self.collect_locations(loc_elem.text.strip(), depth + 1)
                locations.extend(nested or [])

        for url_elem in root.findall('.//url'):
            loc_elem = url_elem.find('loc')
            if loc_elem is not None and loc_elem.text:
                locations.append(loc_elem.text.strip())

        logger.info(f"Found {len(locations)} URLs via {sitemap_url}")
        return locations

    def check_url(self, url):
        """Return the list of canonical issues for one sitemap location."""
        issues = []

        parsed = urlparse(url)
        expected = f"https://{parsed.netloc.lower()}{normalize_path(parsed.path)}"
        if url != expected:
            issues.append(_issue(url, 'Canonical: Non-canonical Sitemap URL',
                                 f"Sitemap lists {url}, canonical form is {expected}"))

        try:
            response = self.session.get(url, timeout=self.timeout, allow_redirects=False)
        except requests.RequestException as e:
            issues.append(_issue(url, 'Canonical: Fetch Failed', str(e)))
            return issues

        if 300 <= response.status_code < 400:
            location = response.headers.get('Location', '')
            issues.append(_issue(url, 'Canonical: Redirected',
                                 f"{response.status_code} -> {location}"))
            return issues

        if response.status_code != 200:
            issues.append(_issue(url, 'Canonical: Bad Status',
                                 f"Returned status {response.status_code}"))
            return issues

        soup = BeautifulSoup(response.text, 'html.parser')
        canonical = soup.find('link', attrs={'rel': 'canonical'})
        href = canonical.get('href', '').strip() if canonical else ''

        if not href:
            issues.append(_issue(url, 'Canonical: Missing Canonical Tag',
                                 'No <link rel="canonical"> in page head', issue_type='warning'))
        elif href != url:
            issues.append(_issue(url, 'Canonical: Canonical Mismatch',
                                 f"Page declares {href}"))

        return issues

    def audit(self, base_url, limit=None):
        """
        Audit every URL listed in the site's sitemaps.

        Raises:
            AuditError: none of the discovered sitemaps could be loaded
        """
        locations = []
        loaded = 0
        for sitemap_url in self.discover_sitemaps(base_url):
            found = self.collect_locations(sitemap_url)
            if found is None:
                continue
            loaded += 1
            locations.extend(found)

        if not loaded:
            raise AuditError(f"No sitemap could be loaded for {base_url}")

        # Same URL can appear in several sitemaps
        locations = list(dict.fromkeys(locations))
        if limit:
            locations = locations[:limit]

        issues = []
        for i, url in enumerate(locations, 1):
            logger.debug(f"[{i}/{len(locations)}] Checking {url}")
            issues.extend(self.check_url(url))

        return {'checked': len(locations), 'issues': issues}
