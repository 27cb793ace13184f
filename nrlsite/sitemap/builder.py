"""
Sitemap URL enumeration and sharding.

Build stages, each a plain function over a list:
    enumerate_candidates -> canonicalize -> validate -> paginate
Rendering to XML lives in ``render.py``.
"""
import logging
import math
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlsplit

from ..core.canonical import DEFAULT_HOST, is_file_like, kebab, normalize_path, to_absolute_url
from ..site_data import MatrixRow, SiteData, load_matrix_rows
from .models import CandidateUrl, ChangeFrequency, SitemapEntry

logger = logging.getLogger(__name__)

SHARD_SIZE = 45000

ROOT_PRIORITY = 1.0
CORE_PRIORITY = 0.7
STATE_PRIORITY = 0.7
SERVICE_PRIORITY = 0.8
MATRIX_PRIORITY = 0.8


def city_state_slug(city: str, abbr: str) -> str:
    """'Los Angeles', 'CA' -> 'los-angeles-ca'"""
    return kebab(f"{city}-{abbr}")


def service_city_path(service: str, city: str) -> str:
    """Path for a matrix row; underscores in city slugs count as hyphens."""
    return f"/services/{kebab(service)}/{kebab(city.replace('_', '-'))}/"


def enumerate_candidates(site_data: SiteData,
                         matrix_rows: Iterable[MatrixRow] = ()) -> List[CandidateUrl]:
    """
    List every publishable path in enumeration order.

    Order: core pages, service hubs, then per state its landing page,
    service x state and service x city pages, then service x priority city,
    then matrix rows.
    """
    candidates = []
    services = list(site_data.services)

    for page in site_data.core_pages:
        priority = ROOT_PRIORITY if normalize_path(page) == '/' else CORE_PRIORITY
        candidates.append(CandidateUrl(page, priority))

    for service in services:
        candidates.append(CandidateUrl(f"/services/{service}/", SERVICE_PRIORITY))

    for state_key, state in site_data.states.items():
        candidates.append(CandidateUrl(f"/states/{state_key}/", STATE_PRIORITY))

        for service in services:
            candidates.append(CandidateUrl(f"/services/{service}/{state_key}/", SERVICE_PRIORITY))

        for city in state.cities:
            slug = city_state_slug(city, state.abbr)
            for service in services:
                candidates.append(CandidateUrl(f"/services/{service}/{slug}/", SERVICE_PRIORITY))

    for city_key in site_data.priority_cities:
        for service in services:
            candidates.append(CandidateUrl(f"/services/{service}/{city_key}/", SERVICE_PRIORITY))

    candidates.extend(matrix_candidates(matrix_rows))
    return candidates


def matrix_candidates(matrix_rows: Iterable[MatrixRow]) -> List[CandidateUrl]:
    return [
        CandidateUrl(
            service_city_path(row.service, row.city),
            MATRIX_PRIORITY,
            last_modified=row.last_modified,
            change_frequency=ChangeFrequency.WEEKLY,
        )
        for row in matrix_rows
    ]


def canonicalize(candidates: Iterable[CandidateUrl], host: Optional[str] = None,
                 default_host: str = DEFAULT_HOST) -> List[SitemapEntry]:
    """Turn paths into absolute canonical URLs; repeated locations keep the first."""
    entries = []
    seen = set()
    for candidate in candidates:
        location = to_absolute_url(candidate.path, host, default_host)
        if location in seen:
            continue
        seen.add(location)
        entries.append(SitemapEntry(
            location=location,
            priority=candidate.priority,
            last_modified=candidate.last_modified,
            change_frequency=candidate.change_frequency,
        ))
    return entries


def is_valid_location(location: str) -> bool:
    """Absolute http(s), lowercase, slash-terminated or file-like, no query."""
    parts = urlsplit(location)
    return (
        parts.scheme in ('http', 'https')
        and bool(parts.netloc)
        and location.lower() == location
        and parts.path != ''
        and (parts.path.endswith('/') or is_file_like(parts.path))
        and '?' not in location
        and not parts.query
    )


def validate(entries: Iterable[SitemapEntry]) -> List[SitemapEntry]:
    """Drop entries whose location fails ``is_valid_location``."""
    valid = []
    dropped = 0
    for entry in entries:
        if is_valid_location(entry.location):
            valid.append(entry)
        else:
            dropped += 1
            logger.debug(f"Dropping invalid sitemap location: {entry.location}")
    if dropped:
        logger.info(f"Dropped {dropped} invalid sitemap entries")
    return valid


def page_count(total: int, shard_size: int = SHARD_SIZE) -> int:
    return max(1, math.ceil(total / shard_size))


def paginate(entries: Sequence[SitemapEntry], page: int,
             shard_size: int = SHARD_SIZE) -> List[SitemapEntry]:
    """Entries of the 1-based ``page``; pages out of range are empty."""
    if page < 1:
        return []
    start = (page - 1) * shard_size
    return list(entries[start:start + shard_size])


class SitemapBuilder:
    """Runs the build stages for one request against one configuration."""

    def __init__(self, site_config, host: Optional[str] = None,
                 matrix_rows: Optional[List[MatrixRow]] = None):
        self.site_config = site_config
        self.host = host
        self.shard_size = site_config.shard_size or SHARD_SIZE
        self._matrix_rows = matrix_rows
        self._entries = None

    @property
    def matrix_rows(self) -> List[MatrixRow]:
        if self._matrix_rows is None:
            self._matrix_rows = load_matrix_rows(self.site_config.matrix_path)
        return self._matrix_rows

    def entries(self) -> List[SitemapEntry]:
        """Full validated list: core, config-derived and matrix URLs."""
        if self._entries is None:
            candidates = enumerate_candidates(self.site_config.site_data, self.matrix_rows)
            self._entries = validate(canonicalize(candidates, self.host, self.site_config.default_host))
        return self._entries

    def matrix_entries(self) -> List[SitemapEntry]:
        """Only the matrix rows (backs /sitemap.xml)."""
        return validate(canonicalize(matrix_candidates(self.matrix_rows),
                                     self.host, self.site_config.default_host))

    def page_count(self) -> int:
        return page_count(len(self.entries()), self.shard_size)

    def page(self, number: int) -> List[SitemapEntry]:
        return paginate(self.entries(), number, self.shard_size)
