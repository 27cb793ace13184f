"""
Sitemap Module
Enumerates the site's canonical URLs and renders sitemap XML and robots.txt.
"""

from .models import ChangeFrequency, CandidateUrl, SitemapEntry
from .builder import (
    SHARD_SIZE,
    SitemapBuilder,
    enumerate_candidates,
    canonicalize,
    is_valid_location,
    validate,
    page_count,
    paginate
)
from .render import render_urlset, render_sitemap_index
from .robots import render_robots
from .routes import sitemap_bp

__all__ = [
    'ChangeFrequency',
    'CandidateUrl',
    'SitemapEntry',
    'SHARD_SIZE',
    'SitemapBuilder',
    'enumerate_candidates',
    'canonicalize',
    'is_valid_location',
    'validate',
    'page_count',
    'paginate',
    'render_urlset',
    'render_sitemap_index',
    'render_robots',
    'sitemap_bp'
]
