"""Sitemap XML serialization (urlset and sitemapindex documents)"""
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Iterable, Optional

from .models import SitemapEntry

SITEMAP_NS = 'http://www.sitemaps.org/schemas/sitemap/0.9'
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def format_lastmod(value: datetime) -> str:
    """W3C datetime in UTC, e.g. 2025-01-31T09:30:00+00:00"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec='seconds')


def format_priority(value: float) -> str:
    return f"{min(max(value, 0.0), 1.0):.1f}"


def _serialize(root: ET.Element) -> str:
    ET.indent(root, space='  ')
    return XML_DECLARATION + ET.tostring(root, encoding='unicode') + '\n'


def render_urlset(entries: Iterable[SitemapEntry], now: Optional[datetime] = None) -> str:
    """
    Render a <urlset> document.

    Entries without a last-modified time get ``now`` (build time).
    """
    now = now or datetime.now(timezone.utc)
    root = ET.Element('urlset', xmlns=SITEMAP_NS)

    for entry in entries:
        url_element = ET.SubElement(root, 'url')
        ET.SubElement(url_element, 'loc').text = entry.location
        ET.SubElement(url_element, 'lastmod').text = format_lastmod(entry.last_modified or now)
        ET.SubElement(url_element, 'changefreq').text = entry.change_frequency.value
        ET.SubElement(url_element, 'priority').text = format_priority(entry.priority)

    return _serialize(root)


def shard_url(host: str, page: int) -> str:
    return f"https://{host}/sitemaps/sitemap-{page}.xml"


def render_sitemap_index(host: str, pages: int, now: Optional[datetime] = None) -> str:
    """Render a <sitemapindex> pointing at shards 1..pages, all stamped ``now``."""
    lastmod = format_lastmod(now or datetime.now(timezone.utc))
    root = ET.Element('sitemapindex', xmlns=SITEMAP_NS)

    for page in range(1, pages + 1):
        sitemap_element = ET.SubElement(root, 'sitemap')
        ET.SubElement(sitemap_element, 'loc').text = shard_url(host, page)
        ET.SubElement(sitemap_element, 'lastmod').text = lastmod

    return _serialize(root)
