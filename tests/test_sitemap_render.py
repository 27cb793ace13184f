"""
Tests for sitemap XML and robots.txt rendering.
"""

import xml.etree.ElementTree as ET
from datetime import datetime, timezone

import pytest

from nrlsite.core.canonical import TRACKING_PARAMS
from nrlsite.sitemap.models import ChangeFrequency, SitemapEntry
from nrlsite.sitemap.render import SITEMAP_NS, render_sitemap_index, render_urlset
from nrlsite.sitemap.robots import render_robots

NS = {'sm': SITEMAP_NS}
NOW = datetime(2025, 6, 1, 12, 30, tzinfo=timezone.utc)


class TestUrlset:

    def test_document_shape(self):
        entries = [
            SitemapEntry('https://example.com/', 1.0),
            SitemapEntry('https://example.com/about/', 0.7,
                         last_modified=datetime(2025, 1, 2, tzinfo=timezone.utc),
                         change_frequency=ChangeFrequency.MONTHLY),
        ]
        xml = render_urlset(entries, now=NOW)
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')

        root = ET.fromstring(xml.encode('utf-8'))
        assert root.tag == f"{{{SITEMAP_NS}}}urlset"

        urls = root.findall('sm:url', NS)
        assert len(urls) == 2
        assert urls[0].find('sm:loc', NS).text == 'https://example.com/'
        assert urls[0].find('sm:lastmod', NS).text == '2025-06-01T12:30:00+00:00'
        assert urls[0].find('sm:changefreq', NS).text == 'weekly'
        assert urls[0].find('sm:priority', NS).text == '1.0'
        assert urls[1].find('sm:lastmod', NS).text == '2025-01-02T00:00:00+00:00'
        assert urls[1].find('sm:changefreq', NS).text == 'monthly'
        assert urls[1].find('sm:priority', NS).text == '0.7'

    def test_empty_urlset(self):
        root = ET.fromstring(render_urlset([], now=NOW).encode('utf-8'))
        assert root.findall('sm:url', NS) == []

    def test_escapes_locations(self):
        xml = render_urlset([SitemapEntry('https://example.com/a&b/', 0.5)], now=NOW)
        assert 'a&amp;b' in xml


class TestSitemapIndex:

    def test_one_entry_per_page(self):
        root = ET.fromstring(render_sitemap_index('example.com', 3, now=NOW).encode('utf-8'))
        assert root.tag == f"{{{SITEMAP_NS}}}sitemapindex"
        sitemaps = root.findall('sm:sitemap', NS)
        assert [s.find('sm:loc', NS).text for s in sitemaps] == [
            'https://example.com/sitemaps/sitemap-1.xml',
            'https://example.com/sitemaps/sitemap-2.xml',
            'https://example.com/sitemaps/sitemap-3.xml',
        ]
        assert {s.find('sm:lastmod', NS).text for s in sitemaps} == {'2025-06-01T12:30:00+00:00'}


class TestRobots:

    def test_sitemap_line(self):
        assert 'Sitemap: https://example.com/sitemap.xml' in render_robots('example.com')

    def test_disallows_every_tracking_param(self):
        robots = render_robots('example.com')
        assert 'Disallow: /*?utm_*' in robots
        for param in TRACKING_PARAMS:
            if not param.startswith('utm_'):
                assert f"Disallow: /*?{param}=*" in robots

    def test_starts_with_user_agent(self):
        assert render_robots('example.com').startswith('User-agent: *\n')


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
