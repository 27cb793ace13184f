"""
HTTP tests for the sitemap and robots endpoints.
"""

import xml.etree.ElementTree as ET

import pytest

from nrlsite.config import SiteConfig
from nrlsite.sitemap.render import SITEMAP_NS

NS = {'sm': SITEMAP_NS}
HTTPS = 'https://example.com'


def locations(response):
    root = ET.fromstring(response.data)
    return [loc.text for loc in root.iter(f"{{{SITEMAP_NS}}}loc")]


@pytest.fixture
def matrix_client(site_data, tmp_path):
    from main import create_app
    matrix = tmp_path / 'matrix.csv'
    matrix.write_text('service,city,lastmod\nai-consulting,Mesa_AZ,2025-01-15\nseo,,\n', encoding='utf-8')
    config = SiteConfig(default_host='example.com', shard_size=4,
                        site_data=site_data, matrix_path=matrix)
    return create_app(config).test_client()


class TestSitemapIndex:

    def test_index(self, client):
        response = client.get('/sitemap-index.xml', base_url=HTTPS)
        assert response.status_code == 200
        assert response.headers['Content-Type'] == 'application/xml; charset=utf-8'
        assert locations(response) == ['https://example.com/sitemaps/sitemap-1.xml']

    def test_index_counts_shards(self, matrix_client):
        # 8 config URLs + 1 matrix URL at 4 per shard
        response = matrix_client.get('/sitemap-index.xml', base_url=HTTPS)
        assert len(locations(response)) == 3


class TestSitemapPages:

    def test_first_page(self, client):
        response = client.get('/sitemaps/sitemap-1.xml', base_url=HTTPS)
        assert response.status_code == 200
        locs = locations(response)
        assert locs[0] == 'https://example.com/'
        assert 'https://example.com/services/seo/los-angeles-ca/' in locs

    def test_page_param_overrides_path(self, matrix_client):
        by_path = locations(matrix_client.get('/sitemaps/sitemap-2.xml', base_url=HTTPS))
        by_param = locations(matrix_client.get('/sitemaps/sitemap-1.xml?page=2', base_url=HTTPS))
        assert by_path == by_param
        assert len(by_path) == 4

    def test_last_page_has_matrix_row(self, matrix_client):
        locs = locations(matrix_client.get('/sitemaps/sitemap-3.xml', base_url=HTTPS))
        assert locs == ['https://example.com/services/ai-consulting/mesa-az/']

    def test_bad_page_param_means_first_page(self, matrix_client):
        first = locations(matrix_client.get('/sitemaps/sitemap-1.xml', base_url=HTTPS))
        assert locations(matrix_client.get('/sitemaps/sitemap-3.xml?page=abc', base_url=HTTPS)) == first
        assert locations(matrix_client.get('/sitemaps/sitemap-3.xml?page=-4', base_url=HTTPS)) == first

    def test_page_out_of_range_is_empty(self, client):
        response = client.get('/sitemaps/sitemap-9.xml', base_url=HTTPS)
        assert response.status_code == 200
        assert locations(response) == []

    def test_http_redirects_to_https(self, client):
        response = client.get('/sitemaps/sitemap-1.xml', base_url='http://example.com')
        assert response.status_code == 301
        assert response.headers['Location'] == 'https://example.com/sitemaps/sitemap-1.xml'


class TestMatrixSitemap:

    def test_matrix_only(self, matrix_client):
        response = matrix_client.get('/sitemap.xml', base_url=HTTPS)
        assert response.status_code == 200
        root = ET.fromstring(response.data)
        urls = root.findall('sm:url', NS)
        assert len(urls) == 1
        assert urls[0].find('sm:loc', NS).text == 'https://example.com/services/ai-consulting/mesa-az/'
        assert urls[0].find('sm:lastmod', NS).text == '2025-01-15T00:00:00+00:00'
        assert urls[0].find('sm:priority', NS).text == '0.8'
        assert urls[0].find('sm:changefreq', NS).text == 'weekly'

    def test_without_matrix_is_empty_urlset(self, client):
        response = client.get('/sitemap.xml', base_url=HTTPS)
        assert response.status_code == 200
        assert locations(response) == []


class TestRobotsRoute:

    def test_robots(self, client):
        response = client.get('/robots.txt', base_url=HTTPS)
        assert response.status_code == 200
        assert response.headers['Content-Type'] == 'text/plain; charset=utf-8'
        assert b'Sitemap: https://example.com/sitemap.xml' in response.data


class TestMatrixPages:

    def test_matrix_page_is_served(self, matrix_client):
        response = matrix_client.get('/services/ai-consulting/mesa-az/', base_url=HTTPS)
        assert response.status_code == 200

    def test_legacy_slug_redirects(self, matrix_client):
        response = matrix_client.get('/services/ai-consulting/Mesa_AZ', base_url=HTTPS)
        assert response.status_code == 301
        assert response.headers['Location'] == 'https://example.com/services/ai-consulting/mesa-az/'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
