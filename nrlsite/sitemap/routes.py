from flask import Blueprint, Response, current_app, request
import logging

from ..core.redirect_guard import resolve_host
from ..core.request import IncomingRequest
from .builder import SitemapBuilder
from .render import render_sitemap_index, render_urlset
from .robots import render_robots

logger = logging.getLogger(__name__)

sitemap_bp = Blueprint('sitemap', __name__)

XML_MIMETYPE = 'application/xml; charset=utf-8'
TEXT_MIMETYPE = 'text/plain; charset=utf-8'


def _site_config():
    return current_app.config['SITE_CONFIG']


def _request_host():
    return resolve_host(IncomingRequest.from_flask(request), _site_config().default_host)


def _page_param(default):
    """?page= wins over the number in the path; junk or < 1 means page 1."""
    raw = request.args.get('page')
    if raw is None:
        value = default
    else:
        try:
            value = int(raw)
        except ValueError:
            value = 1
    return max(1, value)


def _xml(body):
    return Response(body, status=200, content_type=XML_MIMETYPE)


def _error(message):
    return Response(message, status=500, content_type=TEXT_MIMETYPE)


@sitemap_bp.route('/sitemap.xml')
def matrix_sitemap():
    """Service x city pages listed in the matrix CSV."""
    try:
        builder = SitemapBuilder(_site_config(), host=_request_host())
        return _xml(render_urlset(builder.matrix_entries()))
    except Exception as e:
        logger.error(f"Error rendering matrix sitemap: {e}")
        return _error('Sitemap unavailable')


@sitemap_bp.route('/sitemap-index.xml')
def sitemap_index():
    try:
        host = _request_host()
        builder = SitemapBuilder(_site_config(), host=host)
        return _xml(render_sitemap_index(host, builder.page_count()))
    except Exception as e:
        logger.error(f"Error rendering sitemap index: {e}")
        return _error('Sitemap unavailable')


@sitemap_bp.route('/sitemaps/sitemap-<int:page>.xml')
def sitemap_page(page):
    """One 45k-entry shard of the full URL list."""
    try:
        number = _page_param(page)
        builder = SitemapBuilder(_site_config(), host=_request_host())
        return _xml(render_urlset(builder.page(number)))
    except Exception as e:
        logger.error(f"Error rendering sitemap page {page}: {e}")
        return _error('Sitemap unavailable')


@sitemap_bp.route('/robots.txt')
def robots_txt():
    return Response(render_robots(_request_host()), status=200, content_type=TEXT_MIMETYPE)
