from flask import Blueprint, current_app, jsonify, render_template, request
from urllib.parse import urlsplit

from ..core.canonical import normalize_path, to_absolute_url
from ..core.redirect_guard import resolve_host
from ..core.request import IncomingRequest
from ..sitemap.builder import SitemapBuilder

pages_bp = Blueprint('pages', __name__)


def publishable_paths(site_config):
    """Canonical paths of every sitemap page (matrix rows included)."""
    builder = SitemapBuilder(site_config)
    return frozenset(urlsplit(entry.location).path for entry in builder.entries())


def page_title(path):
    segments = [s for s in path.split('/') if s]
    if not segments:
        return 'Home'
    return segments[-1].replace('-', ' ').title()


@pages_bp.route('/healthz')
def healthz():
    return jsonify({'status': 'ok'})


@pages_bp.route('/', defaults={'path': ''})
@pages_bp.route('/<path:path>')
def page(path):
    """
    Placeholder renderer for publishable pages.

    The redirect guard lets a missing trailing slash through, so the path
    is normalized again before the publishable set lookup.
    """
    site_config = current_app.config['SITE_CONFIG']
    canonical_path = normalize_path(request.path)

    if canonical_path not in current_app.config['PUBLISHABLE_PATHS']:
        return render_template('page.html', title='Not Found', canonical_url=''), 404

    host = resolve_host(IncomingRequest.from_flask(request), site_config.default_host)
    return render_template(
        'page.html',
        title=page_title(canonical_path),
        canonical_url=to_absolute_url(canonical_path, host, site_config.default_host),
    )
