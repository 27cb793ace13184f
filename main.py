from flask import Flask

from nrlsite.config import PACKAGE_DIR, SiteConfig, config
from nrlsite.core.redirect_guard import install_redirect_guard
from nrlsite.logger import log
from nrlsite.pages import pages_bp, publishable_paths
from nrlsite.sitemap import sitemap_bp


def create_app(site_config=None):
    """
    Build the Flask app.

    ``site_config`` is read once here and shared read-only by every request;
    pass your own to run against alternate data (tests do).
    """
    site_config = site_config or SiteConfig.from_env()

    app = Flask(__name__, template_folder=str(PACKAGE_DIR / 'templates'), static_folder=None)
    app.config['SITE_CONFIG'] = site_config
    app.config['PUBLISHABLE_PATHS'] = publishable_paths(site_config)

    # Guard first: nothing renders at a non-canonical URL
    install_redirect_guard(app, site_config)

    app.register_blueprint(sitemap_bp)
    app.register_blueprint(pages_bp)

    log.info(
        f"Site ready for {site_config.default_host}: "
        f"{len(app.config['PUBLISHABLE_PATHS'])} publishable pages"
    )
    return app


def main():
    app = create_app()
    app.run(host=config.FLASK_HOST, port=config.FLASK_PORT, debug=False, use_reloader=False)


if __name__ == '__main__':
    main()
