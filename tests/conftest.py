import sys
import os

import pytest

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from nrlsite.config import SiteConfig
from nrlsite.site_data import SiteData, StateInfo


@pytest.fixture
def site_data():
    return SiteData(
        core_pages=('/', '/about/', '/contact/'),
        services={'seo': {'name': 'SEO'}},
        states={'ca': StateInfo(name='California', abbr='CA', cities=('Los Angeles',))},
        priority_cities={'austin-tx': {'name': 'Austin, TX'}},
    )


@pytest.fixture
def site_config(site_data):
    return SiteConfig(default_host='example.com', shard_size=45000, site_data=site_data)


@pytest.fixture
def app(site_config):
    from main import create_app
    app = create_app(site_config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
