"""
Site Configuration
Centralized environment configuration for hosts, data files and sitemaps.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from .site_data import SiteData, load_site_data

# Load environment variables from .env file
load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_SITE_DATA_FILE = PACKAGE_DIR / 'data' / 'site.json'


class Config:
    """
    Configuration class for the site.
    Every value can be overridden via environment variables.
    """

    # Host used when the request carries no Host header
    SITE_DEFAULT_HOST = os.getenv('SITE_DEFAULT_HOST', 'nrlcmd.com').strip().lower()

    # Services, states, priority cities and core pages
    SITE_DATA_FILE = os.getenv('SITE_DATA_FILE', str(DEFAULT_SITE_DATA_FILE))

    # service,city[,lastmod] rows feeding /sitemap.xml
    SITE_MATRIX_CSV = os.getenv('SITE_MATRIX_CSV', 'data/matrix.csv')

    # Sitemap protocol allows 50k; stay under it
    SITEMAP_SHARD_SIZE = int(os.getenv('SITEMAP_SHARD_SIZE', '45000'))

    # 'debug', 'info' or 'production'
    LOG_MODE = os.getenv('LOG_MODE', 'info').lower()

    # Development server
    FLASK_HOST = os.getenv('FLASK_HOST', '127.0.0.1')
    FLASK_PORT = int(os.getenv('FLASK_PORT', '5000'))

    # Never redirected by the canonical guard
    GUARD_EXEMPT_PATHS = ('/healthz',)

    @classmethod
    def get_site_config(cls) -> 'SiteConfig':
        """Build the immutable runtime configuration from the environment."""
        return SiteConfig(
            default_host=cls.SITE_DEFAULT_HOST,
            shard_size=cls.SITEMAP_SHARD_SIZE,
            site_data=load_site_data(cls.SITE_DATA_FILE),
            matrix_path=Path(cls.SITE_MATRIX_CSV) if cls.SITE_MATRIX_CSV else None,
            guard_exempt_paths=cls.GUARD_EXEMPT_PATHS,
        )


@dataclass(frozen=True)
class SiteConfig:
    """
    Read-only configuration handed to the app, the redirect guard and the
    sitemap builder. Built once at startup; tests construct their own.
    """
    default_host: str = 'nrlcmd.com'
    shard_size: int = 45000
    site_data: SiteData = field(default_factory=SiteData)
    matrix_path: Optional[Path] = None
    guard_exempt_paths: Tuple[str, ...] = ('/healthz',)

    @classmethod
    def from_env(cls) -> 'SiteConfig':
        return Config.get_site_config()


# Create singleton instance
config = Config()
