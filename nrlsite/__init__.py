"""
Neural Command site
Canonical URL enforcement, sitemap generation and canonical auditing.
"""
from .config import Config, SiteConfig, config
from .site_data import SiteData, StateInfo, MatrixRow, load_site_data, load_matrix_rows

__all__ = [
    'Config',
    'SiteConfig',
    'config',
    'SiteData',
    'StateInfo',
    'MatrixRow',
    'load_site_data',
    'load_matrix_rows'
]
__version__ = '0.1.0'
