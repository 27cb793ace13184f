"""
Pages Module
Placeholder renderer for publishable URLs and the health check.
"""

from .routes import pages_bp, publishable_paths

__all__ = ['pages_bp', 'publishable_paths']
