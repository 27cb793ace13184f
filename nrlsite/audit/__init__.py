"""
Audit Module
Checks a deployed site's sitemap URLs against their canonical form.
"""

from .canonical_audit import CanonicalAuditor

__all__ = ['CanonicalAuditor']
