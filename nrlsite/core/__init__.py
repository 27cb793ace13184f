"""
Core Module
URL canonicalization and the canonical redirect guard.
"""

from .canonical import (
    TRACKING_PARAMS,
    CanonicalPath,
    is_file_like,
    kebab,
    with_slash,
    parse_canonical_path,
    normalize_path,
    strip_tracking_params,
    encode_query,
    quote_path,
    build_url,
    to_absolute_url
)
from .request import IncomingRequest
from .redirect_guard import RedirectDecision, evaluate, install_redirect_guard

__all__ = [
    'TRACKING_PARAMS',
    'CanonicalPath',
    'is_file_like',
    'kebab',
    'with_slash',
    'parse_canonical_path',
    'normalize_path',
    'strip_tracking_params',
    'encode_query',
    'quote_path',
    'build_url',
    'to_absolute_url',
    # Redirect guard
    'IncomingRequest',
    'RedirectDecision',
    'evaluate',
    'install_redirect_guard'
]
