"""
Canonical URL helpers.

Every page on the site has exactly one canonical address:
``https://<host>/<kebab-cased/segments>/`` with tracking parameters removed.
File-like paths (``/sitemap.xml``, ``/logo.png``) keep their extension and
never gain a trailing slash.
"""
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

DEFAULT_HOST = 'nrlcmd.com'

# Query keys removed from canonical URLs (compared lowercase).
# robots.txt disallows the same list.
TRACKING_PARAMS = (
    'utm_source', 'utm_medium', 'utm_campaign', 'utm_term', 'utm_content',
    'ref', 'fbclid', 'gclid', 'msclkid', '_hsmi', '_hsenc',
)
_TRACKING_KEYS = frozenset(TRACKING_PARAMS)

_FILE_LIKE_RE = re.compile(r'\.[a-z0-9]{2,5}$', re.IGNORECASE)
_SPACE_UNDERSCORE_RE = re.compile(r'[ _]+')
_HYPHENS_RE = re.compile(r'-+')
_SLASHES_RE = re.compile(r'/+')

# RFC 3986 pchar plus "/"; "?" and "#" inside a segment must stay escaped.
_PATH_SAFE = "/-._~!$&'()*+,;=:@"


@dataclass(frozen=True)
class CanonicalPath:
    """A normalized path split into its kebab-cased segments."""
    segments: Tuple[str, ...]
    is_file_like: bool

    def __str__(self) -> str:
        return with_slash('/' + '/'.join(self.segments))


def is_file_like(path: str) -> bool:
    """True when the last segment ends in a 2-5 char alphanumeric extension."""
    return bool(_FILE_LIKE_RE.search(path or ''))


def kebab(segment: str) -> str:
    """
    Kebab-case a single path segment.

    Runs of spaces/underscores become one hyphen, repeated hyphens collapse,
    and the result is lowercased. Slashes are not touched, so call this per
    segment rather than on a whole path.
    """
    s = _SPACE_UNDERSCORE_RE.sub('-', segment or '')
    s = _HYPHENS_RE.sub('-', s)
    return s.lower()


def with_slash(path: str) -> str:
    """Append '/' unless the path is file-like or already ends with one."""
    if is_file_like(path) or path.endswith('/'):
        return path
    return path + '/'


def parse_canonical_path(path: str) -> CanonicalPath:
    path = _SLASHES_RE.sub('/', path or '')
    segments = [kebab(p) for p in path.split('/') if p != '']

    # /services/{service}/{city}/ - legacy city slugs like mesa_AZ
    if len(segments) >= 3 and segments[0] == 'services':
        segments[1] = kebab(segments[1])
        segments[2] = kebab(segments[2].replace('_', '-'))

    joined = '/' + '/'.join(segments)
    return CanonicalPath(segments=tuple(segments), is_file_like=is_file_like(joined))


def normalize_path(path: str) -> str:
    """
    Normalize a request path to its canonical form.

    >>> normalize_path('//Services//AI_Consulting/Mesa_AZ')
    '/services/ai-consulting/mesa-az/'
    """
    return str(parse_canonical_path(path))


def strip_tracking_params(query: Mapping) -> dict:
    """Copy of ``query`` without tracking keys; order and values preserved."""
    return {k: v for k, v in query.items() if str(k).lower() not in _TRACKING_KEYS}


def encode_query(query: Mapping) -> str:
    """Form-encode a query mapping (spaces as '+'), keeping key order."""
    if not query:
        return ''
    return urlencode(list(query.items()), doseq=True)


def quote_path(path: str) -> str:
    """
    Percent-encode a decoded request path for use in a URL.

    >>> quote_path('/about?x/')
    '/about%3Fx/'
    """
    return quote(path, safe=_PATH_SAFE)


def build_url(scheme: str, host: str, path: str, query: Optional[Mapping] = None) -> str:
    """Join URL parts; ``path`` is the decoded form and gets quoted here."""
    qs = encode_query(query or {})
    return f"{scheme}://{host}{quote_path(path)}" + (f"?{qs}" if qs else '')


def to_absolute_url(path: str, host: Optional[str] = None,
                    default_host: str = DEFAULT_HOST) -> str:
    """Canonical absolute https URL for ``path`` on ``host`` (or the default)."""
    current_host = (host or default_host).strip().lower()
    return f"https://{current_host}{normalize_path(path)}"
