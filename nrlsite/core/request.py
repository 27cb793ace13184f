"""Immutable view of an inbound HTTP request, built once at the boundary."""
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from urllib.parse import parse_qsl


@dataclass(frozen=True)
class IncomingRequest:
    """
    The parts of a request the canonical guard looks at.

    ``query`` keeps first-seen key order; the last value of a repeated key
    wins. ``headers`` keys are stored lowercase.
    """
    path: str = '/'
    query_string: str = ''
    method: str = 'GET'
    headers: Mapping[str, str] = field(default_factory=dict)
    is_secure: bool = False

    @property
    def query(self) -> Dict[str, str]:
        return dict(parse_qsl(self.query_string, keep_blank_values=True))

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name.lower(), default)

    @classmethod
    def build(cls, path: str = '/', query_string: str = '', method: str = 'GET',
              headers: Optional[Mapping[str, str]] = None,
              is_secure: bool = False) -> 'IncomingRequest':
        """Convenience constructor that lowercases header names."""
        lowered = {k.lower(): v for k, v in (headers or {}).items()}
        return cls(path=path or '/', query_string=query_string or '',
                   method=method.upper(), headers=lowered, is_secure=is_secure)

    @classmethod
    def from_flask(cls, flask_request) -> 'IncomingRequest':
        """Snapshot a Flask/Werkzeug request."""
        return cls.build(
            path=flask_request.path,
            query_string=flask_request.query_string.decode('utf-8', errors='replace'),
            method=flask_request.method,
            headers=dict(flask_request.headers),
            # Direct TLS only; proxies are handled via X-Forwarded-Proto
            is_secure=flask_request.environ.get('wsgi.url_scheme') == 'https',
        )
