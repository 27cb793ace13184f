"""
Canonical redirect guard.

Runs before every view. The canonical target is always https on the
requested host with a normalized path and tracking parameters stripped.
The URL it is compared against keeps the scheme and the raw query string of
the actual request, so plain http and any tracking parameter both trigger a
301.
"""
import logging
from typing import NamedTuple

from flask import redirect, request

from .canonical import build_url, normalize_path, strip_tracking_params, with_slash
from .request import IncomingRequest

logger = logging.getLogger(__name__)


class RedirectDecision(NamedTuple):
    target: str
    current: str
    redirect: bool


def resolve_scheme(req: IncomingRequest) -> str:
    """X-Forwarded-Proto first (proxies), then direct TLS, else http."""
    forwarded = (req.header('x-forwarded-proto') or '').split(',')[0].strip().lower()
    if forwarded:
        return forwarded
    if req.is_secure:
        return 'https'
    return 'http'


def resolve_host(req: IncomingRequest, default_host: str) -> str:
    host = (req.header('host') or '').strip().lower()
    return host or default_host


def evaluate(req: IncomingRequest, default_host: str) -> RedirectDecision:
    """Compare the request against its canonical URL."""
    scheme = resolve_scheme(req)
    host = resolve_host(req, default_host)
    raw_path = req.path or '/'

    target = build_url('https', host, normalize_path(raw_path),
                       strip_tracking_params(req.query))

    current = build_url(scheme, host, with_slash(raw_path))
    if req.query_string:
        current += f"?{req.query_string}"

    return RedirectDecision(target=target, current=current, redirect=target != current)


def install_redirect_guard(app, site_config):
    """Register the guard as a before_request hook on ``app``."""
    exempt = frozenset(site_config.guard_exempt_paths)

    @app.before_request
    def enforce_canonical_url():
        if request.path in exempt:
            return None

        decision = evaluate(IncomingRequest.from_flask(request), site_config.default_host)
        if decision.redirect:
            logger.debug(f"301 {decision.current} -> {decision.target}")
            return redirect(decision.target, code=301)
        return None

    return enforce_canonical_url
