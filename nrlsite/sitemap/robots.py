"""robots.txt content"""
from ..core.canonical import TRACKING_PARAMS

ALLOWED_PATHS = (
    '/agent.json',
    '/.well-known/agent.json',
    '/assets/css/',
    '/assets/js/',
    '/public/',
)

DISALLOWED_PATHS = (
    '/admin/',
    '/temp/',
    '/logs/',
)


def tracking_disallow_patterns():
    """One pattern per tracking key; all utm_* keys share a wildcard."""
    patterns = []
    for param in TRACKING_PARAMS:
        pattern = '/*?utm_*' if param.startswith('utm_') else f"/*?{param}=*"
        if pattern not in patterns:
            patterns.append(pattern)
    return patterns


def render_robots(host: str) -> str:
    lines = ['User-agent: *']
    lines += [f"Allow: {path}" for path in ALLOWED_PATHS]
    lines += [f"Disallow: {pattern}" for pattern in tracking_disallow_patterns()]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    lines += ['', f"Sitemap: https://{host}/sitemap.xml"]
    return '\n'.join(lines) + '\n'
