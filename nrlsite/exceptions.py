"""Exception types raised by the site package."""


class SiteError(Exception):
    """Base class for site errors."""


class SiteDataError(SiteError):
    """The services/states/cities data file is missing or malformed."""


class AuditError(SiteError):
    """The canonical audit could not load any sitemap."""
