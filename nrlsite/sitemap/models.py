"""
Sitemap Types

Value objects passed between the sitemap build stages.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ChangeFrequency(str, Enum):
    ALWAYS = 'always'
    HOURLY = 'hourly'
    DAILY = 'daily'
    WEEKLY = 'weekly'
    MONTHLY = 'monthly'
    YEARLY = 'yearly'
    NEVER = 'never'


@dataclass(frozen=True)
class CandidateUrl:
    """An enumerated site path, before canonicalization."""
    path: str
    priority: float
    last_modified: Optional[datetime] = None
    change_frequency: ChangeFrequency = ChangeFrequency.WEEKLY


@dataclass(frozen=True)
class SitemapEntry:
    """One <url> of a sitemap. ``last_modified`` None means build time."""
    location: str
    priority: float
    last_modified: Optional[datetime] = None
    change_frequency: ChangeFrequency = ChangeFrequency.WEEKLY
