"""
Site data loading.

Two inputs feed URL enumeration:
- a JSON document describing core pages, services, states (with their key
  cities) and priority cities;
- an optional ``service,city[,lastmod]`` CSV matrix used by /sitemap.xml.

The JSON file is required; the matrix is best-effort and an unreadable file
simply contributes no rows.
"""
import csv
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple

from .exceptions import SiteDataError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateInfo:
    name: str
    abbr: str
    cities: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SiteData:
    """Enumerable URL universe. Mapping order is enumeration order."""
    core_pages: Tuple[str, ...] = ()
    services: Dict[str, dict] = field(default_factory=dict)
    states: Dict[str, StateInfo] = field(default_factory=dict)
    priority_cities: Dict[str, dict] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> 'SiteData':
        states = {}
        for key, raw in (data.get('states') or {}).items():
            if not isinstance(raw, dict) or not raw.get('abbr'):
                raise SiteDataError(f"State '{key}' needs an 'abbr'")
            states[str(key)] = StateInfo(
                name=str(raw.get('name', key)),
                abbr=str(raw['abbr']),
                cities=tuple(str(c) for c in raw.get('cities', [])),
            )

        return cls(
            core_pages=tuple(str(p) for p in data.get('core_pages', [])),
            services={str(k): dict(v or {}) for k, v in (data.get('services') or {}).items()},
            states=states,
            priority_cities={str(k): dict(v or {}) for k, v in (data.get('priority_cities') or {}).items()},
        )


class MatrixRow(NamedTuple):
    service: str
    city: str
    last_modified: Optional[datetime] = None


def load_site_data(path) -> SiteData:
    """
    Load the site data JSON document.

    Raises:
        SiteDataError: file missing, unreadable or not an object
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise SiteDataError(f"Site data file not found at {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise SiteDataError(f"Cannot read site data file {path}: {e}")

    if not isinstance(data, dict):
        raise SiteDataError(f"Site data file {path} must contain a JSON object")

    site_data = SiteData.from_dict(data)
    logger.debug(
        f"Loaded site data: {len(site_data.core_pages)} core pages, "
        f"{len(site_data.services)} services, {len(site_data.states)} states, "
        f"{len(site_data.priority_cities)} priority cities"
    )
    return site_data


def parse_lastmod(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date or datetime; naive values are taken as UTC."""
    if not value or not value.strip():
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def load_matrix_rows(path) -> List[MatrixRow]:
    """
    Read service/city rows from the matrix CSV.

    Never raises: a missing or malformed file yields an empty list.
    """
    if not path:
        return []

    path = Path(path)
    if not path.is_file():
        logger.warning(f"Matrix CSV not found at {path} - skipping")
        return []

    rows = []
    try:
        with open(path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f)
            fields = [h.strip().lower() for h in (reader.fieldnames or [])]
            if 'service' not in fields or 'city' not in fields:
                logger.warning(f"Matrix CSV {path} has no service/city header - skipping")
                return []

            for record in reader:
                record = {(k or '').strip().lower(): (v or '').strip()
                          for k, v in record.items() if isinstance(v, str)}
                service = record.get('service', '')
                city = record.get('city', '')
                if not service or not city:
                    continue
                rows.append(MatrixRow(service, city, parse_lastmod(record.get('lastmod'))))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        logger.warning(f"Could not read matrix CSV {path}: {e}")
        return []

    logger.debug(f"Loaded {len(rows)} matrix rows from {path}")
    return rows
