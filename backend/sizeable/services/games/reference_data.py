"""Reference pools: the cohort and sizable-item lists questions are drawn from.

Both lists are fetched once per process from plain-text endpoints. A fetch
that fails leaves its pool empty; questions drawn meanwhile are the loading
placeholder.
"""

import random
from typing import Dict, List, Optional

import requests

from .errors import DataUnavailable
from .questions import Question, draw, parse_pool

COHORTS = 'cohorts'
ITEMS = 'items'

EXTENSION_KEY = 'sizeable_pools'


class ReferencePools:

    def __init__(self, cohorts: Optional[List[str]] = None, items: Optional[List[str]] = None):
        self.cohorts: List[str] = list(cohorts or [])
        self.items: List[str] = list(items or [])
        self.errors: Dict[str, str] = {}

    def publish(self, name: str, entries: List[str]) -> None:
        # Single assignment so a concurrent draw sees the old or new list, never a partial one.
        if name == COHORTS:
            self.cohorts = list(entries)
        elif name == ITEMS:
            self.items = list(entries)
        else:
            raise ValueError(f'Unknown pool {name!r}')
        self.errors.pop(name, None)

    @property
    def ready(self) -> bool:
        return bool(self.cohorts) and bool(self.items)

    def draw(self, rng: Optional[random.Random] = None) -> Question:
        return draw(self.cohorts, self.items, rng=rng)

    def require(self) -> None:
        missing = [name for name, pool in ((COHORTS, self.cohorts), (ITEMS, self.items)) if not pool]
        if missing:
            details = '; '.join(f'{name}: {self.errors.get(name, "not loaded")}' for name in missing)
            raise DataUnavailable(f'Reference data unavailable ({details})')

    def to_dict(self):
        return {
            'ready': self.ready,
            COHORTS: len(self.cohorts),
            ITEMS: len(self.items),
            'errors': dict(self.errors),
        }


def get_pools(app) -> ReferencePools:
    pools = app.extensions.get(EXTENSION_KEY)
    if pools is None:
        pools = ReferencePools()
        app.extensions[EXTENSION_KEY] = pools
    return pools


def fetch_pool(url: str, timeout: Optional[float] = None) -> List[str]:
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return parse_pool(response.text)


def pool_urls(app) -> Dict[str, str]:
    return {
        COHORTS: app.config.get('GEO_URL'),
        ITEMS: app.config.get('SIZABLE_URL'),
    }


def load_pool(app, pools: ReferencePools, name: str, url: str) -> bool:
    """Fetch one pool and publish it. Returns False when the fetch failed."""
    timeout = app.config.get('REFERENCE_FETCH_TIMEOUT_SEC') or None
    app.logger.info(f"[pool-fetch] name={name} url={url}")
    try:
        entries = fetch_pool(url, timeout=timeout)
    except requests.RequestException as exc:
        pools.errors[name] = str(exc)
        app.logger.warning(f"[pool-fetch-failed] name={name} error={exc}")
        return False
    pools.publish(name, entries)
    app.logger.info(f"[pool-fetch-done] name={name} entries={len(entries)}")
    return True


def start_pool_fetch(app, background: bool = True) -> ReferencePools:
    """Kick off both fetches; they run independently of each other."""
    from sizeable import socketio

    pools = get_pools(app)
    for name, url in pool_urls(app).items():
        if not url:
            pools.errors[name] = 'no URL configured'
            app.logger.warning(f"[pool-fetch-skip] name={name} no URL configured")
            continue
        if background:
            socketio.start_background_task(load_pool, app, pools, name, url)
        else:
            load_pool(app, pools, name, url)
    return pools
