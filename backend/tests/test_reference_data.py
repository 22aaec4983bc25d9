import pytest
import requests

import sizeable.services.games.reference_data as reference_data
from sizeable.services.games.errors import DataUnavailable
from sizeable.services.games.reference_data import (
    COHORTS,
    ITEMS,
    ReferencePools,
    fetch_pool,
    get_pools,
    load_pool,
    start_pool_fetch,
)


class FakeResponse:
    def __init__(self, text='', status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} Error')


def test_fetch_pool_parses_body(monkeypatch):
    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        return FakeResponse('"Ohio"\n\n Texas \n')

    monkeypatch.setattr(reference_data.requests, 'get', fake_get)
    assert fetch_pool('http://reference.test/cohorts.csv', timeout=5) == ['"Ohio"', 'Texas']
    assert calls == [('http://reference.test/cohorts.csv', 5)]


def test_fetch_pool_raises_on_http_error(monkeypatch):
    monkeypatch.setattr(reference_data.requests, 'get', lambda url, timeout=None: FakeResponse(status_code=500))
    with pytest.raises(requests.HTTPError):
        fetch_pool('http://reference.test/items.csv')


def test_failed_fetch_leaves_pool_empty(flask_app, monkeypatch):
    def broken(url, timeout=None):
        raise requests.ConnectionError('connection refused')

    monkeypatch.setattr(reference_data, 'fetch_pool', broken)
    pools = ReferencePools()
    assert load_pool(flask_app, pools, ITEMS, 'http://reference.test/items.csv') is False
    assert pools.items == []
    assert 'connection refused' in pools.errors[ITEMS]
    assert not pools.draw().is_ready


def test_start_pool_fetch_loads_both(flask_app, monkeypatch):
    bodies = {
        flask_app.config['GEO_URL']: ['Ohio', 'Texas'],
        flask_app.config['SIZABLE_URL']: ['Dentists'],
    }
    monkeypatch.setattr(reference_data, 'fetch_pool', lambda url, timeout=None: bodies[url])
    pools = start_pool_fetch(flask_app, background=False)
    assert pools is get_pools(flask_app)
    assert pools.cohorts == ['Ohio', 'Texas']
    assert pools.items == ['Dentists']
    assert pools.ready
    pools.require()
    assert pools.to_dict() == {'ready': True, 'cohorts': 2, 'items': 1, 'errors': {}}


def test_missing_url_is_recorded(flask_app, monkeypatch):
    flask_app.config['SIZABLE_URL'] = ''
    monkeypatch.setattr(reference_data, 'fetch_pool', lambda url, timeout=None: ['Ohio'])
    pools = start_pool_fetch(flask_app, background=False)
    assert pools.cohorts == ['Ohio']
    assert pools.errors[ITEMS] == 'no URL configured'


def test_require_reports_missing_pools():
    pools = ReferencePools(cohorts=['Ohio'])
    pools.errors[ITEMS] = 'timed out'
    with pytest.raises(DataUnavailable) as exc:
        pools.require()
    assert 'items: timed out' in str(exc.value)


def test_publish_replaces_and_clears_error():
    pools = ReferencePools()
    pools.errors[COHORTS] = 'earlier failure'
    pools.publish(COHORTS, ['Ohio'])
    assert pools.cohorts == ['Ohio']
    assert COHORTS not in pools.errors
    with pytest.raises(ValueError):
        pools.publish('planets', ['Mars'])


def test_fetch_pools_cli(flask_app, monkeypatch):
    monkeypatch.setattr(reference_data, 'fetch_pool', lambda url, timeout=None: ['"Ohio"'])
    result = flask_app.test_cli_runner().invoke(args=['fetch-pools'])
    assert result.exit_code == 0
    assert 'cohorts: 1 entries' in result.output
    assert 'Ohio in Ohio?' in result.output


def test_fetch_pools_cli_fails_without_data(flask_app, monkeypatch):
    def broken(url, timeout=None):
        raise requests.Timeout('read timed out')

    monkeypatch.setattr(reference_data, 'fetch_pool', broken)
    result = flask_app.test_cli_runner().invoke(args=['fetch-pools'])
    assert result.exit_code != 0
    assert 'Reference data unavailable' in result.output
