"""Tests for the live API scraper, using httpx.MockTransport."""

import asyncio

import httpx
import pytest
from tenacity import wait_none

from volleylive.scrapers.base_scraper import BaseScraper, ScraperError
from volleylive.scrapers.live_scraper import LiveApiScraper
from volleylive.scrapers.urls import player_photo_url, team_logo_url

BASE = "https://volley.test"


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(BaseScraper._make_request.retry, "wait", wait_none())


def _scraper(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return LiveApiScraper(client=client, base_url=BASE, page_limit=50)


def _run(coro):
    return asyncio.run(coro)


class TestFetch:
    def test_live_bare_array(self):
        scraper = _scraper(lambda request: httpx.Response(200, json=[{"event_id": 1}]))
        assert _run(scraper.fetch_live()) == [{"event_id": 1}]

    def test_teams_envelope_and_paging_params(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["params"] = dict(request.url.params)
            return httpx.Response(200, json={"items": [{"sofascore_team_id": 1}], "total": 1})

        teams = _run(_scraper(handler).fetch_teams())
        assert teams == [{"sofascore_team_id": 1}]
        assert seen["path"] == "/teams"
        assert seen["params"] == {"limit": "50", "offset": "0"}

    def test_players_unexpected_shape_is_empty(self):
        scraper = _scraper(lambda request: httpx.Response(200, json={"data": []}))
        assert _run(scraper.fetch_players()) == []

    def test_non_retryable_status_raises_scraper_error(self):
        calls = []

        def handler(request):
            calls.append(1)
            return httpx.Response(404)

        with pytest.raises(ScraperError):
            _run(_scraper(handler).fetch_live())
        assert len(calls) == 1

    def test_retryable_status_is_retried(self):
        responses = iter([httpx.Response(503), httpx.Response(503), httpx.Response(200, json=[])])
        assert _run(_scraper(lambda request: next(responses)).fetch_live()) == []

    def test_rate_limit_gives_up_after_max_attempts(self):
        calls = []

        def handler(request):
            calls.append(1)
            return httpx.Response(429, headers={"Retry-After": "1"})

        with pytest.raises(ScraperError):
            _run(_scraper(handler).fetch_live())
        assert len(calls) == 4

    def test_connection_errors_are_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(ScraperError):
            _run(_scraper(handler).fetch_live())

    def test_invalid_json(self):
        scraper = _scraper(lambda request: httpx.Response(200, content=b"<html>"))
        with pytest.raises(ScraperError):
            _run(scraper.fetch_live())


class TestUrls:
    def test_team_logo(self):
        assert team_logo_url(12, base_url=BASE) == f"{BASE}/img/teams/12.png"
        assert team_logo_url(None) is None
        assert team_logo_url(" ") is None

    def test_player_photo(self):
        assert player_photo_url("7", base_url=BASE) == f"{BASE}/img/players/7.jpg"
        assert player_photo_url("") is None
