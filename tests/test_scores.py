"""
Tests for the mock live scores feed.
"""

from datetime import date

import pytest

from rest_api.main import app
from rest_api.routers.public.scores import get_scores_service
from rest_api.services.domain import MockScoreProvider, ScoresService

TODAY = date(2025, 9, 14)


@pytest.fixture
def provider():
    return MockScoreProvider(today=lambda: TODAY)


@pytest.fixture
def scores_client(client):
    app.dependency_overrides[get_scores_service] = lambda: ScoresService(today=lambda: TODAY)
    yield client
    app.dependency_overrides.pop(get_scores_service, None)


class TestMockScoreProvider:
    """Date-relative branches of the mock feed."""

    def test_past_dates_are_final(self, provider):
        leagues = provider.games_for(date(2025, 9, 13))
        games = leagues["NFL"] + leagues["MLB"]
        assert {g.status for g in games} == {"final"}

        kc = leagues["NFL"][0]
        assert (kc.home.abbr, kc.home.score, kc.away.abbr, kc.away.score) == ("KC", 28, "BUF", 21)
        assert leagues["MLB"][0].home.name == "New York Yankees"

    def test_future_dates_are_scheduled_without_scores(self, provider):
        leagues = provider.games_for(date(2025, 9, 20))
        games = leagues["NFL"] + leagues["MLB"]
        assert {g.status for g in games} == {"scheduled"}
        assert all(g.home.score is None and g.away.score is None for g in games)
        assert [g.home.abbr for g in leagues["NFL"]] == ["SEA", "GB"]
        assert leagues["MLB"][0].away.abbr == "SD"

    def test_today_mixes_live_and_final(self, provider):
        leagues = provider.games_for(TODAY)
        live = leagues["NFL"][0]
        assert live.status == "live"
        assert live.details == {"quarter": "Q3", "clock": "8:45"}
        assert (live.home.score, live.away.score) == (21, 14)
        assert leagues["NFL"][1].status == "final"
        assert leagues["MLB"][0].status == "final"
        assert leagues["MLB"][0].details == {"inning": "Final", "outs": ""}

    def test_game_ids_and_start_times(self, provider):
        leagues = provider.games_for(TODAY)
        assert [g.id for g in leagues["NFL"]] == ["nfl-2025-09-14-1", "nfl-2025-09-14-2"]
        assert leagues["MLB"][0].id == "mlb-2025-09-14-1"
        assert leagues["NFL"][0].start_time == "2025-09-14T20:20:00Z"

    def test_deterministic(self, provider):
        day = date(2024, 1, 1)
        assert provider.games_for(day) == provider.games_for(day)


class TestScoresEndpoint:
    """Test GET /api/scores."""

    def test_defaults_to_today(self, scores_client):
        response = scores_client.get("/api/scores")
        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2025-09-14"
        assert set(data["leagues"]) == {"NFL", "MLB"}
        assert data["leagues"]["NFL"][0]["status"] == "live"

    def test_response_shape(self, scores_client):
        response = scores_client.get("/api/scores", params={"date": "2025-09-13"})
        game = response.json()["leagues"]["NFL"][0]
        assert set(game) == {"id", "startTime", "status", "home", "away", "details"}
        assert game["home"] == {"abbr": "KC", "name": "Kansas City Chiefs", "score": 28}

    def test_malformed_date(self, scores_client):
        response = scores_client.get("/api/scores", params={"date": "09/14/2025"})
        assert response.status_code == 400
        assert "YYYY-MM-DD" in response.json()["message"]
