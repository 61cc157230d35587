"""
Live scores feed.

There is no real sports-data integration; MockScoreProvider returns a fixed,
date-relative slate so the scores page and ticker have something to render:
past dates show final scores, future dates show scheduled games with null
scores, and today shows a live NFL game alongside finished ones.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Protocol

from shared.config.constants import ScoreStatus
from shared.config.logging import get_logger
from shared.utils.schemas import Game, ScoresResponse

logger = get_logger(__name__)

TEAMS = {
    "KC": "Kansas City Chiefs",
    "BUF": "Buffalo Bills",
    "DAL": "Dallas Cowboys",
    "NYG": "New York Giants",
    "SEA": "Seattle Seahawks",
    "SF": "San Francisco 49ers",
    "GB": "Green Bay Packers",
    "CHI": "Chicago Bears",
    "NYY": "New York Yankees",
    "BOS": "Boston Red Sox",
    "LAD": "Los Angeles Dodgers",
    "SD": "San Diego Padres",
}

# (league, slot, start time, home, away)
SLATES = {
    "past": [
        ("NFL", 1, "20:20", ("KC", 28), ("BUF", 21)),
        ("NFL", 2, "17:00", ("DAL", 24), ("NYG", 17)),
        ("MLB", 1, "19:00", ("NYY", 8), ("BOS", 5)),
    ],
    "future": [
        ("NFL", 1, "20:20", ("SEA", None), ("SF", None)),
        ("NFL", 2, "17:00", ("GB", None), ("CHI", None)),
        ("MLB", 1, "19:00", ("LAD", None), ("SD", None)),
    ],
    "today": [
        ("NFL", 1, "20:20", ("KC", 21), ("BUF", 14)),
        ("NFL", 2, "17:00", ("DAL", 28), ("NYG", 21)),
        ("MLB", 1, "19:00", ("NYY", 7), ("BOS", 4)),
    ],
}

LIVE_DETAILS = {("NFL", 1): {"quarter": "Q3", "clock": "8:45"}}


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _details(league: str, status: str) -> dict[str, Any]:
    final = status == ScoreStatus.FINAL
    if league == "MLB":
        return {"inning": "Final" if final else "", "outs": ""}
    return {"quarter": "Final" if final else "", "clock": ""}


class ScoreProvider(Protocol):
    """Source of games for a calendar date, grouped by league."""

    def games_for(self, day: date) -> dict[str, list[Game]]:
        ...


class MockScoreProvider:
    """
    Deterministic stand-in for a sports-data feed.

    Args:
        today: Callable returning the current date; defaults to the UTC date.
    """

    def __init__(self, today: Callable[[], date] | None = None):
        self._today = today or utc_today

    def _branch(self, day: date) -> str:
        today = self._today()
        if day < today:
            return "past"
        if day > today:
            return "future"
        return "today"

    def games_for(self, day: date) -> dict[str, list[Game]]:
        branch = self._branch(day)
        iso = day.isoformat()
        leagues: dict[str, list[Game]] = {"NFL": [], "MLB": []}

        for league, slot, start, (home, home_score), (away, away_score) in SLATES[branch]:
            if branch == "future":
                status = ScoreStatus.SCHEDULED
            elif branch == "today" and (league, slot) in LIVE_DETAILS:
                status = ScoreStatus.LIVE
            else:
                status = ScoreStatus.FINAL

            details = LIVE_DETAILS[(league, slot)] if status == ScoreStatus.LIVE else _details(league, status)
            leagues[league].append(
                Game(
                    id=f"{league.lower()}-{iso}-{slot}",
                    start_time=f"{iso}T{start}:00Z",
                    status=status,
                    home={"abbr": home, "name": TEAMS[home], "score": home_score},
                    away={"abbr": away, "name": TEAMS[away], "score": away_score},
                    details=dict(details),
                )
            )
        return leagues


class ScoresService:
    """Builds the scores feed response from a provider."""

    def __init__(self, provider: ScoreProvider | None = None, today: Callable[[], date] | None = None):
        self._today = today or utc_today
        self._provider = provider or MockScoreProvider(today=self._today)

    def get_scores(self, day: date | None = None) -> ScoresResponse:
        day = day or self._today()
        leagues = self._provider.games_for(day)
        logger.debug("Scores served", date=day.isoformat(), games=sum(len(g) for g in leagues.values()))
        return ScoresResponse(date=day.isoformat(), leagues=leagues)
