"""
Live scores feed for the score ticker and scores page.
"""

from fastapi import APIRouter, Depends, Query

from shared.utils.exceptions import ValidationError
from shared.utils.schemas import ScoresResponse
from shared.utils.validators import parse_date
from rest_api.services.domain import ScoresService


router = APIRouter(prefix="/api", tags=["scores"])

_scores_service = ScoresService()


def get_scores_service() -> ScoresService:
    """Dependency returning the scores service (overridable in tests)."""
    return _scores_service


@router.get("/scores", response_model=ScoresResponse)
def get_scores(
    day: str | None = Query(default=None, alias="date"),
    service: ScoresService = Depends(get_scores_service),
) -> ScoresResponse:
    """Games for `date` (YYYY-MM-DD, default today) grouped by league."""
    parsed_day = None
    if day:
        try:
            parsed_day = parse_date(day)
        except ValueError:
            raise ValidationError("Invalid date format, expected YYYY-MM-DD", field="date")
    return service.get_scores(parsed_day)
