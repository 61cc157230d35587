"""
Shared Pydantic schemas used across the application.

JSON payloads use camelCase (fullName, dateTime, ...) while Python code uses
snake_case; CamelModel bridges the two and accepts either form on input.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["user", "staff", "admin"]
ReservationStatusType = Literal["pending", "confirmed", "cancelled"]
SportTypeType = Literal["NFL", "MLB", "Custom"]
GameStatus = Literal["scheduled", "live", "final"]


class CamelModel(BaseModel):
    """Base model with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Generic Responses
# =============================================================================


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    message: str
    errors: Optional[list[dict[str, Any]]] = None


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str


class SuccessResponse(BaseModel):
    """Response for delete operations."""

    success: bool = True


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str
    service: str
    environment: str


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    username: str = Field(min_length=1, max_length=Limits.MAX_USERNAME_LENGTH)
    password: str = Field(min_length=1, max_length=Limits.MAX_PASSWORD_LENGTH)


class SessionUser(CamelModel):
    """Non-sensitive user fields returned on login."""

    id: str
    username: str
    email: Optional[str] = None
    role: Role


class LoginResponse(BaseModel):
    """Login response."""

    message: str = "Login successful"
    user: SessionUser


class PrincipalResponse(CamelModel):
    """Current principal bound to the session."""

    user_id: str
    user_role: Role


# =============================================================================
# Upload Schemas
# =============================================================================


class UploadResponse(CamelModel):
    """Relative URL of a stored image."""

    image_url: str


# =============================================================================
# Live Scores Schemas
# =============================================================================


class TeamScore(BaseModel):
    """One side of a game."""

    abbr: str
    name: str
    score: Optional[int] = None


class Game(CamelModel):
    """A single game in the scores feed."""

    id: str
    start_time: str
    status: GameStatus
    home: TeamScore
    away: TeamScore
    details: dict[str, Any] = Field(default_factory=dict)


class ScoresResponse(BaseModel):
    """Scores feed for one date, grouped by league."""

    date: str
    leagues: dict[str, list[Game]]


# =============================================================================
# Audit Schemas
# =============================================================================


class AuditLogOutput(CamelModel):
    """Audit trail entry."""

    id: str
    actor_user_id: Optional[str] = None
    action: str
    target_type: str
    target_id: Optional[str] = None
    meta: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None
