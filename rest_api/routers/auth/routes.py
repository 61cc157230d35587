"""
Authentication router.
Handles login, logout, the current principal and first-run admin setup.
"""

import redis
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.config.logging import auth_logger as logger, audit_auth_event, mask_session_id
from shared.config.settings import settings
from shared.security.auth import Principal, current_principal, get_session_id, get_session_store
from shared.security.rate_limit import limiter
from shared.security.sessions import SessionStore, new_session_id, sign_session_id
from shared.utils.exceptions import InternalError, NotFoundError, UnauthorizedError, ValidationError
from shared.utils.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PrincipalResponse,
    SessionUser,
)
from rest_api.services.domain import UserService

router = APIRouter(prefix="/api", tags=["auth"])

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


def set_session_cookie(response: Response, sid: str) -> None:
    """
    Set the signed session cookie.

    - httponly: Cannot be accessed by JavaScript
    - secure: Only sent over HTTPS (configurable for dev)
    - samesite: lax allows top-level navigation
    """
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_id(sid),
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        max_age=settings.session_max_age_seconds,
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


@router.post("/auth/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
) -> LoginResponse:
    """
    Authenticate with username and password and start a session.

    Failures return the same 401 whether the user is unknown, inactive or
    the password is wrong.
    """
    user = UserService(db).authenticate(body.username, body.password)
    if user is None:
        audit_auth_event(
            "LOGIN_FAILED",
            username=body.username,
            success=False,
            reason="invalid_credentials",
            ip_address=_client_ip(request),
        )
        raise UnauthorizedError("Invalid credentials")

    # Never reuse a session id the client already held
    previous_sid = get_session_id(request)
    if previous_sid:
        store.destroy(previous_sid)

    sid = new_session_id()
    principal = Principal(user_id=user.id, role=user.role, session_id=sid)
    store.set(sid, principal.to_session(), settings.session_max_age_seconds)
    set_session_cookie(response, sid)

    audit_auth_event(
        "LOGIN",
        user_id=user.id,
        username=user.username,
        ip_address=_client_ip(request),
    )
    logger.info("User logged in", user_id=user.id, sid=mask_session_id(sid))

    return LoginResponse(user=SessionUser.model_validate(user))


@router.post("/auth/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
) -> MessageResponse:
    """Destroy the current session and clear its cookie."""
    sid = get_session_id(request)
    if sid:
        try:
            store.destroy(sid)
        except (SQLAlchemyError, redis.RedisError) as e:
            logger.error("Failed to destroy session", sid=mask_session_id(sid), error=str(e))
            raise InternalError("Logout failed")
        audit_auth_event("LOGOUT", ip_address=_client_ip(request), sid=mask_session_id(sid))

    clear_session_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/auth/me", response_model=PrincipalResponse)
def me(principal: Principal = Depends(current_principal)) -> PrincipalResponse:
    """Return the principal bound to the current session."""
    return PrincipalResponse(user_id=principal.user_id, user_role=principal.role)


@router.post("/init-admin", response_model=MessageResponse)
def init_admin(db: Session = Depends(get_db)) -> MessageResponse:
    """
    Create the default admin account on a fresh install.
    Not available in production.
    """
    if settings.environment == "production":
        raise NotFoundError("Endpoint")

    user = UserService(db).ensure_admin(DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD)
    if user is None:
        raise ValidationError("Admin user already exists")

    logger.warning("Default admin account created; change its password", user_id=user.id)
    return MessageResponse(message="Admin user created successfully")
