"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ValidationError,
    DuplicateEntityError,
    ConflictError,
    InternalError,
)
from shared.utils.validators import (
    validate_image_url,
    escape_like_pattern,
    parse_datetime,
    split_tags,
)
from shared.utils.schemas import ErrorResponse

__all__ = [
    # exceptions
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
    "DuplicateEntityError",
    "ConflictError",
    "InternalError",
    # validators
    "validate_image_url",
    "escape_like_pattern",
    "parse_datetime",
    "split_tags",
    # schemas
    "ErrorResponse",
]
