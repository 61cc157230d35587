"""
Pydantic schemas for the admin-managed resources:
users, menu categories, menu items, events, reservations and settings.

Create schemas enforce required fields; Update schemas make every field
optional and are applied with model_dump(exclude_unset=True).
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BeforeValidator, EmailStr, Field, field_serializer, field_validator

from shared.config.constants import Limits
from shared.utils.schemas import CamelModel, ReservationStatusType, Role, SportTypeType
from shared.utils.validators import parse_datetime, split_tags, validate_image_url


# Relative "/uploads/..." path or absolute http(s) URL
ImageUrl = Annotated[Optional[str], AfterValidator(validate_image_url)]

# ISO-8601 string coerced to datetime before type validation
CoercedDateTime = Annotated[datetime, BeforeValidator(parse_datetime)]

# Comma-separated string or list, normalized to a list of trimmed tags
Tags = Annotated[list[str], BeforeValidator(split_tags)]


# =============================================================================
# Users
# =============================================================================


class UserCreate(CamelModel):
    """Create a back-office user. The password is hashed before persistence."""

    username: str = Field(min_length=1, max_length=Limits.MAX_USERNAME_LENGTH)
    password: str = Field(
        min_length=Limits.MIN_PASSWORD_LENGTH, max_length=Limits.MAX_PASSWORD_LENGTH
    )
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    last_name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    profile_image_url: ImageUrl = None
    role: Role = "user"
    is_active: bool = True

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Username cannot be blank")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class UserOutput(CamelModel):
    """Safe user fields. The password hash is never part of a response."""

    id: str
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Role
    is_active: bool
    created_at: Optional[datetime] = None


# =============================================================================
# Menu
# =============================================================================


class MenuCategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    order: int = 0

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class MenuCategoryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    order: Optional[int] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class MenuCategoryOutput(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MenuItemCreate(CamelModel):
    """
    New menu item.

    `tags` may arrive as a comma-separated string from form inputs; it is
    split before validation. `price` accepts numbers or numeric strings.
    """

    category_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image_url: ImageUrl = None
    is_available: bool = True
    tags: Tags = Field(default_factory=list, max_length=Limits.MAX_TAGS)
    spicy_level: Optional[int] = Field(
        default=None, ge=Limits.MIN_SPICY_LEVEL, le=Limits.MAX_SPICY_LEVEL
    )


class MenuItemUpdate(CamelModel):
    category_id: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: ImageUrl = None
    is_available: Optional[bool] = None
    tags: Optional[Tags] = Field(default=None, max_length=Limits.MAX_TAGS)
    spicy_level: Optional[int] = Field(
        default=None, ge=Limits.MIN_SPICY_LEVEL, le=Limits.MAX_SPICY_LEVEL
    )


class MenuItemOutput(CamelModel):
    id: str
    category_id: str
    name: str
    description: Optional[str] = None
    price: Decimal
    image_url: Optional[str] = None
    is_available: bool
    tags: list[str] = Field(default_factory=list)
    spicy_level: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[MenuCategoryOutput] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_none(cls, v: Any) -> Any:
        return v or []

    @field_serializer("price")
    def _price_str(self, price: Decimal) -> str:
        return f"{Decimal(price):.2f}"


# =============================================================================
# Events
# =============================================================================


class EventCreate(CamelModel):
    """New event. dateTime strings are parsed before validation."""

    title: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    date_time: CoercedDateTime
    sport_type: SportTypeType
    image_url: ImageUrl = None
    is_featured: bool = False


class EventUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    date_time: Optional[CoercedDateTime] = None
    sport_type: Optional[SportTypeType] = None
    image_url: ImageUrl = None
    is_featured: Optional[bool] = None


class EventOutput(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    date_time: datetime
    sport_type: SportTypeType
    image_url: Optional[str] = None
    is_featured: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Reservations
# =============================================================================


class ReservationCreate(CamelModel):
    """
    Public reservation request. Status always starts as "pending";
    staff move it to confirmed/cancelled through the update endpoint.
    """

    full_name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=50)
    date_time: CoercedDateTime
    people: int = Field(ge=Limits.MIN_PARTY_SIZE, le=Limits.MAX_PARTY_SIZE)
    notes: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)


class ReservationUpdate(CamelModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    date_time: Optional[CoercedDateTime] = None
    people: Optional[int] = Field(
        default=None, ge=Limits.MIN_PARTY_SIZE, le=Limits.MAX_PARTY_SIZE
    )
    notes: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    status: Optional[ReservationStatusType] = None


class ReservationOutput(CamelModel):
    id: str
    full_name: str
    email: str
    phone: str
    date_time: datetime
    people: int
    notes: Optional[str] = None
    status: ReservationStatusType
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Settings
# =============================================================================


class SettingUpsert(CamelModel):
    """Insert-or-overwrite a site setting keyed by `key`."""

    key: str = Field(min_length=1, max_length=Limits.MAX_SETTING_KEY_LENGTH)
    value: Any = Field(...)

    @field_validator("key")
    @classmethod
    def _strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Key cannot be blank")
        return v


class SettingOutput(CamelModel):
    id: str
    key: str
    value: Any = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
