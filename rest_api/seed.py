"""
Seed data for development and first deployments.
Creates the default admin, the menu categories, two sample events and the
default site settings. Every step is idempotent.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from rest_api.models import Event, MenuCategory, Setting, User
from shared.config.constants import Roles, SportType
from shared.config.logging import get_logger
from shared.security.password import hash_password

logger = get_logger(__name__)


DEFAULT_ADMIN = {
    "username": "admin",
    "password": "admin123",
    "first_name": "Admin",
    "last_name": "User",
}

MENU_CATEGORIES = [
    ("Appetizers", "Start your meal right"),
    ("Burgers", "Classic American burgers"),
    ("Wings", "Buffalo and BBQ wings"),
    ("Salads", "Fresh and healthy options"),
    ("Entrees", "Main course dishes"),
    ("Desserts", "Sweet endings"),
    ("Beverages", "Drinks and cocktails"),
]

SAMPLE_EVENTS = [
    {
        "title": "NFL Sunday Night Football",
        "description": "Watch the big game with friends",
        "date_time": datetime(2025, 9, 14, 20, 0),
        "sport_type": SportType.NFL,
        "is_featured": True,
    },
    {
        "title": "Fantasy Draft Night",
        "description": "Join our fantasy football draft",
        "date_time": datetime(2025, 9, 15, 19, 0),
        "sport_type": SportType.CUSTOM,
    },
]

DEFAULT_SETTINGS = {
    "hours": {
        "monday": "11AM - 12AM",
        "tuesday": "11AM - 12AM",
        "wednesday": "11AM - 12AM",
        "thursday": "11AM - 12AM",
        "friday": "11AM - 2AM",
        "saturday": "11AM - 2AM",
        "sunday": "10AM - 12AM",
    },
    "contact": {
        "address": "123 Sports Ave, Game City",
        "phone": "(555) 123-GAME",
        "email": "info@supanos.bar",
    },
    "hero": {
        "title": "Game On at Supano's",
        "subtitle": "The ultimate sports bar experience with live games, craft drinks, and mouth-watering food.",
    },
    "social": {
        "facebook": "",
        "instagram": "",
        "twitter": "",
        "youtube": "",
    },
}


def seed_admin(db: Session) -> bool:
    """Create the default admin unless a user with that username exists."""
    if db.scalar(select(User.id).where(User.username == DEFAULT_ADMIN["username"])):
        return False

    db.add(
        User(
            username=DEFAULT_ADMIN["username"],
            password=hash_password(DEFAULT_ADMIN["password"]),
            first_name=DEFAULT_ADMIN["first_name"],
            last_name=DEFAULT_ADMIN["last_name"],
            role=Roles.ADMIN,
        )
    )
    logger.warning("Default admin account seeded; change its password")
    return True


def seed_categories(db: Session) -> int:
    existing = set(db.scalars(select(MenuCategory.name)))
    created = 0
    for order, (name, description) in enumerate(MENU_CATEGORIES, start=1):
        if name in existing:
            continue
        db.add(MenuCategory(name=name, description=description, order=order))
        created += 1
    return created


def seed_events(db: Session) -> int:
    # Sample events only go into an empty calendar
    if db.scalar(select(Event.id).limit(1)):
        return 0
    for data in SAMPLE_EVENTS:
        db.add(Event(**data))
    return len(SAMPLE_EVENTS)


def seed_settings(db: Session) -> int:
    existing = set(db.scalars(select(Setting.key)))
    created = 0
    for key, value in DEFAULT_SETTINGS.items():
        if key in existing:
            continue
        db.add(Setting(key=key, value=value))
        created += 1
    return created


def seed(db: Session) -> None:
    """
    Seed initial data.
    Safe to run repeatedly: existing rows are left untouched.
    """
    admin_created = seed_admin(db)
    categories = seed_categories(db)
    events = seed_events(db)
    settings_created = seed_settings(db)
    db.commit()

    logger.info(
        "Seed completed",
        admin_created=admin_created,
        categories=categories,
        events=events,
        settings=settings_created,
    )
