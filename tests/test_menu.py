"""
Tests for menu categories and items.
"""

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from rest_api.models import MenuCategory, MenuItem
from rest_api.services.base_service import is_unique_violation
from rest_api.services.domain import MenuCategoryService
from shared.utils.exceptions import DatabaseError


class TestMenuCategoryEndpoints:
    """Test menu category endpoints."""

    def test_list_is_public_and_ordered(self, client, db_session):
        db_session.add_all([
            MenuCategory(name="Desserts", order=2),
            MenuCategory(name="Burgers", order=1),
            MenuCategory(name="Appetizers", order=1),
        ])
        db_session.commit()

        response = client.get("/api/menu/categories")
        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Appetizers", "Burgers", "Desserts"]

    def test_create_requires_session(self, client):
        response = client.post("/api/menu/categories", json={"name": "Wings"})
        assert response.status_code == 401

    def test_create_requires_staff(self, user_client):
        response = user_client.post("/api/menu/categories", json={"name": "Wings"})
        assert response.status_code == 403
        assert response.json() == {"message": "Staff access required"}

    def test_staff_creates_category(self, staff_client):
        response = staff_client.post(
            "/api/menu/categories",
            json={"name": "Wings", "description": "Buffalo and BBQ wings", "order": 3},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Wings"
        assert data["order"] == 3
        assert data["id"]

    def test_admin_passes_staff_guard(self, admin_client):
        response = admin_client.post("/api/menu/categories", json={"name": "Salads"})
        assert response.status_code == 200

    def test_duplicate_name_rejected(self, staff_client, db_session, seed_category):
        response = staff_client.post(
            "/api/menu/categories",
            json={"name": seed_category.name, "description": "Another"},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Menu category 'Wings' already exists"}

        categories = db_session.scalars(select(MenuCategory)).all()
        assert len(categories) == 1
        assert categories[0].description == "Buffalo and BBQ wings"

    def test_blank_name_rejected(self, staff_client):
        response = staff_client.post("/api/menu/categories", json={"name": "   "})
        assert response.status_code == 400

    def test_update_category(self, staff_client, seed_category):
        response = staff_client.patch(
            f"/api/menu/categories/{seed_category.id}",
            json={"order": 9},
        )
        assert response.status_code == 200
        assert response.json()["order"] == 9
        assert response.json()["name"] == "Wings"

    def test_rename_onto_existing_name_rejected(self, staff_client, db_session, seed_category):
        other = MenuCategory(name="Burgers")
        db_session.add(other)
        db_session.commit()

        response = staff_client.patch(
            f"/api/menu/categories/{other.id}",
            json={"name": "Wings"},
        )
        assert response.status_code == 400

    def test_null_order_rejected(self, staff_client, db_session, seed_category):
        response = staff_client.patch(
            f"/api/menu/categories/{seed_category.id}",
            json={"order": None},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Field 'order' cannot be null"

        db_session.refresh(seed_category)
        assert seed_category.order == 3

    def test_null_name_rejected(self, staff_client, seed_category):
        response = staff_client.patch(
            f"/api/menu/categories/{seed_category.id}",
            json={"name": None},
        )
        assert response.status_code == 400
        assert "already exists" not in response.json()["message"]

    def test_blank_rename_rejected(self, staff_client, db_session, seed_category):
        response = staff_client.patch(
            f"/api/menu/categories/{seed_category.id}",
            json={"name": "   "},
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"

        db_session.refresh(seed_category)
        assert seed_category.name == "Wings"

    def test_rename_is_trimmed(self, staff_client, seed_category):
        response = staff_client.patch(
            f"/api/menu/categories/{seed_category.id}",
            json={"name": "  Hot Wings "},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Hot Wings"

    def test_update_unknown_category(self, staff_client):
        response = staff_client.patch("/api/menu/categories/missing", json={"order": 1})
        assert response.status_code == 404

    def test_delete_empty_category(self, staff_client, seed_category):
        response = staff_client.delete(f"/api/menu/categories/{seed_category.id}")
        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_delete_category_with_items_conflicts(self, staff_client, db_session, seed_menu_item):
        response = staff_client.delete(f"/api/menu/categories/{seed_menu_item.category_id}")
        assert response.status_code == 409
        assert db_session.scalar(select(func.count()).select_from(MenuCategory)) == 1


class TestMenuItemEndpoints:
    """Test menu item endpoints."""

    def test_create_item_coerces_tags_and_price(self, staff_client, seed_category):
        response = staff_client.post(
            "/api/menu/items",
            json={
                "categoryId": seed_category.id,
                "name": "Nashville Hot Wings",
                "price": "9.5",
                "tags": "spicy, house favorite,, ",
                "spicyLevel": 4,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == "9.50"
        assert data["tags"] == ["spicy", "house favorite"]
        assert data["isAvailable"] is True
        assert data["category"]["name"] == "Wings"

    def test_create_item_accepts_tag_list(self, staff_client, seed_category):
        response = staff_client.post(
            "/api/menu/items",
            json={
                "categoryId": seed_category.id,
                "name": "Garden Salad",
                "price": 7,
                "tags": [" vegan ", "gluten-free"],
            },
        )
        assert response.status_code == 200
        assert response.json()["tags"] == ["vegan", "gluten-free"]
        assert response.json()["price"] == "7.00"

    def test_unknown_category_rejected(self, staff_client, db_session):
        response = staff_client.post(
            "/api/menu/items",
            json={"categoryId": "nope", "name": "Ghost Burger", "price": "10.00"},
        )
        assert response.status_code == 400
        assert db_session.scalar(select(func.count()).select_from(MenuItem)) == 0

    def test_invalid_price_rejected(self, staff_client, seed_category):
        for price in ("-1", "12.999", "free"):
            response = staff_client.post(
                "/api/menu/items",
                json={"categoryId": seed_category.id, "name": "Wings", "price": price},
            )
            assert response.status_code == 400, price

    def test_spicy_level_out_of_range(self, staff_client, seed_category):
        response = staff_client.post(
            "/api/menu/items",
            json={"categoryId": seed_category.id, "name": "Ghost Pepper", "price": 10, "spicyLevel": 6},
        )
        assert response.status_code == 400

    def test_unsafe_image_url_rejected(self, staff_client, seed_category):
        response = staff_client.post(
            "/api/menu/items",
            json={
                "categoryId": seed_category.id,
                "name": "Wings",
                "price": 10,
                "imageUrl": "javascript:alert(1)",
            },
        )
        assert response.status_code == 400

    def test_list_items_filters(self, client, db_session, seed_menu_item):
        burgers = MenuCategory(name="Burgers", order=2)
        db_session.add(burgers)
        db_session.flush()
        db_session.add_all([
            MenuItem(category_id=burgers.id, name="Classic Burger", price=Decimal("11.00")),
            MenuItem(category_id=burgers.id, name="BBQ Bacon Burger", price=Decimal("13.50")),
        ])
        db_session.commit()

        response = client.get("/api/menu/items")
        assert response.status_code == 200
        names = [i["name"] for i in response.json()]
        assert names == ["BBQ Bacon Burger", "Buffalo Wings", "Classic Burger"]

        response = client.get("/api/menu/items", params={"categoryId": burgers.id})
        assert {i["name"] for i in response.json()} == {"Classic Burger", "BBQ Bacon Burger"}
        assert all(i["category"]["id"] == burgers.id for i in response.json())

        response = client.get("/api/menu/items", params={"search": "BURGER"})
        assert len(response.json()) == 2

        response = client.get(
            "/api/menu/items",
            params={"categoryId": burgers.id, "search": "bbq"},
        )
        assert [i["name"] for i in response.json()] == ["BBQ Bacon Burger"]

    def test_search_treats_wildcards_literally(self, client, seed_menu_item):
        response = client.get("/api/menu/items", params={"search": "%"})
        assert response.json() == []

    def test_get_item(self, client, seed_menu_item):
        response = client.get(f"/api/menu/items/{seed_menu_item.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == "12.99"
        assert data["tags"] == ["spicy"]
        assert data["spicyLevel"] == 3

    def test_get_unknown_item(self, client):
        response = client.get("/api/menu/items/missing")
        assert response.status_code == 404
        assert "not found" in response.json()["message"]

    def test_update_item(self, staff_client, seed_menu_item):
        response = staff_client.patch(
            f"/api/menu/items/{seed_menu_item.id}",
            json={"price": "13.49", "isAvailable": False, "tags": "spicy,wings"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == "13.49"
        assert data["isAvailable"] is False
        assert data["tags"] == ["spicy", "wings"]
        assert data["name"] == "Buffalo Wings"

    def test_update_rejects_null_name(self, staff_client, seed_menu_item):
        response = staff_client.patch(
            f"/api/menu/items/{seed_menu_item.id}",
            json={"name": None},
        )
        assert response.status_code == 400

    def test_delete_item(self, staff_client, client, seed_menu_item):
        response = staff_client.delete(f"/api/menu/items/{seed_menu_item.id}")
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"/api/menu/items/{seed_menu_item.id}").status_code == 404

    def test_delete_requires_staff(self, user_client, seed_menu_item):
        response = user_client.delete(f"/api/menu/items/{seed_menu_item.id}")
        assert response.status_code == 403


class TestConstraintTranslation:
    """Store constraint failures map to the right API errors."""

    def test_unique_violation_detected(self):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: menu_categories.name"))
        assert is_unique_violation(error)

    def test_not_null_violation_is_not_a_duplicate(self):
        error = IntegrityError("UPDATE", {}, Exception("NOT NULL constraint failed: menu_categories.order"))
        assert not is_unique_violation(error)

    def test_postgres_sqlstate_detected(self):
        class UniqueViolation(Exception):
            sqlstate = "23505"

        error = IntegrityError("INSERT", {}, UniqueViolation("duplicate"))
        assert is_unique_violation(error)

    def test_not_null_failure_raises_database_error(self, db_session, seed_category):
        service = MenuCategoryService(db_session)
        # Skip the null guard so the row reaches the database
        service.REQUIRED_ON_UPDATE = ()

        with pytest.raises(DatabaseError):
            service.update(seed_category.id, {"order": None})

        db_session.refresh(seed_category)
        assert seed_category.order == 3
