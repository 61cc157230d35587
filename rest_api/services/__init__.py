"""
Services module for business logic.

- domain/: Application services, one per resource (business rules, audit)
- base_service.py: Shared CRUD pipeline the domain services build on
- audit.py: Audit trail writer used inside each mutation's transaction
- session_store.py: Database-backed session store

Usage:
    from rest_api.services.domain import MenuCategoryService
    service = MenuCategoryService(db)
    categories = service.list_all()
"""
