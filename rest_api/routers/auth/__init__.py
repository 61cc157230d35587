"""
Authentication routers - /api/auth/*
Handles login, logout, the current principal and /api/init-admin.
"""

from .routes import router

__all__ = ["router"]
