"""Admin services."""

from app.services.admin.service import AdminService

__all__ = [
    "AdminService",
]
