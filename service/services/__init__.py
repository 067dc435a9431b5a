"""Service layer for business logic."""

from service.services.accounting_service import AccountingService
from service.services.auth_service import AuthService
from service.services.file_service import FileService

__all__ = [
    "AccountingService",
    "AuthService",
    "FileService",
]
