from __future__ import annotations

from typing import Optional


class LicensingError(Exception):
    """Base for licensing engine errors."""


class ValidationError(LicensingError):
    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Invalid value for field: {field}")
        self.field = field


class NotFoundError(LicensingError):
    def __init__(self, requirement_id: str):
        super().__init__(f"Requirement not found: {requirement_id}")
        self.requirement_id = requirement_id


class CatalogError(LicensingError):
    """Raised at load time when the catalog document is structurally broken."""
