"""Domain errors raised by catalog services and turned into JSON by the blueprint."""
from __future__ import annotations


class CatalogError(Exception):
    status = 500

    def __init__(self, message: str, detail=None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.detail:
            body["detail"] = self.detail
        return body


class InvalidRequest(CatalogError):
    """Missing or malformed fields, bad numeric id, unknown parent reference."""
    status = 400


class EntityNotFound(CatalogError):
    status = 404


class DuplicateEntity(CatalogError):
    status = 409
