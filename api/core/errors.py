"""
Error taxonomy shared by every feature package.

Services raise these; `api/main.py` maps them to HTTP status codes.
"""

from __future__ import annotations


class CatalogError(RuntimeError):
    status_code = 500


class PayloadError(CatalogError):
    """Input could not be parsed into the expected shape."""

    status_code = 400


class BadRequest(CatalogError):
    status_code = 400


class NotFound(CatalogError):
    status_code = 404


class StorageError(CatalogError):
    """Any read or write against the store failed."""

    status_code = 500
