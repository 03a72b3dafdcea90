"""
Error Taxonomy and Global Error Handling

This module defines the exceptions raised by the indexing pipeline and the
application-wide exception handler for the HTTP service.

Taxonomy
--------
- ConfigurationError : malformed addon definitions, rejected at load time
- MissingSchema      : backing table absent, the addon is skipped silently
- StorageError       : any other storage failure, propagated to the caller
- RecordIntegrityError : dangling parent reference (treated as public)
- SolrError          : the search sink rejected or failed a request
"""

from __future__ import annotations

import logging
from typing import Dict, Any

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger("solr.errors")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class IndexerError(RuntimeError):
    """Base error for the indexing pipeline."""


class ConfigurationError(IndexerError, ValueError):
    """Raised when an addon or field definition is malformed."""


class MissingSchema(IndexerError):
    """Raised when the table backing an addon does not exist."""

    def __init__(self, table: str) -> None:
        super().__init__(f"Table '{table}' does not exist.")
        self.table = table


class StorageError(IndexerError):
    """Raised when rows, related rows or metadata cannot be fetched."""


class RecordIntegrityError(IndexerError):
    """
    Raised when a record references a parent that does not exist.

    The visibility resolver never raises this: a missing parent makes the
    child public.
    """


class SolrError(IndexerError):
    """Raised when the Solr update handler cannot be reached or fails."""


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    Logs the full stack trace and returns a generic 500 payload with no
    internal details.
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "error": "internal_server_error",
        "detail": "Internal server error",
    }

    return JSONResponse(
        status_code=500,
        content=payload,
    )
