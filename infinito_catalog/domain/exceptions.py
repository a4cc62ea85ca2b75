"""Catalog exceptions.

All errors raised by the catalog core. The HTTP layer maps these onto
status codes; the core itself never translates them.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors inherit from this class to allow catching
    them at the service shell.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Storefront Errors
# ============================================================================


class NetworkError(CatalogError):
    """Raised when the storefront cannot be reached at the transport level."""

    def __init__(self, url: str, reason: str) -> None:
        """Initialize network error.

        Args:
            url: URL that was being requested.
            reason: Underlying transport error description.
        """
        super().__init__(
            f"Request to {url} failed: {reason}",
            details={"url": url, "reason": reason},
        )
        self.url = url


class RemoteFetchError(CatalogError):
    """Raised when the storefront answers with a non-success status."""

    def __init__(self, url: str, status_code: int, reason: str | None = None) -> None:
        """Initialize remote fetch error.

        Args:
            url: URL that was requested.
            status_code: HTTP status returned by the storefront.
            reason: Optional extra description.
        """
        message = f"Storefront returned {status_code} for {url}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        """Whether the storefront reported the resource as missing."""
        return self.status_code == 404


# ============================================================================
# Catalog Errors
# ============================================================================


class EmptyCollectionError(CatalogError):
    """Raised when a collection yields zero products."""

    def __init__(self, handle: str) -> None:
        """Initialize empty collection error.

        Args:
            handle: Collection handle.
        """
        super().__init__(
            f"No se encontraron productos en la colección '{handle}'",
            details={"handle": handle},
        )
        self.handle = handle


class RenderError(CatalogError):
    """Raised when the catalog document cannot be produced."""

    def __init__(self, collection: str, reason: str) -> None:
        """Initialize render error.

        Args:
            collection: Collection being rendered.
            reason: Underlying failure description.
        """
        super().__init__(
            f"Error generando el catálogo PDF: {reason}",
            details={"collection": collection, "reason": reason},
        )
