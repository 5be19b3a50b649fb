"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,
    DatabaseError,

    # Product-specific
    ProductNotFoundError,

    # Configurator
    InconsistentOptionIdsError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "DatabaseError",

    # Product
    "ProductNotFoundError",

    # Configurator
    "InconsistentOptionIdsError",
]
