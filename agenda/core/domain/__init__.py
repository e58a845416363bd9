"""
Domain Layer - Core DDD building blocks

This module provides the domain error hierarchy shared by all domains.
"""

from agenda.core.domain.exceptions import (
    DataIntegrityException,
    DomainException,
    InvalidOperationException,
    ValidationException,
)

__all__ = [
    "DomainException",
    "ValidationException",
    "InvalidOperationException",
    "DataIntegrityException",
]
