"""
ForexChart Services

Service layer containing all business logic.
Each service has a defined interface (contract) and implementation.
"""

from forexchart.services.base import (
    BaseService,
    ServiceError,
    ParseError,
    EmptyResultError,
    ProcessingTimeoutError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "ParseError",
    "EmptyResultError",
    "ProcessingTimeoutError",
]
