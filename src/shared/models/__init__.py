# src/shared/models/__init__.py
"""
Общие DTO и Pydantic-модели.
"""

from src.shared.models.common import ErrorResponse, PaginationParams
from src.shared.models.ride_dto import CreateRideRequest, RideCreate, RideDTO

__all__ = [
    "ErrorResponse",
    "PaginationParams",
    "CreateRideRequest",
    "RideCreate",
    "RideDTO",
]
