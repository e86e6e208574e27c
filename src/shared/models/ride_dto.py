# src/shared/models/ride_dto.py
"""
DTO поездки.
JSON-ключи поездки совпадают с колонками таблицы rides (camelCase).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RideDTO(BaseModel):
    """Сохранённая поездка."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int = Field(..., description="ID, назначенный хранилищем")
    start_lat: float = Field(..., alias="startLat", description="Широта начала")
    start_long: float = Field(..., alias="startLong", description="Долгота начала")
    end_lat: float = Field(..., alias="endLat", description="Широта конца")
    end_long: float = Field(..., alias="endLong", description="Долгота конца")
    rider_name: str = Field(..., alias="riderName", description="Имя пассажира")
    driver_name: str = Field(..., alias="driverName", description="Имя водителя")
    driver_vehicle: str = Field(..., alias="driverVehicle", description="Автомобиль водителя")


class RideCreate(BaseModel):
    """Проверенные данные для вставки новой поездки."""

    start_lat: float
    start_long: float
    end_lat: float
    end_long: float
    rider_name: str
    driver_name: str
    driver_vehicle: str


class CreateRideRequest(BaseModel):
    """
    Тело запроса POST /rides.

    Типы не навязываются на уровне схемы: некорректные значения
    должны превращаться в VALIDATION_ERROR, а не в ответ 422.
    """

    model_config = ConfigDict(extra="ignore")

    start_lat: Optional[Any] = None
    start_long: Optional[Any] = None
    end_lat: Optional[Any] = None
    end_long: Optional[Any] = None
    rider_name: Optional[Any] = None
    driver_name: Optional[Any] = None
    driver_vehicle: Optional[Any] = None
