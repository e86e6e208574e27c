# src/services/rides_service/service.py
"""
Сервис поездок.
Связывает валидацию и репозиторий, классифицирует результат
в список поездок или ErrorResponse.
"""

from __future__ import annotations

from typing import Any, Union

from src.common.constants import DEFAULT_PAGE_SIZE, MSG_RIDES_NOT_FOUND, MSG_UNKNOWN_ERROR, ErrorCode, TypeMsg
from src.common.logger import log_debug, log_info
from src.services.rides_service.exceptions import StoreError
from src.services.rides_service.repository import RideRepository
from src.services.rides_service.validation import to_number, validate_create_ride
from src.shared.models.common import ErrorResponse, PaginationParams
from src.shared.models.ride_dto import CreateRideRequest, RideCreate, RideDTO

RidesResult = Union[list[RideDTO], ErrorResponse]


def rides_not_found() -> ErrorResponse:
    return ErrorResponse(error_code=ErrorCode.RIDES_NOT_FOUND_ERROR, message=MSG_RIDES_NOT_FOUND)


def server_error() -> ErrorResponse:
    return ErrorResponse(error_code=ErrorCode.SERVER_ERROR, message=MSG_UNKNOWN_ERROR)


class RideService:
    def __init__(self, repository: RideRepository, page_size: int = DEFAULT_PAGE_SIZE):
        self.repository = repository
        self.page_size = page_size

    async def create_ride(self, request: CreateRideRequest) -> RidesResult:
        validation = validate_create_ride(
            request.start_lat,
            request.start_long,
            request.end_lat,
            request.end_long,
            request.rider_name,
            request.driver_name,
            request.driver_vehicle,
        )
        if not validation.is_valid:
            await log_debug(f"Поездка отклонена валидацией: {validation.error.name}")
            return ErrorResponse(error_code=ErrorCode.VALIDATION_ERROR, message=validation.message)

        ride = RideCreate(
            start_lat=to_number(request.start_lat),
            start_long=to_number(request.start_long),
            end_lat=to_number(request.end_lat),
            end_long=to_number(request.end_long),
            rider_name=request.rider_name,
            driver_name=request.driver_name,
            driver_vehicle=request.driver_vehicle,
        )

        try:
            rides = await self.repository.create(ride)
        except StoreError:
            return server_error()

        # Вставка прошла, но строка не перечитана
        if not rides:
            return server_error()

        await log_info(f"Создана поездка {rides[0].id}", type_msg=TypeMsg.INFO)
        return rides

    async def list_rides(self, raw_page: Any = None) -> RidesResult:
        pagination = PaginationParams.from_raw(raw_page, self.page_size)
        try:
            rides = await self.repository.get_page(pagination.page, pagination.page_size)
        except StoreError:
            return server_error()
        return rides or rides_not_found()

    async def get_ride(self, ride_id: Any) -> RidesResult:
        try:
            rides = await self.repository.get_by_id(ride_id)
        except StoreError:
            return server_error()
        return rides or rides_not_found()
