# src/services/rides_service/routes.py
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from src.services.rides_service.dependencies import get_ride_service
from src.services.rides_service.service import RideService, RidesResult
from src.shared.models.common import ErrorResponse
from src.shared.models.ride_dto import CreateRideRequest

router = APIRouter(prefix="/rides", tags=["Rides"])


def to_response(result: RidesResult) -> JSONResponse:
    # Ошибки отдаются с HTTP 200 для совместимости с существующими клиентами
    if isinstance(result, ErrorResponse):
        return JSONResponse(content=result.model_dump(mode="json"))
    return JSONResponse(content=[ride.model_dump(by_alias=True) for ride in result])


@router.post("", response_model=None, summary="Create a new ride record")
async def create_ride(
    payload: Any = Body(None),
    service: RideService = Depends(get_ride_service),
):
    # Тело не-объект (массив, строка) рассматривается как пустой запрос
    request = CreateRideRequest.model_validate(payload) if isinstance(payload, dict) else CreateRideRequest()
    return to_response(await service.create_ride(request))


@router.get("", response_model=None, summary="Get ride record list, 10 items per page")
async def get_rides(
    page: Optional[str] = None,
    service: RideService = Depends(get_ride_service),
):
    return to_response(await service.list_rides(page))


@router.get("/{ride_id}", response_model=None, summary="Get a ride record by ID")
async def get_ride(
    ride_id: str,
    service: RideService = Depends(get_ride_service),
):
    return to_response(await service.get_ride(ride_id))
