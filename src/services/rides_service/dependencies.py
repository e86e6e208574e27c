# src/services/rides_service/dependencies.py
from fastapi import Depends, Request

from src.config import settings
from src.infra.database import DatabaseManager
from src.services.rides_service.repository import RideRepository
from src.services.rides_service.service import RideService


def get_database(request: Request) -> DatabaseManager:
    return request.app.state.db


def get_ride_repository(db: DatabaseManager = Depends(get_database)) -> RideRepository:
    return RideRepository(db)


def get_ride_service(repository: RideRepository = Depends(get_ride_repository)) -> RideService:
    return RideService(repository, page_size=settings.rides.RIDES_PAGE_SIZE)
