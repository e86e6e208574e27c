# tests/services/test_rides_repository.py
"""
Тесты для репозитория поездок.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.services.rides_service.exceptions import StoreError
from src.services.rides_service.repository import RideRepository, parse_ride_id
from src.shared.models.ride_dto import RideCreate


@pytest.fixture
def ride_repository(mock_db: MagicMock) -> RideRepository:
    """Создаёт RideRepository с моком БД."""
    return RideRepository(db=mock_db)


@pytest.fixture
def ride_create() -> RideCreate:
    return RideCreate(
        start_lat=50.4501,
        start_long=30.5234,
        end_lat=50.3450,
        end_long=30.8940,
        rider_name="John Doe",
        driver_name="The Driver",
        driver_vehicle="The Vehicle",
    )


class TestParseRideId:
    """Тесты для parse_ride_id."""

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (7, 7), (" 3 ", 3)])
    def test_valid(self, raw: Any, expected: int) -> None:
        assert parse_ride_id(raw) == expected

    @pytest.mark.parametrize("raw", [
        "abc", "", "1.5", "1 OR 1=1", "0", "-5", None, True, str(2 ** 63),
        "\u0663", "\uff11", "1" * 5000,
    ])
    def test_invalid(self, raw: Any) -> None:
        assert parse_ride_id(raw) is None


class TestRideRepository:
    """Тесты для RideRepository."""

    @pytest.mark.asyncio
    async def test_create_rereads_inserted_row(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
        ride_create: RideCreate,
        sample_ride_row: dict[str, Any],
    ) -> None:
        """Проверяет, что созданная поездка перечитывается из БД по ID."""
        # Arrange
        mock_db.fetchval.return_value = 1
        mock_db.fetchrow.return_value = sample_ride_row

        # Act
        rides = await ride_repository.create(ride_create)

        # Assert
        assert len(rides) == 1
        assert rides[0].id == 1
        assert rides[0].rider_name == "John Doe"
        insert_args = mock_db.fetchval.call_args[0]
        assert "INSERT INTO rides" in insert_args[0]
        assert insert_args[1:] == (
            50.4501, 30.5234, 50.3450, 30.8940, "John Doe", "The Driver", "The Vehicle",
        )
        assert mock_db.fetchrow.call_args[0][1] == 1

    @pytest.mark.asyncio
    async def test_create_store_error(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
        ride_create: RideCreate,
    ) -> None:
        """Проверяет преобразование ошибки вставки в StoreError."""
        # Arrange
        mock_db.fetchval.side_effect = Exception("relation \"rides\" does not exist")

        # Act / Assert
        with patch("src.services.rides_service.repository.log_error", new_callable=AsyncMock) as mock_log:
            with pytest.raises(StoreError):
                await ride_repository.create(ride_create)

        mock_log.assert_called_once()
        mock_db.fetchrow.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_page_offset_and_order(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
        sample_ride_row: dict[str, Any],
    ) -> None:
        """Проверяет LIMIT/OFFSET и порядок по возрастанию ID."""
        # Arrange
        mock_db.fetch.return_value = [sample_ride_row]

        # Act
        rides = await ride_repository.get_page(3, page_size=10)

        # Assert
        assert [ride.id for ride in rides] == [1]
        query, limit, offset = mock_db.fetch.call_args[0]
        assert "ORDER BY id ASC" in query
        assert "LIMIT $1 OFFSET $2" in query
        assert limit == 10
        assert offset == 20

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page", [0, -4])
    async def test_get_page_non_positive_is_first_page(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
        page: int,
    ) -> None:
        """Проверяет, что номера страниц <= 0 трактуются как первая страница."""
        await ride_repository.get_page(page)

        _, limit, offset = mock_db.fetch.call_args[0]
        assert limit == 10
        assert offset == 0

    @pytest.mark.asyncio
    async def test_get_page_empty(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
    ) -> None:
        """Проверяет, что пустая страница является обычным результатом."""
        mock_db.fetch.return_value = []

        assert await ride_repository.get_page(1) == []

    @pytest.mark.asyncio
    async def test_get_page_offset_beyond_bigint_skips_query(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
    ) -> None:
        """Проверяет, что смещение вне BIGINT даёт пустую страницу без запроса."""
        assert await ride_repository.get_page(10 ** 19) == []

        mock_db.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_page_last_representable_offset_is_queried(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
    ) -> None:
        mock_db.fetch.return_value = []

        await ride_repository.get_page(2 ** 63, page_size=1)

        _, limit, offset = mock_db.fetch.call_args[0]
        assert limit == 1
        assert offset == 2 ** 63 - 1

    @pytest.mark.asyncio
    async def test_get_page_store_error(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
    ) -> None:
        """Проверяет преобразование ошибки выборки в StoreError."""
        mock_db.fetch.side_effect = Exception("connection reset")

        with patch("src.services.rides_service.repository.log_error", new_callable=AsyncMock):
            with pytest.raises(StoreError):
                await ride_repository.get_page(1)

    @pytest.mark.asyncio
    async def test_get_by_id_found(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
        sample_ride_row: dict[str, Any],
    ) -> None:
        """Проверяет получение поездки по ID с привязкой параметра."""
        # Arrange
        mock_db.fetchrow.return_value = sample_ride_row

        # Act
        rides = await ride_repository.get_by_id("1")

        # Assert
        assert len(rides) == 1
        assert rides[0].driver_vehicle == "The Vehicle"
        query, ride_id = mock_db.fetchrow.call_args[0]
        assert "WHERE id = $1" in query
        assert ride_id == 1

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
    ) -> None:
        """Проверяет пустой результат для несуществующего ID."""
        mock_db.fetchrow.return_value = None

        assert await ride_repository.get_by_id(999) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", ["abc", "1; DROP TABLE rides", "1 OR 1=1"])
    async def test_get_by_id_non_numeric_skips_query(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
        raw_id: str,
    ) -> None:
        """Проверяет, что нечисловой ID не доходит до БД."""
        assert await ride_repository.get_by_id(raw_id) == []
        mock_db.fetchrow.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_by_id_store_error(
        self,
        ride_repository: RideRepository,
        mock_db: MagicMock,
    ) -> None:
        """Проверяет преобразование ошибки чтения в StoreError."""
        mock_db.fetchrow.side_effect = Exception("timeout")

        with patch("src.services.rides_service.repository.log_error", new_callable=AsyncMock):
            with pytest.raises(StoreError):
                await ride_repository.get_by_id(1)
