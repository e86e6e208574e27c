# src/services/rides_service/exceptions.py
"""Исключения сервиса поездок."""


class StoreError(Exception):
    """Ошибка хранилища поездок. Детали не передаются клиенту."""
    pass
