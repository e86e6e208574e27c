# src/services/__init__.py
"""
HTTP сервисы приложения.

Сервисы:
- rides_service: создание и чтение поездок (FastAPI + PostgreSQL)
"""

__all__: list[str] = []
