# src/shared/__init__.py
"""
Общий код сервиса.

Модули:
- models: DTO и Pydantic-модели запросов и ответов
"""

__all__: list[str] = []
