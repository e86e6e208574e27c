# src/services/rides_service/__init__.py
"""
Сервис поездок: создание, постраничный список и получение по ID.
"""
