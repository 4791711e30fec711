# site_api/models/__init__.py
"""
SQLAlchemy ORM models for database entities.
"""

from site_api.models.industry import FAQ, Industry, PainPoint, UseCase

__all__ = [
    "FAQ",
    "Industry",
    "PainPoint",
    "UseCase",
]
