# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package."""
from app.repositories.family_repository import FamilyRepository

__all__ = ["FamilyRepository"]
