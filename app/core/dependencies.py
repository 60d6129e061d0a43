# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""FastAPI dependency injection wiring."""
from app.core.database import engine
from app.repositories.family_repository import FamilyRepository
from app.services.family_service import FamilyService
from app.services.sms_client import SmsClient

_repo = FamilyRepository(engine)
_sms_client = SmsClient()
_service = FamilyService(_repo, _sms_client)


def get_family_repo() -> FamilyRepository:
    return _repo


def get_family_service() -> FamilyService:
    return _service
