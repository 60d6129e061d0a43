# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for families — one JSON document per family."""
import json
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import PersistenceError
from app.core.logging import get_logger
from app.models.domain import Family

logger = get_logger(__name__)


def _to_document(family: Family) -> str:
    return json.dumps(family.model_dump(mode="json", by_alias=True))


class FamilyRepository:
    def __init__(self, engine: Engine):
        self._engine = engine

    def ensure_schema(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(text("""
                    CREATE TABLE IF NOT EXISTS families (
                        id          VARCHAR(36)  PRIMARY KEY,
                        name        VARCHAR(255) NOT NULL,
                        document    TEXT         NOT NULL,
                        created_at  VARCHAR(40)  NOT NULL,
                        updated_at  VARCHAR(40)  NOT NULL
                    )
                """))
        except SQLAlchemyError as exc:
            logger.error("Failed to create families table: %s", exc)
            raise PersistenceError(str(exc)) from exc

    # ── Write ──────────────────────────────────────────────────────────

    def insert(self, family: Family) -> Family:
        now = datetime.now(timezone.utc).isoformat()
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    text("""
                        INSERT INTO families (id, name, document, created_at, updated_at)
                        VALUES (:id, :name, :document, :created_at, :updated_at)
                    """),
                    {
                        "id": family.id,
                        "name": family.name,
                        "document": _to_document(family),
                        "created_at": family.created_at.isoformat(),
                        "updated_at": now,
                    },
                )
        except SQLAlchemyError as exc:
            logger.error("Failed to persist family %s: %s", family.id, exc)
            raise PersistenceError(str(exc)) from exc
        return family

    def save(self, family: Family) -> bool:
        """Write the whole aggregate back. Returns False if the row is gone."""
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    text("""
                        UPDATE families
                        SET name = :name, document = :document, updated_at = :updated_at
                        WHERE id = :id
                    """),
                    {
                        "id": family.id,
                        "name": family.name,
                        "document": _to_document(family),
                        "updated_at": datetime.now(timezone.utc).isoformat(),
                    },
                )
                saved = result.rowcount > 0
        except SQLAlchemyError as exc:
            logger.error("Failed to save family %s: %s", family.id, exc)
            raise PersistenceError(str(exc)) from exc
        return saved

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, family_id: str) -> Optional[Family]:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    text("SELECT document FROM families WHERE id = :id"),
                    {"id": family_id},
                ).mappings().first()
        except SQLAlchemyError as exc:
            logger.error("Failed to load family %s: %s", family_id, exc)
            raise PersistenceError(str(exc)) from exc
        if not row:
            return None
        return Family.model_validate(json.loads(row["document"]))

    def count_all(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM families")).scalar() or 0

    def verify_connection(self) -> int:
        return self.count_all()

    def dispose(self):
        self._engine.dispose()
