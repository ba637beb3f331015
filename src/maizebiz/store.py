"""
Record store - user-scoped create/read/update/delete over the three
collections (purchases, sales, laborers).

One RecordStore is built by create_app() around the SQLAlchemy session and
registered on app.extensions["record_store"]. Views and commands reach it via
get_store() rather than talking to db.session directly, so anything that needs
persistence receives it explicitly.
"""

import logging
from typing import Optional

import sqlalchemy as sa
from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from maizebiz.core.calculator import DERIVERS
from maizebiz.models import RECORD_MODELS

logger = logging.getLogger(__name__)

# Sort column for each collection (newest first)
DATE_COLUMNS = {
    "purchases": "date_of_purchase",
    "sales": "date_of_sale",
    "laborers": "date",
}

# Attributes a caller may never set directly
PROTECTED_FIELDS = {"id", "user_id", "created_at", "updated_at"}


class UnknownCollection(KeyError):
    """Raised for a collection name other than purchases, sales or laborers."""


class RecordStore:

    def __init__(self, session_factory):
        # session_factory returns the active session (db.session is a scoped
        # session, calling it yields the request-local session)
        self._session_factory = session_factory

    @property
    def session(self):
        return self._session_factory()

    @staticmethod
    def model_for(kind: str):
        try:
            return RECORD_MODELS[kind]
        except KeyError:
            raise UnknownCollection(kind) from None

    # ── Reads ───────────────────────────────────────────────────────────────

    def list(self, kind: str, user_id: int) -> list:
        model = self.model_for(kind)
        date_column = getattr(model, DATE_COLUMNS[kind])
        query = (
            sa.select(model)
            .where(model.user_id == user_id)
            .order_by(date_column.desc(), model.id.desc())
        )
        return list(self.session.scalars(query))

    def get(self, kind: str, user_id: int, record_id: int):
        """The record, or None if it does not exist or belongs to someone else."""
        model = self.model_for(kind)
        record = self.session.get(model, record_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    # ── Writes ──────────────────────────────────────────────────────────────

    def create(self, kind: str, user_id: int, data: dict):
        model = self.model_for(kind)
        record = model(user_id=user_id)
        self._apply(kind, record, data)
        session = self.session
        session.add(record)
        self._commit(f"creating {kind} record for user #{user_id}")
        logger.info("Created %s #%s for user #%s", kind, record.id, user_id)
        return record

    def update(self, kind: str, user_id: int, record_id: int, data: dict) -> Optional[object]:
        record = self.get(kind, user_id, record_id)
        if record is None:
            return None
        self._apply(kind, record, data)
        self._commit(f"updating {kind} #{record_id}")
        logger.info("Updated %s #%s for user #%s", kind, record_id, user_id)
        return record

    def delete(self, kind: str, user_id: int, record_id: int) -> bool:
        record = self.get(kind, user_id, record_id)
        if record is None:
            return False
        self.session.delete(record)
        self._commit(f"deleting {kind} #{record_id}")
        logger.info("Deleted %s #%s for user #%s", kind, record_id, user_id)
        return True

    # ── Internals ───────────────────────────────────────────────────────────

    def _apply(self, kind: str, record, data: dict) -> None:
        """Copy input fields onto the record, then recompute derived fields."""
        derived = DERIVERS[kind]
        columns = set(record.__table__.columns.keys()) - PROTECTED_FIELDS

        for name, value in data.items():
            if name in columns:
                setattr(record, name, value)

        # Derive from the merged state so a partial edit still recomputes
        merged = {name: getattr(record, name) for name in columns}
        for name, value in derived(merged).items():
            setattr(record, name, value)

    def _commit(self, action: str) -> None:
        session = self.session
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Error {action}: {e}", exc_info=True)
            raise


def get_store() -> RecordStore:
    """The RecordStore registered on the running app."""
    return current_app.extensions["record_store"]
