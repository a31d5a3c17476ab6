"""SQLAlchemy-backed stores.

The database assigns ids and enforces email uniqueness. Low-level SQLAlchemy
errors are rolled back and re-raised as ``StoreError`` so the API layer can
turn them into a clean 500; a unique-constraint hit on the users table
becomes ``DuplicateEmail``.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .. import models
from ..errors import DuplicateEmail, StoreError
from .base import (
    CASE_UPDATABLE_FIELDS,
    Case,
    CaseStore,
    Client,
    ClientStore,
    User,
    UserStore,
    format_case_number,
)

logger = logging.getLogger(__name__)


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Database commit failed: %s", exc)
        raise StoreError(str(exc)) from exc


def _to_user(row: models.User) -> User:
    return User(
        id=row.id,
        email=row.email,
        name=row.name,
        role=row.role,
        is_active=row.is_active,
    )


def _to_case(row: models.Case) -> Case:
    return Case(
        id=row.id,
        case_number=row.case_number,
        title=row.title,
        description=row.description,
        inspector_id=row.inspector_id,
        inspector_name=row.inspector_name,
        client_id=row.client_id,
        status=row.status,
        priority=row.priority,
        file_reference=row.file_reference,
        order_date=row.order_date,
        deadline=row.deadline,
        location=row.location,
        internal_note=row.internal_note,
        created_at=row.created_at,
    )


def _to_client(row: models.Client) -> Client:
    return Client(
        id=row.id,
        company_name=row.company_name,
        contact_name=row.contact_name,
        email=row.email,
        phone=row.phone,
        address=row.address,
        created_at=row.created_at,
    )


class SqlUserStore(UserStore):
    def __init__(self, db: Session):
        self.db = db

    def _row_by_email(self, email: str) -> Optional[models.User]:
        return self.db.execute(
            select(models.User).where(models.User.email == email)
        ).scalar_one_or_none()

    def get(self, user_id: int) -> Optional[User]:
        row = self.db.get(models.User, user_id)
        return _to_user(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        row = self._row_by_email(email)
        return _to_user(row) if row else None

    def credentials(self, email: str) -> Optional[Tuple[User, str]]:
        row = self._row_by_email(email)
        if row is None:
            return None
        return _to_user(row), row.password_hash

    def add(self, name: str, email: str, password_hash: str, role: str) -> User:
        row = models.User(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            is_active=True,
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmail() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(str(exc)) from exc
        self.db.refresh(row)
        return _to_user(row)

    def all(self) -> List[User]:
        rows = self.db.execute(select(models.User).order_by(models.User.id)).scalars().all()
        return [_to_user(row) for row in rows]

    def remove(self, user_id: int) -> bool:
        row = self.db.get(models.User, user_id)
        if row is None:
            return False
        self.db.delete(row)
        _commit(self.db)
        return True

    def set_role(self, user_id: int, role: str) -> Optional[User]:
        row = self.db.get(models.User, user_id)
        if row is None:
            return None
        row.role = role
        _commit(self.db)
        self.db.refresh(row)
        return _to_user(row)

    def count_active(self) -> int:
        return self.db.scalar(
            select(func.count(models.User.id)).where(models.User.is_active.is_(True))
        )


class SqlCaseStore(CaseStore):
    def __init__(self, db: Session):
        self.db = db

    def add(self, **values: Any) -> Case:
        row = models.Case(**values)
        self.db.add(row)
        try:
            # flush to get the id, then derive the case number from it
            self.db.flush()
            row.case_number = format_case_number(row.id)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(str(exc)) from exc
        _commit(self.db)
        self.db.refresh(row)
        return _to_case(row)

    def get(self, case_id: int) -> Optional[Case]:
        row = self.db.get(models.Case, case_id)
        return _to_case(row) if row else None

    def all(self) -> List[Case]:
        rows = self.db.execute(select(models.Case).order_by(models.Case.id)).scalars().all()
        return [_to_case(row) for row in rows]

    def update(self, case_id: int, changes: Dict[str, Any]) -> Optional[Case]:
        row = self.db.get(models.Case, case_id)
        if row is None:
            return None
        for key, value in changes.items():
            if key in CASE_UPDATABLE_FIELDS:
                setattr(row, key, value)
        _commit(self.db)
        self.db.refresh(row)
        return _to_case(row)

    def remove(self, case_id: int) -> bool:
        row = self.db.get(models.Case, case_id)
        if row is None:
            return False
        self.db.delete(row)
        _commit(self.db)
        return True

    def count(self, status: Optional[str] = None) -> int:
        stmt = select(func.count(models.Case.id))
        if status is not None:
            stmt = stmt.where(models.Case.status == status)
        return self.db.scalar(stmt)


class SqlClientStore(ClientStore):
    def __init__(self, db: Session):
        self.db = db

    def add(self, **values: Any) -> Client:
        row = models.Client(**values)
        self.db.add(row)
        _commit(self.db)
        self.db.refresh(row)
        return _to_client(row)

    def all(self) -> List[Client]:
        rows = self.db.execute(select(models.Client).order_by(models.Client.id)).scalars().all()
        return [_to_client(row) for row in rows]
