from datetime import date, datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text

from .database import Base


class TimestampMixin:
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class User(Base, TimestampMixin):
    __tablename__ = "users"
    # Ids are never reused after a delete, on SQLite too.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="CASEWORKER")  # CASEWORKER, INSPECTOR, ADMIN
    is_active = Column(Boolean, default=True, nullable=False)


class Case(Base, TimestampMixin):
    __tablename__ = "cases"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    case_number = Column(String, unique=True, index=True)
    title = Column(String)
    description = Column(Text, nullable=False)
    # Plain ids, not foreign keys: deleting a user or client leaves cases untouched.
    inspector_id = Column(Integer, nullable=False, index=True)
    inspector_name = Column(String, nullable=False)
    client_id = Column(Integer, index=True)
    status = Column(String, nullable=False, default="OPEN")
    priority = Column(String, nullable=False, default="MEDIUM")
    file_reference = Column(String)
    order_date = Column(Date, default=date.today)
    deadline = Column(Date)
    location = Column(String)
    internal_note = Column(Text)


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String, nullable=False)
    contact_name = Column(String)
    email = Column(String)
    phone = Column(String)
    address = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
