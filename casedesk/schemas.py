from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, constr
from pydantic.alias_generators import to_camel

NonEmptyStr = constr(strip_whitespace=True, min_length=1)
# Credentials are matched exactly as submitted, never trimmed.
CredentialStr = constr(min_length=1)


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case is accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    message: str


# ----- Auth -----


class LoginRequest(CamelModel):
    email: CredentialStr
    password: CredentialStr


class RegisterRequest(CamelModel):
    name: NonEmptyStr
    email: CredentialStr
    password: CredentialStr


class SessionUserOut(CamelModel):
    id: int
    email: str
    name: str
    role: str


class LoginOut(CamelModel):
    user: SessionUserOut


# ----- Users -----


class UserCreate(RegisterRequest):
    role: Optional[str] = None


class UserOut(SessionUserOut):
    is_active: bool


class RoleUpdate(CamelModel):
    role: str


# ----- Cases -----


class CaseBase(CamelModel):
    title: Optional[str] = None
    client_id: Optional[int] = None
    priority: Optional[str] = None
    file_reference: Optional[str] = None
    order_date: Optional[date] = None
    deadline: Optional[date] = None
    location: Optional[str] = None
    internal_note: Optional[str] = None


class CaseCreate(CaseBase):
    description: NonEmptyStr
    inspector_id: int


class CaseUpdate(CaseBase):
    description: Optional[NonEmptyStr] = None
    status: Optional[NonEmptyStr] = None


class CaseOut(CamelModel):
    id: int
    case_number: str
    title: Optional[str] = None
    description: str
    inspector_id: int
    inspector_name: str
    client_id: Optional[int] = None
    status: str
    priority: str
    file_reference: Optional[str] = None
    order_date: Optional[date] = None
    deadline: Optional[date] = None
    location: Optional[str] = None
    internal_note: Optional[str] = None
    created_at: datetime


# ----- Clients -----


class ClientCreate(CamelModel):
    company_name: NonEmptyStr
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class ClientOut(CamelModel):
    id: int
    company_name: str
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime


# ----- Stats -----


class StatsOut(CamelModel):
    total_cases: int
    pending_cases: int
    completed_cases: int
    active_users: int


def format_errors(errors: List[dict]) -> str:
    """Flatten pydantic error entries into one readable message."""
    parts = []
    for error in errors:
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts)
