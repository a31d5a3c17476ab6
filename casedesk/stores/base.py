"""Store interfaces shared by the in-memory and SQL backends.

Stores hand out plain record objects. ``User`` records never carry the
password digest; the only way to read a digest is ``UserStore.credentials``,
which exists for the login check alone.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple


CASE_NUMBER_PREFIX = "CASE-"


def format_case_number(sequence: int) -> str:
    return f"{CASE_NUMBER_PREFIX}{sequence:05d}"


@dataclass
class User:
    id: int
    email: str
    name: str
    role: str
    is_active: bool = True


@dataclass
class Case:
    id: int
    case_number: str
    description: str
    inspector_id: int
    inspector_name: str
    title: Optional[str] = None
    client_id: Optional[int] = None
    status: str = "OPEN"
    priority: str = "MEDIUM"
    file_reference: Optional[str] = None
    order_date: Optional[date] = None
    deadline: Optional[date] = None
    location: Optional[str] = None
    internal_note: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class Client:
    id: int
    company_name: str
    contact_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


# Columns a case update may touch; id, case_number and the inspector snapshot are fixed.
CASE_UPDATABLE_FIELDS = (
    "title",
    "description",
    "status",
    "priority",
    "client_id",
    "file_reference",
    "order_date",
    "deadline",
    "location",
    "internal_note",
)


class UserStore(ABC):
    @abstractmethod
    def get(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def credentials(self, email: str) -> Optional[Tuple[User, str]]:
        """Return the user and its password digest, or None for an unknown email."""

    @abstractmethod
    def add(self, name: str, email: str, password_hash: str, role: str) -> User:
        """Persist a new active user; raise DuplicateEmail if the email is taken."""

    @abstractmethod
    def all(self) -> List[User]:
        ...

    @abstractmethod
    def remove(self, user_id: int) -> bool:
        """Delete a user. Returns False if it did not exist."""

    @abstractmethod
    def set_role(self, user_id: int, role: str) -> Optional[User]:
        ...

    @abstractmethod
    def count_active(self) -> int:
        ...


class CaseStore(ABC):
    @abstractmethod
    def add(self, **values: Any) -> Case:
        """Persist a new case, assigning its id and case number."""

    @abstractmethod
    def get(self, case_id: int) -> Optional[Case]:
        ...

    @abstractmethod
    def all(self) -> List[Case]:
        ...

    @abstractmethod
    def update(self, case_id: int, changes: Dict[str, Any]) -> Optional[Case]:
        ...

    @abstractmethod
    def remove(self, case_id: int) -> bool:
        ...

    @abstractmethod
    def count(self, status: Optional[str] = None) -> int:
        ...


class ClientStore(ABC):
    @abstractmethod
    def add(self, **values: Any) -> Client:
        ...

    @abstractmethod
    def all(self) -> List[Client]:
        ...
