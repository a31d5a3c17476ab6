"""In-process stores.

Records live in insertion-ordered dicts keyed by id. Ids come from a counter
that only moves forward, so a deleted id (and its case number) is never
handed out again. Every read and write holds the store's lock, and callers
only ever get copies of the stored records.
"""

import itertools
import threading
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from ..errors import DuplicateEmail
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


class MemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.clear()

    def clear(self) -> None:
        with self._lock:
            self._ids = itertools.count(1)
            self._users: Dict[int, User] = {}
            self._hashes: Dict[int, str] = {}
            self._by_email: Dict[str, int] = {}

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._by_email.get(email)
            return replace(self._users[user_id]) if user_id is not None else None

    def credentials(self, email: str) -> Optional[Tuple[User, str]]:
        with self._lock:
            user_id = self._by_email.get(email)
            if user_id is None:
                return None
            return replace(self._users[user_id]), self._hashes[user_id]

    def add(self, name: str, email: str, password_hash: str, role: str) -> User:
        with self._lock:
            if email in self._by_email:
                raise DuplicateEmail()
            user = User(id=next(self._ids), email=email, name=name, role=role, is_active=True)
            self._users[user.id] = user
            self._hashes[user.id] = password_hash
            self._by_email[email] = user.id
            return replace(user)

    def all(self) -> List[User]:
        with self._lock:
            return [replace(user) for user in self._users.values()]

    def remove(self, user_id: int) -> bool:
        with self._lock:
            user = self._users.pop(user_id, None)
            if user is None:
                return False
            del self._hashes[user_id]
            del self._by_email[user.email]
            return True

    def set_role(self, user_id: int, role: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            user.role = role
            return replace(user)

    def count_active(self) -> int:
        with self._lock:
            return sum(1 for user in self._users.values() if user.is_active)


class MemoryCaseStore(CaseStore):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.clear()

    def clear(self) -> None:
        with self._lock:
            self._ids = itertools.count(1)
            self._cases: Dict[int, Case] = {}

    def add(self, **values: Any) -> Case:
        with self._lock:
            case_id = next(self._ids)
            case = Case(id=case_id, case_number=format_case_number(case_id), **values)
            self._cases[case_id] = case
            return replace(case)

    def get(self, case_id: int) -> Optional[Case]:
        with self._lock:
            case = self._cases.get(case_id)
            return replace(case) if case else None

    def all(self) -> List[Case]:
        with self._lock:
            return [replace(case) for case in self._cases.values()]

    def update(self, case_id: int, changes: Dict[str, Any]) -> Optional[Case]:
        with self._lock:
            case = self._cases.get(case_id)
            if case is None:
                return None
            for key, value in changes.items():
                if key in CASE_UPDATABLE_FIELDS:
                    setattr(case, key, value)
            return replace(case)

    def remove(self, case_id: int) -> bool:
        with self._lock:
            return self._cases.pop(case_id, None) is not None

    def count(self, status: Optional[str] = None) -> int:
        with self._lock:
            if status is None:
                return len(self._cases)
            return sum(1 for case in self._cases.values() if case.status == status)


class MemoryClientStore(ClientStore):
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.clear()

    def clear(self) -> None:
        with self._lock:
            self._ids = itertools.count(1)
            self._clients: Dict[int, Client] = {}

    def add(self, **values: Any) -> Client:
        values.setdefault("created_at", datetime.utcnow())
        with self._lock:
            client = Client(id=next(self._ids), **values)
            self._clients[client.id] = client
            return replace(client)

    def all(self) -> List[Client]:
        with self._lock:
            return [replace(client) for client in self._clients.values()]
