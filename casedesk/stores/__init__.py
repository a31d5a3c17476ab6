"""Store selection for request handlers.

``settings.storage_backend`` picks the backend per call, so tests can flip it
with ``monkeypatch`` without rebuilding the app.
"""

from typing import Generator, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from .base import Case, CaseStore, Client, ClientStore, User, UserStore
from .memory import MemoryCaseStore, MemoryClientStore, MemoryUserStore
from .sql import SqlCaseStore, SqlClientStore, SqlUserStore

memory_users = MemoryUserStore()
memory_cases = MemoryCaseStore()
memory_clients = MemoryClientStore()


def use_memory() -> bool:
    return settings.storage_backend == "memory"


def reset_memory_stores() -> None:
    memory_users.clear()
    memory_cases.clear()
    memory_clients.clear()


def get_store_db() -> Generator[Optional[Session], None, None]:
    """Yield a database session for the SQL backend, None for the memory backend."""
    if use_memory():
        yield None
        return
    yield from get_db()


def get_user_store(db: Optional[Session] = Depends(get_store_db)) -> UserStore:
    if db is None:
        return memory_users
    return SqlUserStore(db)


def get_case_store(db: Optional[Session] = Depends(get_store_db)) -> CaseStore:
    if db is None:
        return memory_cases
    return SqlCaseStore(db)


def get_client_store(db: Optional[Session] = Depends(get_store_db)) -> ClientStore:
    if db is None:
        return memory_clients
    return SqlClientStore(db)


__all__ = [
    "Case",
    "CaseStore",
    "Client",
    "ClientStore",
    "User",
    "UserStore",
    "get_case_store",
    "get_client_store",
    "get_store_db",
    "get_user_store",
    "memory_cases",
    "memory_clients",
    "memory_users",
    "reset_memory_stores",
    "use_memory",
]
