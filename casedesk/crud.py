import logging
from datetime import date
from typing import Any, Dict, List, Optional

from .auth import DEFAULT_ROLE, ROLE_ADMIN, VALID_ROLES, hash_password
from .errors import DuplicateEmail, InvalidRole, NotFound, ValidationFailed
from .stores import Case, CaseStore, Client, ClientStore, User, UserStore

logger = logging.getLogger(__name__)

UNKNOWN_INSPECTOR = "Unknown"
DEFAULT_PRIORITY = "MEDIUM"
STATUS_OPEN = "OPEN"
STATUS_RELEASED = "RELEASED"


# User CRUD


def create_user(
    users: UserStore,
    name: str,
    email: str,
    password: str,
    role: Optional[str] = None,
) -> User:
    if not name or not email or not password:
        raise ValidationFailed("Name, email and password are required.")
    if role is not None and role not in VALID_ROLES:
        raise InvalidRole()
    if users.find_by_email(email) is not None:
        raise DuplicateEmail()

    user = users.add(
        name=name,
        email=email,
        password_hash=hash_password(password),
        role=role or DEFAULT_ROLE,
    )
    logger.info("Created user %s (%s) with role %s", user.id, user.email, user.role)
    return user


def list_users(users: UserStore) -> List[User]:
    return users.all()


def delete_user(users: UserStore, user_id: int) -> None:
    """Delete a user. Deleting an id that does not exist is not an error."""
    if users.remove(user_id):
        logger.info("Deleted user %s", user_id)


def seed_default_admin(users: UserStore, email: str, password: str, name: str) -> Optional[User]:
    if users.find_by_email(email) is not None:
        return None
    admin = create_user(users, name=name, email=email, password=password, role=ROLE_ADMIN)
    logger.info("Seeded default admin account %s", email)
    return admin


# Case CRUD


def create_case(
    cases: CaseStore,
    users: UserStore,
    description: str,
    inspector_id: int,
    client_id: Optional[int] = None,
    priority: Optional[str] = None,
    status: Optional[str] = None,
    title: Optional[str] = None,
    file_reference: Optional[str] = None,
    order_date: Optional[date] = None,
    deadline: Optional[date] = None,
    location: Optional[str] = None,
    internal_note: Optional[str] = None,
) -> Case:
    if not description or not inspector_id:
        raise ValidationFailed("Description and inspector are required.")

    # Snapshot of the name at creation time; never refreshed afterwards.
    inspector = users.get(inspector_id)
    inspector_name = inspector.name if inspector else UNKNOWN_INSPECTOR

    case = cases.add(
        title=title,
        description=description,
        inspector_id=inspector_id,
        inspector_name=inspector_name,
        client_id=client_id,
        status=status or STATUS_OPEN,
        priority=priority or DEFAULT_PRIORITY,
        file_reference=file_reference,
        order_date=order_date or date.today(),
        deadline=deadline,
        location=location,
        internal_note=internal_note,
    )
    logger.info("Created case %s for inspector %s", case.case_number, inspector_id)
    return case


def list_cases(cases: CaseStore) -> List[Case]:
    return cases.all()


def update_case(cases: CaseStore, case_id: int, changes: Dict[str, Any]) -> Case:
    """Apply a partial update; the last write wins."""
    # These columns cannot be cleared, only replaced.
    changes = {
        key: value
        for key, value in changes.items()
        if value is not None or key not in ("description", "status", "priority")
    }
    if "description" in changes and not changes["description"]:
        raise ValidationFailed("Description must not be empty.")
    case = cases.update(case_id, changes)
    if case is None:
        raise NotFound("Case not found.")
    return case


def delete_case(cases: CaseStore, case_id: int) -> None:
    if cases.remove(case_id):
        logger.info("Deleted case %s", case_id)


# Client CRUD


def create_client(
    clients: ClientStore,
    company_name: str,
    contact_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> Client:
    if not company_name:
        raise ValidationFailed("Company name is required.")
    return clients.add(
        company_name=company_name,
        contact_name=contact_name or None,
        email=email or None,
        phone=phone or None,
        address=address or None,
    )


def list_clients(clients: ClientStore) -> List[Client]:
    return clients.all()


# Stats


def collect_stats(cases: CaseStore, users: UserStore) -> Dict[str, int]:
    return {
        "total_cases": cases.count(),
        "pending_cases": cases.count(STATUS_OPEN),
        "completed_cases": cases.count(STATUS_RELEASED),
        "active_users": users.count_active(),
    }
