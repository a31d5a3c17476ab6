import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from passlib.context import CryptContext

from .config import settings
from .errors import AuthFailure, Forbidden, HashingError, InvalidRole, NotFound
from .stores import User, UserStore, get_user_store

logger = logging.getLogger(__name__)

ROLE_CASEWORKER = "CASEWORKER"
ROLE_INSPECTOR = "INSPECTOR"
ROLE_ADMIN = "ADMIN"
VALID_ROLES = (ROLE_CASEWORKER, ROLE_INSPECTOR, ROLE_ADMIN)
DEFAULT_ROLE = ROLE_CASEWORKER

SESSION_USER_KEY = "user_id"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError, RuntimeError, MemoryError) as exc:
        raise HashingError(f"Password hashing failed: {exc}") from exc


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError, RuntimeError, MemoryError) as exc:
        raise HashingError(f"Password verification failed: {exc}") from exc


def authenticate(users: UserStore, email: str, password: str) -> User:
    """Return the user for a matching email/password pair.

    Unknown emails and wrong passwords raise the same ``AuthFailure`` so a
    caller cannot tell which one it was.
    """
    found = users.credentials(email)
    if found is None:
        logger.warning("Login rejected for %s", email)
        raise AuthFailure()
    user, password_hash = found
    if not verify_password(password, password_hash):
        logger.warning("Login rejected for %s", email)
        raise AuthFailure()
    return user


def change_role(users: UserStore, acting_email: str, target_id: int, new_role: str) -> User:
    """Set ``new_role`` on the target user.

    Anyone acting on their own account may only (re)assign ADMIN, so an admin
    cannot drop their own admin status through this path.
    """
    if new_role not in VALID_ROLES:
        raise InvalidRole()

    target = users.get(target_id)
    if target is None:
        raise NotFound("User not found.")

    if target.email == acting_email and new_role != ROLE_ADMIN:
        logger.warning("User %s tried to change their own role to %s", acting_email, new_role)
        raise Forbidden()

    updated = users.set_role(target_id, new_role)
    if updated is None:
        raise NotFound("User not found.")
    logger.info("Role of user %s changed to %s by %s", target_id, new_role, acting_email)
    return updated


def get_current_user(
    request: Request, users: UserStore = Depends(get_user_store)
) -> Optional[User]:
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        return None
    return users.get(user_id)


def require_user(current_user: Optional[User] = Depends(get_current_user)) -> User:
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please log in to continue.",
        )
    return current_user
