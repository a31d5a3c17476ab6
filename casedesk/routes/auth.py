from fastapi import APIRouter, Depends, Request

from .. import crud, schemas
from ..auth import SESSION_USER_KEY, authenticate, require_user
from ..stores import User, UserStore, get_user_store

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=schemas.LoginOut)
def login(
    payload: schemas.LoginRequest,
    request: Request,
    users: UserStore = Depends(get_user_store),
):
    user = authenticate(users, payload.email, payload.password)
    request.session[SESSION_USER_KEY] = user.id
    return {"user": user}


@router.post("/register", response_model=schemas.MessageOut)
def register(payload: schemas.RegisterRequest, users: UserStore = Depends(get_user_store)):
    """Self-registration; new accounts always start as CASEWORKER."""
    crud.create_user(users, name=payload.name, email=payload.email, password=payload.password)
    return {"message": "Registration successful"}


@router.post("/logout", response_model=schemas.MessageOut)
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out"}


@router.get("/me", response_model=schemas.UserOut)
def me(current_user: User = Depends(require_user)):
    return current_user
