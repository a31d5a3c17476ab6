from typing import List

from fastapi import APIRouter, Depends

from .. import crud, schemas
from ..auth import change_role, require_user
from ..stores import User, UserStore, get_user_store

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[schemas.UserOut])
def list_users(users: UserStore = Depends(get_user_store)):
    return crud.list_users(users)


@router.post("", response_model=schemas.UserOut)
def create_user(payload: schemas.UserCreate, users: UserStore = Depends(get_user_store)):
    return crud.create_user(
        users,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )


@router.delete("/{user_id}", response_model=schemas.MessageOut)
def delete_user(user_id: int, users: UserStore = Depends(get_user_store)):
    crud.delete_user(users, user_id)
    return {"message": "Deleted"}


@router.put("/{user_id}/role", response_model=schemas.UserOut)
def update_role(
    user_id: int,
    payload: schemas.RoleUpdate,
    users: UserStore = Depends(get_user_store),
    current_user: User = Depends(require_user),
):
    return change_role(users, current_user.email, user_id, payload.role)
