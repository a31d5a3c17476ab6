from typing import List

from fastapi import APIRouter, Depends

from .. import crud, schemas
from ..stores import CaseStore, UserStore, get_case_store, get_user_store

router = APIRouter(prefix="/api/cases", tags=["cases"])


@router.get("", response_model=List[schemas.CaseOut])
def list_cases(cases: CaseStore = Depends(get_case_store)):
    return crud.list_cases(cases)


@router.post("", response_model=schemas.CaseOut)
def create_case(
    payload: schemas.CaseCreate,
    cases: CaseStore = Depends(get_case_store),
    users: UserStore = Depends(get_user_store),
):
    return crud.create_case(cases, users, **payload.model_dump())


@router.put("/{case_id}", response_model=schemas.CaseOut)
def update_case(
    case_id: int,
    payload: schemas.CaseUpdate,
    cases: CaseStore = Depends(get_case_store),
):
    return crud.update_case(cases, case_id, payload.model_dump(exclude_unset=True))


@router.delete("/{case_id}", response_model=schemas.MessageOut)
def delete_case(case_id: int, cases: CaseStore = Depends(get_case_store)):
    crud.delete_case(cases, case_id)
    return {"message": "Deleted"}
