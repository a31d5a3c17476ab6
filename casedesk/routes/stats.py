from fastapi import APIRouter, Depends

from .. import crud, schemas
from ..stores import CaseStore, UserStore, get_case_store, get_user_store

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=schemas.StatsOut)
def stats(
    cases: CaseStore = Depends(get_case_store),
    users: UserStore = Depends(get_user_store),
):
    """Dashboard counters: OPEN cases are pending, RELEASED cases are completed."""
    return crud.collect_stats(cases, users)
