from typing import List

from fastapi import APIRouter, Depends

from .. import crud, schemas
from ..stores import ClientStore, get_client_store

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("", response_model=List[schemas.ClientOut])
def list_clients(clients: ClientStore = Depends(get_client_store)):
    return crud.list_clients(clients)


@router.post("", response_model=schemas.ClientOut)
def create_client(payload: schemas.ClientCreate, clients: ClientStore = Depends(get_client_store)):
    return crud.create_client(clients, **payload.model_dump())
