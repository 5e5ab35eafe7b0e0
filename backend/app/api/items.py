"""Catalog item endpoints."""

from typing import Iterable

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.crud.crud_item import item_crud
from backend.app.crud.crud_tax import tax_crud
from backend.app.db.session import get_db
from backend.app.models.item import Item
from backend.app.schemas.item import ItemCreate, ItemRead, ItemUpdate

router = APIRouter(prefix="/api/items", tags=["items"])


def _get_item(db: Session, item_id: str) -> Item:
    item = item_crud.get(db, item_id=item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return item


def _ensure_taxes_exist(db: Session, tax_ids: Iterable[str]) -> None:
    wanted = set(tax_ids)
    found = {tax.id for tax in tax_crud.get_many(db, tax_ids=wanted)}
    missing = sorted(wanted - found)
    if missing:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Tax not found: {missing[0]}")


@router.get("/", response_model=list[ItemRead])
async def list_items(db: Session = Depends(get_db)):
    return item_crud.get_multi(db)


@router.post("/", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
async def create_item(item_in: ItemCreate, db: Session = Depends(get_db)):
    _ensure_taxes_exist(db, item_in.tax_ids)
    return item_crud.create(db, obj_in=item_in)


@router.get("/{item_id}", response_model=ItemRead)
async def get_item(item_id: str, db: Session = Depends(get_db)):
    return _get_item(db, item_id)


@router.put("/{item_id}", response_model=ItemRead)
async def update_item(item_id: str, item_in: ItemUpdate, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    if item_in.tax_ids is not None:
        _ensure_taxes_exist(db, item_in.tax_ids)
    return item_crud.update(db, db_obj=item, obj_in=item_in)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(item_id: str, db: Session = Depends(get_db)):
    item = _get_item(db, item_id)
    item_crud.delete(db, db_obj=item)
