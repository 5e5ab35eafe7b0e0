"""Tax rate endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.crud.crud_tax import tax_crud
from backend.app.db.session import get_db
from backend.app.models.tax import Tax
from backend.app.schemas.tax import TaxCreate, TaxRead, TaxUpdate

router = APIRouter(prefix="/api/taxes", tags=["taxes"])


def _get_tax(db: Session, tax_id: str) -> Tax:
    tax = tax_crud.get(db, tax_id=tax_id)
    if not tax:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tax not found")
    return tax


@router.get("/", response_model=list[TaxRead])
async def list_taxes(db: Session = Depends(get_db)):
    return tax_crud.get_multi(db)


@router.post("/", response_model=TaxRead, status_code=status.HTTP_201_CREATED)
async def create_tax(tax_in: TaxCreate, db: Session = Depends(get_db)):
    return tax_crud.create(db, obj_in=tax_in)


@router.get("/{tax_id}", response_model=TaxRead)
async def get_tax(tax_id: str, db: Session = Depends(get_db)):
    return _get_tax(db, tax_id)


@router.put("/{tax_id}", response_model=TaxRead)
async def update_tax(tax_id: str, tax_in: TaxUpdate, db: Session = Depends(get_db)):
    tax = _get_tax(db, tax_id)
    return tax_crud.update(db, db_obj=tax, obj_in=tax_in)


@router.delete("/{tax_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tax(tax_id: str, db: Session = Depends(get_db)):
    tax = _get_tax(db, tax_id)
    tax_crud.delete(db, db_obj=tax)
