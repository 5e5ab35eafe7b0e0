"""Invoice routes."""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.core.settings import get_settings
from backend.app.crud.crud_invoice import invoice_crud
from backend.app.db.session import get_db
from backend.app.models.invoice import Invoice
from backend.app.schemas.dashboard import InvoiceStats
from backend.app.schemas.invoice import (
    InvoiceCreate,
    InvoicePreview,
    InvoicePreviewRequest,
    InvoiceRead,
    InvoiceStatus,
    InvoiceUpdate,
)
from backend.app.services.invoices import (
    DuplicateInvoiceNumber,
    MissingReference,
    compute_totals,
    create_invoice,
    get_invoice_stats,
    update_invoice,
)
from backend.app.services.totals import InvalidDiscount, InvalidLineItem, format_money

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


def _get_invoice(db: Session, invoice_id: str) -> Invoice:
    invoice = invoice_crud.get(db, invoice_id=invoice_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice


def _raise_for_invoice_error(exc: Exception):
    if isinstance(exc, MissingReference):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{exc.entity} not found") from exc
    if isinstance(exc, DuplicateInvoiceNumber):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Invoice number already exists") from exc
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/", response_model=List[InvoiceRead])
async def list_invoices(status: Optional[InvoiceStatus] = None, db: Session = Depends(get_db)):
    return invoice_crud.get_multi(db, status=status)


@router.get("/stats", response_model=InvoiceStats)
async def invoice_stats(db: Session = Depends(get_db)):
    return get_invoice_stats(db)


@router.post("/preview", response_model=InvoicePreview)
async def preview_invoice(payload: InvoicePreviewRequest, db: Session = Depends(get_db)):
    try:
        totals, _ = compute_totals(db, payload.line_items, payload.discount)
    except (MissingReference, InvalidLineItem, InvalidDiscount) as exc:
        _raise_for_invoice_error(exc)
    symbol = get_settings().currency_symbol
    return InvoicePreview(
        subtotal=totals.subtotal,
        total_tax=totals.total_tax,
        discount=totals.discount,
        total=totals.total,
        lines=[asdict(line) for line in totals.lines],
        currency_symbol=symbol,
        formatted_total=format_money(totals.total, symbol),
    )


@router.post("/", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
async def create_invoice_route(payload: InvoiceCreate, db: Session = Depends(get_db)):
    try:
        return create_invoice(db, payload)
    except (MissingReference, DuplicateInvoiceNumber, InvalidLineItem, InvalidDiscount) as exc:
        _raise_for_invoice_error(exc)


@router.get("/{invoice_id}", response_model=InvoiceRead)
async def get_invoice(invoice_id: str, db: Session = Depends(get_db)):
    return _get_invoice(db, invoice_id)


@router.put("/{invoice_id}", response_model=InvoiceRead)
async def update_invoice_route(invoice_id: str, payload: InvoiceUpdate, db: Session = Depends(get_db)):
    invoice = _get_invoice(db, invoice_id)
    try:
        return update_invoice(db, invoice, payload)
    except (MissingReference, DuplicateInvoiceNumber, InvalidLineItem, InvalidDiscount) as exc:
        _raise_for_invoice_error(exc)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(invoice_id: str, db: Session = Depends(get_db)):
    invoice = _get_invoice(db, invoice_id)
    invoice_crud.delete(db, db_obj=invoice)
