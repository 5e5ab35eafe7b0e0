"""Invoice workflows: totals resolution, persistence and status aggregation."""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.app.crud.crud_customer import customer_crud
from backend.app.crud.crud_item import item_crud
from backend.app.models.invoice import INVOICE_STATUSES, Invoice
from backend.app.models.invoice_line_item import InvoiceLineItem
from backend.app.models.item import Item
from backend.app.schemas.invoice import InvoiceCreate, InvoiceUpdate, LineItemInput
from backend.app.services.totals import (
    InvoiceTotals,
    apply_discount,
    calculate_invoice_totals,
    normalize_discount,
    quantize_money,
)

logger = logging.getLogger(__name__)

_SCALAR_UPDATE_FIELDS = ("invoice_number", "customer_id", "issue_date", "due_date", "status")


class MissingReference(LookupError):
    """A referenced customer or item does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class DuplicateInvoiceNumber(Exception):
    def __init__(self, invoice_number: str):
        self.invoice_number = invoice_number
        super().__init__(f"Invoice number already exists: {invoice_number}")


def load_catalog(db: Session, item_ids: Iterable[str]) -> Dict[str, Item]:
    """Fetch the referenced items, failing on the first id that does not resolve."""
    wanted = list(dict.fromkeys(item_ids))
    found = {item.id: item for item in item_crud.get_many(db, item_ids=wanted)}
    for item_id in wanted:
        if item_id not in found:
            raise MissingReference("Item", item_id)
    return found


def tax_rates_for(catalog: Dict[str, Item]) -> Dict[str, List[Decimal]]:
    return {item_id: [tax.percentage for tax in item.taxes] for item_id, item in catalog.items()}


def compute_totals(
    db: Session, line_items: Sequence[LineItemInput], discount=None
) -> tuple[InvoiceTotals, Dict[str, Item]]:
    catalog = load_catalog(db, (line.item_id for line in line_items))
    totals = calculate_invoice_totals(line_items, tax_rates_for(catalog), discount)
    return totals, catalog


def _build_line_items(totals: InvoiceTotals, catalog: Dict[str, Item]) -> List[InvoiceLineItem]:
    return [
        InvoiceLineItem(
            item_id=line.item_id,
            item_name=catalog[line.item_id].name,
            position=position,
            quantity=line.quantity,
            unit_price=line.unit_price,
            total=line.line_total,
        )
        for position, line in enumerate(totals.lines)
    ]


def _invoice_number_taken(db: Session, invoice_number: str, exclude_id: Optional[str] = None) -> bool:
    query = db.query(Invoice.id).filter(Invoice.invoice_number == invoice_number)
    if exclude_id is not None:
        query = query.filter(Invoice.id != exclude_id)
    return query.first() is not None


def _commit_invoice(db: Session, invoice: Invoice) -> None:
    # Read before commit; a rollback expires the pending values
    invoice_number = invoice.invoice_number
    invoice_id = invoice.id
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if _invoice_number_taken(db, invoice_number, exclude_id=invoice_id):
            logger.warning("Invoice number collision on commit: %s", invoice_number)
            raise DuplicateInvoiceNumber(invoice_number)
        raise
    except Exception:
        db.rollback()
        raise


def create_invoice(db: Session, payload: InvoiceCreate) -> Invoice:
    if customer_crud.get(db, customer_id=payload.customer_id) is None:
        raise MissingReference("Customer", payload.customer_id)
    if _invoice_number_taken(db, payload.invoice_number):
        logger.warning("Rejected duplicate invoice number %s", payload.invoice_number)
        raise DuplicateInvoiceNumber(payload.invoice_number)

    totals, catalog = compute_totals(db, payload.line_items, payload.discount)

    invoice = Invoice(
        invoice_number=payload.invoice_number,
        customer_id=payload.customer_id,
        issue_date=payload.issue_date,
        due_date=payload.due_date,
        status=payload.status,
        subtotal=totals.subtotal,
        total_tax=totals.total_tax,
        discount=totals.discount,
        total=totals.total,
    )
    invoice.line_items = _build_line_items(totals, catalog)
    db.add(invoice)
    _commit_invoice(db, invoice)
    db.refresh(invoice)
    logger.info(
        "Created invoice id=%s number=%s lines=%d total=%s",
        invoice.id,
        invoice.invoice_number,
        len(totals.lines),
        invoice.total,
    )
    return invoice


def update_invoice(db: Session, invoice: Invoice, payload: InvoiceUpdate) -> Invoice:
    fields_set = payload.model_fields_set

    if payload.invoice_number is not None and payload.invoice_number != invoice.invoice_number:
        if _invoice_number_taken(db, payload.invoice_number, exclude_id=invoice.id):
            logger.warning("Rejected duplicate invoice number %s", payload.invoice_number)
            raise DuplicateInvoiceNumber(payload.invoice_number)
    if payload.customer_id is not None and customer_crud.get(db, customer_id=payload.customer_id) is None:
        raise MissingReference("Customer", payload.customer_id)

    discount = payload.discount if payload.discount is not None else invoice.discount

    totals = catalog = None
    if payload.line_items is not None:
        totals, catalog = compute_totals(db, payload.line_items, discount)

    try:
        for field in _SCALAR_UPDATE_FIELDS:
            if field not in fields_set:
                continue
            value = getattr(payload, field)
            if value is None and field != "due_date":
                continue
            setattr(invoice, field, value)

        if totals is not None:
            invoice.line_items.clear()
            db.flush()
            invoice.line_items.extend(_build_line_items(totals, catalog))
            invoice.subtotal = totals.subtotal
            invoice.total_tax = totals.total_tax
            invoice.discount = totals.discount
            invoice.total = totals.total
        elif payload.discount is not None:
            invoice.discount = quantize_money(normalize_discount(payload.discount))
            invoice.total = apply_discount(invoice.subtotal, invoice.total_tax, invoice.discount)
    except Exception:
        db.rollback()
        raise

    _commit_invoice(db, invoice)
    db.refresh(invoice)
    logger.info("Updated invoice id=%s fields=%s", invoice.id, sorted(fields_set))
    return invoice


def summarize_invoice_statuses(statuses: Iterable[str]) -> dict:
    """Count invoices overall and per status."""
    counts = {status: 0 for status in INVOICE_STATUSES}
    total = 0
    for status in statuses:
        total += 1
        if status in counts:
            counts[status] += 1
    return {"total": total, **counts}


def get_invoice_stats(db: Session) -> dict:
    statuses = (row.status for row in db.query(Invoice.status).all())
    return summarize_invoice_statuses(statuses)
