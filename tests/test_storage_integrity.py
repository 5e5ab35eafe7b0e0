from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice
from backend.app.models.invoice_line_item import InvoiceLineItem
from backend.app.models.item import Item, ItemTax
from backend.app.models.tax import Tax


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _seed(db):
    customer = Customer(name="Acme")
    tax = Tax(name="GST", percentage=Decimal("18.00"))
    item = Item(name="Widget", unit_price=Decimal("100.00"))
    item.tax_links = [ItemTax(tax=tax)]
    invoice = Invoice(
        invoice_number="INV-DB-1",
        customer=customer,
        issue_date=date(2026, 1, 1),
        subtotal=Decimal("200.00"),
        total_tax=Decimal("36.00"),
        total=Decimal("236.00"),
    )
    invoice.line_items = [
        InvoiceLineItem(item=item, item_name="Widget", quantity=2, unit_price=Decimal("100.00"), total=Decimal("200.00"))
    ]
    db.add_all([customer, tax, item, invoice])
    db.commit()
    return customer, tax, item, invoice


def test_database_cascades_tax_links():
    db = SessionLocal()
    try:
        _, tax, _, _ = _seed(db)
        db.execute(delete(Tax).where(Tax.id == tax.id))
        db.commit()
        assert db.query(ItemTax).count() == 0
    finally:
        db.close()


def test_database_cascades_line_items_and_nulls_item_reference():
    db = SessionLocal()
    try:
        _, _, item, invoice = _seed(db)
        db.execute(delete(Item).where(Item.id == item.id))
        db.commit()
        line = db.query(InvoiceLineItem).one()
        assert line.item_id is None
        assert line.total == Decimal("200.00")

        db.execute(delete(Invoice).where(Invoice.id == invoice.id))
        db.commit()
        assert db.query(InvoiceLineItem).count() == 0
    finally:
        db.close()


def test_invoice_number_unique_in_schema():
    db = SessionLocal()
    try:
        customer, _, _, _ = _seed(db)
        db.add(
            Invoice(
                invoice_number="INV-DB-1",
                customer_id=customer.id,
                issue_date=date(2026, 1, 2),
                subtotal=0,
                total_tax=0,
                total=0,
            )
        )
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()
    finally:
        db.close()
