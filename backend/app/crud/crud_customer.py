"""CRUD operations for customers."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.customer import Customer
from backend.app.models.invoice import Invoice
from backend.app.schemas.customer import CustomerCreate, CustomerUpdate

logger = logging.getLogger(__name__)


class CRUDCustomer:
    def create(self, db: Session, *, obj_in: CustomerCreate) -> Customer:
        obj = Customer(**obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        logger.info("Created customer id=%s", obj.id)
        return obj

    def get(self, db: Session, *, customer_id: str) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.id == customer_id).first()

    def get_multi(self, db: Session) -> List[Customer]:
        return db.query(Customer).order_by(Customer.created_at.desc(), Customer.id.desc()).all()

    def update(self, db: Session, *, db_obj: Customer, obj_in: CustomerUpdate) -> Customer:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        logger.info("Updated customer id=%s fields=%s", db_obj.id, sorted(update_data))
        return db_obj

    def has_invoices(self, db: Session, *, customer_id: str) -> bool:
        return db.query(Invoice.id).filter(Invoice.customer_id == customer_id).first() is not None

    def delete(self, db: Session, *, db_obj: Customer) -> None:
        obj_id = db_obj.id
        db.delete(db_obj)
        db.commit()
        logger.info("Deleted customer id=%s", obj_id)


customer_crud = CRUDCustomer()
