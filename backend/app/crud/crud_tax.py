"""CRUD operations for tax rates."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from backend.app.models.tax import Tax
from backend.app.schemas.tax import TaxCreate, TaxUpdate

logger = logging.getLogger(__name__)


class CRUDTax:
    def create(self, db: Session, *, obj_in: TaxCreate) -> Tax:
        obj = Tax(**obj_in.model_dump())
        db.add(obj)
        db.commit()
        db.refresh(obj)
        logger.info("Created tax id=%s percentage=%s", obj.id, obj.percentage)
        return obj

    def get(self, db: Session, *, tax_id: str) -> Optional[Tax]:
        return db.query(Tax).filter(Tax.id == tax_id).first()

    def get_many(self, db: Session, *, tax_ids: Iterable[str]) -> List[Tax]:
        ids = list(tax_ids)
        if not ids:
            return []
        return db.query(Tax).filter(Tax.id.in_(ids)).all()

    def get_multi(self, db: Session) -> List[Tax]:
        return db.query(Tax).order_by(Tax.created_at.desc(), Tax.id.desc()).all()

    def update(self, db: Session, *, db_obj: Tax, obj_in: TaxUpdate) -> Tax:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        db.commit()
        db.refresh(db_obj)
        logger.info("Updated tax id=%s fields=%s", db_obj.id, sorted(update_data))
        return db_obj

    def delete(self, db: Session, *, db_obj: Tax) -> None:
        # item_taxes rows go with it through ON DELETE CASCADE
        obj_id = db_obj.id
        db.delete(db_obj)
        db.commit()
        logger.info("Deleted tax id=%s", obj_id)


tax_crud = CRUDTax()
