"""Read and delete operations for invoices; writes live in services.invoices."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from backend.app.models.invoice import Invoice

logger = logging.getLogger(__name__)


class CRUDInvoice:
    def get(self, db: Session, *, invoice_id: str) -> Optional[Invoice]:
        return (
            db.query(Invoice)
            .options(joinedload(Invoice.customer), selectinload(Invoice.line_items))
            .filter(Invoice.id == invoice_id)
            .first()
        )

    def get_multi(self, db: Session, *, status: Optional[str] = None) -> List[Invoice]:
        query = db.query(Invoice).options(joinedload(Invoice.customer), selectinload(Invoice.line_items))
        if status:
            query = query.filter(Invoice.status == status)
        return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()

    def delete(self, db: Session, *, db_obj: Invoice) -> None:
        # Line items are removed by ON DELETE CASCADE
        obj_id, invoice_number = db_obj.id, db_obj.invoice_number
        db.delete(db_obj)
        db.commit()
        logger.info("Deleted invoice id=%s number=%s", obj_id, invoice_number)


invoice_crud = CRUDInvoice()
