"""CRUD operations for catalog items and their tax links."""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from backend.app.models.item import Item, ItemTax
from backend.app.schemas.item import ItemCreate, ItemUpdate

logger = logging.getLogger(__name__)


def _unique(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))


class CRUDItem:
    def _replace_tax_links(self, db: Session, item: Item, tax_ids: Iterable[str]) -> None:
        # Old links are flushed out before the new set goes in; both happen in
        # the caller's transaction.
        item.tax_links.clear()
        db.flush()
        for tax_id in _unique(tax_ids):
            item.tax_links.append(ItemTax(tax_id=tax_id))

    def create(self, db: Session, *, obj_in: ItemCreate) -> Item:
        data = obj_in.model_dump(exclude={"tax_ids"})
        obj = Item(**data)
        obj.tax_links = [ItemTax(tax_id=tax_id) for tax_id in _unique(obj_in.tax_ids)]
        db.add(obj)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(obj)
        logger.info("Created item id=%s with %d tax link(s)", obj.id, len(obj.tax_links))
        return obj

    def get(self, db: Session, *, item_id: str) -> Optional[Item]:
        return db.query(Item).options(selectinload(Item.taxes)).filter(Item.id == item_id).first()

    def get_many(self, db: Session, *, item_ids: Iterable[str]) -> List[Item]:
        ids = list(item_ids)
        if not ids:
            return []
        return db.query(Item).options(selectinload(Item.taxes)).filter(Item.id.in_(ids)).all()

    def get_multi(self, db: Session) -> List[Item]:
        return (
            db.query(Item)
            .options(selectinload(Item.taxes))
            .order_by(Item.created_at.desc(), Item.id.desc())
            .all()
        )

    def update(self, db: Session, *, db_obj: Item, obj_in: ItemUpdate) -> Item:
        update_data = obj_in.model_dump(exclude_unset=True, exclude={"tax_ids"})
        try:
            for field, value in update_data.items():
                setattr(db_obj, field, value)
            if obj_in.tax_ids is not None:
                self._replace_tax_links(db, db_obj, obj_in.tax_ids)
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(db_obj)
        logger.info("Updated item id=%s fields=%s", db_obj.id, sorted(update_data))
        return db_obj

    def delete(self, db: Session, *, db_obj: Item) -> None:
        # Tax links cascade; historical line items keep their snapshot with item_id nulled
        obj_id = db_obj.id
        db.delete(db_obj)
        db.commit()
        logger.info("Deleted item id=%s", obj_id)


item_crud = CRUDItem()
