"""CRUD operations for invoice PDF templates."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.models.template import Template
from backend.app.schemas.template import TemplateCreate, TemplateUpdate

logger = logging.getLogger(__name__)


class CRUDTemplate:
    def _clear_other_defaults(self, db: Session, keep_id: Optional[str] = None) -> None:
        query = db.query(Template).filter(Template.is_default.is_(True))
        if keep_id is not None:
            query = query.filter(Template.id != keep_id)
        query.update({Template.is_default: False}, synchronize_session="fetch")

    def create(self, db: Session, *, obj_in: TemplateCreate) -> Template:
        obj = Template(**obj_in.model_dump())
        if obj.is_default:
            self._clear_other_defaults(db)
        db.add(obj)
        db.commit()
        db.refresh(obj)
        logger.info("Created template id=%s default=%s", obj.id, obj.is_default)
        return obj

    def get(self, db: Session, *, template_id: str) -> Optional[Template]:
        return db.query(Template).filter(Template.id == template_id).first()

    def get_default(self, db: Session) -> Optional[Template]:
        return db.query(Template).filter(Template.is_default.is_(True)).first()

    def get_multi(self, db: Session) -> List[Template]:
        return db.query(Template).order_by(Template.created_at.desc(), Template.id.desc()).all()

    def update(self, db: Session, *, db_obj: Template, obj_in: TemplateUpdate) -> Template:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_obj, field, value)
        if update_data.get("is_default"):
            self._clear_other_defaults(db, keep_id=db_obj.id)
        db.commit()
        db.refresh(db_obj)
        logger.info("Updated template id=%s fields=%s", db_obj.id, sorted(update_data))
        return db_obj

    def delete(self, db: Session, *, db_obj: Template) -> None:
        obj_id = db_obj.id
        db.delete(db_obj)
        db.commit()
        logger.info("Deleted template id=%s", obj_id)


template_crud = CRUDTemplate()
