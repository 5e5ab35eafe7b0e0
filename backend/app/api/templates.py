"""Invoice PDF template endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from backend.app.crud.crud_template import template_crud
from backend.app.db.session import get_db
from backend.app.models.template import Template
from backend.app.schemas.template import TemplateCreate, TemplateRead, TemplateUpdate

router = APIRouter(prefix="/api/templates", tags=["templates"])


def _get_template(db: Session, template_id: str) -> Template:
    template = template_crud.get(db, template_id=template_id)
    if not template:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    return template


@router.get("/", response_model=list[TemplateRead])
async def list_templates(db: Session = Depends(get_db)):
    return template_crud.get_multi(db)


@router.post("/", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
async def create_template(template_in: TemplateCreate, db: Session = Depends(get_db)):
    return template_crud.create(db, obj_in=template_in)


@router.get("/{template_id}", response_model=TemplateRead)
async def get_template(template_id: str, db: Session = Depends(get_db)):
    return _get_template(db, template_id)


@router.put("/{template_id}", response_model=TemplateRead)
async def update_template(template_id: str, template_in: TemplateUpdate, db: Session = Depends(get_db)):
    template = _get_template(db, template_id)
    return template_crud.update(db, db_obj=template, obj_in=template_in)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(template_id: str, db: Session = Depends(get_db)):
    template = _get_template(db, template_id)
    template_crud.delete(db, db_obj=template)
