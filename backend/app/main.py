# Ledgerly Invoicing backend entrypoint: FastAPI app, routers and lifecycle hooks.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.settings import get_settings
from backend.app.core.logging_config import configure_logging
from backend.app.api import customers
from backend.app.api import taxes
from backend.app.api import items
from backend.app.api import invoices
from backend.app.api import templates
from backend.app.core.dev_seed import ensure_default_template
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)

settings = get_settings()
app = FastAPI(title=settings.app_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(customers.router)
app.include_router(taxes.router)
app.include_router(items.router)
app.include_router(invoices.router)
app.include_router(templates.router)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Storage failure"})


@app.get("/")
def read_root():
    return {"app": "Ledgerly Invoicing backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def open_storage():
    configure_logging(settings.log_level)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_template(db)
    finally:
        db.close()
    logger.info("%s started (environment=%s)", settings.app_name, settings.environment)


@app.on_event("shutdown")
def close_storage():
    engine.dispose()
    logger.info("%s stopped", settings.app_name)
