# boxmfg/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from boxmfg import config
from boxmfg.api.branches import router as branches_router
from boxmfg.api.clients import router as clients_router
from boxmfg.api.dashboard import router as dashboard_router
from boxmfg.api.invoices import router as invoices_router
from boxmfg.api.materials import router as materials_router
from boxmfg.api.order_items import router as order_items_router
from boxmfg.api.orders import router as orders_router
from boxmfg.api.payments import router as payments_router
from boxmfg.api.products import router as products_router
from boxmfg.api.shipments import router as shipments_router
from boxmfg.db.engine import init_db, is_degraded
from boxmfg.errors import AppError, DatabaseError, ValidationError

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title="Box Manufacturing API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Error envelope ----

def _error_body(exc: AppError) -> dict:
    body = {"success": False, "message": exc.message, "error": exc.error}
    if isinstance(exc, ValidationError) and exc.errors:
        body["errors"] = exc.errors
    return body


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.error)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc))


def _field_name(loc) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Every failing field is reported, not just the first one
    messages = [f"{_field_name(e['loc'])}: {e['msg']}" for e in exc.errors()]
    return JSONResponse(
        status_code=400,
        content=_error_body(ValidationError.from_messages(messages)),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=_error_body(DatabaseError()))


@app.get("/health")
def health_check():
    return {"status": "ok", "storage": "in-memory" if is_degraded() else "database"}


app.include_router(clients_router)
app.include_router(branches_router)
app.include_router(materials_router)
app.include_router(products_router)
app.include_router(orders_router)
app.include_router(order_items_router)
app.include_router(invoices_router)
app.include_router(payments_router)
app.include_router(shipments_router)
app.include_router(dashboard_router)
