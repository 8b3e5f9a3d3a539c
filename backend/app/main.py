import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import config

logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")

from app.database import engine, SessionLocal
from app.models.base import Base
import app.models  # noqa: F401 - register all tables for create_all
from app.api.endpoints import admins, auctions, bids, invites, live, suppliers, vendor
from app.seed import seed_demo_auction, seed_preset_accounts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    if config.SEED_PRESET_ACCOUNTS or config.SEED_DEMO_AUCTION:
        db = SessionLocal()
        try:
            if config.SEED_PRESET_ACCOUNTS:
                seed_preset_accounts(db)
            if config.SEED_DEMO_AUCTION:
                seed_demo_auction(db)
        finally:
            db.close()
    yield


app = FastAPI(title="Speed Sourcing API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Errors are always {"message": ...} JSON so the client never has to parse HTML
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


# Lost races on a unique constraint, e.g. two first bids from one vendor
@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=409, content={"message": "Conflicting update, please retry"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.include_router(admins.router)
app.include_router(auctions.router)
app.include_router(invites.router)
app.include_router(vendor.router)
app.include_router(bids.router)
app.include_router(suppliers.router)
app.include_router(live.router)


def _database_ok() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        return False


@app.get("/health")
def health():
    """Health check endpoint for load balancers and readiness probes."""
    return {
        "status": "ok",
        "service": "speed-sourcing-backend",
        "database": "ok" if _database_ok() else "unavailable",
    }
