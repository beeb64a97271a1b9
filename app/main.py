import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import CORS_ORIGINS, ENV, NOTIFICATIONS_POLL_SECONDS
from app.core.database import Base, SessionLocal, engine
from app.core.logging_setup import configure_logging
from app.middleware.observability import ObservabilityMiddleware
import app.models  # garante que os models são importados antes do create_all
from app.services.notifications import NotificationService

from app.routers.admin_whatsapp import router as admin_whatsapp_router
from app.routers.freight import router as freight_router
from app.routers.notifications import router as notifications_router
from app.routers.webhook import router as webhook_router

configure_logging()

logger = logging.getLogger(__name__)


def _startup_tasks() -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("[STARTUP] ERROR startup failed")
        raise
    logger.info("[STARTUP] env=%s tables ready", ENV)


def _generate_notifications_once() -> int:
    db = SessionLocal()
    try:
        return NotificationService(db).generate_automatic_notifications()
    finally:
        db.close()


async def _notifications_loop(interval_seconds: int) -> None:
    while True:
        try:
            await run_in_threadpool(_generate_notifications_once)
        except Exception:
            logger.exception("[NOTIFICATIONS] ciclo falhou")
        await asyncio.sleep(interval_seconds)


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    task = None
    if NOTIFICATIONS_POLL_SECONDS > 0:
        task = asyncio.create_task(_notifications_loop(NOTIFICATIONS_POLL_SECONDS))
    yield
    if task is not None:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task


app = FastAPI(
    title="FestaLog API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

# Routers
app.include_router(webhook_router)
app.include_router(admin_whatsapp_router)
app.include_router(freight_router)
app.include_router(notifications_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
