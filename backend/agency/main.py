import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from .config import settings
from .core.errors import InvalidInput, NotFound, StoreUnavailable
from .database import Base, get_engine
from .models import artist, notice, performance, setting, user  # noqa: F401  registra le tabelle su Base.metadata
from .routers import artist as artist_router
from .routers import auth as auth_router
from .routers import notice as notice_router
from .routers import performance as performance_router
from .routers import settings as settings_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = get_engine()
    if engine is not None:
        Base.metadata.create_all(bind=engine)
    else:
        logger.warning("Avvio senza database: letture vuote, scritture 503")
    yield


app = FastAPI(title="Booking Agency", docs_url=None, redoc_url=None, lifespan=lifespan)

# cookie SameSite=None: il frontend può stare su un altro dominio
if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# --- API (procedure "gruppo.nome" sotto /api) ---
app.include_router(auth_router.router)
app.include_router(artist_router.router)
app.include_router(performance_router.router)
app.include_router(notice_router.router)
app.include_router(settings_router.router)


# --- Errori dei servizi -> risposte strutturate ---
@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Vincolo violato su %s: %s", request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content={"detail": "Vincolo del database violato", "error": str(exc.orig)},
    )


@app.get("/ping")
def ping():
    return {"ok": True}
