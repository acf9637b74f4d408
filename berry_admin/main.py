import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from berry_admin.config import settings
from berry_admin.database import Base, engine
from berry_admin.errors import AdminServiceError
from berry_admin.routers import auth, data

logger = logging.getLogger(__name__)


def _run_migrations() -> None:
    from alembic import command
    from alembic.config import Config

    root_dir = Path(__file__).resolve().parent.parent
    alembic_cfg = Config(str(root_dir / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(root_dir / "alembic"))
    command.upgrade(alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.run_migrations:
        try:
            _run_migrations()
        except Exception:
            logging.exception("Alembic upgrade failed")
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title="Berry Rewards Admin", lifespan=lifespan)


# must stay inside CORSMiddleware (registered before it) so 500s carry CORS headers
@app.middleware("http")
async def unhandled_error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.cors_origin_regex,
    allow_credentials=True,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


@app.exception_handler(AdminServiceError)
async def admin_service_error_handler(request: Request, exc: AdminServiceError):
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})


app.include_router(auth.router)
app.include_router(data.router)


@app.get("/health")
def health():
    return {"status": "ok"}
