import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException as FastAPIHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.sessions import SessionMiddleware

from . import crud, models  # noqa: F401  (models registers the tables on Base)
from .config import settings
from .database import Base, SessionLocal, engine
from .errors import CaseDeskError, InternalError
from .routes import auth as auth_routes
from .routes import cases as cases_routes
from .routes import clients as clients_routes
from .routes import stats as stats_routes
from .routes import users as users_routes
from .schemas import format_errors
from .stores import memory_users, use_memory
from .stores.sql import SqlUserStore

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Case management backend: users and roles, clients, inspection cases.",
    version="0.1.0",
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _seed_admin(users) -> None:
    crud.seed_default_admin(
        users,
        email=settings.default_admin_email,
        password=settings.default_admin_password,
        name=settings.default_admin_name,
    )


@app.on_event("startup")
def on_startup() -> None:
    logger.info("Starting %s with %s storage", settings.app_name, settings.storage_backend)
    if use_memory():
        _seed_admin(memory_users)
        return

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        _seed_admin(SqlUserStore(db))
    except SQLAlchemyError:
        db.rollback()
        raise
    finally:
        db.close()


@app.exception_handler(CaseDeskError)
async def casedesk_error_handler(request: Request, exc: CaseDeskError):
    if isinstance(exc, InternalError):
        logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Missing or empty required fields are a plain 400, not FastAPI's 422.
    return JSONResponse(
        {"detail": format_errors(exc.errors())},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(FastAPIHTTPException)
async def http_exception_handler(request: Request, exc: FastAPIHTTPException):
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled application error", exc_info=exc)
    return JSONResponse({"detail": "Internal server error"}, status_code=500)


app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(cases_routes.router)
app.include_router(clients_routes.router)
app.include_router(stats_routes.router)
