import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from config import Settings
from database import check_connection, create_db_engine, init_db, make_session_factory
from routers import auth_router, visits_router, payments_router
from services import build_password_context
from services.errors import ServiceError
from utils.gateway import RazorpayClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    owns_engine = app.state.engine is None
    engine = app.state.engine or create_db_engine(settings.database_url, echo=settings.sql_echo)
    # Fail fast: do not serve requests with a broken database
    if not check_connection(engine):
        raise RuntimeError("Cannot reach the database at startup")
    if settings.auto_create_tables:
        init_db(engine)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    if app.state.gateway is None:
        app.state.gateway = RazorpayClient(
            settings.razorpay_key_id,
            settings.razorpay_key_secret,
            base_url=settings.razorpay_base_url,
            timeout=settings.gateway_timeout,
        )
        if not app.state.gateway.configured:
            logger.warning("RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET not set; payment routes will fail")

    logger.info("Skyline Estates backend started")
    try:
        yield
    finally:
        close = getattr(app.state.gateway, "close", None)
        if close is not None:
            close()
        if owns_engine:
            engine.dispose()
        logger.info("Skyline Estates backend stopped")


def _error_response(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": kind, "message": message},
    )


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed with %s: %s", request.method, request.url.path, exc.kind, exc.__cause__ or exc.message)
    return _error_response(exc.status_code, exc.kind, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    message = "Invalid request body"
    if any(fields):
        message = f"Invalid fields: {', '.join(f for f in fields if f)}"
    return _error_response(400, "ValidationError", message)


def create_app(
    settings: Optional[Settings] = None,
    gateway=None,
    engine: Optional[Engine] = None,
) -> FastAPI:
    """
    Build the application.

    The database engine and the payment gateway client are created at startup
    unless passed in (tests pass a SQLite engine URL and a fake gateway).
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Skyline Estates API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.gateway = gateway
    app.state.pwd_context = build_password_context(settings.bcrypt_rounds)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/")
    def health():
        return {"status": "ok", "service": "Skyline Estates backend"}

    app.include_router(auth_router)
    app.include_router(visits_router)
    app.include_router(payments_router)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=app.state.settings.port, reload=True)
