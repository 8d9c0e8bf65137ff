from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mercado.api.deps import build_services
from mercado.api.routes import router as api_router
from mercado.config import settings
from mercado.errors import AuthError, InsufficientCategory, MercadoError, NotFound, ValidationError
from mercado.logging import configure_logging, get_logger
from mercado.storage import db

app = FastAPI(title="Mercado Saludable API")
logger = get_logger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_STATUS_BY_ERROR = (
    (ValidationError, 422),
    (InsufficientCategory, 409),
    (NotFound, 404),
    (AuthError, 401),
)


@app.exception_handler(MercadoError)
async def mercado_error_handler(request: Request, exc: MercadoError) -> JSONResponse:
    status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(exc, kind)), 503)
    logger.info("request.failed path=%s kind=%s status=%s", request.url.path, type(exc).__name__, status)
    return JSONResponse(status_code=status, content={"detail": exc.user_message, "kind": type(exc).__name__})


@app.on_event("startup")
def on_startup() -> None:
    configure_logging()
    logger.info("startup: configuring services env=%s", settings.env)
    db.create_db_and_tables(db.engine)
    if not hasattr(app.state, "services"):
        app.state.services = build_services(db.engine)


app.include_router(api_router)
