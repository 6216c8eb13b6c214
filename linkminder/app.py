"""FastAPI application setup for LinkMinder."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linkminder.api.dependencies import get_app_settings, get_database, get_pin_store, get_save_pipeline
from linkminder.api.routes_admin import router as admin_router
from linkminder.api.routes_links import router as links_router
from linkminder.api.routes_rules import router as rules_router
from linkminder.core.errors import LinkMinderError
from linkminder.core.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="LinkMinder",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"^(chrome-extension|moz-extension)://.*$",
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(links_router, prefix="/links", tags=["links"])
app.include_router(rules_router, prefix="/rules", tags=["rules"])
app.include_router(admin_router, prefix="", tags=["admin"])


@app.exception_handler(LinkMinderError)
async def handle_user_error(request: Request, exc: LinkMinderError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


@app.on_event("startup")
async def startup() -> None:
    """Warm up core singletons on startup."""
    settings = get_app_settings()
    configure_logging(settings.log_level, use_json=settings.log_json)
    get_database()
    get_pin_store()
    get_save_pipeline()


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}
