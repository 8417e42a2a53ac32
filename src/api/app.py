"""FastAPI application for the Team Reports Mini App."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import __version__
from src.api.routes.auth import router as auth_router
from src.api.routes.health import router as health_router
from src.api.routes.helpers import validation_detail
from src.api.routes.reports import router as reports_router
from src.api.routes.sheets import router as sheets_router
from src.api.routes.teams import router as teams_router
from src.api.routes.templates import router as templates_router
from src.api.routes.users import router as users_router
from src.api.routes.webhook import router as webhook_router
from src.config.settings import settings
from src.utils.logger import logger

app = FastAPI(
    title="Team Reports API",
    description="Report submission, team management and bot webhook",
    version=__version__,
)

# CORS restricted to the Mini App origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.webapp_url],
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type"],
)

# Register routes
app.include_router(reports_router)
app.include_router(teams_router)
app.include_router(users_router)
app.include_router(templates_router)
app.include_router(webhook_router)
app.include_router(auth_router)
app.include_router(sheets_router)
app.include_router(health_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed or incomplete bodies are client errors (400), keyed by field."""
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors[".".join(location) or "body"] = error.get("msg", "Invalid value")
    logger.info(f"Rejected {request.method} {request.url.path}: {sorted(errors)}")
    return JSONResponse(status_code=400, content={"detail": validation_detail(errors)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
