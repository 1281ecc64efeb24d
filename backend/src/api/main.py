"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import auth, continue_watching, health, profiles, search
from core.config import get_settings
from services.exceptions import AccountLayerError, ValidationError

API_PREFIX = "/api/v1"

app_settings = get_settings()

logging.basicConfig(
    level=app_settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


app = FastAPI(
    title="AuraStream API",
    description="Accounts, viewer profiles and continue-watching for the AuraStream catalog.",
    version="0.1.0",
)


def failure_response(status_code: int, message: str, field: str | None = None) -> JSONResponse:
    """Structured failure body shared by every error path."""
    content: dict[str, object] = {"success": False, "message": message}
    if field is not None:
        content["field"] = field
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(AccountLayerError)
async def account_layer_exception_handler(
    _request: Request, exc: AccountLayerError,
) -> JSONResponse:
    """Translate service exceptions into structured failure responses."""
    field = exc.field if isinstance(exc, ValidationError) else None
    return failure_response(exc.status_code, exc.message, field)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed requests as 400 with the first offending field."""
    errors = exc.errors()
    if not errors:
        return failure_response(400, "Invalid request")
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[-1] if loc else None
    msg = first.get("msg", "invalid")
    if first.get("type") == "missing":
        message = f"{field} is required" if field else "All fields are required"
    else:
        message = f"{field}: {msg}" if field else msg
    return failure_response(400, message, field)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, _exc: Exception) -> JSONResponse:
    """Log unexpected failures and hide their details from clients."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return failure_response(500, "Internal server error")


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(profiles.router, prefix=API_PREFIX)
app.include_router(continue_watching.router, prefix=API_PREFIX)
app.include_router(search.router, prefix=API_PREFIX)
