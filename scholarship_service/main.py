import time
import logging
import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .domain.errors import Forbidden, InvalidObjectId, InvalidTransition, NotFound, Unauthenticated, UpstreamFailure
from .infrastructure.cache import JsonCache
from .infrastructure.db import Database
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.payments import StripePaymentGateway
from .infrastructure.rate_limit import limiter
from .interfaces.http.routers import applications as applications_router
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import reviews as reviews_router
from .interfaces.http.routers import scholarships as scholarships_router
from .interfaces.http.routers import users as users_router

VERSION = "0.1.0"

log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="Scholarship Service", version=VERSION)
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def observe_request(request: Request, call_next):
    start_time = time.time()
    method = request.method
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(method=method, path=request.url.path)

    response = await call_next(request)

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    # label by route template so ids do not explode metric cardinality
    route = request.scope.get("route")
    endpoint = getattr(route, "path", request.url.path)
    duration = time.time() - start_time
    http_requests_total.labels(method=method, endpoint=endpoint, status=response.status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    logger.info(
        "http_request",
        status_code=response.status_code,
        duration_ms=round(duration * 1000, 2)
    )
    return response


def _error(code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=code, content={"detail": detail})


@app.exception_handler(Unauthenticated)
def on_unauthenticated(request: Request, exc: Unauthenticated):
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"detail": "Unauthenticated"},
                        headers={"WWW-Authenticate": "Bearer"})


@app.exception_handler(Forbidden)
def on_forbidden(request: Request, exc: Forbidden):
    return _error(status.HTTP_403_FORBIDDEN, "Forbidden")


@app.exception_handler(InvalidObjectId)
def on_invalid_id(request: Request, exc: InvalidObjectId):
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid id")


@app.exception_handler(NotFound)
def on_not_found(request: Request, exc: NotFound):
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(InvalidTransition)
def on_invalid_transition(request: Request, exc: InvalidTransition):
    return _error(status.HTTP_409_CONFLICT, str(exc))


@app.exception_handler(UpstreamFailure)
def on_upstream_failure(request: Request, exc: UpstreamFailure):
    logger.error("upstream_failure", error=str(exc))
    return _error(status.HTTP_502_BAD_GATEWAY, "Upstream service unavailable")


@app.exception_handler(SQLAlchemyError)
def on_store_failure(request: Request, exc: SQLAlchemyError):
    logger.error("store_failure", error=type(exc).__name__)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.on_event("startup")
def on_startup():
    logger.info("Starting scholarship service", version=VERSION)
    app.state.db = Database(settings.DATABASE_URL)
    app.state.db.create_all()
    app.state.db.ping()
    logger.info("Database connection established")
    app.state.cache = JsonCache.from_url(settings.REDIS_URL, settings.CACHE_TTL)
    app.state.payments = StripePaymentGateway.from_settings(settings)


@app.on_event("shutdown")
def on_shutdown():
    app.state.payments.close()
    app.state.cache.close()
    app.state.db.dispose()
    logger.info("Scholarship service stopped")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(auth_router.router)
app.include_router(users_router.router)
app.include_router(applications_router.router)
app.include_router(scholarships_router.router)
app.include_router(reviews_router.router)
