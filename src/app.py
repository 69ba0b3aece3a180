"""Storefront FastAPI application.

Single web server exposing the catalogue, checkout, payment-confirmation and
order endpoints. Commands are processed synchronously within each request,
and each request is wrapped in the correct domain context based on its URL
prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 3000 --reload
"""

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from catalogue.domain import catalogue
from domains import init_domains
from ordering.domain import ordering
from payments.domain import payments
from services import Services, build_services
from shared.config import Settings, load_settings
from shared.exception_handlers import register_exception_handlers
from shared.logging import add_context, clear_context, configure_logging, get_env, get_logger

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at import so uvicorn workers share them.
init_domains()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/products": catalogue,
    "/checkout-sessions": payments,
    "/payment-confirmations": ordering,
    "/orders": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build and initialize services on startup unless a test injected them."""
    if get_env() != "test":
        configure_logging()

    owned = getattr(app.state, "services", None) is None
    if owned:
        app.state.services = build_services(app.state.settings)
        app.state.services.init()
    logger.info("Storefront started", env=app.state.settings.env)

    yield

    if owned:
        app.state.services.close()
        app.state.services = None
    logger.info("Storefront stopped")


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    """Application factory. Tests pass a prepared ``services`` container."""
    settings = settings or (services.settings if services else load_settings())

    app = FastAPI(
        title="Storefront API",
        description="Product listings, hosted checkout and order reconciliation",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_domain],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        # No domain match: pass through (health check, docs, etc.)
        return await call_next(request)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind a request id and path to every log line emitted for the request."""
        clear_context()
        request_id = request.headers.get("x-request-id") or uuid4().hex
        add_context(request_id=request_id, path=request.url.path, method=request.method)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    from catalogue.api import product_router
    from ordering.api import confirmation_router, order_router
    from payments.api import checkout_router

    app.include_router(product_router)
    app.include_router(checkout_router)
    app.include_router(confirmation_router)
    app.include_router(order_router)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello from Server.."

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "env": settings.env,
                "store": settings.store_backend,
                "gateway": settings.payment_gateway,
                "domains": [domain.name for domain in (catalogue, ordering, payments)],
            }
        )

    return app


app = create_app()
