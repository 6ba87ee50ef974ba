"""FastAPI application factory.

Wires the order-placement services explicitly from settings and maps
domain errors to HTTP responses. The marketplace domain must be initialized
before the app serves requests.
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.api.routes import order_router, product_router, user_router
from marketplace.config import Settings, get_settings
from marketplace.domain import marketplace
from marketplace.errors import (
    InsufficientFunds,
    InsufficientProductStock,
    LockContention,
    MarketplaceError,
    NotAuthorizedToPerformAction,
    ProductNotFound,
    UserNotFound,
)
from marketplace.locking import build_coordinator
from marketplace.order.placement import OrderPlacementService, PlacementDependencies
from marketplace.order.repository import OrderStore
from marketplace.product.service import ProductService
from marketplace.user.service import UserService
from marketplace.utils.logging import add_context, clear_context

_ERROR_STATUS = {
    ProductNotFound: 404,
    UserNotFound: 404,
    InsufficientFunds: 402,
    NotAuthorizedToPerformAction: 403,
    InsufficientProductStock: 409,
    LockContention: 503,
}


def build_dependencies(settings: Settings) -> PlacementDependencies:
    return PlacementDependencies(
        users=UserService(marketplace),
        products=ProductService(marketplace, max_attempts=settings.stock_update_attempts),
        orders=OrderStore(marketplace),
        locks=build_coordinator(settings),
    )


def create_app(settings: Settings | None = None, dependencies: PlacementDependencies | None = None) -> FastAPI:
    settings = settings or get_settings()
    dependencies = dependencies or build_dependencies(settings)

    app = FastAPI(
        title="Marketplace API",
        description="Buyers, sellers, products and order placement",
    )
    app.state.order_placement = OrderPlacementService(dependencies, lock_max_attempts=settings.lock_max_attempts)
    app.state.order_store = dependencies.orders

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the marketplace domain context and tag logs with a request id."""
        add_context(request_id=request.headers.get("x-request-id") or uuid4().hex)
        try:
            with marketplace.domain_context():
                return await call_next(request)
        finally:
            clear_context()

    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        status_code = next(
            (code for error_cls, code in _ERROR_STATUS.items() if isinstance(exc, error_cls)),
            500,
        )
        headers = {"Retry-After": "1"} if isinstance(exc, LockContention) else None
        return JSONResponse(status_code=status_code, content={"error": str(exc)}, headers=headers)

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"error": exc.messages})

    @app.exception_handler(ObjectNotFoundError)
    async def not_found_handler(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    app.include_router(user_router)
    app.include_router(product_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": marketplace.name,
                "lock_backend": settings.lock_backend,
            }
        )

    return app
