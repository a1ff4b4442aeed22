"""FastAPI application assembly for the storefront domain."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.api.errors import register_error_handlers
from storefront.api.reports import report_router
from storefront.api.routes import routers
from storefront.domain import storefront
from storefront.utils.logging import add_context, clear_context


def create_app() -> FastAPI:
    """Build the API around an already initialized storefront domain."""
    app = FastAPI(
        title="Storefront API",
        description="E-commerce storefront: catalogue, carts, checkout, orders and reports",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and bind request details to log lines."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        with storefront.domain_context():
            response = await call_next(request)
        return response

    register_exception_handlers(app)
    register_error_handlers(app)

    for router in routers:
        app.include_router(router)
    app.include_router(report_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
