"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from grochain_portal.api.errors import register_exception_handlers
from grochain_portal.api.middleware import MetricsMiddleware, RequestIDMiddleware
from grochain_portal.api.v1 import commissions, fintech, harvests, marketplace, partners
from grochain_portal.config import settings
from grochain_portal.infrastructure.observability.logging import setup_logging

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="GroChain Portal",
        description="Dashboard views over the GroChain marketplace API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(commissions.router, prefix="/v1", tags=["commissions"])
    app.include_router(partners.router, prefix="/v1", tags=["partners"])
    app.include_router(marketplace.router, prefix="/v1", tags=["marketplace"])
    app.include_router(fintech.router, prefix="/v1", tags=["fintech"])
    app.include_router(harvests.router, prefix="/v1", tags=["harvests"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
