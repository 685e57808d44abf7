"""Application factory for the FastAPI app.

Keeps app construction (middleware, handlers, routers, docs) in one place so
tests can build fresh instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from ratekey.api.routes import health_router, rate_limit_router
from ratekey.core.config import settings
from ratekey.core.exception_handlers import setup_exception_handlers
from ratekey.core.logging import configure_logging
from ratekey.core.middleware import request_id_middleware
from ratekey.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Rate Limit Key API",
        description=(
            "Derives per-caller rate limit bucket keys (rl:<category>:<identifier>) "
            "from the Authorization bearer token, falling back to the client "
            "address and then to 'anonymous'."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(rate_limit_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
