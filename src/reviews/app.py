"""Reviews FastAPI application.

Serves the review API over HTTP. Each ``/reviews`` request runs inside the
Reviews domain context so the Protean-backed store can reach its
repository.

Usage:
    uvicorn reviews.app:create_app --factory --host 0.0.0.0 --port 8000 --reload

There is no module-level app instance: the domain imports every module in
this package while initializing, and building the app initializes it.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from reviews.api import register_review_exception_handlers, review_router
from reviews.domain import reviews
from reviews.utils.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)


def create_app(init_domain: bool = True) -> FastAPI:
    """Build the application. Pass ``init_domain=False`` when the caller already initialized the domain."""
    configure_logging()

    if init_domain:
        reviews.init()

    app = FastAPI(
        title="Reviews API",
        description="Company reviews: CRUD, listings, and average ratings",
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
        """Push the Reviews domain context and bind request details to the log context."""
        add_context(method=request.method, path=request.url.path)
        try:
            if request.url.path.startswith("/reviews"):
                with reviews.domain_context():
                    return await call_next(request)
            return await call_next(request)
        finally:
            clear_context()

    app.include_router(review_router)
    register_review_exception_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    logger.info("Reviews API ready")
    return app
