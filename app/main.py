import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.logging import configure_logging
from app.db.init_db import init_db
from app.services.pricing import InvalidArgument

# Import routers
from app.api.auth import router as auth_router
from app.api.users import router as users_router
from app.api.plans import router as plans_router
from app.api.discounts import router as discounts_router
from app.api.subscriptions import router as subscriptions_router
from app.api.dashboard import router as dashboard_router
from app.api.search import router as search_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s ready (env=%s)", settings.app_name, settings.app_env)
    yield

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidArgument)
    async def invalid_argument_handler(request: Request, exc: InvalidArgument):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/health")
    def health():
        return {"status" : "ok", "env" : settings.app_env}

    # Include authentication routes
    app.include_router(auth_router)
    # Include admin resources
    app.include_router(users_router)
    app.include_router(plans_router)
    app.include_router(discounts_router)
    app.include_router(subscriptions_router)
    # Include dashboard widgets and global search
    app.include_router(dashboard_router)
    app.include_router(search_router)

    return app

app = create_app()
