# Uvicorn application factory <https://www.uvicorn.org/#application-factories>
from contextlib import asynccontextmanager

from fastapi import FastAPI

from postlist.logging import logger
from postlist.middlewares.correlation_id import CorrelationIDMiddleware
from postlist.routing import collect_subrouters
from postlist.storage.db import wait_for_db
from postlist.storage.redis import RedisPool


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application startup and shutdown.

    Startup waits for the database; shutdown closes the Redis pools opened
    by the count cache.
    """
    await wait_for_db()
    logger.info("Application startup complete")

    yield

    logger.info("Application shutdown initiated")
    await RedisPool.close_all()
    logger.info("Application shutdown complete")


def application() -> FastAPI:
    """
    Initializes and configures the FastAPI application.

    Routers are collected from ``postlist/api/http`` and every request runs
    through ``CorrelationIDMiddleware`` so that log lines carry a request id.
    """
    app = FastAPI(
        title="Post listing",
        description="Offset and cursor pagination over posts",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(collect_subrouters())

    app.add_middleware(CorrelationIDMiddleware)

    return app


app = application()  # Need for fastapi cli
