"""
FastAPI Application.

Serves the rated listing set and runs the periodic crawl in-process.

Run with:
    uvicorn src.api.main:app
"""

from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load .env file before settings are read
load_dotenv()

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from loguru import logger  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from config.settings import get_settings  # noqa: E402
from src.api.routes import health_router, listings_router  # noqa: E402
from src.crawler import get_area_names  # noqa: E402
from src.jobs import scheduler  # noqa: E402
from src.jobs.harvester import close_harvester  # noqa: E402
from src.middleware import setup_middleware  # noqa: E402
from src.utils.log_config import configure_logging  # noqa: E402

configure_logging(get_settings().log_level)

log = logger.bind(module="App")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the crawl scheduler; on shutdown stop it and release the fetcher."""
    log.info(f"Monitoring {len(get_area_names())} areas: {', '.join(get_area_names())}")
    scheduler.start()

    yield

    scheduler.shutdown()
    await close_harvester()
    log.info("Server stopped")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"success": false, "message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
    )


def create_app() -> FastAPI:
    """Build the API application."""
    application = FastAPI(
        title="House Listing Rater API",
        description="Crawls house listings per area and rates them by relative price",
        version="0.1.0",
        lifespan=lifespan,
    )

    setup_middleware(application, get_settings())

    application.include_router(health_router)
    application.include_router(listings_router)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)

    return application


app = create_app()
