# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from storefront.api import register_api
from storefront.data.database import Base, engine
from storefront.data import models  # noqa: F401  registers every model in Base.metadata
from storefront.data.seed import seed
from storefront.utils.retry import db_retry
from storefront.utils.settings import HOST, PORT, SEED_DEMO_DATA
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@db_retry()
def create_tables(bind=engine):
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=bind)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        create_tables()
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    if SEED_DEMO_DATA:
        seed()

    yield

    logger.info("Shutting down, closing database connections")
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )
    return register_api(app)


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
