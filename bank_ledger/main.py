"""
Bank Ledger FastAPI application.

This is the entry point for the application.
All routers are registered here. The ledger store is opened
when the application starts and saved when it shuts down.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from bank_ledger.config import get_settings
from bank_ledger.logging_config import setup_logging
from bank_ledger.api.customers import router as customers_router
from bank_ledger.api.health import router as health_router
from bank_ledger.api.transactions import router as transactions_router
from bank_ledger.services.ledger_store import open_store

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    with open_store(settings.LEDGER_FILE) as store:
        app.state.store = store
        yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="A minimal customer and account ledger backed by a flat file",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(customers_router)
app.include_router(transactions_router)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
