import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import assets, health, network, transactions
from .api.errors import transaction_error_handler
from .config import settings
from .core.errors import TransactionError
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    logger.info(f"THORChain transaction API starting on {settings.network_mode}")
    yield


app = FastAPI(
    title="THORChain Transaction API",
    description="Local surface for asset normalization, unit conversion and transaction tracking",
    version="0.1.0",
    lifespan=lifespan,
)

# The API only ever serves the local wallet UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost", "http://127.0.0.1", "app://."],
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["*"],
)

app.add_exception_handler(TransactionError, transaction_error_handler)

app.include_router(health.router, tags=["Health"])
app.include_router(assets.router, tags=["Assets"])
app.include_router(network.router, tags=["Network"])
app.include_router(transactions.router, tags=["Transactions"])


@app.get("/")
async def root():
    return {
        "name": "THORChain Transaction API",
        "version": "0.1.0",
        "network": settings.network_mode,
        "docs": "/docs",
        "health": "/healthz",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "thortx.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
