"""
RocketCart - FastAPI application.

Run with the default wiring (shop API + Upstash Redis from environment):
    uvicorn rocketcart.app:create_app --factory
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from rocketcart.cart import CartEngine, create_cart_engine
from rocketcart.logging import get_logger
from rocketcart.routers import cart_router

logger = get_logger(__name__)


def create_app(engine: Optional[CartEngine] = None) -> FastAPI:
    """Create the app around engine, or around a default engine built from config."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Cart loaded with {len(app.state.cart_engine.cart)} product(s)")
        yield
        await app.state.cart_engine.close()

    app = FastAPI(title="RocketCart", lifespan=lifespan)
    app.state.cart_engine = engine or create_cart_engine()
    app.include_router(cart_router)

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok"}

    return app
