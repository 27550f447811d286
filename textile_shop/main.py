# textile_shop/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from textile_shop.core.config import get_settings
from textile_shop.core.exceptions import register_exception_handlers
from textile_shop.database import create_db_and_tables
from textile_shop.services.cart_sessions import CartSessionStore
from textile_shop.services.fabric_catalog import FABRIC_CATALOG

# Import models so SQLModel metadata is populated before create_all()
from textile_shop.models import profile as _profile_models  # noqa: F401
from textile_shop.models import product as _product_models  # noqa: F401
from textile_shop.models import order as _order_models  # noqa: F401


# Routers
from textile_shop.routers.catalog import router as catalog_router
from textile_shop.routers.profiles import router as profiles_router
from textile_shop.routers.products import router as products_router
from textile_shop.routers.cart import router as cart_router
from textile_shop.routers.orders import router as orders_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
    """
    logger.info("Startup: %d fabric types loaded.", len(FABRIC_CATALOG))
    logger.info("Startup: connecting to Supabase Postgres...")
    try:
        create_db_and_tables()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

# One cart ledger per shopper, kept in process memory.
app.state.cart_sessions = CartSessionStore()

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(catalog_router, prefix=settings.API_V1_STR)
app.include_router(profiles_router, prefix=settings.API_V1_STR)
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)
app.include_router(orders_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "textile-shop-backend"}
