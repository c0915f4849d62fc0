from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.startup import configure_startup_logging, run_startup_checks
from core.config import get_settings
from core.database import init_db
from core.exceptions import register_exception_handlers
from modules.auth.routes.auth_routes import router as auth_router
from modules.customers.routers.customer_router import router as customer_router
from modules.sales.routes.sale_routes import router as sale_router

settings = get_settings()
configure_startup_logging(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        init_db()
    run_startup_checks(settings)
    yield


app = FastAPI(
    title="Storyst - Sales Tracking API",
    description="""
    Multi-tenant sales tracking API.

    Customers register, authenticate with a bearer token, record their own
    sales and query per-day totals plus cross-customer leaderboards
    (top customer by volume, average sale value and purchase count).
    """,
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== Routers (auth first) ==========
app.include_router(auth_router)
app.include_router(customer_router)
app.include_router(sale_router)


@app.get("/")
def read_root():
    return {"message": "Storyst API is running"}
