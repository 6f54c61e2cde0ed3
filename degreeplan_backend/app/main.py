import requests
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router as api_router
from app.core.config import settings
from app.core.database import engine
from app.core.logging_config import configure_logging
from app.models.base import Base
from app.services.catalog_cache import TTLCache
import app.models  # noqa: F401

configure_logging(settings.log_level)

app = FastAPI(title="DegreePlan API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Catalog lookups shared across requests; owned by the app, not a module global
app.state.catalog_cache = TTLCache(
    ttl=settings.catalog_cache_ttl_seconds,
    capacity=settings.catalog_cache_capacity,
)
app.state.http_session = requests.Session()

app.include_router(api_router)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)


@app.on_event("shutdown")
def on_shutdown():
    app.state.http_session.close()


@app.get("/health")
def health_check():
    return {"status": "ok"}
