import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from krishi_setu.api.rest_routes.advisory import router as advisory_router
from krishi_setu.api.rest_routes.auth import router as auth_router
from krishi_setu.api.rest_routes.cultivation_guides import (
    router as cultivation_guides_router,
)
from krishi_setu.api.rest_routes.dashboard import router as dashboard_router
from krishi_setu.api.rest_routes.farms import router as farms_router
from krishi_setu.api.rest_routes.ledger import router as ledger_router
from krishi_setu.core.config import settings
from krishi_setu.core.mongodb import close_mongo_client, init_mongo_client

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_mongo_client()
    yield
    await close_mongo_client()


app = FastAPI(title="Krishi Setu API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(farms_router)
app.include_router(cultivation_guides_router)
app.include_router(ledger_router)
app.include_router(advisory_router)


@app.get("/")
async def root():
    return {"message": "Welcome to Krishi Setu!"}
