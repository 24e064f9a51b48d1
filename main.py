from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from core.config_loader import settings
from core.database import SessionLocal, init_db
from core.logging import RequestContextLogMiddleware, setup_logging

from user.router import user_router
from role.router import role_router
from application.router import application_router
from location.router import location_router
from company.router import company_router
from equipment.router import equipment_router
from certificate.router import certificate_router
from seed.seeder import run_seed
import models_bootstrap

setup_logging()

openapi_tags = [
    {"name": "Users", "description": "User accounts, role assignment and the navigation menu"},
    {"name": "Roles", "description": "Roles and their application permissions"},
    {"name": "Applications", "description": "Menu applications"},
    {"name": "Locations", "description": "Location records and hierarchy"},
    {"name": "Setup", "description": "Company details"},
    {"name": "Equipment", "description": "Equipment register"},
    {"name": "Certificates", "description": "Certificates, expiry and approval workflow"},
    {"name": "Health Checks", "description": "Application health checks"},
]


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.ENV in ("prod", "production") and settings.SECRET_KEY == "change-me":
        raise RuntimeError("SECRET_KEY must be set to a strong value in production")
    init_db()
    if settings.SEED_ON_STARTUP:
        with SessionLocal() as db:
            run_seed(db)
    logger.info("{} ready (env={})", settings.APP_NAME, settings.ENV)
    yield


app = FastAPI(title=settings.APP_NAME, openapi_tags=openapi_tags, lifespan=lifespan)

app.add_middleware(RequestContextLogMiddleware)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(user_router, prefix="/api")
app.include_router(role_router, prefix="/api")
app.include_router(application_router, prefix="/api")
app.include_router(location_router, prefix="/api")
app.include_router(company_router, prefix="/api")
app.include_router(equipment_router, prefix="/api")
app.include_router(certificate_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
