# eduai/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eduai.api.v1.endpoints import admin, assignments, auth, contents, courses, health, users
from eduai.core.config import settings
from eduai.core.errors import ServiceError, service_error_handler
from eduai.core.logging_config import configure_logging
from eduai.db.session import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    init_db()
    logger.info(f"{settings.PROJECT_NAME} started")
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ServiceError, service_error_handler)

for router in (
    auth.router,
    users.router,
    admin.router,
    courses.router,
    assignments.router,
    contents.router,
    health.router,
):
    app.include_router(router, prefix="/api/v1")
