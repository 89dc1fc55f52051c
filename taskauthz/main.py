import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskauthz.core.database import get_prisma
from taskauthz.core.settings import settings
from taskauthz.domains.audit.routes import router as audit_router
from taskauthz.domains.auth.routes import router as session_router
from taskauthz.domains.authz.exceptions import DecisionNotRecordedError
from taskauthz.domains.authz.routes import router as authz_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    prisma = get_prisma()
    await prisma.connect()
    logger.info(f"Audit backend: {settings.AUDIT_BACKEND}")
    yield
    # Shutdown
    await prisma.disconnect()


app = FastAPI(
    title="Task Authorization API",
    description="Authorization and audit trail for the task-management API",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DecisionNotRecordedError)
async def decision_not_recorded_handler(
    _request: Request, exc: DecisionNotRecordedError
) -> JSONResponse:
    logger.error(f"Audit trail gap: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Audit trail unavailable"},
    )


# Include routers
app.include_router(audit_router, prefix="/api/v1")
app.include_router(authz_router, prefix="/api/v1")
app.include_router(session_router, prefix="/api/v1")


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": "Task Authorization API is running"}


@app.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}
