"""IPMS FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ipms.api.departments import router as departments_router
from ipms.api.evaluations import router as evaluations_router
from ipms.api.health import router as health_router
from ipms.api.ideas import router as ideas_router
from ipms.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="IPMS - Idea Pipeline Management Service",
    description="Moves ideas through the L1-L5 evaluation pipeline with an auditable stage history",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, tags=["Health"])
app.include_router(departments_router, prefix="/v1", tags=["Departments"])
app.include_router(ideas_router, prefix="/v1", tags=["Ideas"])
app.include_router(evaluations_router, prefix="/v1", tags=["Evaluations"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "IPMS", "version": "0.1.0", "docs": "/docs"}
