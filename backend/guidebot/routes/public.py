# /guidebot/routes/public.py

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import generate_latest
from datetime import datetime

from guidebot.config.settings import settings
from guidebot.utils.dependencies import verify_metrics_access
from guidebot.services.db_service import db_service
from guidebot.services.cache_service import cache_service

# Unauthenticated endpoints: service info, health probes and metrics
# (the latter behind X-API-KEY when one is configured).

router = APIRouter()

@router.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "Guidebot Chatbot Flow Resolver",
        "version": "1.0.0",
        "status": "operational",
        "environment": settings.environment
    }

@router.get("/health", summary="Basic Health Check")
async def health_check():
    """Basic health check for load balancers."""
    return {"status": "healthy", "timestamp": datetime.utcnow()}

@router.get("/health/ready", summary="Readiness Probe")
async def readiness_check():
    """Readiness probe. MongoDB is required; Redis is optional and only reported."""
    if not await db_service.health_check():
        raise HTTPException(status_code=503, detail="Service not ready: database unavailable")
    cache_status = "connected" if await cache_service.ping() else "unavailable"
    return {"status": "ready", "cache": cache_status}

@router.get("/health/live", summary="Liveness Probe")
async def liveness_check():
    """Liveness probe."""
    return {"status": "alive"}

@router.get("/metrics", tags=["Monitoring"])
async def metrics(request: Request, _: bool = Depends(verify_metrics_access)):
    """Prometheus metrics endpoint."""
    return PlainTextResponse(generate_latest(), media_type="text/plain")
