"""
Status and polling endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from lead_inbox.core.logging import get_logger
from lead_inbox.service import LeadMonitorService

log = get_logger(__name__)
router = APIRouter()

RECENT_LOG_LIMIT = 50

ENDPOINTS = {
    "GET /": "Service status and endpoints",
    "GET /health": "Health check",
    "GET /logs": "View recent logs",
    "POST /test": "Test email monitoring manually",
    "POST /monitor": "Run email monitoring cycle",
}


def get_service(request: Request) -> LeadMonitorService:
    return request.app.state.service


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
def index(service: LeadMonitorService = Depends(get_service)):
    """Service descriptor with current stats."""
    return {
        "status": "running",
        "service": "Email Lead Monitor",
        "description": "Monitors emails 24/7, identifies leads, creates draft responses, and adds labels",
        "endpoints": ENDPOINTS,
        "stats": service.stats(),
    }


@router.get("/health")
def health(service: LeadMonitorService = Depends(get_service)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": _now(),
        "processedEmails": len(service.ledger),
    }


@router.get("/logs")
def logs(service: LeadMonitorService = Depends(get_service)):
    """Most recent activity log entries, oldest first."""
    return {
        "logs": [entry.to_dict() for entry in service.activity.recent(RECENT_LOG_LIMIT)],
        "total": service.activity.total,
    }


@router.post("/test")
def test_monitoring(service: LeadMonitorService = Depends(get_service)):
    """Run one polling cycle on demand."""
    log.info("manual_test_triggered")
    return _run_cycle(service)


@router.post("/monitor")
def monitor(service: LeadMonitorService = Depends(get_service)):
    """Run one polling cycle (for external cron-style triggers)."""
    return _run_cycle(service)


def _run_cycle(service: LeadMonitorService):
    try:
        report = service.run_cycle(wait=True)
    except Exception as e:
        log.error("monitor_endpoint_error", error=str(e))
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e), "timestamp": _now()},
        )
    return {"success": True, "timestamp": _now(), **report.to_dict()}
