"""
FastAPI application for the email lead monitor.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lead_inbox import __version__
from lead_inbox.config import settings
from lead_inbox.core.logging import configure_logging, get_logger
from lead_inbox.routers.monitor import router as monitor_router
from lead_inbox.scheduler import start_scheduler, stop_scheduler
from lead_inbox.service import LeadMonitorService

log = get_logger(__name__)


def create_app(
    service: LeadMonitorService | None = None,
    enable_scheduler: bool | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        service: Pre-built service (tests inject one with fake gateways).
            When None, one is built from settings at startup.
        enable_scheduler: Override settings.scheduler_enabled
    """
    scheduler_on = settings.scheduler_enabled if enable_scheduler is None else enable_scheduler

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        if app.state.service is None:
            app.state.service = LeadMonitorService.from_settings(settings)
        configure_logging(
            log_level=settings.log_level,
            json_output=settings.json_logs,
            activity=app.state.service.activity,
        )
        log.info("lead_monitor_started", port=settings.port, version=__version__)

        if scheduler_on:
            start_scheduler(app.state.service, interval_minutes=settings.poll_interval_minutes)
            log.info("monitoring_interval", minutes=settings.poll_interval_minutes)
        else:
            log.info("scheduler_disabled", reason="use POST /monitor to poll")

        yield

        if scheduler_on:
            stop_scheduler()
        log.info("lead_monitor_stopped")

    app = FastAPI(
        title="Email Lead Monitor",
        description="Identifies leads in an inbox, drafts replies and labels messages",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(monitor_router)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()

# Run with: uvicorn lead_inbox.main:app --host 0.0.0.0 --port 3000
