"""Scheduled and on-demand runs of the monthly credit reset sweep."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from fastapi import FastAPI

from ..core.config import get_settings
from ..core.database import SessionLocal
from ..services.monthly_reset_service import ResetSummary, run_monthly_reset

logger = logging.getLogger(__name__)

_scheduler = AsyncIOScheduler(timezone="UTC")


async def _execute_monthly_reset() -> None:
    session = SessionLocal()
    try:
        summary = run_monthly_reset(session, current_time=datetime.now(timezone.utc))
        session.commit()
        logger.info("scheduled monthly reset completed: %s", summary.as_dict())
    except Exception:  # pragma: no cover - safeguard for background job
        session.rollback()
        logger.exception("scheduled monthly reset failed")
        raise
    finally:
        session.close()


def register_scheduler(app: FastAPI) -> None:
    """Attach APScheduler lifecycle hooks to the FastAPI app when enabled.

    Lazy resets keep balances correct without it; the cron run only brings
    idle accounts up to date.
    """

    if not get_settings().reset_scheduler_enabled:
        return

    if _scheduler.get_job("monthly_reset") is None:
        _scheduler.add_job(
            _execute_monthly_reset,
            "cron",
            day="1",
            hour=0,
            minute=5,
            id="monthly_reset",
            misfire_grace_time=3600,
        )

    @app.on_event("startup")
    async def start_scheduler() -> None:
        if not _scheduler.running:
            _scheduler.start()
            logger.info("monthly reset scheduler started")

    @app.on_event("shutdown")
    async def shutdown_scheduler() -> None:
        if _scheduler.running:
            _scheduler.shutdown(wait=False)
            logger.info("monthly reset scheduler stopped")


def run_reset_once(current_time: datetime | None = None) -> ResetSummary:
    """Run the sweep synchronously in its own session."""

    session = SessionLocal()
    try:
        summary = run_monthly_reset(session, current_time=current_time)
        session.commit()
        return summary
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def main() -> None:
    """Console entry point: ``boostly-reset``."""

    from ..core.logging import configure_logging

    configure_logging()
    summary = run_reset_once()
    logger.info(
        "Successfully reset %s student(s) for %s (carry-forward applied: %s)",
        summary.reset_count,
        summary.current_month,
        summary.total_carry_forward,
    )
