"""Background and on-demand jobs."""

from .monthly_reset import register_scheduler, run_reset_once

__all__ = ["register_scheduler", "run_reset_once"]
